#!/usr/bin/env python3
"""
SMS Expense Tracker CLI
"""
import asyncio
from collections import Counter

import click
from rich.console import Console
from rich.table import Table

from api.v1.dependencies import build_ingest_use_case, close_database, get_sms_parser
from domain.entities.ingestion import IngestionOutcome
from domain.exceptions import StorageError
from infrastructure.sms.json_inbox import JsonFileSmsInbox

console = Console()


@click.group()
@click.version_option(version="1.0.0")
def cli():
    """
    📱 SMS Expense Tracker - capture bank SMS alerts as transactions
    """
    pass


@cli.command()
@click.argument('sender')
@click.argument('body')
def parse(sender: str, body: str):
    """
    Extract a transaction from one SMS without storing it.

    Example:
        python cli.py parse VM-HDFCBK "Rs 1,234.50 debited from your account"
    """
    transaction = get_sms_parser().parse(sender, body)

    if transaction is None:
        console.print("[yellow]Not a transaction message[/yellow]")
        raise SystemExit(1)

    table = Table(title="Extracted Transaction", show_header=True)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("ID", transaction.id)
    table.add_row("Amount", f"₹{transaction.amount:,.2f}")
    table.add_row("Direction", transaction.direction.value.upper())
    table.add_row("Date", transaction.occurred_at.isoformat(sep=" ", timespec="seconds"))
    table.add_row("Bank", transaction.bank)
    table.add_row("Description", transaction.description)

    console.print(table)


@cli.command()
@click.argument('inbox_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--dry-run', is_flag=True, help='Only parse, do not store anything')
def replay(inbox_file: str, dry_run: bool):
    """
    Ingest every message of an exported inbox JSON file.

    Messages are processed oldest first. Already known transactions are
    skipped, so replaying the same file twice is safe.
    """
    messages = sorted(JsonFileSmsInbox(inbox_file).read_all(), key=lambda msg: msg.date)
    console.print(f"[bold blue]Replaying {len(messages)} messages...[/bold blue]")

    if dry_run:
        parser = get_sms_parser()
        outcomes = Counter(
            "parsed" if parser.parse(msg.address, msg.body) else IngestionOutcome.UNPARSED.value
            for msg in messages
        )
    else:
        try:
            outcomes = asyncio.run(_replay(messages))
        except StorageError as e:
            console.print(f"[red]✗[/red] Database unavailable: {e}")
            raise SystemExit(1)

    table = Table(title="Replay Summary", show_header=True)
    table.add_column("Outcome", style="cyan")
    table.add_column("Messages", style="magenta", justify="right")
    for outcome, count in sorted(outcomes.items()):
        table.add_row(outcome, str(count))
    console.print(table)


async def _replay(messages) -> Counter:
    outcomes: Counter = Counter()
    try:
        use_case = await build_ingest_use_case()
        for msg in messages:
            result = await use_case.on_raw_message(msg.address, msg.body)
            outcomes[result.outcome.value] += 1
    finally:
        await close_database()
    return outcomes


if __name__ == '__main__':
    cli()
