#!/usr/bin/env python3
"""
Run Alembic migrations for the SMS Expense Tracker database.

Usage:
    python scripts/run_migrations.py upgrade head
    python scripts/run_migrations.py downgrade base
    python scripts/run_migrations.py current
    python scripts/run_migrations.py history

DATABASE_URL selects the target database.
"""

import os

import click
from alembic import command
from alembic.config import Config

ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def alembic_config() -> Config:
    config = Config(os.path.join(ROOT_DIR, "alembic.ini"))
    config.set_main_option("script_location", os.path.join(ROOT_DIR, "alembic"))
    return config


@click.group()
def cli():
    """Database migrations"""
    pass


@cli.command()
@click.argument("target", default="head")
def upgrade(target: str):
    """Upgrade to TARGET (default: head)"""
    click.echo(f"Running: alembic upgrade {target}")
    command.upgrade(alembic_config(), target)
    click.echo("✓ Migration complete")


@cli.command()
@click.argument("target", default="base")
def downgrade(target: str):
    """Downgrade to TARGET (default: base)"""
    click.echo(f"Running: alembic downgrade {target}")
    command.downgrade(alembic_config(), target)
    click.echo("✓ Downgrade complete")


@cli.command()
def current():
    """Show the current revision"""
    command.current(alembic_config())


@cli.command()
def history():
    """Show migration history"""
    command.history(alembic_config())


if __name__ == "__main__":
    cli()
