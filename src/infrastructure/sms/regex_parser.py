"""
Regex SMS Parser
Implements ISmsParser for Indian bank transaction alerts

Typical messages:
    "Rs 1,234.50 debited from your a/c XX1234 on 15/01/2024. Avl bal ..."
    "INR 500.00 credited to A/c no. XX5678 on 2024-01-15 by UPI ref ..."
    "You have spent ₹250 at AMAZON yesterday"

Extraction is rule based and best effort. Anything that does not look like
a transaction alert yields None rather than an exception.
"""

import logging
import re
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional

from application.ports.sms_parser import ISmsParser
from domain.entities.transaction import Transaction
from domain.enums import TransactionDirection, TransactionOrigin
from domain.identity import generate_transaction_id, to_epoch_millis

logger = logging.getLogger(__name__)


class RegexSmsParser(ISmsParser):
    """Extract transactions from bank SMS alerts"""

    # -----------------------
    # Regex patterns
    # -----------------------
    AMOUNT_RE = re.compile(r"(?:INR|Rs|₹)\s*([\d,]+\.?\d*)", re.IGNORECASE)

    # Tried in order, first match wins
    DATE_PATTERNS = (
        (re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4})"), "dmy"),   # 15/01/2024
        (re.compile(r"(\d{1,2})-(\d{1,2})-(\d{4})"), "dmy"),   # 15-01-2024
        (re.compile(r"(\d{4})-(\d{1,2})-(\d{1,2})"), "ymd"),   # 2024-01-15
    )

    # -----------------------
    # Direction keywords
    # -----------------------
    DEBIT_KEYWORDS = (
        "debited",
        "spent",
        "withdrawn",
        "paid",
        "purchase",
        "purchased",
        "transaction",
    )

    CREDIT_KEYWORDS = (
        "credited",
        "received",
        "deposited",
        "refund",
        "refunded",
    )

    # -----------------------
    # Sender code -> bank name (first match wins, order matters)
    # -----------------------
    BANK_CODES = (
        ("HDFC", "HDFC Bank"),
        ("ICICI", "ICICI Bank"),
        ("SBI", "State Bank of India"),
        ("AXIS", "Axis Bank"),
        ("KOTAK", "Kotak Mahindra"),
        ("PNB", "Punjab National Bank"),
        ("BOI", "Bank of India"),
        ("BOB", "Bank of Baroda"),
        ("CANARA", "Canara Bank"),
        ("UNION", "Union Bank"),
    )

    MAX_SENDER_LENGTH = 20
    MAX_DESCRIPTION_LENGTH = 100

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        """
        Args:
            clock: Returns the current local time; injected for tests
        """
        self.clock = clock

    # -----------------------
    # Public API
    # -----------------------
    def parse(self, sender: str, body: str) -> Optional[Transaction]:
        """
        Extract a transaction from an SMS

        Steps:
        1. Amount (first currency-marked number)
        2. Direction (keyword evidence, defaults to debit)
        3. Date (explicit date, then today/yesterday, then now)
        4. Bank (sender code lookup)
        5. Identity + description
        """
        try:
            now = self.clock()

            amount = self.extract_amount(body)
            if amount is None:
                logger.debug("[SMS_PARSE] no amount in message from %s", sender)
                return None

            direction = self.detect_direction(body)
            occurred_at = self.extract_date(body, now)
            bank = self.resolve_bank(sender)

            return Transaction(
                id=generate_transaction_id(sender, amount, to_epoch_millis(occurred_at)),
                amount=amount,
                direction=direction,
                occurred_at=occurred_at,
                description=body[:self.MAX_DESCRIPTION_LENGTH].strip(),
                bank=bank,
                origin=TransactionOrigin.SMS,
                created_at=now,
                updated_at=now,
            )
        except (ValueError, ArithmeticError, TypeError) as e:
            logger.debug("[SMS_PARSE] failed for message from %s: %s", sender, e)
            return None

    # -----------------------
    # Field extraction
    # -----------------------
    def extract_amount(self, body: str) -> Optional[Decimal]:
        """Return the first currency-marked amount, or None if missing or not positive"""
        match = self.AMOUNT_RE.search(body)
        if not match:
            return None

        try:
            amount = Decimal(match.group(1).replace(",", ""))
        except InvalidOperation:
            return None

        if not amount.is_finite() or amount <= 0:
            return None
        return amount

    def detect_direction(self, body: str) -> TransactionDirection:
        """
        Decide debit vs credit from keyword evidence

        When both keyword sets hit, the earlier of the plain substrings
        "credit" / "debit" decides. ``str.find`` returns -1 for a missing
        substring, so a missing one sorts first.

        TODO: product review of the tie-break; it ignores the keyword sets
        used for the first decision.
        """
        text = body.lower()
        has_debit = any(keyword in text for keyword in self.DEBIT_KEYWORDS)
        has_credit = any(keyword in text for keyword in self.CREDIT_KEYWORDS)

        if has_credit and not has_debit:
            return TransactionDirection.CREDIT
        if has_credit and has_debit:
            if text.find("credit") < text.find("debit"):
                return TransactionDirection.CREDIT
        return TransactionDirection.DEBIT

    def extract_date(self, body: str, now: datetime) -> datetime:
        """
        Transaction date from the message text

        Explicit dates resolve to local midnight. Raises ValueError for an
        impossible calendar date such as 31/02/2024.
        """
        for pattern, order in self.DATE_PATTERNS:
            match = pattern.search(body)
            if not match:
                continue
            first, second, third = (int(part) for part in match.groups())
            if order == "dmy":
                return datetime(third, second, first)
            return datetime(first, second, third)

        text = body.lower()
        if "today" in text:
            return now
        if "yesterday" in text:
            return now - timedelta(days=1)
        return now

    def resolve_bank(self, sender: str) -> str:
        """Bank display name for a sender label, or the (truncated) sender itself"""
        sender_upper = sender.upper()
        for code, name in self.BANK_CODES:
            if code in sender_upper:
                return name
        return sender[:self.MAX_SENDER_LENGTH]
