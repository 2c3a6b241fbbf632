"""
Domain Entity: IngestionResult
What happened to a single inbound SMS
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .transaction import Transaction


class IngestionOutcome(str, Enum):
    UNPARSED = "unparsed"
    DUPLICATE = "duplicate"
    CONFIRMED = "confirmed"
    STAGED = "staged"
    FAILED = "failed"

    def __str__(self) -> str:
        return self.value


@dataclass
class IngestionResult:
    """Outcome of ingesting one message"""

    outcome: IngestionOutcome
    transaction: Optional[Transaction] = None
    error: Optional[str] = None

    @property
    def stored(self) -> bool:
        """True if the message produced a new confirmed or staged record"""
        return self.outcome in (IngestionOutcome.CONFIRMED, IngestionOutcome.STAGED)
