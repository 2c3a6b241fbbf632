"""Transaction Origin Enumeration"""

from enum import Enum


class TransactionOrigin(str, Enum):
    """Where a transaction record came from"""

    SMS = "sms"
    MANUAL = "manual"

    def __str__(self) -> str:
        return self.value
