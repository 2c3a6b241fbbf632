"""Transaction Direction Enumeration

Defines whether money left (debit) or entered (credit) the tracked account.
"""

from enum import Enum


class TransactionDirection(str, Enum):
    """Money flow direction

    DEBIT: Outflow (spent, withdrawn, paid)
    CREDIT: Inflow (received, deposited, refunded)
    """

    DEBIT = "debit"
    CREDIT = "credit"

    def __str__(self) -> str:
        return self.value
