from .direction import TransactionDirection
from .origin import TransactionOrigin

__all__ = ["TransactionDirection", "TransactionOrigin"]
