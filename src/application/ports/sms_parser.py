"""
Port: SMS Parser Interface
Defines contract for turning a raw bank SMS into a transaction
"""

from abc import ABC, abstractmethod
from typing import Optional

from domain.entities.transaction import Transaction


class ISmsParser(ABC):
    """Interface for SMS field extraction"""

    @abstractmethod
    def parse(self, sender: str, body: str) -> Optional[Transaction]:
        """
        Extract a transaction from an SMS

        Args:
            sender: Sender label (e.g. "VM-HDFCBK")
            body: Message text

        Returns:
            Transaction, or None when the message is not a usable
            transaction notification. Must never raise.
        """
        pass
