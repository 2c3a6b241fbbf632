"""
Port: Staging Queue Interface
Holding area for extracted transactions that wait for user confirmation
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from domain.entities.transaction import Transaction


class IStagingQueue(ABC):
    """Interface for the pending-transaction queue"""

    @abstractmethod
    async def enqueue(self, transaction: Transaction) -> bool:
        """
        Add a transaction to the queue

        Returns:
            True if added, False if a transaction with the same id is
            already staged (the queue is left unchanged)
        """
        pass

    @abstractmethod
    async def list(self) -> List[Transaction]:
        """Return all staged transactions (no ordering guarantee)"""
        pass

    @abstractmethod
    async def get(self, transaction_id: str) -> Optional[Transaction]:
        """Return a staged transaction by id, or None"""
        pass

    @abstractmethod
    async def remove(self, transaction_id: str) -> bool:
        """
        Remove a transaction from the queue

        Returns:
            True if it was staged, False if absent (no-op)
        """
        pass
