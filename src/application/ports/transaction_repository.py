"""
Transaction Repository Port Interface
Defines the contract for durable storage of confirmed transactions
"""

from abc import ABC, abstractmethod
from typing import List

from domain.entities.transaction import Transaction


class ITransactionRepository(ABC):
    """
    Port interface for the confirmed-transaction store
    Following Hexagonal Architecture - this is the application layer port

    Implementations raise ``domain.exceptions.StorageError`` when the
    backing store fails; they never swallow it.
    """

    @abstractmethod
    async def insert(self, transaction: Transaction) -> bool:
        """
        Insert a transaction, ignoring it if the id already exists

        Args:
            transaction: Transaction to store

        Returns:
            bool: True if a new row was written, False on duplicate id
        """
        pass

    @abstractmethod
    async def exists(self, transaction_id: str) -> bool:
        """
        Check whether a transaction id is already stored

        Args:
            transaction_id: Transaction identity

        Returns:
            bool: True if present
        """
        pass

    @abstractmethod
    async def list(self, limit: int = 100, offset: int = 0) -> List[Transaction]:
        """
        List transactions, newest occurrence first

        Ordered by ``occurred_at`` descending, then ``created_at`` descending.

        Args:
            limit: Maximum number of results
            offset: Pagination offset

        Returns:
            List of transactions
        """
        pass

    @abstractmethod
    async def list_by_month(self, year: int, month: int) -> List[Transaction]:
        """
        List transactions that occurred within a calendar month

        Args:
            year: Four-digit year
            month: Month number, 1-12

        Returns:
            List of transactions, same ordering as ``list``
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check backing store health

        Returns:
            bool: True if the store is reachable
        """
        pass

    @abstractmethod
    async def close(self):
        """
        Release connections and other resources
        """
        pass
