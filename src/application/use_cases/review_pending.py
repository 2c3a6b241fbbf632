"""
Application Use Case: Review Pending Transactions
Confirm or reject SMS transactions waiting in the staging queue
"""

import logging
from typing import List, Optional

from application.ports.staging_queue import IStagingQueue
from application.ports.transaction_repository import ITransactionRepository
from application.transaction_feed import TransactionFeed
from domain.entities.transaction import Transaction

logger = logging.getLogger(__name__)


class ReviewPendingUseCase:
    """
    Staging transitions

    Confirm inserts into the repository first and removes from staging
    second. A crash in between leaves the record in both places; the next
    confirm is harmless because repository insert ignores duplicates.
    """

    def __init__(
        self,
        repository: ITransactionRepository,
        staging_queue: IStagingQueue,
        feed: Optional[TransactionFeed] = None
    ):
        self.repository = repository
        self.staging_queue = staging_queue
        self.feed = feed

    async def list_pending(self) -> List[Transaction]:
        return await self.staging_queue.list()

    async def confirm(self, transaction_id: str) -> Optional[Transaction]:
        """
        Move a staged transaction into the repository

        Returns:
            The confirmed transaction, or None if nothing is staged under that id
        """
        transaction = await self.staging_queue.get(transaction_id)
        if transaction is None:
            return None

        inserted = await self.repository.insert(transaction)
        await self.staging_queue.remove(transaction_id)

        if inserted and self.feed is not None:
            self.feed.publish(transaction)

        logger.info("Pending transaction confirmed: %s", transaction_id)
        return transaction

    async def reject(self, transaction_id: str) -> bool:
        """
        Discard a staged transaction

        Returns:
            True if it was staged
        """
        removed = await self.staging_queue.remove(transaction_id)
        if removed:
            logger.info("Pending transaction rejected: %s", transaction_id)
        return removed
