"""
Application Use Case: Ingest SMS
Turns one inbound bank SMS into a confirmed or pending transaction
"""

import logging
from typing import Optional

from application.ports.sms_parser import ISmsParser
from application.ports.staging_queue import IStagingQueue
from application.ports.transaction_repository import ITransactionRepository
from application.preferences import AutoConfirmPolicy
from application.transaction_feed import TransactionFeed
from domain.entities.ingestion import IngestionOutcome, IngestionResult

logger = logging.getLogger(__name__)


class IngestSmsUseCase:
    """
    Ingestion coordinator

    extract -> dedup against repository -> auto-confirm into repository,
    or stage for review. One message is processed to completion before the
    caller hands over the next one.
    """

    def __init__(
        self,
        parser: ISmsParser,
        repository: ITransactionRepository,
        staging_queue: IStagingQueue,
        auto_confirm: AutoConfirmPolicy,
        feed: Optional[TransactionFeed] = None
    ):
        """Initialize use case with dependencies"""

        self.parser = parser
        self.repository = repository
        self.staging_queue = staging_queue
        self.auto_confirm = auto_confirm
        self.feed = feed

    async def execute(self, sender: str, body: str) -> IngestionResult:
        """
        Ingest a single message

        Raises:
            StorageError: If the repository or staging queue fails
        """

        # 1. Extract
        transaction = self.parser.parse(sender, body)
        if transaction is None:
            logger.debug("SMS from %s could not be parsed as transaction", sender)
            return IngestionResult(IngestionOutcome.UNPARSED)

        # 2. Dedup against confirmed transactions
        if await self.repository.exists(transaction.id):
            logger.info("Transaction already exists: %s", transaction.id)
            return IngestionResult(IngestionOutcome.DUPLICATE, transaction)

        # 3. Route by policy
        if await self.auto_confirm.is_enabled():
            await self.repository.insert(transaction)
            if self.feed is not None:
                self.feed.publish(transaction)
            logger.info("Transaction auto-confirmed and inserted: %s", transaction.id)
            return IngestionResult(IngestionOutcome.CONFIRMED, transaction)

        if not await self.staging_queue.enqueue(transaction):
            return IngestionResult(IngestionOutcome.DUPLICATE, transaction)

        logger.info("Transaction added to pending queue: %s", transaction.id)
        return IngestionResult(IngestionOutcome.STAGED, transaction)

    async def on_raw_message(self, sender: str, body: str) -> IngestionResult:
        """
        Message source callback

        Never raises: a failing message is logged and reported as FAILED so
        the listener moves on to the next one.
        """
        try:
            return await self.execute(sender, body)
        except Exception as e:
            logger.exception("Error processing incoming SMS from %s", sender)
            return IngestionResult(IngestionOutcome.FAILED, error=str(e))
