"""
API Dependencies: Dependency Injection Container
"""

import logging
from functools import lru_cache
from typing import Optional

from fastapi import Depends

from application.ports.key_value_store import IKeyValueStore
from application.ports.sms_parser import ISmsParser
from application.ports.staging_queue import IStagingQueue
from application.ports.transaction_repository import ITransactionRepository
from application.preferences import AutoConfirmPolicy
from application.transaction_feed import TransactionFeed
from application.use_cases.add_manual_transaction import AddManualTransactionUseCase
from application.use_cases.ingest_sms import IngestSmsUseCase
from application.use_cases.review_pending import ReviewPendingUseCase
from infrastructure.database.connection import PostgresConnection
from infrastructure.database.postgres_kv_store import PostgresKeyValueStore
from infrastructure.database.postgres_repository import PostgresTransactionRepository
from infrastructure.sms.json_inbox import JsonFileSmsInbox
from infrastructure.sms.polling_source import PollingMessageSource
from infrastructure.sms.regex_parser import RegexSmsParser
from infrastructure.storage.kv_staging_queue import KeyValueStagingQueue
from infrastructure.storage.local_kv_store import LocalKeyValueStore
from config import settings

logger = logging.getLogger(__name__)

# Global instances shared by all requests and the SMS listener
_database_instance: PostgresConnection | None = None
_message_source: PollingMessageSource | None = None
_feed = TransactionFeed()


async def get_database() -> PostgresConnection:
    """Get database connection with pooling"""
    global _database_instance

    if _database_instance is None:
        database = PostgresConnection(
            connection_string=settings.DATABASE_URL,
            min_pool_size=settings.DATABASE_MIN_SIZE,
            max_pool_size=settings.DATABASE_MAX_SIZE
        )
        await database.connect()
        _database_instance = database

    return _database_instance


async def close_database():
    """Close database connection pool"""
    global _database_instance

    if _database_instance is not None:
        await _database_instance.close()
        _database_instance = None


async def get_repository() -> ITransactionRepository:
    """Get transaction repository implementation"""
    return PostgresTransactionRepository(await get_database())


@lru_cache()
def get_local_kv_store() -> LocalKeyValueStore:
    return LocalKeyValueStore(base_path=settings.LOCAL_STORAGE_PATH)


async def get_kv_store() -> IKeyValueStore:
    """Get key-value store (PostgreSQL, or local JSON file)"""
    if settings.KV_BACKEND == "local":
        return get_local_kv_store()
    return PostgresKeyValueStore(await get_database())


def get_staging_queue(store: IKeyValueStore = Depends(get_kv_store)) -> IStagingQueue:
    return KeyValueStagingQueue(store)


def get_auto_confirm_policy(store: IKeyValueStore = Depends(get_kv_store)) -> AutoConfirmPolicy:
    return AutoConfirmPolicy(store)


@lru_cache()
def get_sms_parser() -> ISmsParser:
    """Get SMS parser implementation"""
    return RegexSmsParser()


def get_feed() -> TransactionFeed:
    return _feed


def get_review_use_case(
    repository: ITransactionRepository = Depends(get_repository),
    staging_queue: IStagingQueue = Depends(get_staging_queue),
    feed: TransactionFeed = Depends(get_feed)
) -> ReviewPendingUseCase:
    return ReviewPendingUseCase(repository=repository, staging_queue=staging_queue, feed=feed)


def get_manual_use_case(
    repository: ITransactionRepository = Depends(get_repository),
    feed: TransactionFeed = Depends(get_feed)
) -> AddManualTransactionUseCase:
    return AddManualTransactionUseCase(repository=repository, feed=feed)


async def build_ingest_use_case() -> IngestSmsUseCase:
    """Ingestion coordinator wired to the configured stores"""
    store = await get_kv_store()
    return IngestSmsUseCase(
        parser=get_sms_parser(),
        repository=await get_repository(),
        staging_queue=KeyValueStagingQueue(store),
        auto_confirm=AutoConfirmPolicy(store),
        feed=_feed
    )


def get_message_source() -> Optional[PollingMessageSource]:
    return _message_source


async def start_sms_capture() -> Optional[PollingMessageSource]:
    """
    Start the SMS listener if an inbox is configured

    Returns:
        The running message source, or None when capture is disabled
    """
    global _message_source

    if not settings.SMS_INBOX_PATH:
        logger.info("SMS_INBOX_PATH not set; SMS capture disabled")
        return None

    if _message_source is None:
        _message_source = PollingMessageSource(
            inbox=JsonFileSmsInbox(settings.SMS_INBOX_PATH),
            interval=settings.SMS_POLL_INTERVAL_SECONDS,
            batch_size=settings.SMS_POLL_BATCH_SIZE
        )

    use_case = await build_ingest_use_case()
    await _message_source.start_listening(use_case.on_raw_message)
    return _message_source


def stop_sms_capture():
    """Stop the SMS listener"""
    if _message_source is not None:
        _message_source.stop_listening()
