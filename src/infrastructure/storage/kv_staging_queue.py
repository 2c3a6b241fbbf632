"""
Infrastructure Adapter: Key-Value Staging Queue
Implements IStagingQueue as a JSON array stored under one key
"""

import asyncio
import json
import logging
import weakref
from typing import Dict, List, Optional

from application.ports.key_value_store import IKeyValueStore
from application.ports.staging_queue import IStagingQueue
from domain.entities.transaction import Transaction
from domain.exceptions import StorageError

logger = logging.getLogger(__name__)

PENDING_TRANSACTIONS_KEY = "pending_transactions"

# event loop -> {key: Lock}; shared by all queue instances on the same key
_locks = weakref.WeakKeyDictionary()


def queue_lock(key: str) -> asyncio.Lock:
    """Lock serialising read-modify-write of the queue stored under key"""
    locks = _locks.setdefault(asyncio.get_running_loop(), {})
    if key not in locks:
        locks[key] = asyncio.Lock()
    return locks[key]


class KeyValueStagingQueue(IStagingQueue):
    """Pending transactions kept as one JSON document in a key-value store"""

    def __init__(self, store: IKeyValueStore, key: str = PENDING_TRANSACTIONS_KEY):
        self.store = store
        self.key = key

    async def _read(self) -> List[Transaction]:
        raw = await self.store.get_item(self.key)
        if not raw:
            return []
        try:
            return [Transaction.from_dict(item) for item in json.loads(raw)]
        except (ValueError, KeyError, TypeError) as e:
            raise StorageError(f"Corrupt staging queue under {self.key!r}: {e}") from e

    async def _write(self, transactions: List[Transaction]) -> None:
        payload = json.dumps([tx.to_dict() for tx in transactions], ensure_ascii=False)
        await self.store.set_item(self.key, payload)

    async def enqueue(self, transaction: Transaction) -> bool:
        async with queue_lock(self.key):
            pending = await self._read()
            if any(tx.id == transaction.id for tx in pending):
                logger.info("Transaction already pending: %s", transaction.id)
                return False
            pending.append(transaction)
            await self._write(pending)
            return True

    async def list(self) -> List[Transaction]:
        return await self._read()

    async def get(self, transaction_id: str) -> Optional[Transaction]:
        for tx in await self._read():
            if tx.id == transaction_id:
                return tx
        return None

    async def remove(self, transaction_id: str) -> bool:
        async with queue_lock(self.key):
            pending = await self._read()
            remaining = [tx for tx in pending if tx.id != transaction_id]
            if len(remaining) == len(pending):
                return False
            await self._write(remaining)
            return True
