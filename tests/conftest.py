"""
Pytest configuration and shared fixtures.
"""
import sys
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Dict, List, Optional

import pytest

# Add src to path
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from application.ports.key_value_store import IKeyValueStore  # noqa: E402
from application.ports.transaction_repository import ITransactionRepository  # noqa: E402
from domain.entities.transaction import Transaction  # noqa: E402
from domain.enums import TransactionDirection, TransactionOrigin  # noqa: E402
from domain.exceptions import StorageError  # noqa: E402


FIXED_NOW = datetime(2024, 3, 10, 14, 30, 0)


class InMemoryTransactionRepository(ITransactionRepository):
    """Dict-backed repository with the same ordering and duplicate rules as PostgreSQL."""

    def __init__(self):
        self.rows: Dict[str, Transaction] = {}
        self.fail = False
        self.healthy = True

    def _check(self):
        if self.fail:
            raise StorageError("database unavailable")

    async def insert(self, transaction: Transaction) -> bool:
        self._check()
        if transaction.id in self.rows:
            return False
        self.rows[transaction.id] = transaction
        return True

    async def exists(self, transaction_id: str) -> bool:
        self._check()
        return transaction_id in self.rows

    def _ordered(self, transactions) -> List[Transaction]:
        return sorted(
            transactions,
            key=lambda tx: (tx.occurred_at, tx.created_at),
            reverse=True,
        )

    async def list(self, limit: int = 100, offset: int = 0) -> List[Transaction]:
        self._check()
        return self._ordered(self.rows.values())[offset:offset + limit]

    async def list_by_month(self, year: int, month: int) -> List[Transaction]:
        self._check()
        return self._ordered(
            tx for tx in self.rows.values()
            if tx.occurred_at.year == year and tx.occurred_at.month == month
        )

    async def health_check(self) -> bool:
        return self.healthy

    async def close(self):
        pass


class InMemoryKeyValueStore(IKeyValueStore):
    """Dict-backed key-value store."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.items: Dict[str, str] = dict(initial or {})
        self.fail = False

    async def get_item(self, key: str) -> Optional[str]:
        if self.fail:
            raise StorageError("settings unavailable")
        return self.items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        if self.fail:
            raise StorageError("settings unavailable")
        self.items[key] = value


def make_transaction(
    tx_id: str = "tx_test1",
    amount: str = "250.00",
    direction: TransactionDirection = TransactionDirection.DEBIT,
    occurred_at: datetime = FIXED_NOW,
    origin: TransactionOrigin = TransactionOrigin.SMS,
    created_at: datetime = FIXED_NOW,
) -> Transaction:
    """Build a transaction with sensible defaults."""
    return Transaction(
        id=tx_id,
        amount=Decimal(amount),
        direction=direction,
        occurred_at=occurred_at,
        description="Rs 250.00 spent at CAFE COFFEE DAY",
        bank="HDFC Bank",
        origin=origin,
        created_at=created_at,
        updated_at=created_at,
    )


@pytest.fixture
def fixed_clock():
    """Clock that always returns FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def repository() -> InMemoryTransactionRepository:
    return InMemoryTransactionRepository()


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def sample_transaction() -> Transaction:
    return make_transaction()
