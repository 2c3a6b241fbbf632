"""
PostgreSQL Transaction Repository
Implements ITransactionRepository port using asyncpg
"""

import logging
from datetime import datetime
from typing import List

from dateutil.relativedelta import relativedelta

from application.ports.transaction_repository import ITransactionRepository
from domain.entities.transaction import Transaction
from domain.exceptions import StorageError
from infrastructure.database.connection import DRIVER_ERRORS, PostgresConnection

logger = logging.getLogger(__name__)

TRANSACTION_COLUMNS = """
    id, amount, direction, occurred_at, description, bank, origin,
    created_at, updated_at
"""


def month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    """First and last instant (inclusive) of a calendar month"""
    start = datetime(year, month, 1)
    end = start + relativedelta(months=1) - relativedelta(microseconds=1)
    return start, end


class PostgresTransactionRepository(ITransactionRepository):
    """
    PostgreSQL adapter implementing ITransactionRepository port
    Table ``transactions`` is created by Alembic migration 001_initial
    """

    def __init__(self, database: PostgresConnection):
        """
        Args:
            database: Shared connection pool (must be connected before use)
        """
        self.database = database

    async def insert(self, transaction: Transaction) -> bool:
        """
        Insert transaction; an existing id is left untouched
        """
        query = """
            INSERT INTO transactions (
                id, amount, direction, occurred_at, description, bank, origin,
                created_at, updated_at
            ) VALUES (
                $1, $2, $3, $4, $5, $6, $7, $8, $9
            )
            ON CONFLICT (id) DO NOTHING
        """

        try:
            async with self.database.acquire() as conn:
                status = await conn.execute(
                    query,
                    transaction.id,
                    transaction.amount,
                    transaction.direction.value,
                    transaction.occurred_at,
                    transaction.description,
                    transaction.bank,
                    transaction.origin.value,
                    transaction.created_at,
                    transaction.updated_at
                )
        except DRIVER_ERRORS as e:
            raise StorageError(f"Insert of transaction {transaction.id} failed: {e}") from e

        # status is "INSERT 0 <rows>"
        inserted = status.endswith(" 1")
        if inserted:
            logger.info("Transaction inserted: %s", transaction.id)
        else:
            logger.info("Transaction already exists (duplicate): %s", transaction.id)
        return inserted

    async def exists(self, transaction_id: str) -> bool:
        """
        Check if a transaction with given id exists
        """
        try:
            async with self.database.acquire() as conn:
                found = await conn.fetchval(
                    "SELECT EXISTS (SELECT 1 FROM transactions WHERE id = $1)",
                    transaction_id
                )
        except DRIVER_ERRORS as e:
            raise StorageError(f"Existence check for {transaction_id} failed: {e}") from e

        return bool(found)

    async def list(self, limit: int = 100, offset: int = 0) -> List[Transaction]:
        """
        Fetch transactions with pagination
        """
        query = f"""
            SELECT {TRANSACTION_COLUMNS}
            FROM transactions
            ORDER BY occurred_at DESC, created_at DESC
            LIMIT $1 OFFSET $2
        """

        try:
            async with self.database.acquire() as conn:
                rows = await conn.fetch(query, limit, offset)
        except DRIVER_ERRORS as e:
            raise StorageError(f"Listing transactions failed: {e}") from e

        return [Transaction.from_record(row) for row in rows]

    async def list_by_month(self, year: int, month: int) -> List[Transaction]:
        """
        Fetch transactions for a specific month
        """
        start, end = month_bounds(year, month)

        query = f"""
            SELECT {TRANSACTION_COLUMNS}
            FROM transactions
            WHERE occurred_at >= $1 AND occurred_at <= $2
            ORDER BY occurred_at DESC, created_at DESC
        """

        try:
            async with self.database.acquire() as conn:
                rows = await conn.fetch(query, start, end)
        except DRIVER_ERRORS as e:
            raise StorageError(f"Listing transactions for {year}-{month:02d} failed: {e}") from e

        return [Transaction.from_record(row) for row in rows]

    async def health_check(self) -> bool:
        return await self.database.health_check()

    async def close(self):
        await self.database.close()
