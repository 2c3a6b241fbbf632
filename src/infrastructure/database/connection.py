"""
PostgreSQL Connection
Shared asyncpg pool for the repository and the key-value store
"""

from typing import Optional

import asyncpg
from asyncpg.pool import Pool

from domain.exceptions import StorageError

# Errors from the driver or the network that mean "store unavailable"
DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


class PostgresConnection:
    """Owns one asyncpg connection pool"""

    def __init__(self, connection_string: str, min_pool_size: int = 1, max_pool_size: int = 5):
        """
        Args:
            connection_string: PostgreSQL connection string
            min_pool_size: Minimum connection pool size
            max_pool_size: Maximum connection pool size
        """
        self.connection_string = connection_string
        self.min_pool_size = min_pool_size
        self.max_pool_size = max_pool_size
        self.pool: Optional[Pool] = None

    async def connect(self):
        """
        Establish database connection pool
        Must be called before using the adapters
        """
        if self.pool is None:
            try:
                self.pool = await asyncpg.create_pool(
                    self.connection_string,
                    min_size=self.min_pool_size,
                    max_size=self.max_pool_size,
                    command_timeout=60
                )
            except DRIVER_ERRORS as e:
                raise StorageError(f"Cannot connect to database: {e}") from e

    def acquire(self):
        """Connection context manager; raises StorageError before connect()"""
        if self.pool is None:
            raise StorageError("Database not connected. Call connect() first.")
        return self.pool.acquire()

    async def health_check(self) -> bool:
        """
        Check database connection health
        """
        if self.pool is None:
            return False

        try:
            async with self.pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
            return True
        except DRIVER_ERRORS:
            return False

    async def close(self):
        """
        Close database connection pool
        """
        if self.pool is not None:
            await self.pool.close()
            self.pool = None
