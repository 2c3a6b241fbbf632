"""
PostgreSQL Key-Value Store
Implements IKeyValueStore on the ``app_settings`` table
"""

from typing import Optional

from application.ports.key_value_store import IKeyValueStore
from domain.exceptions import StorageError
from infrastructure.database.connection import DRIVER_ERRORS, PostgresConnection


class PostgresKeyValueStore(IKeyValueStore):
    """Key-value adapter backed by PostgreSQL"""

    def __init__(self, database: PostgresConnection):
        self.database = database

    async def get_item(self, key: str) -> Optional[str]:
        try:
            async with self.database.acquire() as conn:
                return await conn.fetchval(
                    "SELECT value FROM app_settings WHERE key = $1",
                    key
                )
        except DRIVER_ERRORS as e:
            raise StorageError(f"Reading setting {key!r} failed: {e}") from e

    async def set_item(self, key: str, value: str) -> None:
        query = """
            INSERT INTO app_settings (key, value, updated_at)
            VALUES ($1, $2, NOW())
            ON CONFLICT (key) DO UPDATE
            SET value = EXCLUDED.value, updated_at = NOW()
        """

        try:
            async with self.database.acquire() as conn:
                await conn.execute(query, key, value)
        except DRIVER_ERRORS as e:
            raise StorageError(f"Writing setting {key!r} failed: {e}") from e
