from .connection import PostgresConnection
from .postgres_repository import PostgresTransactionRepository
from .postgres_kv_store import PostgresKeyValueStore

__all__ = ["PostgresConnection", "PostgresTransactionRepository", "PostgresKeyValueStore"]
