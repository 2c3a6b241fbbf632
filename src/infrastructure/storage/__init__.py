from .local_kv_store import LocalKeyValueStore
from .kv_staging_queue import KeyValueStagingQueue, PENDING_TRANSACTIONS_KEY

__all__ = ["LocalKeyValueStore", "KeyValueStagingQueue", "PENDING_TRANSACTIONS_KEY"]
