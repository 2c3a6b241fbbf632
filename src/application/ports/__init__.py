from .sms_parser import ISmsParser
from .transaction_repository import ITransactionRepository
from .key_value_store import IKeyValueStore
from .staging_queue import IStagingQueue
from .sms_inbox import ISmsInbox
from .message_source import IMessageSource, MessageHandler

__all__ = [
    "ISmsParser",
    "ITransactionRepository",
    "IKeyValueStore",
    "IStagingQueue",
    "ISmsInbox",
    "IMessageSource",
    "MessageHandler",
]
