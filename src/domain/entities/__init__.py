from .transaction import Transaction
from .sms_message import SmsMessage
from .ingestion import IngestionOutcome, IngestionResult

__all__ = ["Transaction", "SmsMessage", "IngestionOutcome", "IngestionResult"]
