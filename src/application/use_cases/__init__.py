from .ingest_sms import IngestSmsUseCase
from .review_pending import ReviewPendingUseCase
from .add_manual_transaction import AddManualTransactionUseCase

__all__ = ["IngestSmsUseCase", "ReviewPendingUseCase", "AddManualTransactionUseCase"]
