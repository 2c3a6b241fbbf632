"""
Domain Entity: SmsMessage
A raw message as read from the device inbox
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SmsMessage:
    """Inbox entry"""

    address: str
    body: str
    date: int  # epoch milliseconds

    @classmethod
    def from_dict(cls, data: dict) -> "SmsMessage":
        """Build from an inbox export row (``address``/``body``/``date``)"""
        return cls(
            address=str(data.get("address") or "Unknown"),
            body=str(data.get("body") or ""),
            date=int(data.get("date") or 0),
        )
