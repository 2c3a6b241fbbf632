"""
Port: SMS Inbox Interface
Platform inbox the message source reads from
"""

from abc import ABC, abstractmethod

from domain.entities.sms_message import SmsMessage


class ISmsInbox(ABC):
    """Interface for reading the device SMS inbox"""

    @abstractmethod
    async def request_permission(self) -> bool:
        """
        Check (and if possible obtain) read access to the inbox

        Returns:
            True if the inbox can be read
        """
        pass

    @abstractmethod
    async def list_recent(self, max_count: int) -> list[SmsMessage]:
        """
        Read the most recent inbox entries

        Args:
            max_count: Maximum number of messages, newest first

        Raises:
            InboxPermissionError: If access was revoked
            OSError: If the inbox cannot be read
        """
        pass
