"""
Port: Message Source Interface
Delivers raw (sender, body) pairs to the ingestion coordinator
"""

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable

MessageHandler = Callable[[str, str], Awaitable[Any]]


class IMessageSource(ABC):
    """
    Interface for inbound SMS delivery

    Delivery is at-least-once and possibly reordered. Messages older than
    the moment listening started are not delivered.
    """

    @abstractmethod
    async def start_listening(self, on_message: MessageHandler) -> None:
        """
        Start delivering messages to ``on_message``

        No-op (logged) when already active, when permission is denied or
        when the platform is unsupported.
        """
        pass

    @abstractmethod
    def stop_listening(self) -> None:
        """Stop delivery; results of an in-flight read are discarded"""
        pass

    @abstractmethod
    def is_active(self) -> bool:
        """True while messages are being delivered"""
        pass
