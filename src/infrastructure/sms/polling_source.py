"""
Polling Message Source
Implements IMessageSource by reading the inbox on a fixed interval

Each tick reads at most ``batch_size`` of the most recent inbox entries and
delivers those newer than the watermark. If more than ``batch_size``
messages arrive within one interval the older ones are never delivered;
the listener does not scan back to catch up.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from application.ports.message_source import IMessageSource, MessageHandler
from application.ports.sms_inbox import ISmsInbox
from domain.exceptions import InboxPermissionError

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 5.0
DEFAULT_BATCH_SIZE = 10


def current_millis() -> int:
    return int(time.time() * 1000)


@dataclass
class ListenerState:
    """Everything one running listener owns"""

    active: bool = False
    callback: Optional[MessageHandler] = None
    watermark: int = 0
    task: Optional["asyncio.Task[None]"] = None


class PollingMessageSource(IMessageSource):
    """Deliver new inbox messages by polling"""

    def __init__(
        self,
        inbox: ISmsInbox,
        interval: float = DEFAULT_POLL_INTERVAL,
        batch_size: int = DEFAULT_BATCH_SIZE,
        clock: Callable[[], int] = current_millis
    ):
        """
        Args:
            inbox: Platform inbox to read from
            interval: Seconds between polls
            batch_size: Maximum messages read per poll
            clock: Current time in epoch milliseconds
        """
        self.inbox = inbox
        self.interval = interval
        self.batch_size = batch_size
        self.clock = clock
        self.state = ListenerState()
        self.permission_denied = False

    # -----------------------
    # IMessageSource
    # -----------------------
    async def start_listening(self, on_message: MessageHandler) -> None:
        if self.state.active:
            logger.warning("SMS listener is already active")
            return

        if not await self.inbox.request_permission():
            if not self.permission_denied:
                logger.warning("SMS permission not granted; automatic capture is disabled")
            self.permission_denied = True
            return

        # Start from "now" so messages already in the inbox are not replayed
        self.state = ListenerState(
            active=True,
            callback=on_message,
            watermark=self.clock(),
        )
        self.state.task = asyncio.create_task(self._run(self.state))
        logger.info("SMS listener started (polling every %ss)", self.interval)

    def stop_listening(self) -> None:
        state = self.state
        if not state.active:
            return

        state.active = False
        state.callback = None
        if state.task is not None:
            state.task.cancel()
            state.task = None

        logger.info("SMS listener stopped")

    def is_active(self) -> bool:
        return self.state.active

    # -----------------------
    # Polling
    # -----------------------
    async def _run(self, state: ListenerState) -> None:
        while state.active:
            await asyncio.sleep(self.interval)
            try:
                await self.poll_once(state)
            except Exception:
                logger.exception("SMS poll failed; retrying next interval")

    async def poll_once(self, state: Optional[ListenerState] = None) -> int:
        """
        Read the inbox once and deliver new messages

        Returns:
            Number of messages handed to the callback
        """
        state = state or self.state
        if not state.active or state.callback is None:
            return 0

        try:
            messages = await self.inbox.list_recent(self.batch_size)
        except InboxPermissionError:
            logger.warning("SMS permission revoked; stopping listener")
            self.permission_denied = True
            self.stop_listening()
            return 0
        except (OSError, ValueError):
            logger.exception("Error reading SMS inbox")
            return 0

        # Stopped while the read was in flight: drop the result
        if not state.active:
            return 0

        new_messages = sorted(
            (msg for msg in messages if msg.date > state.watermark),
            key=lambda msg: msg.date,
        )
        if not new_messages:
            return 0

        state.watermark = max(msg.date for msg in new_messages)

        delivered = 0
        for msg in new_messages:
            callback = state.callback
            if not state.active or callback is None:
                break
            try:
                await callback(msg.address or "Unknown", msg.body or "")
            except Exception:
                logger.exception("SMS handler failed for message from %s", msg.address)
            delivered += 1

        return delivered
