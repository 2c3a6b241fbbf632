"""
Infrastructure Adapter: JSON File SMS Inbox
Implements ISmsInbox over an exported inbox file

The file is a JSON array in the shape Android's ``content://sms/inbox``
export produces (extra fields are ignored):

    [{"address": "VM-HDFCBK", "body": "Rs 500 debited ...", "date": 1705300000000}, ...]

A phone-side forwarder or backup tool can keep the file current; the
polling message source picks up new entries.
"""

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import List

from application.ports.sms_inbox import ISmsInbox
from domain.entities.sms_message import SmsMessage
from domain.exceptions import InboxPermissionError

logger = logging.getLogger(__name__)


class JsonFileSmsInbox(ISmsInbox):
    """Read SMS from a JSON export"""

    def __init__(self, path: str):
        self.path = Path(path)

    async def request_permission(self) -> bool:
        if not self.path.is_file():
            logger.warning("SMS inbox file not found: %s", self.path)
            return False
        return os.access(self.path, os.R_OK)

    def read_all(self) -> List[SmsMessage]:
        """All messages in the file, newest first"""
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                rows = json.load(f)
        except PermissionError as e:
            raise InboxPermissionError(str(e)) from e

        if isinstance(rows, dict):
            rows = rows.get("messages", [])
        if not isinstance(rows, list):
            raise ValueError(f"Expected a JSON array in {self.path}")

        messages = []
        for row in rows:
            if not isinstance(row, dict):
                continue
            try:
                messages.append(SmsMessage.from_dict(row))
            except (TypeError, ValueError, OverflowError):
                logger.warning("Skipping malformed inbox row in %s: %r", self.path, row)
        messages.sort(key=lambda msg: msg.date, reverse=True)
        return messages

    async def list_recent(self, max_count: int) -> List[SmsMessage]:
        messages = await asyncio.to_thread(self.read_all)
        return messages[:max_count]
