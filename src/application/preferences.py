"""
Persisted user preferences
"""

from application.ports.key_value_store import IKeyValueStore

AUTO_CONFIRM_KEY = "sms_auto_confirm"


class AutoConfirmPolicy:
    """
    Whether SMS-derived transactions skip the review queue

    Enabled unless the stored value is exactly "false"; an absent key
    counts as enabled.
    """

    def __init__(self, store: IKeyValueStore):
        self.store = store

    async def is_enabled(self) -> bool:
        value = await self.store.get_item(AUTO_CONFIRM_KEY)
        return value != "false"

    async def set_enabled(self, enabled: bool) -> None:
        await self.store.set_item(AUTO_CONFIRM_KEY, "true" if enabled else "false")
