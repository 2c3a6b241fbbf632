"""
Port: Key-Value Store Interface
Small persisted settings/state store (string keys, string values)
"""

from abc import ABC, abstractmethod
from typing import Optional


class IKeyValueStore(ABC):
    """Interface for persisted key-value storage"""

    @abstractmethod
    async def get_item(self, key: str) -> Optional[str]:
        """
        Read a value

        Args:
            key: Item key

        Returns:
            Stored string, or None if the key is absent

        Raises:
            StorageError: If the backing store fails
        """
        pass

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        """
        Write (or overwrite) a value

        Raises:
            StorageError: If the backing store fails
        """
        pass
