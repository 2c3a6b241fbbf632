"""
Infrastructure Adapter: Local Key-Value Store
Implements IKeyValueStore as a JSON file (fallback when no database is configured)
"""

import json
import os
from pathlib import Path
from typing import Dict, Optional

from application.ports.key_value_store import IKeyValueStore
from domain.exceptions import StorageError


class LocalKeyValueStore(IKeyValueStore):
    """Key-value adapter persisted to ``<base_path>/settings.json``"""

    def __init__(self, base_path: str = "data/storage", filename: str = "settings.json"):
        """Initialize local store"""

        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)
        self.file_path = self.base_path / filename

    def _load(self) -> Dict[str, str]:
        if not self.file_path.exists():
            return {}
        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Cannot read {self.file_path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Unexpected content in {self.file_path}")
        return data

    def _save(self, data: Dict[str, str]) -> None:
        # Write to a sibling file then rename so readers never see half a file
        tmp_path = self.file_path.with_suffix(self.file_path.suffix + '.tmp')
        try:
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.file_path)
        except OSError as e:
            raise StorageError(f"Cannot write {self.file_path}: {e}") from e

    async def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    async def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)
