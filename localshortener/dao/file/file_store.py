"""Key-value store persisted as a single JSON document on local disk.

The whole document is rewritten on every `set()`/`delete()`: the new content
goes to a sibling temporary file which then atomically replaces the original,
so a crash mid-write never leaves a half-written store behind.

Document layout:
    {
        "<prefix>:entries": "[...]",
        "<prefix>:code-index": "{...}"
    }

Example:
    >>> store = FileKeyValueStore('/tmp/localshortener/store.json')
    >>> store.set('entries', '[]')
    >>> store.get('entries')
    '[]'
"""

import os
import json
import logging
from pathlib import Path

from beartype import beartype

from localshortener.constants import Defaults, Action
from localshortener.dao.base import KeyValueBaseStore
from localshortener.dao.exceptions import DataStoreError, StorageQuotaExceededError


logger = logging.getLogger(__name__)


class FileKeyValueStore(KeyValueBaseStore):
    """JSON-file-backed key-value store

    Attributes:
        path (Path):
            Location of the JSON document. Parent directories are created on first write.
        max_bytes (int):
            Soft cap on the size of the serialized document.
    """

    def __init__(self, path: str | os.PathLike, max_bytes: int = Defaults.STORAGE_MAX_BYTES):
        if max_bytes <= 0:
            raise ValueError(f'Retention cap must be a positive integer (given value: {max_bytes}).')

        self.path = Path(path)
        self.max_bytes = max_bytes

    def _read(self) -> dict[str, str]:
        try:
            raw = self.path.read_text(encoding='utf-8')
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise DataStoreError(f"Can't read store file at {self.path}.") from e

        try:
            document = json.loads(raw)
        except json.JSONDecodeError:
            document = None
        if not isinstance(document, dict):
            # An unreadable document is treated as empty and overwritten by the next write
            logger.warning(
                'Store file is corrupt, treating it as empty.',
                extra={'action': Action.STORAGE_LOAD, 'data': {'path': str(self.path)}},
            )
            return {}

        return {k: v for k, v in document.items() if isinstance(v, str)}

    def _write(self, document: dict[str, str]) -> None:
        payload = json.dumps(document)
        size = len(payload.encode())
        if size > self.max_bytes:
            raise StorageQuotaExceededError(f'Store file would grow to {size} bytes (cap: {self.max_bytes} bytes).')

        tmp_path = self.path.with_name(f'{self.path.name}.tmp')
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding='utf-8')
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise DataStoreError(f"Can't write store file at {self.path}.") from e

    @beartype
    def get(self, key: str) -> str | None:
        return self._read().get(key)

    @beartype
    def set(self, key: str, value: str) -> None:
        document = self._read()
        document[key] = value
        self._write(document)

    @beartype
    def delete(self, key: str) -> bool:
        document = self._read()
        if key not in document:
            return False
        del document[key]
        self._write(document)
        return True
