"""In-process key-value store with a soft retention cap.

Values live only as long as the store object; used for ephemeral sessions
and as the default store in tests.
"""

from beartype import beartype

from localshortener.constants import Defaults
from localshortener.dao.base import KeyValueBaseStore
from localshortener.dao.exceptions import StorageQuotaExceededError


class MemoryKeyValueStore(KeyValueBaseStore):
    """Dict-backed key-value store

    Attributes:
        max_bytes (int):
            Soft cap on the total UTF-8 size of all stored values.
    """

    def __init__(self, max_bytes: int = Defaults.STORAGE_MAX_BYTES):
        if max_bytes <= 0:
            raise ValueError(f'Retention cap must be a positive integer (given value: {max_bytes}).')

        self.max_bytes = max_bytes
        self._data: dict[str, str] = {}

    def _size_with(self, key: str, value: str) -> int:
        return sum(len(v.encode()) for k, v in self._data.items() if k != key) + len(value.encode())

    @beartype
    def get(self, key: str) -> str | None:
        return self._data.get(key)

    @beartype
    def set(self, key: str, value: str) -> None:
        size = self._size_with(key, value)
        if size > self.max_bytes:
            raise StorageQuotaExceededError(f"Writing '{key}' would use {size} bytes (cap: {self.max_bytes} bytes).")
        self._data[key] = value

    @beartype
    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None
