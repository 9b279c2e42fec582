"""Abstract base class for durable key-value stores.

This class establishes a consistent contract for the durable stores the
engine persists into, regardless of the underlying medium (e.g., process
memory, a local JSON file, Redis).

Responsibilities:
    - Provide a synchronous get/set/delete interface over string values.
    - Standardize error handling across store implementations.

Example:
    Typical usage with a store-specific implementation:

        >>> from localshortener.dao.memory import MemoryKeyValueStore
        >>> store = MemoryKeyValueStore()
        >>> store.set('entries', '[]')
        >>> store.get('entries')
        '[]'
        >>> store.get('missing') is None
        True
"""

from abc import ABC, abstractmethod


class KeyValueBaseStore(ABC):
    """Interface for durable key-value stores.

    Methods:
        get(key: str) -> str | None:
            Return the value stored under key, None if absent.
            Raises DataStoreError on read failure.

        set(key: str, value: str) -> None:
            Store value under key, replacing any previous value.
            Raises StorageQuotaExceededError if the store's retention cap would be exceeded.
            Raises DataStoreError on write failure.

        delete(key: str) -> bool:
            Remove key. Return True if it existed.
            Raises DataStoreError on write failure.

    Subclassing:
        Medium-specific implementations (e.g., MemoryKeyValueStore or
        RedisKeyValueStore) must extend this class and implement all
        abstract methods.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Retrieve the value stored under key.

        Args:
            key (str):
                Fully qualified key name.

        Returns:
            str | None: The stored value if present, otherwise None.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key.

        Args:
            key (str):
                Fully qualified key name.

            value (str):
                Serialized value.

        Raises:
            StorageQuotaExceededError:
                If the write would exceed the store's retention cap.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove key from the store.

        Returns:
            bool: True if the key existed.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass
