"""In-memory entry store, the source of truth during a session

The store owns two indexes which are always updated together:

    id         -> UrlEntryModel
    short_code -> id

Entries are immutable; state transitions replace the stored instance, so a
value handed out by the store never changes underneath its holder.

Example:
    >>> store = EntryStore()
    >>> store.insert(entry)
    >>> store.get_by_code('abc123').id == entry.id
    True
    >>> store.remove(entry.id).short_code
    'abc123'
    >>> store.get_by_code('abc123') is None
    True
"""

import logging
from collections.abc import Iterable, Mapping

from beartype import beartype

from localshortener.constants import Action
from localshortener.dao.exceptions import DuplicateIdError, DuplicateCodeError, EntryNotFoundError
from localshortener.models import UrlEntryModel
from localshortener.types import CodeIndex


logger = logging.getLogger(__name__)


class EntryStore:
    """Dual-indexed mapping of UrlEntryModel instances

    Methods:
        insert(entry) -> None:
            Add entry to both indexes.
            Raises DuplicateIdError / DuplicateCodeError if either key is taken.

        replace(entry) -> None:
            Swap the stored instance for an entry with the same id and shortcode.
            Raises EntryNotFoundError if the id is unknown.

        remove(entry_id) -> UrlEntryModel:
            Drop entry from both indexes and return it.
            Raises EntryNotFoundError if the id is unknown.

        get_by_id(entry_id) / get_by_code(short_code) -> UrlEntryModel | None:
            O(1) lookups, None when absent.

        has_code(short_code) -> bool:
            Whether the shortcode is indexed (live or soft-expired).

        all() -> list[UrlEntryModel]:
            Snapshot ordered by created_at, newest first.

        code_index() -> dict[str, str]:
            Snapshot of the shortcode index.
    """

    def __init__(self):
        self._entries: dict[str, UrlEntryModel] = {}
        self._code_index: dict[str, str] = {}

    @classmethod
    def from_snapshot(cls, entries: Iterable[UrlEntryModel], code_index: Mapping[str, str] | None = None) -> 'EntryStore':
        """Rebuild a store from persisted records

        The shortcode index is rebuilt from the entries themselves. The stored
        index is only cross-checked: mappings pointing at unknown ids or
        disagreeing with the entries are dropped and logged. Entries whose id
        or shortcode collides with an earlier entry are dropped as well.

        Args:
            entries (Iterable[UrlEntryModel]):
                Persisted entries.
            code_index (Mapping[str, str] | None):
                Persisted shortcode index.

        Returns:
            EntryStore: populated store.
        """
        store = cls()
        for entry in entries:
            try:
                store.insert(entry)
            except (DuplicateIdError, DuplicateCodeError) as e:
                logger.warning('Dropping conflicting stored URL', extra={'action': Action.STORAGE_LOAD, 'data': {'error': str(e)}})

        for short_code, entry_id in (code_index or {}).items():
            if store._code_index.get(short_code) != entry_id:
                logger.warning(
                    'Dropping stale shortcode mapping',
                    extra={'action': Action.STORAGE_LOAD, 'data': {'shortCode': short_code, 'id': entry_id}},
                )

        return store

    @beartype
    def insert(self, entry: UrlEntryModel) -> None:
        if entry.id in self._entries:
            raise DuplicateIdError(f"Entry with id '{entry.id}' already exists.")
        if entry.short_code in self._code_index:
            raise DuplicateCodeError(f"Shortcode '{entry.short_code}' is already indexed.")

        self._entries[entry.id] = entry
        self._code_index[entry.short_code] = entry.id

    @beartype
    def replace(self, entry: UrlEntryModel) -> None:
        current = self._entries.get(entry.id)
        if current is None:
            raise EntryNotFoundError(f"Entry with id '{entry.id}' not found.")
        if current.short_code != entry.short_code:
            raise ValueError(f"Shortcode of entry '{entry.id}' is immutable ('{current.short_code}' -> '{entry.short_code}').")

        self._entries[entry.id] = entry

    @beartype
    def remove(self, entry_id: str) -> UrlEntryModel:
        entry = self._entries.pop(entry_id, None)
        if entry is None:
            raise EntryNotFoundError(f"Entry with id '{entry_id}' not found.")

        del self._code_index[entry.short_code]
        return entry

    def get_by_id(self, entry_id: str) -> UrlEntryModel | None:
        return self._entries.get(entry_id)

    def get_by_code(self, short_code: str) -> UrlEntryModel | None:
        entry_id = self._code_index.get(short_code)
        if entry_id is None:
            return None
        return self._entries.get(entry_id)

    def has_code(self, short_code: str) -> bool:
        return short_code in self._code_index

    def all(self) -> list[UrlEntryModel]:
        return sorted(self._entries.values(), key=lambda entry: entry.created_at, reverse=True)

    def code_index(self) -> CodeIndex:
        return dict(self._code_index)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._entries
