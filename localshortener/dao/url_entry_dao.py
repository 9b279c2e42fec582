"""Persistence adapter between the entry store and a durable key-value store

The entry set and the shortcode index are persisted as two independent
records so that the index can be cross-checked against the entries at
startup:

    <prefix>:entries     -> JSON array of UrlEntryModel records
    <prefix>:code-index  -> JSON object {shortcode: id}

Persistence is best-effort. Neither `save()` nor `load()` ever raises a
store failure to the caller; failures are logged as persistence warnings.

Example:
    >>> from localshortener.dao.memory import MemoryKeyValueStore
    >>> dao = UrlEntryDAO(MemoryKeyValueStore(), prefix='localshortener:test')
    >>> dao.save([entry], {entry.short_code: entry.id})
    True
    >>> entries, code_index = dao.load()
    >>> entries[0].short_code
    'abc123'
"""

import json
import logging
from collections.abc import Iterable, Mapping

from beartype import beartype

from localshortener.constants import Action
from localshortener.dao.base import KeyValueBaseStore
from localshortener.dao.exceptions import DataStoreError
from localshortener.dao.key_schema import StorageKeySchema
from localshortener.models import UrlEntryModel
from localshortener.types import CodeIndex


logger = logging.getLogger(__name__)


class UrlEntryDAO:
    """Serialize UrlEntryModel collections to and from a KeyValueBaseStore

    Attributes:
        store (KeyValueBaseStore):
            Durable store the two records are written to.
        keys (StorageKeySchema):
            Key schema helper for generating namespaced record keys.
    """

    def __init__(self, store: KeyValueBaseStore, prefix: str | None = None):
        self.store = store
        self.keys = StorageKeySchema(prefix=prefix)

    @beartype
    def save(self, entries: Iterable[UrlEntryModel], code_index: Mapping[str, str]) -> bool:
        """Write entries and shortcode index to the durable store

        Args:
            entries (Iterable[UrlEntryModel]):
                Every entry currently held by the entry store.
            code_index (Mapping[str, str]):
                shortcode -> id mapping.

        Returns:
            bool: True if both records were written, False otherwise.
        """
        records = [entry.to_dict() for entry in entries]
        try:
            self.store.set(self.keys.entries_key(), json.dumps(records))
            self.store.set(self.keys.code_index_key(), json.dumps(dict(code_index)))
        except DataStoreError as e:
            logger.warning(
                'Failed to save URLs to storage',
                extra={'action': Action.STORAGE_SAVE, 'data': {'error': str(e), 'count': len(records)}},
            )
            return False

        logger.debug('URLs saved to storage', extra={'action': Action.STORAGE_SAVE, 'data': {'count': len(records)}})
        return True

    def load(self) -> tuple[list[UrlEntryModel], CodeIndex]:
        """Read entries and shortcode index from the durable store

        Returns empty structures when nothing is stored, when the stored
        records are corrupt, or when the store can't be read. Individual
        malformed entry records are skipped.

        Returns:
            tuple[list[UrlEntryModel], dict[str, str]]: entries and shortcode index.
        """
        try:
            raw_entries = self.store.get(self.keys.entries_key())
            raw_index = self.store.get(self.keys.code_index_key())
        except DataStoreError as e:
            logger.warning('Failed to load URLs from storage', extra={'action': Action.STORAGE_LOAD, 'data': {'error': str(e)}})
            return [], {}

        try:
            records = json.loads(raw_entries) if raw_entries else []
            code_index = json.loads(raw_index) if raw_index else {}
        except json.JSONDecodeError as e:
            logger.warning('Stored URLs are corrupt, starting empty', extra={'action': Action.STORAGE_LOAD, 'data': {'error': str(e)}})
            return [], {}

        if not isinstance(records, list) or not isinstance(code_index, dict):
            logger.warning('Stored URLs have an unexpected shape, starting empty', extra={'action': Action.STORAGE_LOAD, 'data': {}})
            return [], {}

        entries = []
        for record in records:
            try:
                entries.append(UrlEntryModel.from_dict(record))
            except (KeyError, ValueError, TypeError, AttributeError) as e:
                logger.warning('Skipping malformed stored URL', extra={'action': Action.STORAGE_LOAD, 'data': {'error': str(e)}})

        code_index = {code: str(entry_id) for code, entry_id in code_index.items() if isinstance(code, str)}

        logger.info('URLs loaded from storage', extra={'action': Action.STORAGE_LOAD, 'data': {'count': len(entries)}})
        return entries, code_index
