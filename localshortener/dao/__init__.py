from localshortener.dao.base import KeyValueBaseStore
from localshortener.dao.file import FileKeyValueStore
from localshortener.dao.memory import MemoryKeyValueStore
from localshortener.dao.redis import RedisKeyValueStore
from localshortener.dao.key_schema import StorageKeySchema
from localshortener.dao.url_entry_dao import UrlEntryDAO


__all__ = [
    'KeyValueBaseStore',
    'FileKeyValueStore',
    'MemoryKeyValueStore',
    'RedisKeyValueStore',
    'StorageKeySchema',
    'UrlEntryDAO',
]
