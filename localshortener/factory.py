"""Wire a UrlShortenerService from configuration

Functions:
    build_store(config) -> KeyValueBaseStore
        Instantiate the durable store selected by `config.storage_backend`.
    create_service(config=None) -> UrlShortenerService
        Build the store, persistence adapter and service.

Example:
    >>> os.environ['STORAGE_BACKEND'] = 'memory'
    >>> service = create_service()
    >>> service.list_all()
    []
"""

from localshortener.dao import KeyValueBaseStore, FileKeyValueStore, MemoryKeyValueStore, RedisKeyValueStore, UrlEntryDAO
from localshortener.service import UrlShortenerService
from localshortener.utils.config import ShortenerConfig, load_config


def build_store(config: ShortenerConfig) -> KeyValueBaseStore:
    """Instantiate the configured durable store

    Raises:
        DataStoreError: If the Redis backend is selected and unreachable.
    """
    match config.storage_backend:
        case 'memory':
            return MemoryKeyValueStore(max_bytes=config.storage_max_bytes)
        case 'file':
            return FileKeyValueStore(config.storage_file_path, max_bytes=config.storage_max_bytes)
        case 'redis':
            return RedisKeyValueStore(
                redis_host=config.redis_host,
                redis_port=config.redis_port,
                redis_db=config.redis_db,
                redis_username=config.redis_username,
                redis_password=config.redis_password,
            )
        case _:
            raise ValueError(f"Unknown storage backend '{config.storage_backend}'.")


def create_service(config: ShortenerConfig | None = None) -> UrlShortenerService:
    config = config or load_config()
    dao = UrlEntryDAO(build_store(config), prefix=config.storage_prefix)
    return UrlShortenerService(
        dao,
        base_url=config.base_url,
        default_validity_minutes=config.default_validity_minutes,
    )
