from enum import StrEnum


class Defaults:
    """Default engine values."""

    VALIDITY_MINUTES = 30  # Short URL lifetime when the caller doesn't supply one
    SHORTCODE_LENGTH = 8  # Length of generated shortcodes
    MAX_GENERATION_ATTEMPTS = 1000  # Draws before giving up on a saturated index
    SWEEP_INTERVAL_SECONDS = 60  # Period of the expiry sweep
    BASE_URL = 'http://localhost:3000'
    STORAGE_BACKEND = 'file'
    STORAGE_FILE_PATH = '.localshortener/store.json'
    STORAGE_MAX_BYTES = 5 * 1024 * 1024  # 5 MiB soft retention cap
    LOG_BUFFER_CAPACITY = 1000


class ShortcodeRules:
    """Constraints on custom shortcodes."""

    MIN_LENGTH = 3
    MAX_LENGTH = 20


class ValidityRules:
    """Bounds on caller-supplied validity periods, in minutes."""

    MIN_MINUTES = 1
    MAX_MINUTES = 10 * 365 * 24 * 60  # 10 years


class Action(StrEnum):
    """Engine event names attached to log records as `action`."""

    SERVICE_INIT = 'SERVICE_INIT'
    STORAGE_LOAD = 'STORAGE_LOAD'
    STORAGE_SAVE = 'STORAGE_SAVE'
    CREATE_URL = 'CREATE_URL'
    GET_URL = 'GET_URL'
    INCREMENT_CLICKS = 'INCREMENT_CLICKS'
    DELETE_URL = 'DELETE_URL'
    CLEANUP_EXPIRED = 'CLEANUP_EXPIRED'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        LOG_LEVEL = 'LOG_LEVEL'

    class Storage(StrEnum):
        BACKEND = 'STORAGE_BACKEND'  # memory | file | redis
        FILE_PATH = 'STORAGE_FILE_PATH'
        MAX_BYTES = 'STORAGE_MAX_BYTES'

    class Redis(StrEnum):
        HOST = 'REDIS_HOST'
        PORT = 'REDIS_PORT'
        DB = 'REDIS_DB'
        USERNAME = 'REDIS_USERNAME'
        PASSWORD = 'REDIS_PASSWORD'  # noqa: S105

    class Shortener(StrEnum):
        BASE_URL = 'SHORTENER_BASE_URL'
        DEFAULT_VALIDITY_MINUTES = 'SHORTENER_DEFAULT_VALIDITY_MINUTES'
        SWEEP_INTERVAL_SECONDS = 'SHORTENER_SWEEP_INTERVAL_SECONDS'


# Storage record names
ENTRIES_RECORD = 'entries'
CODE_INDEX_RECORD = 'code-index'
