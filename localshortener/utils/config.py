"""Utility functions for application configuration management.

Configuration is read from environment variables only. Variable names are
grouped in `localshortener.constants.ENV`:

    APP_ENV / APP_NAME                     -> key namespace '<name>:<env>'
    STORAGE_BACKEND                        -> 'memory' | 'file' | 'redis'
    STORAGE_FILE_PATH / STORAGE_MAX_BYTES  -> file/memory store settings
    REDIS_HOST / REDIS_PORT / REDIS_DB / REDIS_USERNAME / REDIS_PASSWORD
    SHORTENER_BASE_URL
    SHORTENER_DEFAULT_VALIDITY_MINUTES
    SHORTENER_SWEEP_INTERVAL_SECONDS

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return the storage key prefix, or None if `APP_NAME` is not set.

    load_config() -> ShortenerConfig
        Build the engine configuration from the environment.

Example:
    >>> os.environ['STORAGE_BACKEND'] = 'memory'
    >>> config = load_config()
    >>> config.storage_backend
    'memory'
    >>> config.default_validity_minutes
    30
"""

import os
from dataclasses import dataclass
from pathlib import Path

from localshortener.constants import ENV, Defaults, ValidityRules
from localshortener.exceptions import BadConfigurationError


STORAGE_BACKENDS = frozenset({'memory', 'file', 'redis'})


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'

    Returns:
        str:
            Value of `APP_NAME` environment variable.
            None if variable is not set.
    """
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for storage keys

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'localshortener'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'localshortener:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def _int_env(name: str, default: int, minimum: int, maximum: int | None = None) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == '':
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise BadConfigurationError(f"Environment variable '{name}' must be an integer (given value: {raw!r}).") from e
    if value < minimum:
        raise BadConfigurationError(f"Environment variable '{name}' must be >= {minimum} (given value: {value}).")
    if maximum is not None and value > maximum:
        raise BadConfigurationError(f"Environment variable '{name}' must be <= {maximum} (given value: {value}).")
    return value


@dataclass(frozen=True)
class ShortenerConfig:
    """Engine configuration resolved from the environment."""

    storage_backend: str = Defaults.STORAGE_BACKEND
    storage_file_path: Path = Path(Defaults.STORAGE_FILE_PATH)
    storage_max_bytes: int = Defaults.STORAGE_MAX_BYTES
    storage_prefix: str | None = None
    redis_host: str = 'localhost'
    redis_port: int = 6379
    redis_db: int = 0
    redis_username: str | None = None
    redis_password: str | None = None
    base_url: str = Defaults.BASE_URL
    default_validity_minutes: int = Defaults.VALIDITY_MINUTES
    sweep_interval_seconds: int = Defaults.SWEEP_INTERVAL_SECONDS


def load_config() -> ShortenerConfig:
    """Load engine configuration from environment variables

    Returns:
        ShortenerConfig: resolved configuration, defaults for unset variables.

    Raises:
        BadConfigurationError:
            If a variable holds a value of the wrong type or out of range,
            or names an unknown storage backend.
    """
    backend = os.environ.get(ENV.Storage.BACKEND, Defaults.STORAGE_BACKEND).lower()
    if backend not in STORAGE_BACKENDS:
        supported = ', '.join(sorted(STORAGE_BACKENDS))
        raise BadConfigurationError(f"Unknown storage backend '{backend}' (supported: {supported}).")

    return ShortenerConfig(
        storage_backend=backend,
        storage_file_path=Path(os.environ.get(ENV.Storage.FILE_PATH) or Defaults.STORAGE_FILE_PATH),
        storage_max_bytes=_int_env(ENV.Storage.MAX_BYTES, Defaults.STORAGE_MAX_BYTES, minimum=1),
        storage_prefix=app_prefix(),
        redis_host=os.environ.get(ENV.Redis.HOST) or 'localhost',
        redis_port=_int_env(ENV.Redis.PORT, 6379, minimum=1),
        redis_db=_int_env(ENV.Redis.DB, 0, minimum=0),
        redis_username=os.environ.get(ENV.Redis.USERNAME) or None,
        redis_password=os.environ.get(ENV.Redis.PASSWORD) or None,
        base_url=os.environ.get(ENV.Shortener.BASE_URL) or Defaults.BASE_URL,
        default_validity_minutes=_int_env(
            ENV.Shortener.DEFAULT_VALIDITY_MINUTES,
            Defaults.VALIDITY_MINUTES,
            minimum=ValidityRules.MIN_MINUTES,
            maximum=ValidityRules.MAX_MINUTES,
        ),
        sweep_interval_seconds=_int_env(ENV.Shortener.SWEEP_INTERVAL_SECONDS, Defaults.SWEEP_INTERVAL_SECONDS, minimum=1),
    )
