from localshortener.utils.config import app_env, app_name, app_prefix, load_config, ShortenerConfig
from localshortener.utils.helpers import get_short_url, utc_now
from localshortener.utils.shortener import generate_shortcode
from localshortener.utils.logging import initialize_logging, JsonFormatter, LogBufferHandler
from localshortener.utils.validators import validate_long_url, validate_short_code, validate_validity_minutes


__all__ = [
    'generate_shortcode',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'ShortenerConfig',
    'get_short_url',
    'utc_now',
    'initialize_logging',
    'JsonFormatter',
    'LogBufferHandler',
    'validate_long_url',
    'validate_short_code',
    'validate_validity_minutes',
]
