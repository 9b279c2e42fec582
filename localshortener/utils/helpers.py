"""Helper utilities shared by the engine.

Functions:
    get_short_url(shortcode, base_url) -> str
        Get string representation of short URL for a given shortcode
    utc_now() -> datetime
        Current time as a timezone-aware UTC datetime

Example:
    >>> get_short_url('abc123', 'http://localhost:3000/')
    'http://localhost:3000/abc123'
"""

from datetime import datetime, UTC


def get_short_url(shortcode: str, base_url: str) -> str:
    """Get string representation of shortened URL

    Args:
        shortcode (str): shortcode
        base_url (str): public origin the short links are served from

    Returns:
        str: short url string representation
    """
    return f'{base_url.rstrip("/")}/{shortcode}'


def utc_now() -> datetime:
    return datetime.now(UTC)
