"""Input validation for short URL creation requests

All validators are pure: they return a ValidationResult instead of raising,
so callers can hand the failure reason straight to the presentation layer.

Functions:
    validate_long_url(url) -> ValidationResult
        Check that a destination URL is an absolute http(s) URL.
    validate_short_code(code, is_taken) -> ValidationResult
        Check a custom shortcode's length, alphabet and availability.
    validate_validity_minutes(minutes) -> ValidationResult
        Check that a caller-supplied validity period is a positive integer.

Example:
    >>> validate_long_url('https://example.com/page').is_valid
    True
    >>> validate_long_url('ftp://example.com').error_code
    <ValidationFailure.UNSUPPORTED_SCHEME: 'UNSUPPORTED_SCHEME'>
    >>> validate_short_code('ab', is_taken=lambda code: False).error
    'Shortcode must be between 3 and 20 characters'
"""

import re
from typing import Any
from urllib.parse import urlsplit

from localshortener.constants import ShortcodeRules, ValidityRules
from localshortener.models import ValidationFailure, ValidationResult
from localshortener.types import CodeLookup


ALLOWED_SCHEMES = frozenset({'http', 'https'})
SHORTCODE_PATTERN = re.compile(r'[A-Za-z0-9]+')


def validate_long_url(url: Any) -> ValidationResult:
    """Validate a destination URL

    A URL is well-formed when it parses into a scheme and, for http(s), a host.
    Any other scheme is reported as unsupported rather than malformed.

    Args:
        url (Any): candidate long URL

    Returns:
        ValidationResult: INVALID_FORMAT, UNSUPPORTED_SCHEME or valid.
    """
    invalid_format = ValidationResult.fail(ValidationFailure.INVALID_FORMAT, 'Invalid URL format')

    if not isinstance(url, str) or not url or any(char.isspace() for char in url):
        return invalid_format

    try:
        parts = urlsplit(url)
        # Accessing the port validates it (raises ValueError when out of range)
        parts.port
    except ValueError:
        return invalid_format

    if not parts.scheme:
        return invalid_format
    if parts.scheme.lower() not in ALLOWED_SCHEMES:
        return ValidationResult.fail(ValidationFailure.UNSUPPORTED_SCHEME, 'URL must use HTTP or HTTPS protocol')
    if not parts.hostname:
        return invalid_format

    return ValidationResult.ok()


def validate_short_code(code: Any, is_taken: CodeLookup) -> ValidationResult:
    """Validate a custom shortcode

    Args:
        code (Any):
            candidate shortcode
        is_taken (Callable[[str], bool]):
            lookup into the entry store's shortcode index, evaluated on every call

    Returns:
        ValidationResult: LENGTH_OUT_OF_RANGE, INVALID_CHARACTERS, CODE_TAKEN or valid.
    """
    if not isinstance(code, str) or not ShortcodeRules.MIN_LENGTH <= len(code) <= ShortcodeRules.MAX_LENGTH:
        return ValidationResult.fail(
            ValidationFailure.LENGTH_OUT_OF_RANGE,
            f'Shortcode must be between {ShortcodeRules.MIN_LENGTH} and {ShortcodeRules.MAX_LENGTH} characters',
        )
    if not SHORTCODE_PATTERN.fullmatch(code):
        return ValidationResult.fail(ValidationFailure.INVALID_CHARACTERS, 'Shortcode must contain only letters and numbers')
    if is_taken(code):
        return ValidationResult.fail(ValidationFailure.CODE_TAKEN, 'Shortcode already exists')

    return ValidationResult.ok()


def validate_validity_minutes(minutes: Any) -> ValidationResult:
    """Validate a caller-supplied validity period (None means "use the default")."""
    if minutes is None:
        return ValidationResult.ok()
    # bool is an int subclass, but True minutes is never meant
    if isinstance(minutes, bool) or not isinstance(minutes, int):
        return ValidationResult.fail(ValidationFailure.INVALID_VALIDITY, 'Validity must be a whole number of minutes')
    if not ValidityRules.MIN_MINUTES <= minutes <= ValidityRules.MAX_MINUTES:
        return ValidationResult.fail(
            ValidationFailure.INVALID_VALIDITY,
            f'Validity must be between {ValidityRules.MIN_MINUTES} and {ValidityRules.MAX_MINUTES} minutes',
        )

    return ValidationResult.ok()
