"""Shortcode generation utility

This module provides a helper function for drawing random Base62 shortcodes
that are not yet present in the entry store's index.

Functions:
    generate_shortcode(is_taken, length=8, max_attempts=1000):
        Draw a random unused shortcode suitable for use as a URL slug.

Example:
    >>> from localshortener.utils import generate_shortcode
    >>> generate_shortcode(lambda code: False)
    'q3ZkT9bA'
"""

import random
import string

from localshortener.constants import Defaults
from localshortener.exceptions import GenerationExhaustedError
from localshortener.types import CodeLookup


ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
BASE = len(ALPHABET)  # 26 uppercase + 26 lowercase + 10 digits


def generate_shortcode(
    is_taken: CodeLookup,
    length: int = Defaults.SHORTCODE_LENGTH,
    max_attempts: int = Defaults.MAX_GENERATION_ATTEMPTS,
) -> str:
    """Draw a random shortcode which is not in use.

    Every character is drawn uniformly from the Base62 alphabet. The whole
    draw is repeated until `is_taken` reports the code unused.

    Args:
        is_taken (Callable[[str], bool]):
            Lookup into the current shortcode index.

        length (int, optional):
            Length of the resulting shortcode.
            Defaults to 8.

        max_attempts (int, optional):
            Number of draws before giving up.
            Defaults to 1000.

    Returns:
        str: An unused alphanumeric shortcode.

    Raises:
        GenerationExhaustedError:
            If every one of `max_attempts` draws collided with an existing code.

    NOTE:
        - 62^8 codes make a collision practically impossible; the attempt
          budget only protects against a saturated or misbehaving index.
        - Uses the non-cryptographic `random` module. Shortcodes are not secrets.
    """
    if length <= 0:
        raise ValueError(f'Shortcode length must be a positive integer (given value: {length}).')
    if max_attempts <= 0:
        raise ValueError(f'Attempt budget must be a positive integer (given value: {max_attempts}).')

    for _ in range(max_attempts):
        code = ''.join(random.choices(ALPHABET, k=length))  # noqa: S311
        if not is_taken(code):
            return code

    raise GenerationExhaustedError(f'Unable to generate an unused shortcode after {max_attempts} attempts.')
