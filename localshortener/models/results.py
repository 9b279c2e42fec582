from dataclasses import dataclass
from enum import StrEnum

from localshortener.models.url_entry_model import UrlEntryModel


class ValidationFailure(StrEnum):
    """Reasons a creation request can be rejected."""

    INVALID_FORMAT = 'INVALID_FORMAT'
    UNSUPPORTED_SCHEME = 'UNSUPPORTED_SCHEME'
    LENGTH_OUT_OF_RANGE = 'LENGTH_OUT_OF_RANGE'
    INVALID_CHARACTERS = 'INVALID_CHARACTERS'
    CODE_TAKEN = 'CODE_TAKEN'
    INVALID_VALIDITY = 'INVALID_VALIDITY'
    GENERATION_EXHAUSTED = 'GENERATION_EXHAUSTED'


# fmt: off
@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    error_code: ValidationFailure | None = None  # Machine-readable failure reason
    error: str | None = None                     # Human-readable failure message

    @classmethod
    def ok(cls) -> 'ValidationResult':
        return cls(is_valid=True)

    @classmethod
    def fail(cls, error_code: ValidationFailure, error: str) -> 'ValidationResult':
        return cls(is_valid=False, error_code=error_code, error=error)


@dataclass(frozen=True)
class CreateUrlResult:
    success: bool
    entry: UrlEntryModel | None = None
    error: str | None = None
    error_code: ValidationFailure | None = None


@dataclass(frozen=True)
class UrlStats:
    total_urls: int
    active_urls: int
    expired_urls: int
    total_clicks: int
    average_clicks_per_url: float
# fmt: on
