from dataclasses import dataclass
from datetime import datetime, UTC
from typing import Any


def _format_timestamp(value: datetime) -> str:
    return value.astimezone(UTC).isoformat().replace('+00:00', 'Z')


def _parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    # Records written without an offset are taken as UTC
    return parsed if parsed.tzinfo is not None else parsed.replace(tzinfo=UTC)


@dataclass(frozen=True)
class UrlEntryModel:
    """Represent a shortened URL entry owned by the entry store.

    Attributes:
        id (str):
            Opaque unique identifier, stable for the entry's lifetime.
        long_url (str):
            Destination URL the short code resolves to.
        short_code (str):
            Alphanumeric token identifying the short link.
        short_url (str):
            Public representation of the short link, e.g. 'http://localhost:3000/abc123'.
        created_at (datetime):
            Creation time (UTC).
        expires_at (datetime):
            Expiry time (UTC), always after `created_at`.
        clicks (int):
            Number of successful resolutions counted so far.
        is_valid (bool):
            False once the entry has been observed past `expires_at`.
        custom_short_code (Optional[str]):
            Caller-supplied shortcode, None for generated codes.

    NOTE:
        Instances are immutable. State transitions (click increments, soft expiry)
        replace the stored instance via `dataclasses.replace()`.

    Example:
        >>> from datetime import datetime, timedelta, UTC
        >>> now = datetime.now(UTC)
        >>> entry = UrlEntryModel(
        ...     id='4f1c2a',
        ...     long_url='https://example.com/article/123',
        ...     short_code='abc123',
        ...     short_url='http://localhost:3000/abc123',
        ...     created_at=now,
        ...     expires_at=now + timedelta(minutes=30),
        ... )
        >>> entry.clicks
        0
        >>> entry.is_valid
        True
    """

    id: str
    long_url: str
    short_code: str
    short_url: str
    created_at: datetime
    expires_at: datetime
    clicks: int = 0
    is_valid: bool = True
    custom_short_code: str | None = None

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at

    def to_dict(self) -> dict[str, Any]:
        record = {
            'id': self.id,
            'longUrl': self.long_url,
            'shortUrl': self.short_url,
            'shortCode': self.short_code,
            'createdAt': _format_timestamp(self.created_at),
            'expiresAt': _format_timestamp(self.expires_at),
            'clicks': self.clicks,
            'isValid': self.is_valid,
        }
        if self.custom_short_code is not None:
            record['customShortCode'] = self.custom_short_code
        return record

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> 'UrlEntryModel':
        """Rebuild an entry from its persisted representation.

        Raises:
            KeyError: If a required field is missing.
            ValueError: If a timestamp or counter is malformed, or the entry expires before it was created.
            TypeError: If the record is not a mapping of the expected types.
        """
        for field in ('id', 'longUrl', 'shortCode'):
            if not isinstance(record[field], str):
                raise TypeError(f"Field '{field}' must be a string (given type: {type(record[field])}).")
        for field in ('shortUrl', 'customShortCode'):
            if record.get(field) is not None and not isinstance(record[field], str):
                raise TypeError(f"Field '{field}' must be a string (given type: {type(record[field])}).")

        clicks = record['clicks']
        # bool is an int subclass
        if isinstance(clicks, bool) or not isinstance(clicks, int):
            raise TypeError(f'Click counter must be an integer (given type: {type(clicks)}).')
        if clicks < 0:
            raise ValueError(f'Click counter must be non-negative (given value: {clicks}).')

        is_valid = record.get('isValid', True)
        if not isinstance(is_valid, bool):
            raise TypeError(f'Validity flag must be a boolean (given type: {type(is_valid)}).')

        created_at = _parse_timestamp(record['createdAt'])
        expires_at = _parse_timestamp(record['expiresAt'])
        if expires_at <= created_at:
            raise ValueError(f'Expiry ({expires_at.isoformat()}) must be after creation ({created_at.isoformat()}).')

        return cls(
            id=record['id'],
            long_url=record['longUrl'],
            short_code=record['shortCode'],
            short_url=record.get('shortUrl') or '',
            created_at=created_at,
            expires_at=expires_at,
            clicks=clicks,
            is_valid=is_valid,
            custom_short_code=record.get('customShortCode'),
        )
