"""Short URL management engine

UrlShortenerService is the public surface consumed by front ends (the CLI,
a UI, a scheduler). It is constructed explicitly and passed around; there is
no module-level instance.

Creation:   validate -> generate shortcode (unless custom) -> insert -> save
Resolution: lookup -> expiry check -> (click increment) -> save
Sweep:      remove every entry past expiry -> save

Example:
    >>> from localshortener.dao import UrlEntryDAO, MemoryKeyValueStore
    >>> service = UrlShortenerService(UrlEntryDAO(MemoryKeyValueStore()))
    >>> result = service.create_short_url('https://example.com/page', validity_minutes=30)
    >>> result.success
    True
    >>> service.increment_clicks(result.entry.short_code)
    True
    >>> service.resolve(result.entry.short_code).clicks
    1
"""

import uuid
import logging
from datetime import datetime, timedelta

from localshortener.constants import Action, Defaults
from localshortener.dao import UrlEntryDAO
from localshortener.dao.exceptions import EntryNotFoundError
from localshortener.exceptions import GenerationExhaustedError
from localshortener.lifecycle import LifecycleManager
from localshortener.models import UrlEntryModel, CreateUrlResult, UrlStats, ValidationFailure
from localshortener.store import EntryStore
from localshortener.utils.helpers import get_short_url, utc_now
from localshortener.utils.shortener import generate_shortcode
from localshortener.utils.validators import validate_long_url, validate_short_code, validate_validity_minutes


logger = logging.getLogger(__name__)


class UrlShortenerService:
    """Create, resolve, count and expire short URLs

    Attributes:
        dao (UrlEntryDAO):
            Persistence adapter, written through on every mutation.
        store (EntryStore):
            In-memory source of truth, restored from `dao` at construction.
        lifecycle (LifecycleManager):
            Expiry checks, click counting and sweeping.
        base_url (str):
            Origin used to build each entry's short_url.
        default_validity_minutes (int):
            Validity applied when the caller doesn't supply one.
    """

    def __init__(
        self,
        dao: UrlEntryDAO,
        base_url: str = Defaults.BASE_URL,
        default_validity_minutes: int = Defaults.VALIDITY_MINUTES,
    ):
        if default_validity_minutes is None or not validate_validity_minutes(default_validity_minutes).is_valid:
            raise ValueError(f'Default validity is out of range (given value: {default_validity_minutes}).')

        self.dao = dao
        self.base_url = base_url
        self.default_validity_minutes = default_validity_minutes

        entries, code_index = dao.load()
        self.store = EntryStore.from_snapshot(entries, code_index)
        self.lifecycle = LifecycleManager(self.store, dao)

        logger.info('URL Service initialized', extra={'action': Action.SERVICE_INIT, 'data': {'count': len(self.store)}})

    def _reject(self, error_code: ValidationFailure, error: str, data: dict) -> CreateUrlResult:
        logger.warning(error, extra={'action': Action.CREATE_URL, 'data': {**data, 'errorCode': error_code}})
        return CreateUrlResult(success=False, error=error, error_code=error_code)

    def create_short_url(
        self,
        long_url: str,
        custom_short_code: str | None = None,
        validity_minutes: int | None = None,
    ) -> CreateUrlResult:
        """Create a new short URL

        Args:
            long_url (str):
                Destination URL (absolute, http or https).
            custom_short_code (str | None):
                Caller-chosen shortcode (3-20 alphanumerics). An empty string
                is treated like None and a code is generated.
            validity_minutes (int | None):
                Lifetime of the link, `default_validity_minutes` if None.

        Returns:
            CreateUrlResult:
                success=True with the new entry, or success=False with the
                failure reason. Nothing is inserted on failure.
        """
        logger.info(
            'Creating short URL',
            extra={
                'action': Action.CREATE_URL,
                'data': {'longUrl': long_url, 'customShortCode': custom_short_code, 'validityMinutes': validity_minutes},
            },
        )

        url_validation = validate_long_url(long_url)
        if not url_validation.is_valid:
            return self._reject(url_validation.error_code, url_validation.error, {'longUrl': long_url})

        validity_validation = validate_validity_minutes(validity_minutes)
        if not validity_validation.is_valid:
            return self._reject(validity_validation.error_code, validity_validation.error, {'validityMinutes': validity_minutes})

        if custom_short_code:
            code_validation = validate_short_code(custom_short_code, is_taken=self.store.has_code)
            if not code_validation.is_valid:
                return self._reject(code_validation.error_code, code_validation.error, {'customShortCode': custom_short_code})
            short_code = custom_short_code
        else:
            try:
                short_code = generate_shortcode(is_taken=self.store.has_code)
            except GenerationExhaustedError as e:
                logger.error(str(e), extra={'action': Action.CREATE_URL, 'data': {'indexed': len(self.store)}})
                return CreateUrlResult(success=False, error=str(e), error_code=ValidationFailure.GENERATION_EXHAUSTED)

        created_at = utc_now()
        entry = UrlEntryModel(
            id=uuid.uuid4().hex,
            long_url=long_url,
            short_code=short_code,
            short_url=get_short_url(short_code, self.base_url),
            created_at=created_at,
            expires_at=created_at + timedelta(minutes=validity_minutes or self.default_validity_minutes),
            custom_short_code=custom_short_code or None,
        )

        self.store.insert(entry)
        self.lifecycle.persist()

        logger.info(
            'Short URL created successfully',
            extra={'action': Action.CREATE_URL, 'data': {'id': entry.id, 'shortCode': entry.short_code}},
        )
        return CreateUrlResult(success=True, entry=entry)

    def resolve(self, short_code: str, now: datetime | None = None) -> UrlEntryModel | None:
        return self.lifecycle.resolve(short_code, now=now)

    def increment_clicks(self, short_code: str, now: datetime | None = None) -> bool:
        return self.lifecycle.increment_clicks(short_code, now=now)

    def get_by_id(self, entry_id: str) -> UrlEntryModel | None:
        return self.store.get_by_id(entry_id)

    def list_all(self) -> list[UrlEntryModel]:
        """Return every stored entry (live and soft-expired), newest first."""
        return self.store.all()

    def delete(self, entry_id: str) -> bool:
        """Delete an entry by id

        Returns:
            bool: False (and no write) if the id is unknown, True otherwise.
        """
        try:
            entry = self.store.remove(entry_id)
        except EntryNotFoundError:
            logger.warning('Attempted to delete non-existent URL', extra={'action': Action.DELETE_URL, 'data': {'id': entry_id}})
            return False

        self.lifecycle.persist()

        logger.info(
            'URL deleted successfully',
            extra={'action': Action.DELETE_URL, 'data': {'id': entry_id, 'shortCode': entry.short_code}},
        )
        return True

    def sweep_expired(self, now: datetime | None = None) -> int:
        return self.lifecycle.sweep_expired(now=now)

    def get_statistics(self, now: datetime | None = None) -> UrlStats:
        """Summarize stored entries

        An entry counts as active when it is flagged valid and not past expiry.
        """
        now = now or utc_now()
        entries = self.store.all()

        total_urls = len(entries)
        active_urls = sum(1 for entry in entries if entry.is_valid and not entry.is_expired(now))
        total_clicks = sum(entry.clicks for entry in entries)

        return UrlStats(
            total_urls=total_urls,
            active_urls=active_urls,
            expired_urls=total_urls - active_urls,
            total_clicks=total_clicks,
            average_clicks_per_url=total_clicks / total_urls if total_urls else 0.0,
        )
