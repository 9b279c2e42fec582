"""Expiry and click tracking for stored entries

Entries move through three states:

    Active       is_valid=True, now <= expires_at
    SoftExpired  is_valid=False, still indexed (shortcode slot still taken)
    Removed      absent from the entry store

A read past expiry moves Active -> SoftExpired. Only `sweep_expired()` (or an
explicit delete) physically removes entries.

Every mutation is written through to the persistence adapter immediately.
"""

import logging
from dataclasses import replace
from datetime import datetime

from localshortener.constants import Action
from localshortener.dao import UrlEntryDAO
from localshortener.dao.exceptions import EntryNotFoundError
from localshortener.exceptions import ExpiredError
from localshortener.models import UrlEntryModel
from localshortener.store import EntryStore
from localshortener.utils.helpers import utc_now


logger = logging.getLogger(__name__)


class LifecycleManager:
    """Resolve shortcodes, count clicks and evict expired entries

    Attributes:
        store (EntryStore):
            Entry store the manager operates on.
        dao (UrlEntryDAO):
            Persistence adapter flushed after every mutation.
    """

    def __init__(self, store: EntryStore, dao: UrlEntryDAO):
        self.store = store
        self.dao = dao

    def persist(self) -> bool:
        return self.dao.save(self.store.all(), self.store.code_index())

    def lookup(self, short_code: str, now: datetime | None = None) -> UrlEntryModel:
        """Return the live entry for a shortcode

        An entry found past its expiry is soft-expired (is_valid=False) and
        the change is persisted before the error is raised.

        Raises:
            EntryNotFoundError: If the shortcode isn't indexed.
            ExpiredError: If the entry is past expiry.
        """
        now = now or utc_now()

        entry = self.store.get_by_code(short_code)
        if entry is None:
            raise EntryNotFoundError(f"Shortcode '{short_code}' not found.")

        if entry.is_expired(now) or not entry.is_valid:
            if entry.is_valid:
                self.store.replace(replace(entry, is_valid=False))
                self.persist()
            raise ExpiredError(f"Shortcode '{short_code}' expired at {entry.expires_at.isoformat()}.")

        return entry

    def resolve(self, short_code: str, now: datetime | None = None) -> UrlEntryModel | None:
        """Return the live entry for a shortcode, None if unknown or expired."""
        try:
            entry = self.lookup(short_code, now=now)
        except EntryNotFoundError:
            logger.warning('Shortcode not found', extra={'action': Action.GET_URL, 'data': {'shortCode': short_code}})
            return None
        except ExpiredError:
            expired = self.store.get_by_code(short_code)
            logger.info(
                'URL expired',
                extra={'action': Action.GET_URL, 'data': {'shortCode': short_code, 'urlId': expired.id if expired else None}},
            )
            return None

        logger.debug('URL resolved', extra={'action': Action.GET_URL, 'data': {'shortCode': short_code, 'urlId': entry.id}})
        return entry

    def increment_clicks(self, short_code: str, now: datetime | None = None) -> bool:
        """Count one click on a live shortcode

        Returns:
            bool: False if the shortcode is unknown or expired, True otherwise.
        """
        entry = self.resolve(short_code, now=now)
        if entry is None:
            return False

        updated = replace(entry, clicks=entry.clicks + 1)
        self.store.replace(updated)
        self.persist()

        logger.info(
            'Click count incremented',
            extra={'action': Action.INCREMENT_CLICKS, 'data': {'shortCode': short_code, 'clicks': updated.clicks}},
        )
        return True

    def sweep_expired(self, now: datetime | None = None) -> int:
        """Remove every entry whose expiry lies before `now`

        Returns:
            int: number of entries removed.
        """
        now = now or utc_now()

        expired = [entry for entry in self.store.all() if entry.expires_at < now]
        for entry in expired:
            self.store.remove(entry.id)

        if expired:
            self.persist()
            logger.info(
                'Expired URLs cleaned up',
                extra={'action': Action.CLEANUP_EXPIRED, 'data': {'count': len(expired)}},
            )

        return len(expired)
