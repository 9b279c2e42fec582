"""Periodic expiry sweep

The sweeper runs in the caller's thread: `run()` blocks, sleeping between
ticks, and each tick performs at most one sweep. Sweeps therefore never
overlap with each other or with other engine calls made from that thread.

Example:
    >>> sweeper = ExpirySweeper(service, interval_seconds=60)
    >>> sweeper.tick()   # first tick always sweeps
    0
    >>> sweeper.tick()   # not due yet
    >>> sweeper.run(max_ticks=10)
"""

import time
import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from localshortener.constants import Action, Defaults
from localshortener.service import UrlShortenerService
from localshortener.utils.helpers import utc_now


logger = logging.getLogger(__name__)


class ExpirySweeper:
    """Drive `UrlShortenerService.sweep_expired()` on a fixed interval"""

    def __init__(self, service: UrlShortenerService, interval_seconds: int = Defaults.SWEEP_INTERVAL_SECONDS):
        if interval_seconds <= 0:
            raise ValueError(f'Sweep interval must be a positive integer (given value: {interval_seconds}).')

        self.service = service
        self.interval = timedelta(seconds=interval_seconds)
        self.last_run: datetime | None = None

    def due(self, now: datetime | None = None) -> bool:
        now = now or utc_now()
        return self.last_run is None or now - self.last_run >= self.interval

    def tick(self, now: datetime | None = None) -> int | None:
        """Sweep if due

        Returns:
            int | None: number of removed entries, None if no sweep was due.
        """
        now = now or utc_now()
        if not self.due(now):
            return None

        self.last_run = now
        removed = self.service.sweep_expired(now=now)
        logger.debug('Expiry sweep finished', extra={'action': Action.CLEANUP_EXPIRED, 'data': {'count': removed}})
        return removed

    def run(self, max_ticks: int | None = None, sleep: Callable[[float], None] = time.sleep) -> None:
        """Tick every interval until `max_ticks` ticks ran (forever if None)."""
        ticks = 0
        while max_ticks is None or ticks < max_ticks:
            self.tick()
            ticks += 1
            if max_ticks is None or ticks < max_ticks:
                sleep(self.interval.total_seconds())
