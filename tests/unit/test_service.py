"""Unit tests for the UrlShortenerService

Test coverage includes:

1. Creation
   - Generated shortcodes are 8 Base62 characters and unique.
   - Custom shortcodes are validated; failures insert and persist nothing.
   - Long URL and validity validation failures are typed results.
   - Expiry defaults to 30 minutes (configurable) and honours validity_minutes.
   - Generation exhaustion and persistence failures (quota, Redis timeouts) don't raise.

2. Resolution and clicks
   - Expiry boundary: live at +59s, unavailable at +61s for a 1-minute link.
   - N click increments add exactly N; expired/unknown codes are untouched.

3. Listing, deletion, sweeping, statistics
   - list_all() is newest first.
   - delete() removes both mappings; unknown ids return False without a write.
   - sweep_expired() is idempotent.
   - A soft-expired shortcode can't be reused until swept.

4. Persistence across restarts
   - A new service over the same store reproduces ids, codes and clicks.
"""

import logging
from datetime import timedelta
from unittest.mock import patch

import pytest
import redis
from freezegun import freeze_time

from localshortener.dao import MemoryKeyValueStore, RedisKeyValueStore, UrlEntryDAO
from localshortener.exceptions import GenerationExhaustedError
from localshortener.models import ValidationFailure
from localshortener.service import UrlShortenerService
from localshortener.utils.shortener import ALPHABET


FROZEN_NOW = '2025-10-15 12:00:00'


# -------------------------------
# 1. Creation
# -------------------------------


@freeze_time(FROZEN_NOW)
def test_create_short_url_scenario(service):
    """A 30-minute link starts valid with no clicks."""
    result = service.create_short_url('https://example.com/page', validity_minutes=30)

    assert result.success
    assert result.error is None
    entry = result.entry
    assert entry.long_url == 'https://example.com/page'
    assert entry.clicks == 0
    assert entry.is_valid is True
    assert entry.expires_at - entry.created_at == timedelta(minutes=30)
    assert entry.short_url == f'http://localhost:3000/{entry.short_code}'
    assert entry.custom_short_code is None
    assert service.get_by_id(entry.id) == entry


def test_generated_codes_are_unique_base62(service):
    codes = set()
    for i in range(100):
        result = service.create_short_url(f'https://example.com/{i}')
        assert result.success
        assert len(result.entry.short_code) == 8
        assert all(char in ALPHABET for char in result.entry.short_code)
        codes.add(result.entry.short_code)

    assert len(codes) == 100


@freeze_time(FROZEN_NOW)
def test_default_validity(dao):
    entry = UrlShortenerService(dao).create_short_url('https://example.com').entry
    assert entry.expires_at - entry.created_at == timedelta(minutes=30)

    entry = UrlShortenerService(UrlEntryDAO(MemoryKeyValueStore()), default_validity_minutes=45).create_short_url('https://example.com').entry
    assert entry.expires_at - entry.created_at == timedelta(minutes=45)


def test_create_with_custom_code(service):
    result = service.create_short_url('https://example.com', custom_short_code='promo2025')

    assert result.success
    assert result.entry.short_code == 'promo2025'
    assert result.entry.custom_short_code == 'promo2025'
    assert service.resolve('promo2025') == result.entry


def test_create_with_empty_custom_code_generates_one(service):
    result = service.create_short_url('https://example.com', custom_short_code='')

    assert result.success
    assert len(result.entry.short_code) == 8
    assert result.entry.custom_short_code is None


def test_custom_code_too_short(service, dao):
    with patch.object(dao, 'save', wraps=dao.save) as save:
        result = service.create_short_url('https://example.com', custom_short_code='ab')

    assert not result.success
    assert result.entry is None
    assert result.error_code == ValidationFailure.LENGTH_OUT_OF_RANGE
    assert '3 and 20' in result.error
    assert service.list_all() == []
    save.assert_not_called()


@pytest.mark.parametrize(
    'code, error_code',
    [
        ('x' * 21, ValidationFailure.LENGTH_OUT_OF_RANGE),
        ('has-dash', ValidationFailure.INVALID_CHARACTERS),
        ('white space', ValidationFailure.INVALID_CHARACTERS),
        ('emoji🙂', ValidationFailure.INVALID_CHARACTERS),
    ],
)
def test_invalid_custom_codes_insert_nothing(service, code, error_code):
    result = service.create_short_url('https://example.com', custom_short_code=code)

    assert not result.success
    assert result.error_code == error_code
    assert service.list_all() == []


def test_duplicate_custom_code(service):
    first = service.create_short_url('https://example.com/a', custom_short_code='promo')
    second = service.create_short_url('https://example.com/b', custom_short_code='promo')

    assert first.success
    assert not second.success
    assert second.error_code == ValidationFailure.CODE_TAKEN
    assert [entry.long_url for entry in service.list_all()] == ['https://example.com/a']


@pytest.mark.parametrize(
    'long_url, error_code',
    [
        ('not a url', ValidationFailure.INVALID_FORMAT),
        ('example.com', ValidationFailure.INVALID_FORMAT),
        ('ftp://example.com/file', ValidationFailure.UNSUPPORTED_SCHEME),
    ],
)
def test_invalid_long_url(service, long_url, error_code):
    result = service.create_short_url(long_url)

    assert not result.success
    assert result.error_code == error_code
    assert service.list_all() == []


@pytest.mark.parametrize('minutes', [0, -1, 10**10])
def test_invalid_validity(service, minutes):
    result = service.create_short_url('https://example.com', validity_minutes=minutes)

    assert not result.success
    assert result.error_code == ValidationFailure.INVALID_VALIDITY


def test_generation_exhausted(service):
    with patch('localshortener.service.generate_shortcode', side_effect=GenerationExhaustedError('exhausted')):
        result = service.create_short_url('https://example.com')

    assert not result.success
    assert result.error_code == ValidationFailure.GENERATION_EXHAUSTED
    assert service.list_all() == []


def test_persistence_failure_does_not_abort_creation():
    service = UrlShortenerService(UrlEntryDAO(MemoryKeyValueStore(max_bytes=16)))

    result = service.create_short_url('https://example.com/page')

    assert result.success
    assert service.resolve(result.entry.short_code) == result.entry


@pytest.mark.parametrize('error', [redis.exceptions.TimeoutError, redis.exceptions.ConnectionError])
def test_redis_failure_does_not_abort_mutations(redis_client, error):
    service = UrlShortenerService(UrlEntryDAO(RedisKeyValueStore(redis_client=redis_client)))
    redis_client.set.side_effect = error('Timeout writing to socket')

    result = service.create_short_url('https://example.com/page')

    assert result.success
    assert service.increment_clicks(result.entry.short_code)
    assert service.delete(result.entry.id)
    assert service.list_all() == []


def test_create_logs_events(service, caplog):
    with caplog.at_level(logging.INFO):
        result = service.create_short_url('https://example.com/page')

    messages = [(record.getMessage(), record.action) for record in caplog.records if hasattr(record, 'action')]
    assert ('Creating short URL', 'CREATE_URL') in messages
    assert ('Short URL created successfully', 'CREATE_URL') in messages
    assert caplog.records[-1].data == {'id': result.entry.id, 'shortCode': result.entry.short_code}


@pytest.mark.parametrize('minutes', [0, 10**10])
def test_invalid_default_validity(dao, minutes):
    with pytest.raises(ValueError):
        UrlShortenerService(dao, default_validity_minutes=minutes)


# -------------------------------
# 2. Resolution and clicks
# -------------------------------


def test_expiry_boundary(service):
    with freeze_time(FROZEN_NOW) as frozen:
        code = service.create_short_url('https://example.com', validity_minutes=1).entry.short_code

        frozen.tick(timedelta(seconds=59))
        assert service.resolve(code) is not None

        frozen.tick(timedelta(seconds=2))
        assert service.resolve(code) is None
        assert service.list_all()[0].is_valid is False


def test_click_monotonicity(service):
    code = service.create_short_url('https://example.com').entry.short_code

    for _ in range(7):
        assert service.increment_clicks(code) is True

    assert service.resolve(code).clicks == 7


def test_click_on_expired_code(service):
    with freeze_time(FROZEN_NOW) as frozen:
        code = service.create_short_url('https://example.com', validity_minutes=1).entry.short_code
        service.increment_clicks(code)

        frozen.tick(timedelta(minutes=2))
        assert service.increment_clicks(code) is False
        assert service.list_all()[0].clicks == 1


def test_click_on_unknown_code(service):
    assert service.increment_clicks('missing') is False
    assert service.resolve('missing') is None


# -------------------------------
# 3. Listing, deletion, sweeping, statistics
# -------------------------------


def test_list_all_newest_first(service):
    with freeze_time(FROZEN_NOW) as frozen:
        for i in range(3):
            service.create_short_url(f'https://example.com/{i}')
            frozen.tick(timedelta(seconds=1))

    assert [entry.long_url for entry in service.list_all()] == [
        'https://example.com/2',
        'https://example.com/1',
        'https://example.com/0',
    ]


def test_delete(service):
    entry = service.create_short_url('https://example.com', custom_short_code='promo').entry

    assert service.delete(entry.id) is True
    assert service.get_by_id(entry.id) is None
    assert service.resolve('promo') is None
    # the shortcode slot is free again
    assert service.create_short_url('https://example.com', custom_short_code='promo').success


def test_delete_unknown_id(service, dao):
    service.create_short_url('https://example.com')

    with patch.object(dao, 'save', wraps=dao.save) as save:
        assert service.delete('missing') is False

    save.assert_not_called()
    assert len(service.list_all()) == 1


def test_sweep_expired_idempotent(service):
    with freeze_time(FROZEN_NOW) as frozen:
        service.create_short_url('https://example.com/a', validity_minutes=1)
        service.create_short_url('https://example.com/b', validity_minutes=1)
        service.create_short_url('https://example.com/c', validity_minutes=60)

        frozen.tick(timedelta(minutes=5))
        assert service.sweep_expired() == 2
        assert service.sweep_expired() == 0

    assert [entry.long_url for entry in service.list_all()] == ['https://example.com/c']


def test_soft_expired_code_is_reserved_until_swept(service):
    with freeze_time(FROZEN_NOW) as frozen:
        service.create_short_url('https://example.com/a', custom_short_code='promo', validity_minutes=1)
        frozen.tick(timedelta(minutes=2))
        assert service.resolve('promo') is None

        taken = service.create_short_url('https://example.com/b', custom_short_code='promo')
        assert taken.error_code == ValidationFailure.CODE_TAKEN

        service.sweep_expired()
        assert service.create_short_url('https://example.com/b', custom_short_code='promo').success


def test_get_statistics(service):
    with freeze_time(FROZEN_NOW) as frozen:
        short_lived = service.create_short_url('https://example.com/a', validity_minutes=1).entry
        long_lived = service.create_short_url('https://example.com/b', validity_minutes=60).entry
        service.increment_clicks(short_lived.short_code)
        service.increment_clicks(long_lived.short_code)
        service.increment_clicks(long_lived.short_code)

        frozen.tick(timedelta(minutes=2))
        stats = service.get_statistics()

    assert stats.total_urls == 2
    assert stats.active_urls == 1
    assert stats.expired_urls == 1
    assert stats.total_clicks == 3
    assert stats.average_clicks_per_url == 1.5


def test_get_statistics_empty(service):
    stats = service.get_statistics()

    assert stats.total_urls == 0
    assert stats.average_clicks_per_url == 0.0


# -------------------------------
# 4. Persistence across restarts
# -------------------------------


def test_state_survives_restart(dao):
    first = UrlShortenerService(dao)
    a = first.create_short_url('https://example.com/a').entry
    b = first.create_short_url('https://example.com/b', custom_short_code='promo').entry
    for _ in range(3):
        first.increment_clicks(b.short_code)

    restarted = UrlShortenerService(dao)

    assert {(e.id, e.short_code, e.clicks) for e in restarted.list_all()} == {(a.id, a.short_code, 0), (b.id, 'promo', 3)}
    assert restarted.resolve('promo').long_url == 'https://example.com/b'
    assert not restarted.create_short_url('https://example.com/c', custom_short_code='promo').success


def test_deletion_survives_restart(dao):
    first = UrlShortenerService(dao)
    entry = first.create_short_url('https://example.com').entry
    first.delete(entry.id)

    assert UrlShortenerService(dao).list_all() == []
