"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` at process start (the CLI does this)
before any other logging is done.

Engine events are logged with two `extra` fields, so every record carries the
{level, message, data, action} event shape:

    logger.info('Short URL created successfully', extra={'action': Action.CREATE_URL, 'data': {...}})

Logging format:
{
    "timestamp": "2025-12-26T12:00:00.000Z",
    "level": "INFO",
    "logger": "localshortener.service",
    "message": "Short URL created successfully",
    "action": "CREATE_URL",
    "data": {"id": "...", "shortCode": "abc123"}
}

Classes:
    JsonFormatter:
        Render LogRecords (including extras) as single-line JSON.
    LogBufferHandler:
        Retain the most recent event records in memory for inspection/export.
"""

import os
import json
import logging
import logging.config
from collections import deque
from datetime import datetime, UTC
from typing import Any

from localshortener.constants import ENV, Defaults


def _timestamp(record: logging.LogRecord) -> str:
    # fmt: off
    return datetime.fromtimestamp(record.created, tz=UTC) \
                   .isoformat(timespec="milliseconds") \
                   .replace("+00:00", "Z")
    # fmt: on


class JsonFormatter(logging.Formatter):
    """JSON formatter that includes LogRecord extras"""

    STANDARD_ATTRS = frozenset(
        {
            'args',
            'asctime',
            'created',
            'exc_info',
            'exc_text',
            'filename',
            'funcName',
            'levelname',
            'levelno',
            'lineno',
            'module',
            'msecs',
            'msg',
            'name',
            'pathname',
            'process',
            'processName',
            'relativeCreated',
            'stack_info',
            'thread',
            'threadName',
            'taskName',
        }
    )

    def format(self, record: logging.LogRecord) -> str:
        log = {
            'timestamp': _timestamp(record),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        # Attach `extra` fields
        for key, value in record.__dict__.items():
            if key not in self.STANDARD_ATTRS:
                log[key] = value

        if record.exc_info:
            log['exc_info'] = self.formatException(record.exc_info)

        return json.dumps(log, default=str)


class LogBufferHandler(logging.Handler):
    """Keep the most recent log events in memory

    Only the last `capacity` events are retained; older events are dropped.

    Example:
        >>> buffer = LogBufferHandler(capacity=100)
        >>> logging.getLogger('localshortener').addHandler(buffer)
        >>> buffer.by_action('CREATE_URL')
        [{'timestamp': '...', 'level': 'INFO', 'message': 'Creating short URL', ...}]
    """

    def __init__(self, capacity: int = Defaults.LOG_BUFFER_CAPACITY, level: int = logging.NOTSET):
        super().__init__(level=level)
        self._events: deque[dict[str, Any]] = deque(maxlen=capacity)

    def emit(self, record: logging.LogRecord) -> None:
        self._events.append(
            {
                'timestamp': _timestamp(record),
                'level': record.levelname,
                'message': record.getMessage(),
                'data': getattr(record, 'data', None),
                'action': getattr(record, 'action', None),
            }
        )

    def entries(self) -> list[dict[str, Any]]:
        return list(self._events)

    def by_level(self, level: str) -> list[dict[str, Any]]:
        return [event for event in self._events if event['level'] == level.upper()]

    def by_action(self, action: str) -> list[dict[str, Any]]:
        return [event for event in self._events if event['action'] == action]

    def export(self) -> str:
        return json.dumps(self.entries(), indent=2, default=str)

    def clear(self) -> None:
        self._events.clear()


def initialize_logging(log_buffer: LogBufferHandler | None = None) -> None:
    log_level = os.getenv(ENV.App.LOG_LEVEL, 'INFO').upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                }
            },
            'handlers': {
                'stderr': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stderr',
                }
            },
            'root': {
                'level': log_level,
                'handlers': ['stderr'],
            },
        }
    )
    if log_buffer is not None:
        logging.getLogger().addHandler(log_buffer)
