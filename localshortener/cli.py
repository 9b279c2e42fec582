"""Command-line front end for the short URL engine

Every command loads the engine from the configured durable store (see
`localshortener.utils.config`), runs one operation and prints JSON to stdout.
Logs go to stderr as JSON lines.

CLI usage:
    $ localshortener create https://example.com/page --minutes 60
    $ localshortener create https://example.com/page --code promo2025
    $ localshortener resolve promo2025
    $ localshortener click promo2025
    $ localshortener list
    $ localshortener delete 3f2a9c...
    $ localshortener sweep
    $ localshortener stats
    $ localshortener watch --interval 60

    # Print this invocation's engine events after the result
    $ localshortener --show-logs create https://example.com/page

Exit codes:
    0: success
    1: operation failed (validation error, unknown/expired code, unknown id)
    2: bad configuration or unreachable store
"""

import sys
import json
import argparse
import dataclasses
from datetime import datetime
from typing import Any

from localshortener.dao.exceptions import DataStoreError
from localshortener.exceptions import ConfigurationError
from localshortener.factory import create_service
from localshortener.models import UrlEntryModel
from localshortener.sweeper import ExpirySweeper
from localshortener.utils.config import load_config
from localshortener.utils.logging import initialize_logging, LogBufferHandler


def _positive_int(value: str) -> int:
    try:
        iv = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError('must be an integer') from None
    if iv <= 0:
        raise argparse.ArgumentTypeError('must be > 0')
    return iv


def _to_json(value: Any) -> str:
    def default(obj: Any) -> Any:
        if isinstance(obj, UrlEntryModel):
            return obj.to_dict()
        if dataclasses.is_dataclass(obj):
            return dataclasses.asdict(obj)
        if isinstance(obj, datetime):
            return obj.isoformat()
        return str(obj)

    return json.dumps(value, indent=2, default=default)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='localshortener', description='Create, resolve and expire short URLs')
    parser.add_argument('--show-logs', action='store_true', help="Print this invocation's engine events after the result")
    commands = parser.add_subparsers(dest='command', required=True)

    create = commands.add_parser('create', help='Shorten a URL')
    create.add_argument('long_url', help='Destination URL (http or https)')
    create.add_argument('--code', default=None, help='Custom shortcode (3-20 letters/digits)')
    create.add_argument('--minutes', type=_positive_int, default=None, help='Validity in minutes (default: 30)')

    resolve = commands.add_parser('resolve', help='Look up a live shortcode')
    resolve.add_argument('short_code')

    click = commands.add_parser('click', help='Resolve a shortcode and count a click')
    click.add_argument('short_code')

    commands.add_parser('list', help='List all stored URLs, newest first')

    delete = commands.add_parser('delete', help='Delete a URL by id')
    delete.add_argument('id')

    commands.add_parser('sweep', help='Remove expired URLs')
    commands.add_parser('stats', help='Summarize stored URLs')

    watch = commands.add_parser('watch', help='Sweep expired URLs periodically')
    watch.add_argument('--interval', type=_positive_int, default=None, help='Seconds between sweeps (default: from config)')
    watch.add_argument('--max-ticks', type=_positive_int, default=None, help='Stop after this many sweeps')

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Steps:
        - Parse CLI arguments
        - Initialize logging and load configuration
        - Build the engine and run the requested operation
        - Print the result as JSON

    Returns:
        int: process exit code.
    """
    args = build_parser().parse_args(argv)

    log_buffer = LogBufferHandler()
    initialize_logging(log_buffer=log_buffer)

    try:
        config = load_config()
        service = create_service(config)
    except (ConfigurationError, DataStoreError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 2

    ok = True
    match args.command:
        case 'create':
            result = service.create_short_url(args.long_url, custom_short_code=args.code, validity_minutes=args.minutes)
            ok = result.success
            print(_to_json(result))
        case 'resolve':
            entry = service.resolve(args.short_code)
            ok = entry is not None
            print(_to_json(entry if ok else {'error': f"Shortcode '{args.short_code}' is unavailable"}))
        case 'click':
            ok = service.increment_clicks(args.short_code)
            print(_to_json({'success': ok}))
        case 'list':
            print(_to_json(service.list_all()))
        case 'delete':
            ok = service.delete(args.id)
            print(_to_json({'success': ok}))
        case 'sweep':
            print(_to_json({'removed': service.sweep_expired()}))
        case 'stats':
            print(_to_json(service.get_statistics()))
        case 'watch':
            sweeper = ExpirySweeper(service, interval_seconds=args.interval or config.sweep_interval_seconds)
            try:
                sweeper.run(max_ticks=args.max_ticks)
            except KeyboardInterrupt:
                pass

    if args.show_logs:
        print(log_buffer.export())

    return 0 if ok else 1


if __name__ == '__main__':
    sys.exit(main())
