import functools
from collections.abc import Callable

from localshortener.constants import ENTRIES_RECORD, CODE_INDEX_RECORD


__all__ = ['StorageKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class StorageKeySchema:
    """Provide standardized keys for the two persisted records.

    An optional prefix can be provided to namespace all generated keys,
    e.g. "localshortener:dev" yields "localshortener:dev:entries".
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def entries_key(self) -> str:
        return ENTRIES_RECORD

    @prefix_key
    def code_index_key(self) -> str:
        return CODE_INDEX_RECORD
