"""Exceptions related to Data Access Objects (DAO) and entry store operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    EntryNotFoundError:
        Raised when a UrlEntryModel is not found in the entry store.

    EntryAlreadyExistsError:
        Raised when attempting to insert a UrlEntryModel that already exists.

    DuplicateIdError:
        Raised when the id of an inserted entry is already indexed.

    DuplicateCodeError:
        Raised when the shortcode of an inserted entry is already indexed.

    DataStoreError:
        Raised when there is an error in the durable key-value store (e.g., connection issues, I/O, etc.).

    StorageQuotaExceededError:
        Raised when a write would push the durable store past its retention cap.

Example:
    >>> from localshortener.dao.exceptions import DuplicateCodeError
    >>> raise DuplicateCodeError("Shortcode 'abc123' is already indexed.")
    Traceback (most recent call last):
        ...
    localshortener.dao.exceptions.DuplicateCodeError: Shortcode 'abc123' is already indexed.
"""

from localshortener.exceptions import NotFoundError


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class EntryNotFoundError(DAOError, NotFoundError):
    """Exception raised when a UrlEntryModel is not found in the entry store."""

    pass


class EntryAlreadyExistsError(DAOError):
    """Exception raised when attempting to insert a UrlEntryModel that already exists in the entry store."""

    pass


class DuplicateIdError(EntryAlreadyExistsError):
    """Exception raised when the entry id is already indexed."""

    pass


class DuplicateCodeError(EntryAlreadyExistsError):
    """Exception raised when the entry shortcode is already indexed."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the durable store.

    e.g. connection issues, unreadable files, OOM, etc.
    """

    pass


class StorageQuotaExceededError(DataStoreError):
    """Exception raised when a write exceeds the durable store's retention cap."""

    pass
