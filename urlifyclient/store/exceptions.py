"""Exceptions related to persistent store operations.

Classes:
    StoreError:
        Generic base class for persistent store exceptions.

    DataStoreError:
        Raised when there is an error in the underlying storage
        (e.g. Redis connection issues, unreadable session file, etc.).

Example:
    >>> from urlifyclient.store.exceptions import DataStoreError
    >>> raise DataStoreError("Can't connect to Redis at localhost:6379/0.")
    Traceback (most recent call last):
        ...
    urlifyclient.store.exceptions.DataStoreError: Can't connect to Redis at localhost:6379/0.
"""


class StoreError(Exception):
    """Generic base class for persistent store exceptions."""

    pass


class DataStoreError(StoreError):
    """Exception raised when there is an error in the underlying storage.

    e.g. connection issues, timeouts, unreadable files, etc.
    """

    pass
