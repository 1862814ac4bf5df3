"""Abstract base class for persistent key/value stores.

This class establishes a consistent contract for every durable storage
backend able to hold the serialized session (e.g., a JSON file, Redis).

Responsibilities:
    - Provide an interface for reading, writing and removing string values.
    - Write and remove related keys together.
    - Standardize error handling across multiple storage implementations.

Example:
    Typical usage with a backend-specific implementation:

        >>> from urlifyclient.store import FilePersistentStore
        >>> store = FilePersistentStore('~/.urlify/session.json')

        >>> store.update({'token': 'abc', 'user': '{"id": "1"}'})
        >>> store.get('token')
        'abc'

        >>> store.delete('token', 'user')
        2
        >>> store.get('token') is None
        True
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping


class PersistentStoreBase(ABC):
    """Interface for durable key/value stores.

    Methods:
        get(key: str) -> str | None:
            Retrieve the value stored under a key, None if absent.
            Raises DataStoreError on read failure.

        update(values: Mapping[str, str]) -> PersistentStoreBase:
            Write several keys together.
            Raises DataStoreError on write failure.

        delete(*keys: str) -> int:
            Remove keys together and return how many existed.
            Raises DataStoreError on write failure.

    Subclassing:
        Backend-specific implementations (e.g., FilePersistentStore or
        RedisPersistentStore) must extend this class and implement all
        abstract methods.

    NOTE:
        - Store access is synchronous. Callers never interleave a read and a
          write of the same keys with other work.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Retrieve the value stored under a key.

        Args:
            key (str):
                Logical key name, e.g. 'token'.

        Returns:
            str | None: The stored value if found, otherwise None.

        Raises:
            DataStoreError:
                If there is an error in the underlying storage.
        """
        pass

    @abstractmethod
    def update(self, values: Mapping[str, str]) -> 'PersistentStoreBase':
        """Write several keys together.

        Args:
            values (Mapping[str, str]):
                Key/value pairs to write.

        Returns:
            PersistentStoreBase: self (for method chaining)

        Raises:
            DataStoreError:
                If there is an error in the underlying storage.
        """
        pass

    @abstractmethod
    def delete(self, *keys: str) -> int:
        """Remove keys together.

        Args:
            *keys (str):
                Logical key names to remove. Missing keys are ignored.

        Returns:
            int: Number of keys which existed and were removed.

        Raises:
            DataStoreError:
                If there is an error in the underlying storage.
        """
        pass
