from collections.abc import Mapping

from beartype import beartype

from urlifyclient.store.base import PersistentStoreBase


class MemoryPersistentStore(PersistentStoreBase):
    """In-process store. Survives nothing; used for tests and ephemeral sessions."""

    def __init__(self, initial: Mapping[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})

    @beartype
    def get(self, key: str) -> str | None:
        return self.data.get(key)

    @beartype
    def update(self, values: Mapping[str, str]) -> 'MemoryPersistentStore':
        self.data.update(values)
        return self

    @beartype
    def delete(self, *keys: str) -> int:
        return sum(self.data.pop(key, None) is not None for key in keys)
