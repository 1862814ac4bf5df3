from urlifyclient.store.base import PersistentStoreBase
from urlifyclient.store.file_store import FilePersistentStore
from urlifyclient.store.memory_store import MemoryPersistentStore
from urlifyclient.store.redis import RedisPersistentStore


__all__ = [
    'PersistentStoreBase',
    'FilePersistentStore',
    'MemoryPersistentStore',
    'RedisPersistentStore',
]
