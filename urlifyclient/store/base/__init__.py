from urlifyclient.store.base.persistent_store_base import PersistentStoreBase


__all__ = ['PersistentStoreBase']
