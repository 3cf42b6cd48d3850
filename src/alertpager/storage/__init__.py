from alertpager.storage.base import AlertStateStore, LockingAlertStateStore
from alertpager.storage.locks import KeyedLock
from alertpager.storage.memory import InMemoryAlertStore
from alertpager.storage.sql import SqlAlertStore, create_store_engine

__all__ = [
    "AlertStateStore",
    "InMemoryAlertStore",
    "KeyedLock",
    "LockingAlertStateStore",
    "SqlAlertStore",
    "create_store_engine",
]
