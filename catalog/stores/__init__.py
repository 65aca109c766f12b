from catalog.stores.interfaces import AuthProvider, EventStore, FavoriteStore, RawEventRecord
from catalog.stores.memory_store import InMemoryAuthProvider, InMemoryEventStore, InMemoryFavoriteStore

__all__ = [
    "AuthProvider",
    "EventStore",
    "FavoriteStore",
    "RawEventRecord",
    "InMemoryAuthProvider",
    "InMemoryEventStore",
    "InMemoryFavoriteStore",
]
