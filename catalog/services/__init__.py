from catalog.services.event_service import EventCatalog, event_from_record
from catalog.services.favorite_service import FavoritesStore
from catalog.services.selection import SelectionController
from catalog.services.session_service import BrowsingSession

__all__ = [
    "EventCatalog",
    "event_from_record",
    "FavoritesStore",
    "SelectionController",
    "BrowsingSession",
]
