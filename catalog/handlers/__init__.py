from catalog.handlers.views import (
    EventDetailView,
    EventListView,
    FavoriteListView,
    FavoriteToggleView,
    SurpriseView,
)

__all__ = [
    "EventDetailView",
    "EventListView",
    "FavoriteListView",
    "FavoriteToggleView",
    "SurpriseView",
]
