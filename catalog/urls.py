from django.urls import path

from catalog.handlers import (
    EventDetailView,
    EventListView,
    FavoriteListView,
    FavoriteToggleView,
    SurpriseView,
)

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("events/surprise", SurpriseView.as_view(), name="event-surprise"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path("favorites", FavoriteListView.as_view(), name="favorite-list"),
    path(
        "favorites/<str:event_id>/toggle",
        FavoriteToggleView.as_view(),
        name="favorite-toggle",
    ),
]
