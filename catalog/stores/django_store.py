"""Django ORM implementations of the catalog stores."""

import logging

from django.core.cache import cache
from django.core.exceptions import ValidationError
from django.db import DatabaseError, IntegrityError

from catalog import models
from catalog.domain import City, EventId, FavoriteRecord, UserId
from catalog.domain.errors import LoadError, WriteError
from catalog.stores.interfaces import EventStore, FavoriteStore, RawEventRecord

logger = logging.getLogger(__name__)

RECORD_FIELDS = (
    "id",
    "name",
    "category",
    "description",
    "city",
    "ideal_group_size",
    "duration_hours",
    "cost_per_person",
    "meeting_point",
    "transit_tips",
    "booking_link",
    "best_months",
    "accessibility_notes",
    "image_url",
)


def event_list_cache_key(city: City | str) -> str:
    value = city.value if isinstance(city, City) else city
    return f"events:list:{value}"


class DjangoEventStore(EventStore):
    """Database-backed event store with a per-city record cache."""

    def __init__(self, cache_timeout: int | None = 300) -> None:
        self._cache_timeout = cache_timeout

    async def list_events(self, city: City) -> list[RawEventRecord]:
        key = event_list_cache_key(city)
        cached = await cache.aget(key)
        if cached is not None:
            return cached

        queryset = (
            models.Event.objects.filter(city=city.value)
            .order_by("name")
            .values(*RECORD_FIELDS)
        )
        try:
            records = [{**row, "id": str(row["id"])} async for row in queryset]
        except DatabaseError as exc:
            logger.exception("Event query failed for %s", city.value)
            raise LoadError("events", str(exc)) from exc

        await cache.aset(key, records, self._cache_timeout)
        return records


def _to_domain(favorite: models.Favorite) -> FavoriteRecord:
    return FavoriteRecord(
        id=str(favorite.id),
        user_id=UserId(favorite.user_id),
        event_id=EventId(favorite.event_id),
        created_at=favorite.created_at,
    )


class DjangoFavoriteStore(FavoriteStore):
    """Database-backed favorite store."""

    async def list_favorites(
        self, user_id: UserId, event_id: EventId | None = None
    ) -> list[FavoriteRecord]:
        queryset = models.Favorite.objects.filter(user_id=user_id.value)
        if event_id is not None:
            queryset = queryset.filter(event_id=event_id.value)
        try:
            return [_to_domain(f) async for f in queryset.order_by("created_at")]
        except DatabaseError as exc:
            logger.exception("Favorite query failed for user %s", user_id)
            raise LoadError("favorites", str(exc)) from exc

    async def create_favorite(self, user_id: UserId, event_id: EventId) -> FavoriteRecord:
        try:
            favorite = await models.Favorite.objects.acreate(
                user_id=user_id.value, event_id=event_id.value
            )
        except IntegrityError as exc:
            raise WriteError("create", "favorite already exists") from exc
        except DatabaseError as exc:
            logger.exception("Favorite insert failed for user %s", user_id)
            raise WriteError("create", str(exc)) from exc
        return _to_domain(favorite)

    async def delete_favorite(self, favorite_id: str) -> None:
        try:
            deleted, _ = await models.Favorite.objects.filter(pk=favorite_id).adelete()
        except ValidationError as exc:
            raise WriteError("delete", "invalid favorite id") from exc
        except DatabaseError as exc:
            logger.exception("Favorite delete failed for %s", favorite_id)
            raise WriteError("delete", str(exc)) from exc
        if not deleted:
            raise WriteError("delete", "favorite not found")
