"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import logging

from asgiref.sync import async_to_sync
from django.conf import settings
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from catalog.domain import City, EventId, FilterResult, UserId, evaluate
from catalog.domain.errors import DomainError, ErrorCode, InvalidEventIdError
from catalog.handlers.serializers import DataQualitySerializer, EventSerializer, FilterQuerySerializer
from catalog.services import EventCatalog, FavoritesStore, SelectionController
from catalog.stores.django_store import DjangoEventStore, DjangoFavoriteStore

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ErrorCode.INVALID_CITY: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_FILTER: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_EVENT_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.AUTH_REQUIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.FAVORITES_NOT_LOADED: status.HTTP_409_CONFLICT,
    ErrorCode.LOAD_FAILED: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.WRITE_FAILED: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _city(value: str | None) -> City:
    return City.from_string(value or settings.CATALOG["DEFAULT_CITY"])


def _load_catalog(city: City) -> EventCatalog:
    catalog = EventCatalog(DjangoEventStore(cache_timeout=settings.CATALOG["CACHE_TIMEOUT"]))
    async_to_sync(catalog.load)(city)
    return catalog


def _favorites() -> FavoritesStore:
    return FavoritesStore(
        DjangoFavoriteStore(),
        write_timeout=settings.CATALOG["FAVORITE_WRITE_TIMEOUT"],
    )


def _user_id(request: Request) -> UserId:
    return UserId(str(request.user.pk))


class DomainErrorMixin:
    """Maps domain errors raised by services to error responses."""

    def handle_exception(self, exc):
        if isinstance(exc, DomainError):
            status_code = ERROR_STATUS.get(exc.code, status.HTTP_400_BAD_REQUEST)
            logger.info("%s %s -> %s", self.request.method, self.request.path, exc)
            return Response(
                {"error": {"code": exc.code.value, "message": exc.message}},
                status=status_code,
            )
        return super().handle_exception(exc)


class CatalogQueryMixin(DomainErrorMixin):
    """Loads the requested city's catalog and applies the query filters."""

    def filtered(self, request: Request) -> tuple[City, EventCatalog, FilterResult]:
        query = FilterQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        city = _city(query.validated_data.get("city"))
        catalog = _load_catalog(city)
        return city, catalog, evaluate(catalog.events, query.to_filter_state())


class EventListView(CatalogQueryMixin, APIView):
    """Handler for GET /api/events"""

    def get(self, request: Request) -> Response:
        city, catalog, result = self.filtered(request)
        rejected = [*catalog.data_quality_errors, *result.rejected]
        return Response(
            {
                "city": city.value,
                "count": len(result),
                "categories": list(catalog.categories),
                "results": EventSerializer(result.events, many=True).data,
                "rejected": DataQualitySerializer(rejected, many=True).data,
            }
        )


class SurpriseView(CatalogQueryMixin, APIView):
    """Handler for GET /api/events/surprise"""

    def get(self, request: Request) -> Response:
        _, _, result = self.filtered(request)
        event = SelectionController().surprise(result.events)
        if event is None:
            return Response(status=status.HTTP_204_NO_CONTENT)
        return Response(EventSerializer(event).data)


class EventDetailView(DomainErrorMixin, APIView):
    """Handler for GET /api/events/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        catalog = _load_catalog(_city(request.query_params.get("city")))
        return Response(EventSerializer(catalog.get(event_id)).data)


class FavoriteListView(DomainErrorMixin, APIView):
    """Handler for GET /api/favorites"""

    def get(self, request: Request) -> Response:
        event_ids = async_to_sync(_favorites().load)(_user_id(request))
        return Response({"results": sorted(event_id.value for event_id in event_ids)})


class FavoriteToggleView(DomainErrorMixin, APIView):
    """Handler for POST /api/favorites/{event_id}/toggle"""

    def post(self, request: Request, event_id: str) -> Response:
        try:
            target = EventId.from_string(event_id)
        except ValueError:
            raise InvalidEventIdError() from None
        user_id = _user_id(request)
        favorites = _favorites()

        async def toggle() -> bool:
            await favorites.load(user_id)
            return await favorites.toggle(user_id, target)

        favorited = async_to_sync(toggle)()
        return Response({"event_id": target.value, "favorited": favorited})
