"""Event catalog service.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors

Persisted records use snake_case keys and may carry numbers as text;
translating them into ``Event`` happens here, so the filter engine only
ever sees the normalized shape.
"""

import logging
from collections.abc import Mapping
from typing import Any

from catalog.domain import City, Event, EventId, category_universe, coerce_number
from catalog.domain.errors import DataQualityError, EventNotFoundError, InvalidCityError, LoadError
from catalog.stores.interfaces import EventStore

logger = logging.getLogger(__name__)

REQUIRED_TEXT_FIELDS = (
    "name",
    "category",
    "description",
    "ideal_group_size",
    "meeting_point",
    "best_months",
    "image_url",
)


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def event_from_record(record: Mapping[str, Any]) -> Event:
    """Translate a raw persisted record into an ``Event``.

    Raises:
        DataQualityError: If the id, city or a numeric field is malformed.
    """
    raw_id = record.get("id")
    event_id = str(raw_id).strip() if raw_id is not None else ""
    if not event_id:
        raise DataQualityError("", "id", raw_id)

    try:
        city = City.from_string(str(record.get("city") or ""))
    except InvalidCityError:
        raise DataQualityError(event_id, "city", record.get("city")) from None

    numbers = {}
    for field in ("duration_hours", "cost_per_person"):
        try:
            numbers[field] = coerce_number(record.get(field))
        except ValueError:
            raise DataQualityError(event_id, field, record.get(field)) from None

    text = {field: str(record.get(field) or "") for field in REQUIRED_TEXT_FIELDS}
    return Event(
        id=EventId(event_id),
        city=city,
        transit_tips=_optional_text(record.get("transit_tips")),
        booking_link=_optional_text(record.get("booking_link")),
        accessibility_notes=_optional_text(record.get("accessibility_notes")),
        **numbers,
        **text,
    )


class EventCatalog:
    """Holds the full set of events for the selected city.

    A failed load keeps the previous contents and exposes the error. When
    loads overlap, only the most recently requested one is applied.
    """

    def __init__(self, store: EventStore) -> None:
        self._store = store
        self._city: City | None = None
        self._events: tuple[Event, ...] = ()
        self._categories: tuple[str, ...] = ()
        self._latest_request = 0
        self.version = 0
        self.error: LoadError | None = None
        self.data_quality_errors: tuple[DataQualityError, ...] = ()

    @property
    def city(self) -> City | None:
        return self._city

    @property
    def events(self) -> tuple[Event, ...]:
        return self._events

    @property
    def categories(self) -> tuple[str, ...]:
        """Category universe of the unfiltered catalog."""
        return self._categories

    def __len__(self) -> int:
        return len(self._events)

    def get(self, event_id: str) -> Event:
        """Return a loaded event by ID.

        Raises:
            EventNotFoundError: If the event is not in the current catalog.
        """
        for event in self._events:
            if event.id.value == event_id:
                return event
        raise EventNotFoundError(event_id)

    async def load(self, city: City) -> tuple[Event, ...]:
        """Fetch and translate the catalog for ``city``.

        Returns the translated events. They become the current catalog only
        if no newer load was requested while this one was in flight.

        Raises:
            LoadError: If the store failed. Previous contents are kept.
        """
        self._latest_request += 1
        request = self._latest_request
        logger.info("Loading catalog for %s", city.value)

        try:
            records = await self._store.list_events(city)
        except LoadError as exc:
            if request == self._latest_request:
                self.error = exc
            logger.warning("Catalog load for %s failed: %s", city.value, exc.detail or exc)
            raise

        events: list[Event] = []
        problems: list[DataQualityError] = []
        seen: set[EventId] = set()
        for record in records:
            try:
                event = event_from_record(record)
            except DataQualityError as exc:
                logger.warning(
                    "Dropping event %r: malformed %s %r", exc.event_id, exc.field, exc.value
                )
                problems.append(exc)
                continue
            if event.id in seen:
                logger.warning("Dropping duplicate event id %s", event.id)
                problems.append(DataQualityError(event.id.value, "id", event.id.value))
                continue
            seen.add(event.id)
            events.append(event)

        loaded = tuple(events)
        if request != self._latest_request:
            logger.info("Discarding stale catalog for %s", city.value)
            return loaded

        self._city = city
        self._events = loaded
        self._categories = tuple(category_universe(loaded))
        self.data_quality_errors = tuple(problems)
        self.error = None
        self.version += 1
        logger.info("Loaded %d events for %s", len(loaded), city.value)
        return loaded
