"""Domain models representing loaded and session state.

These are pure domain objects with no API input rules.
Django ORM models are in catalog/models.py (persistence layer).
"""

from dataclasses import dataclass, field
from datetime import datetime

from catalog.domain.value_objects import City, EventId, Range, UserId

DEFAULT_SEARCH_QUERY = ""
DEFAULT_COST_RANGE = Range(low=0, high=100)
DEFAULT_DURATION_RANGE = Range(low=0, high=5)


@dataclass(frozen=True)
class Event:
    """Domain representation of a curated team event."""

    id: EventId
    name: str
    category: str
    description: str
    city: City
    ideal_group_size: str
    duration_hours: float
    cost_per_person: float
    meeting_point: str
    best_months: str
    image_url: str
    transit_tips: str | None = None
    booking_link: str | None = None
    accessibility_notes: str | None = None


@dataclass(frozen=True)
class User:
    """Signed-in user as reported by the auth provider."""

    id: UserId
    email: str | None = None


@dataclass(frozen=True)
class AuthState:
    """Snapshot passed to auth state change callbacks."""

    user: User | None
    is_loading: bool = False


@dataclass(frozen=True)
class FavoriteRecord:
    """Persisted marker relating a user to an event."""

    id: str
    user_id: UserId
    event_id: EventId
    created_at: datetime


@dataclass
class FilterState:
    """User-controlled constraints applied to the catalog.

    An empty ``selected_categories`` set means no category restriction.
    """

    search_query: str = DEFAULT_SEARCH_QUERY
    selected_categories: set[str] = field(default_factory=set)
    cost_range: Range = DEFAULT_COST_RANGE
    duration_range: Range = DEFAULT_DURATION_RANGE

    def toggle_category(self, category: str) -> bool:
        """Flip membership of ``category``; return True if now selected."""
        if category in self.selected_categories:
            self.selected_categories.discard(category)
            return False
        self.selected_categories.add(category)
        return True

    def clear(self) -> None:
        self.search_query = DEFAULT_SEARCH_QUERY
        self.selected_categories = set()
        self.cost_range = DEFAULT_COST_RANGE
        self.duration_range = DEFAULT_DURATION_RANGE

    @property
    def is_default(self) -> bool:
        return self.snapshot() == FilterState().snapshot()

    def snapshot(self) -> tuple:
        return (
            self.search_query,
            frozenset(self.selected_categories),
            self.cost_range,
            self.duration_range,
        )
