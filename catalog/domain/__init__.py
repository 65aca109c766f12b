from catalog.domain.filtering import FilterResult, StageTrace, category_universe, evaluate, visible
from catalog.domain.models import AuthState, Event, FavoriteRecord, FilterState, User
from catalog.domain.value_objects import City, EventId, Range, UserId, coerce_number

__all__ = [
    "Event",
    "User",
    "AuthState",
    "FavoriteRecord",
    "FilterState",
    "FilterResult",
    "StageTrace",
    "City",
    "EventId",
    "UserId",
    "Range",
    "coerce_number",
    "evaluate",
    "visible",
    "category_universe",
]
