"""Domain error codes for the catalog module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    LOAD_FAILED = "LOAD_FAILED"
    WRITE_FAILED = "WRITE_FAILED"
    DATA_QUALITY = "DATA_QUALITY"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    INVALID_CITY = "INVALID_CITY"
    INVALID_FILTER = "INVALID_FILTER"
    AUTH_REQUIRED = "AUTH_REQUIRED"
    FAVORITES_NOT_LOADED = "FAVORITES_NOT_LOADED"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class LoadError(DomainError):
    """Raised when the catalog or favorites could not be fetched."""

    def __init__(self, resource: str, detail: str = "") -> None:
        super().__init__(
            code=ErrorCode.LOAD_FAILED,
            message=f"Could not load {resource}",
        )
        self.resource = resource
        self.detail = detail


class WriteError(DomainError):
    """Raised when a favorite could not be created or deleted."""

    def __init__(self, operation: str, detail: str = "") -> None:
        super().__init__(
            code=ErrorCode.WRITE_FAILED,
            message=f"Could not {operation} favorite",
        )
        self.operation = operation
        self.detail = detail


class DataQualityError(DomainError):
    """Raised when a catalog record carries a malformed field."""

    def __init__(self, event_id: str, field: str, value: object) -> None:
        super().__init__(
            code=ErrorCode.DATA_QUALITY,
            message=f"Event has a malformed {field}",
        )
        self.event_id = event_id
        self.field = field
        self.value = value


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class InvalidEventIdError(DomainError):
    """Raised when an event ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_ID,
            message="Invalid event ID format",
        )


class InvalidCityError(DomainError):
    """Raised when a city is not one of the supported catalogs."""

    def __init__(self, city: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_CITY,
            message="Unsupported city",
        )
        self.city = city


class InvalidFilterError(DomainError):
    """Raised when filter parameters cannot form a valid filter state."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_FILTER,
            message="Invalid filter parameters",
        )
        self.detail = detail


class AuthRequiredError(DomainError):
    """Raised when an operation needs a signed-in user."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.AUTH_REQUIRED,
            message="Sign in required",
        )


class FavoritesNotLoadedError(DomainError):
    """Raised when toggling favorites of a user whose set is not loaded."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            code=ErrorCode.FAVORITES_NOT_LOADED,
            message="Favorites are not loaded",
        )
        self.user_id = user_id
