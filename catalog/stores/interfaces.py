"""Store interfaces (repository pattern).

Stores must be swappable. Every call that reaches persistence is a
coroutine; these are the only suspension points of the catalog core.
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any

from catalog.domain import AuthState, City, EventId, FavoriteRecord, User, UserId

RawEventRecord = dict[str, Any]
AuthCallback = Callable[[AuthState], Awaitable[None] | None]


class EventStore(ABC):
    """Interface for reading the persisted event catalog."""

    @abstractmethod
    async def list_events(self, city: City) -> list[RawEventRecord]:
        """Return raw snake_case event records for ``city`` ordered by name.

        Raises:
            LoadError: If the records could not be fetched.
        """
        ...


class FavoriteStore(ABC):
    """Interface for favorite persistence operations."""

    @abstractmethod
    async def list_favorites(
        self, user_id: UserId, event_id: EventId | None = None
    ) -> list[FavoriteRecord]:
        """Return the user's favorites, optionally narrowed to one event.

        Raises:
            LoadError: If the records could not be fetched.
        """
        ...

    @abstractmethod
    async def create_favorite(self, user_id: UserId, event_id: EventId) -> FavoriteRecord:
        """Persist a new favorite and return it.

        Raises:
            WriteError: If the record could not be created.
        """
        ...

    @abstractmethod
    async def delete_favorite(self, favorite_id: str) -> None:
        """Delete a favorite by record ID.

        Raises:
            WriteError: If the record does not exist or could not be deleted.
        """
        ...


class AuthProvider(ABC):
    """Opaque authentication collaborator."""

    @abstractmethod
    def current_user(self) -> User | None:
        ...

    @abstractmethod
    def on_auth_state_change(self, callback: AuthCallback) -> Callable[[], None]:
        """Register ``callback`` for every transition; return an unsubscribe function."""
        ...

    @abstractmethod
    def login(self) -> None:
        """Request a sign in. The outcome arrives through the callbacks."""
        ...

    @abstractmethod
    def logout(self) -> None:
        """Request a sign out. The outcome arrives through the callbacks."""
        ...
