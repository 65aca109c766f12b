"""In-memory store implementations.

Useful for local development and as collaborators in tests.
"""

import inspect
import uuid
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime, timezone

from catalog.domain import AuthState, City, EventId, FavoriteRecord, User, UserId
from catalog.domain.errors import WriteError
from catalog.stores.interfaces import (
    AuthCallback,
    AuthProvider,
    EventStore,
    FavoriteStore,
    RawEventRecord,
)


class InMemoryEventStore(EventStore):
    """Event store backed by a list of raw records."""

    def __init__(self, records: Iterable[Mapping] = ()) -> None:
        self._records = [dict(record) for record in records]
        self.requests: list[City] = []

    async def list_events(self, city: City) -> list[RawEventRecord]:
        self.requests.append(city)
        rows = [dict(r) for r in self._records if r.get("city") == city.value]
        return sorted(rows, key=lambda r: str(r.get("name") or ""))


class InMemoryFavoriteStore(FavoriteStore):
    """Favorite store keeping records in a dict.

    ``writes`` records every successful create/delete as
    ``(operation, favorite_id)``.
    """

    def __init__(self) -> None:
        self._records: dict[str, FavoriteRecord] = {}
        self.writes: list[tuple[str, str]] = []

    def __len__(self) -> int:
        return len(self._records)

    async def list_favorites(
        self, user_id: UserId, event_id: EventId | None = None
    ) -> list[FavoriteRecord]:
        records = [
            r
            for r in self._records.values()
            if r.user_id == user_id and (event_id is None or r.event_id == event_id)
        ]
        return sorted(records, key=lambda r: r.created_at)

    async def create_favorite(self, user_id: UserId, event_id: EventId) -> FavoriteRecord:
        if any(r.user_id == user_id and r.event_id == event_id for r in self._records.values()):
            raise WriteError("create", "favorite already exists")
        record = FavoriteRecord(
            id=str(uuid.uuid4()),
            user_id=user_id,
            event_id=event_id,
            created_at=datetime.now(timezone.utc),
        )
        self._records[record.id] = record
        self.writes.append(("create", record.id))
        return record

    async def delete_favorite(self, favorite_id: str) -> None:
        if self._records.pop(favorite_id, None) is None:
            raise WriteError("delete", "favorite not found")
        self.writes.append(("delete", favorite_id))


class InMemoryAuthProvider(AuthProvider):
    """Auth provider whose transitions are driven by ``emit``.

    ``login``/``logout`` only record the request, like a real provider
    that answers later through the state callbacks.
    """

    def __init__(self, user: User | None = None) -> None:
        self._state = AuthState(user=user, is_loading=False)
        self._callbacks: list[AuthCallback] = []
        self.requests: list[str] = []

    def current_user(self) -> User | None:
        return self._state.user

    def on_auth_state_change(self, callback: AuthCallback) -> Callable[[], None]:
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def login(self) -> None:
        self.requests.append("login")

    def logout(self) -> None:
        self.requests.append("logout")

    async def emit(self, state: AuthState) -> None:
        """Publish a transition to every subscriber, awaiting async ones."""
        self._state = state
        for callback in list(self._callbacks):
            result = callback(state)
            if inspect.isawaitable(result):
                await result
