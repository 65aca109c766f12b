"""Favorites service.

Keeps a set-of-event-ids view of the current user's favorites that mirrors
persisted state optimistically: the local set changes first, exactly one
write follows, and a failed write rolls the local change back.
"""

import asyncio
import logging
from collections import Counter

from catalog.domain import EventId, UserId
from catalog.domain.errors import DomainError, FavoritesNotLoadedError, LoadError, WriteError
from catalog.stores.interfaces import FavoriteStore

logger = logging.getLogger(__name__)

DEFAULT_WRITE_TIMEOUT = 10.0


class FavoritesStore:
    """Favorites of the current user, keyed by event ID."""

    def __init__(self, store: FavoriteStore, write_timeout: float = DEFAULT_WRITE_TIMEOUT) -> None:
        self._store = store
        self._write_timeout = write_timeout
        self._user_id: UserId | None = None
        self._event_ids: set[EventId] = set()
        self._locks: dict[tuple[UserId, EventId], asyncio.Lock] = {}
        self._lock_users: Counter[tuple[UserId, EventId]] = Counter()
        self._latest_request = 0
        self.error: DomainError | None = None

    @property
    def user_id(self) -> UserId | None:
        return self._user_id

    @property
    def event_ids(self) -> frozenset[EventId]:
        return frozenset(self._event_ids)

    def __contains__(self, event_id: EventId) -> bool:
        return event_id in self._event_ids

    def __len__(self) -> int:
        return len(self._event_ids)

    def clear(self) -> None:
        self._latest_request += 1
        self._user_id = None
        self._event_ids = set()
        self.error = None

    async def load(self, user_id: UserId | None) -> frozenset[EventId]:
        """Fetch the favorites of ``user_id``; no user means an empty set.

        Raises:
            LoadError: If the store failed. Previous contents are kept.
        """
        if user_id is None:
            self.clear()
            return frozenset()

        self._latest_request += 1
        request = self._latest_request
        try:
            records = await self._store.list_favorites(user_id)
        except LoadError as exc:
            if request == self._latest_request:
                self.error = exc
            logger.warning("Favorites load for %s failed: %s", user_id, exc.detail or exc)
            raise

        loaded = frozenset(record.event_id for record in records)
        if request != self._latest_request:
            logger.info("Discarding stale favorites for %s", user_id)
            return loaded

        self._user_id = user_id
        self._event_ids = set(loaded)
        self.error = None
        return loaded

    async def toggle(self, user_id: UserId, event_id: EventId) -> bool:
        """Add or remove a favorite; return True if it is now a favorite.

        Toggles on the same (user, event) pair run one after another.

        Raises:
            FavoritesNotLoadedError: If ``user_id``'s favorites are not the
                loaded set. Nothing is written.
            WriteError: If persistence failed or did not answer within the
                write timeout. The local set is restored.
            LoadError: If the record to remove could not be looked up.
        """
        key = (user_id, event_id)
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        self._lock_users[key] += 1
        try:
            async with lock:
                if self._user_id != user_id:
                    logger.warning("Refusing toggle of %s: favorites of %s are not loaded", event_id, user_id)
                    raise FavoritesNotLoadedError(str(user_id))
                return await self._toggle(user_id, event_id)
        finally:
            self._lock_users[key] -= 1
            if not self._lock_users[key]:
                del self._lock_users[key]
                del self._locks[key]

    async def _toggle(self, user_id: UserId, event_id: EventId) -> bool:
        adding = event_id not in self._event_ids
        self._mirror(user_id, event_id, present=adding)
        try:
            await asyncio.wait_for(
                self._add(user_id, event_id) if adding else self._remove(user_id, event_id),
                timeout=self._write_timeout,
            )
        except TimeoutError:
            self._mirror(user_id, event_id, present=not adding)
            operation = "create" if adding else "delete"
            logger.warning("Favorite %s for %s timed out", operation, event_id)
            self.error = WriteError(operation, "timed out")
            raise self.error from None
        except DomainError as exc:
            self._mirror(user_id, event_id, present=not adding)
            logger.warning("Rolled back favorite toggle for %s: %s", event_id, exc)
            self.error = exc
            raise
        self.error = None
        return adding

    def _mirror(self, user_id: UserId, event_id: EventId, present: bool) -> None:
        # The set belongs to whoever is loaded now; a toggle that outlived
        # a sign out must not write into another user's view.
        if self._user_id != user_id:
            return
        if present:
            self._event_ids.add(event_id)
        else:
            self._event_ids.discard(event_id)

    async def _add(self, user_id: UserId, event_id: EventId) -> None:
        await self._store.create_favorite(user_id, event_id)

    async def _remove(self, user_id: UserId, event_id: EventId) -> None:
        records = await self._store.list_favorites(user_id, event_id)
        if not records:
            logger.warning("No stored favorite for %s/%s; evicting locally", user_id, event_id)
            return
        await self._store.delete_favorite(records[0].id)
