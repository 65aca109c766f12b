"""Unit tests for BrowsingSession.

These exercise the explicit triggers end to end with in-memory stores.
Run with: pytest tests/test_session_service.py -v
"""

import asyncio
import random

import pytest

from catalog.domain import AuthState, City, EventId, User, UserId
from catalog.domain.errors import (
    AuthRequiredError,
    EventNotFoundError,
    FavoritesNotLoadedError,
    InvalidFilterError,
    LoadError,
)
from catalog.services import BrowsingSession, EventCatalog, FavoritesStore, SelectionController
from catalog.stores import EventStore, InMemoryAuthProvider, InMemoryEventStore, InMemoryFavoriteStore


class GatedEventStore(InMemoryEventStore):
    """In-memory store that holds chosen cities until released."""

    def __init__(self, records, held=()) -> None:
        super().__init__(records)
        self.gates = {city: asyncio.Event() for city in City}
        for city in City:
            if city not in held:
                self.gates[city].set()

    async def list_events(self, city):
        await self.gates[city].wait()
        return await super().list_events(city)


class BrokenEventStore(EventStore):
    async def list_events(self, city):
        raise LoadError("events", "unreachable")


class BrokenFavoriteStore(InMemoryFavoriteStore):
    async def list_favorites(self, user_id, event_id=None):
        raise LoadError("favorites", "unreachable")


def build_session(event_store, favorite_store=None, **kwargs) -> BrowsingSession:
    return BrowsingSession(
        EventCatalog(event_store),
        FavoritesStore(favorite_store if favorite_store is not None else InMemoryFavoriteStore()),
        **kwargs,
    )


@pytest.fixture
def records(chicago_records, minneapolis_records):
    return [*chicago_records, *minneapolis_records]


class TestAuthTransitions:
    """Tests for handle_auth_state and the provider binding."""

    @pytest.mark.asyncio
    async def test_loading_state_does_not_fetch(self, records, user):
        store = InMemoryEventStore(records)
        session = build_session(store)
        await session.handle_auth_state(AuthState(user=user, is_loading=True))
        assert store.requests == []
        assert session.is_loading

    @pytest.mark.asyncio
    async def test_sign_in_loads_catalog_and_favorites(self, records, user):
        favorite_store = InMemoryFavoriteStore()
        await favorite_store.create_favorite(user.id, EventId("c-3"))
        session = build_session(InMemoryEventStore(records), favorite_store)

        await session.handle_auth_state(AuthState(user=user))

        assert [e.id.value for e in session.visible()] == ["c-1", "c-2", "c-3"]
        assert session.is_favorite(EventId("c-3"))
        assert session.is_authoritative

    @pytest.mark.asyncio
    async def test_bound_provider_drives_session(self, records, user):
        auth = InMemoryAuthProvider()
        session = build_session(InMemoryEventStore(records))
        unsubscribe = session.bind(auth)

        session.login()
        assert auth.requests == ["login"]
        await auth.emit(AuthState(user=user))
        assert session.user == user
        assert len(session.visible()) == 3

        unsubscribe()
        await auth.emit(AuthState(user=None))
        assert session.user == user

    @pytest.mark.asyncio
    async def test_sign_out_clears_favorites_and_selection(self, records, user):
        favorite_store = InMemoryFavoriteStore()
        await favorite_store.create_favorite(user.id, EventId("c-1"))
        session = build_session(InMemoryEventStore(records), favorite_store)
        await session.handle_auth_state(AuthState(user=user))
        session.open_event("c-1")

        await session.handle_auth_state(AuthState(user=None))

        assert not session.is_favorite(EventId("c-1"))
        assert session.selected is None
        assert not session.is_authoritative

    @pytest.mark.asyncio
    async def test_same_user_again_does_not_reload(self, records, user):
        store = InMemoryEventStore(records)
        session = build_session(store)
        await session.handle_auth_state(AuthState(user=user))
        await session.handle_auth_state(AuthState(user=user))
        assert store.requests == [City.CHICAGO]


class TestCitySelection:
    """Tests for select_city and refresh ordering."""

    @pytest.mark.asyncio
    async def test_switching_city_reloads_catalog(self, records, user):
        session = build_session(InMemoryEventStore(records))
        await session.handle_auth_state(AuthState(user=user))
        await session.select_city(City.MINNEAPOLIS)
        assert [e.id.value for e in session.visible()] == ["m-1", "m-2"]
        assert session.categories == ("Outdoor/Adventure", "Culture/Arts")

    @pytest.mark.asyncio
    async def test_city_change_while_signed_out_defers_load(self, records):
        store = InMemoryEventStore(records)
        session = build_session(store)
        await session.select_city(City.MINNEAPOLIS)
        assert store.requests == []
        assert session.city is City.MINNEAPOLIS

    @pytest.mark.asyncio
    async def test_late_catalog_for_previous_city_is_discarded(self, records, user):
        store = GatedEventStore(records, held=[City.CHICAGO])
        session = build_session(store)

        first = asyncio.create_task(session.handle_auth_state(AuthState(user=user)))
        await asyncio.sleep(0)
        await session.select_city(City.MINNEAPOLIS)
        assert session.is_authoritative

        store.gates[City.CHICAGO].set()
        await first

        assert session.catalog.city is City.MINNEAPOLIS
        assert [e.id.value for e in session.visible()] == ["m-1", "m-2"]
        assert session.is_authoritative

    @pytest.mark.asyncio
    async def test_failed_refresh_keeps_favorites_and_reports(self, user):
        favorite_store = InMemoryFavoriteStore()
        await favorite_store.create_favorite(user.id, EventId("x"))
        session = build_session(BrokenEventStore(), favorite_store)

        with pytest.raises(LoadError):
            await session.handle_auth_state(AuthState(user=user))

        assert not session.is_authoritative
        assert session.is_favorite(EventId("x"))
        assert [type(e) for e in session.errors] == [LoadError]
        assert session.visible() == []


class TestFilterTriggers:
    """Tests for filter mutations and re-evaluation."""

    @pytest.mark.asyncio
    async def test_filters_narrow_and_clear(self, records, user):
        session = build_session(InMemoryEventStore(records))
        await session.handle_auth_state(AuthState(user=user))

        session.set_search_query("kayak")
        assert [e.id.value for e in session.visible()] == ["c-2"]

        session.clear_filters()
        session.toggle_category("Food & Drink")
        assert [e.id.value for e in session.visible()] == ["c-3"]

        session.set_categories([])
        session.set_cost_range(30, 40)
        assert [e.id.value for e in session.visible()] == ["c-1", "c-3"]

        session.set_duration_range(2, 3)
        assert [e.id.value for e in session.visible()] == ["c-3"]

        session.clear_filters()
        assert len(session.visible()) == 3

    def test_inverted_range_is_rejected(self, records):
        session = build_session(InMemoryEventStore(records))
        with pytest.raises(InvalidFilterError):
            session.set_cost_range(50, 10)
        assert session.filters.is_default

    @pytest.mark.asyncio
    async def test_direct_filter_edits_are_seen(self, records, user):
        session = build_session(InMemoryEventStore(records))
        await session.handle_auth_state(AuthState(user=user))
        assert len(session.visible()) == 3
        session.filters.search_query = "pizza"
        assert [e.id.value for e in session.visible()] == ["c-3"]


class TestSelectionAndFavorites:
    """Tests for surprise, open_event and toggle_favorite."""

    @pytest.mark.asyncio
    async def test_surprise_picks_from_visible_set(self, records, user):
        session = build_session(
            InMemoryEventStore(records), selection=SelectionController(rng=random.Random(3))
        )
        await session.handle_auth_state(AuthState(user=user))
        session.set_search_query("pizza")
        assert session.surprise().id == EventId("c-3")
        assert session.selected.id == EventId("c-3")

    @pytest.mark.asyncio
    async def test_surprise_on_empty_visible_set_keeps_selection(self, records, user):
        session = build_session(InMemoryEventStore(records))
        await session.handle_auth_state(AuthState(user=user))
        opened = session.open_event("c-1")
        session.set_search_query("no such event")
        assert session.surprise() is None
        assert session.selected is opened

    @pytest.mark.asyncio
    async def test_open_unknown_event(self, records, user):
        session = build_session(InMemoryEventStore(records))
        await session.handle_auth_state(AuthState(user=user))
        with pytest.raises(EventNotFoundError):
            session.open_event("nope")

    @pytest.mark.asyncio
    async def test_toggle_favorite_requires_user(self, records):
        session = build_session(InMemoryEventStore(records))
        with pytest.raises(AuthRequiredError):
            await session.toggle_favorite(EventId("c-1"))

    @pytest.mark.asyncio
    async def test_toggle_favorite_round_trip(self, records, user):
        favorite_store = InMemoryFavoriteStore()
        session = build_session(InMemoryEventStore(records), favorite_store)
        await session.handle_auth_state(AuthState(user=user))

        assert await session.toggle_favorite(EventId("c-2")) is True
        assert session.is_favorite(EventId("c-2"))
        assert await session.toggle_favorite(EventId("c-2")) is False
        assert len(favorite_store) == 0

    @pytest.mark.asyncio
    async def test_favorites_do_not_affect_visible_set(self, records, user):
        session = build_session(InMemoryEventStore(records))
        await session.handle_auth_state(AuthState(user=user))
        before = session.visible()
        await session.toggle_favorite(EventId("c-1"))
        assert session.visible() == before

    @pytest.mark.asyncio
    async def test_switching_user_loads_their_favorites(self, records, user):
        favorite_store = InMemoryFavoriteStore()
        other = User(id=UserId("user-2"))
        await favorite_store.create_favorite(other.id, EventId("c-2"))
        session = build_session(InMemoryEventStore(records), favorite_store)

        await session.handle_auth_state(AuthState(user=user))
        assert not session.is_favorite(EventId("c-2"))
        await session.handle_auth_state(AuthState(user=other))
        assert session.is_favorite(EventId("c-2"))

    @pytest.mark.asyncio
    async def test_toggle_favorite_after_failed_favorites_load(self, records, user):
        favorite_store = BrokenFavoriteStore()
        session = build_session(InMemoryEventStore(records), favorite_store)
        with pytest.raises(LoadError):
            await session.handle_auth_state(AuthState(user=user))

        for _ in range(2):
            with pytest.raises(FavoritesNotLoadedError):
                await session.toggle_favorite(EventId("c-1"))
        assert not session.is_favorite(EventId("c-1"))
        assert len(favorite_store) == 0
