"""Browsing session: the explicit context for one signed-in user.

Every state transition has a trigger method here. Nothing reacts
implicitly: auth changes arrive through ``handle_auth_state``, city
changes through ``select_city`` and filter edits through the ``set_*``
methods. The visible set is recomputed lazily from the catalog and the
filter state.
"""

import asyncio
import logging
from collections.abc import Callable, Iterable

from catalog.domain import AuthState, City, Event, EventId, FilterResult, FilterState, Range, User, evaluate
from catalog.domain.errors import AuthRequiredError, DomainError, InvalidFilterError
from catalog.services.event_service import EventCatalog
from catalog.services.favorite_service import FavoritesStore
from catalog.services.selection import SelectionController
from catalog.stores.interfaces import AuthProvider

logger = logging.getLogger(__name__)


def _range(low: float, high: float) -> Range:
    try:
        return Range(low=low, high=high)
    except ValueError as exc:
        raise InvalidFilterError(str(exc)) from exc


class BrowsingSession:
    """Session state shared by the catalog, favorites and selection."""

    def __init__(
        self,
        catalog: EventCatalog,
        favorites: FavoritesStore,
        *,
        city: City = City.CHICAGO,
        selection: SelectionController | None = None,
    ) -> None:
        self.catalog = catalog
        self.favorites = favorites
        self.selection = selection or SelectionController()
        self.filters = FilterState()
        self.city = city
        self.user: User | None = None
        self.is_loading = True
        self.errors: tuple[DomainError, ...] = ()
        self._generation = 0
        self._authoritative = False
        self._auth: AuthProvider | None = None
        self._result_key: tuple | None = None
        self._result: FilterResult | None = None

    # Auth

    def bind(self, auth: AuthProvider) -> Callable[[], None]:
        """Subscribe to ``auth`` transitions; return the unsubscribe function."""
        self._auth = auth
        return auth.on_auth_state_change(self.handle_auth_state)

    def login(self) -> None:
        if self._auth is not None:
            self._auth.login()

    def logout(self) -> None:
        if self._auth is not None:
            self._auth.logout()

    async def handle_auth_state(self, state: AuthState) -> None:
        """Apply an auth transition, loading data once a user is settled."""
        previous = self.user
        self.user = state.user
        self.is_loading = state.is_loading
        logger.info("Auth state changed: user=%s loading=%s", state.user and state.user.id, state.is_loading)
        if state.is_loading:
            return
        if state.user is None:
            self._generation += 1
            self._authoritative = False
            self.favorites.clear()
            self.selection.close()
            return
        if state.user != previous or not self._authoritative:
            await self.refresh()

    # Loading

    @property
    def is_authoritative(self) -> bool:
        """True when catalog and favorites both loaded for the current city and user."""
        return self._authoritative

    async def select_city(self, city: City) -> None:
        self.city = city
        if self.user is None or self.is_loading:
            self._generation += 1
            self._authoritative = False
            return
        await self.refresh()

    async def refresh(self) -> None:
        """Reload catalog and favorites concurrently for the current city and user.

        A refresh overtaken by a newer one leaves state to the newer one.

        Raises:
            LoadError: If either load failed. The other load's result is kept.
        """
        self._generation += 1
        generation = self._generation
        self._authoritative = False
        city, user = self.city, self.user

        results = await asyncio.gather(
            self.catalog.load(city),
            self.favorites.load(user.id if user else None),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException) and not isinstance(result, DomainError):
                raise result

        if generation != self._generation:
            logger.info("Refresh for %s superseded", city.value)
            return

        errors = tuple(r for r in results if isinstance(r, DomainError))
        self.errors = errors
        if errors:
            raise errors[0]
        self._authoritative = True

    # Filters

    def set_search_query(self, query: str) -> None:
        self.filters.search_query = query

    def toggle_category(self, category: str) -> bool:
        return self.filters.toggle_category(category)

    def set_categories(self, categories: Iterable[str]) -> None:
        self.filters.selected_categories = set(categories)

    def set_cost_range(self, low: float, high: float) -> None:
        self.filters.cost_range = _range(low, high)

    def set_duration_range(self, low: float, high: float) -> None:
        self.filters.duration_range = _range(low, high)

    def clear_filters(self) -> None:
        self.filters.clear()

    @property
    def categories(self) -> tuple[str, ...]:
        return self.catalog.categories

    def evaluate(self) -> FilterResult:
        key = (self.catalog.version, self.filters.snapshot())
        if key != self._result_key:
            result = evaluate(self.catalog.events, self.filters)
            for stage in result.stages:
                logger.debug("Filter stage %s: %d -> %d", stage.name, stage.before, stage.after)
            for problem in result.rejected:
                logger.warning("Excluded event %s: malformed %s %r", problem.event_id, problem.field, problem.value)
            self._result_key, self._result = key, result
        return self._result

    def visible(self) -> list[Event]:
        return list(self.evaluate().events)

    # Selection

    @property
    def selected(self) -> Event | None:
        return self.selection.selected

    def select(self, event: Event | None) -> None:
        self.selection.select(event)

    def open_event(self, event_id: str) -> Event:
        event = self.catalog.get(event_id)
        self.selection.select(event)
        return event

    def surprise(self) -> Event | None:
        return self.selection.surprise(self.evaluate().events)

    # Favorites

    def is_favorite(self, event_id: EventId) -> bool:
        return event_id in self.favorites

    async def toggle_favorite(self, event_id: EventId) -> bool:
        if self.user is None:
            raise AuthRequiredError()
        return await self.favorites.toggle(self.user.id, event_id)
