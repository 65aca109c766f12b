"""Open-event selection and the random pick."""

import logging
import random
from collections.abc import Sequence

from catalog.domain import Event

logger = logging.getLogger(__name__)


class SelectionController:
    """Tracks the single event open in the detail view."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()
        self._selected: Event | None = None

    @property
    def selected(self) -> Event | None:
        return self._selected

    def select(self, event: Event | None) -> None:
        self._selected = event

    def close(self) -> None:
        self._selected = None

    def surprise(self, pool: Sequence[Event]) -> Event | None:
        """Open an event drawn uniformly from ``pool``.

        An empty pool leaves the selection untouched and returns None.
        """
        if not pool:
            logger.debug("Nothing to pick from; selection unchanged")
            return None
        choice = pool[self._rng.randrange(len(pool))]
        self._selected = choice
        return choice
