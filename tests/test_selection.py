"""Unit tests for SelectionController.

Run with: pytest tests/test_selection.py -v
"""

import random
from collections import Counter

from catalog.services import SelectionController
from factories import make_event


class TestSelect:
    """Tests for opening and closing the detail view."""

    def test_select_and_close(self):
        controller = SelectionController()
        event = make_event("a")
        controller.select(event)
        assert controller.selected is event
        controller.select(None)
        assert controller.selected is None


class TestSurprise:
    """Tests for the random pick."""

    def test_empty_pool_keeps_current_selection(self):
        controller = SelectionController()
        current = make_event("a")
        controller.select(current)
        assert controller.surprise([]) is None
        assert controller.selected is current

    def test_empty_pool_with_nothing_open(self):
        controller = SelectionController()
        assert controller.surprise(()) is None
        assert controller.selected is None

    def test_pick_is_a_member_and_becomes_selected(self):
        pool = [make_event("a"), make_event("b")]
        controller = SelectionController(rng=random.Random(7))
        choice = controller.surprise(pool)
        assert choice in pool
        assert controller.selected is choice

    def test_picks_are_uniform(self):
        pool = [make_event("a"), make_event("b"), make_event("c"), make_event("d")]
        controller = SelectionController(rng=random.Random(2024))
        draws = 8000
        counts = Counter(controller.surprise(pool).id.value for _ in range(draws))

        assert set(counts) == {"a", "b", "c", "d"}
        expected = draws / len(pool)
        chi_square = sum((counts[k] - expected) ** 2 / expected for k in counts)
        # 3 degrees of freedom; 16.27 is the 0.001 critical value
        assert chi_square < 16.27
