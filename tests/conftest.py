"""Pytest configuration and shared fixtures."""

import pytest
from rest_framework.test import APIClient

from catalog.domain import User, UserId
from factories import make_record


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def user() -> User:
    return User(id=UserId("user-1"), email="ana@example.com")


@pytest.fixture
def chicago_records() -> list[dict]:
    return [
        make_record(id="c-1", name="Axe Throwing", category="Entertainment/Adventure",
                    description="Throw axes at wooden targets.", cost_per_person="35", duration_hours="1.5"),
        make_record(id="c-2", name="Kayak the Loop", category="Outdoor/Adventure",
                    description="Kayaking through downtown.", cost_per_person="65", duration_hours="2"),
        make_record(id="c-3", name="Pizza Crawl", category="Food & Drink",
                    description="Deep dish tasting walk.", cost_per_person="40", duration_hours="3"),
    ]


@pytest.fixture
def minneapolis_records() -> list[dict]:
    return [
        make_record(id="m-1", name="Lake Canoe", city="minneapolis", category="Outdoor/Adventure",
                    description="Paddle the Chain of Lakes.", cost_per_person="30", duration_hours="2"),
        make_record(id="m-2", name="Mill City Museum", city="minneapolis", category="Culture/Arts",
                    description="Flour milling history.", cost_per_person="15", duration_hours="1.5"),
    ]
