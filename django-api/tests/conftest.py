"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest
from rest_framework.test import APIClient

from swaps.domain import Event, User
from swaps.services import EventService, ProjectionService, SwapService, UserService
from swaps.services.registry import get_store
from swaps.stores import InMemorySwapStore, SwapStore

BASE_TIME = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_store_registry():
    get_store.cache_clear()
    yield
    get_store.cache_clear()


@pytest.fixture(params=["memory", pytest.param("django", marks=pytest.mark.django_db)])
def store(request) -> SwapStore:
    """Every service test runs against both store implementations."""
    if request.param == "django":
        request.getfixturevalue("db")
        from swaps.stores.django_store import DjangoSwapStore

        return DjangoSwapStore()
    return InMemorySwapStore()


@pytest.fixture
def memory_store() -> InMemorySwapStore:
    return InMemorySwapStore()


@pytest.fixture
def event_service(store: SwapStore) -> EventService:
    return EventService(store)


@pytest.fixture
def swap_service(store: SwapStore) -> SwapService:
    return SwapService(store)


@pytest.fixture
def projection_service(store: SwapStore) -> ProjectionService:
    return ProjectionService(store)


@pytest.fixture
def user_service(store: SwapStore) -> UserService:
    return UserService(store)


@pytest.fixture
def alice(user_service: UserService) -> User:
    return user_service.register_user("Alice", "alice@example.com", "alice-pw")


@pytest.fixture
def bob(user_service: UserService) -> User:
    return user_service.register_user("Bob", "bob@example.com", "bob-pw")


@pytest.fixture
def carol(user_service: UserService) -> User:
    return user_service.register_user("Carol", "carol@example.com", "carol-pw")


@pytest.fixture
def make_slot(event_service: EventService):
    """Create a one-hour event ``hour`` hours after BASE_TIME, swappable by default."""

    def _make(owner: User, hour: int, *, title: str | None = None, swappable: bool = True) -> Event:
        starts_at = BASE_TIME + timedelta(hours=hour)
        event = event_service.create_event(
            owner.id, title or f"Slot {hour}", starts_at, starts_at + timedelta(hours=1)
        )
        if swappable:
            event = event_service.set_swappable(event.id, owner.id)
        return event

    return _make
