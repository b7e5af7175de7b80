"""Process-wide wiring of the configured store into the services."""

from functools import lru_cache

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from swaps.services.event_service import EventService
from swaps.services.projection_service import ProjectionService
from swaps.services.swap_service import SwapService
from swaps.services.user_service import UserService
from swaps.stores.interfaces import SwapStore
from swaps.stores.memory_store import InMemorySwapStore


@lru_cache
def get_store() -> SwapStore:
    """Build the store named by ``settings.SWAPS_STORE_BACKEND`` once per process."""
    backend = getattr(settings, "SWAPS_STORE_BACKEND", "django")
    if backend == "memory":
        return InMemorySwapStore()
    if backend == "django":
        from swaps.stores.django_store import DjangoSwapStore

        return DjangoSwapStore()
    raise ImproperlyConfigured(f"Unknown SWAPS_STORE_BACKEND: {backend!r}")


def get_event_service() -> EventService:
    return EventService(get_store())


def get_swap_service() -> SwapService:
    return SwapService(get_store())


def get_projection_service() -> ProjectionService:
    return ProjectionService(get_store())


def get_user_service() -> UserService:
    return UserService(get_store())
