from swaps.handlers.views import (
    EventListView,
    EventStatusView,
    LoginView,
    OwnSwappableEventListView,
    SwapRequestListView,
    SwappableSlotListView,
    SwapResponseView,
    UserRegistrationView,
)

__all__ = [
    "UserRegistrationView",
    "LoginView",
    "EventListView",
    "OwnSwappableEventListView",
    "EventStatusView",
    "SwappableSlotListView",
    "SwapRequestListView",
    "SwapResponseView",
]
