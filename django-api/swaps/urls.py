from django.urls import path

from swaps.handlers import (
    EventListView,
    EventStatusView,
    LoginView,
    OwnSwappableEventListView,
    SwapRequestListView,
    SwappableSlotListView,
    SwapResponseView,
    UserRegistrationView,
)

urlpatterns = [
    path("users", UserRegistrationView.as_view(), name="user-register"),
    path("users/login", LoginView.as_view(), name="user-login"),
    path("events", EventListView.as_view(), name="event-list"),
    path("events/swappable", OwnSwappableEventListView.as_view(), name="own-swappable-list"),
    path("events/<str:event_id>/status", EventStatusView.as_view(), name="event-status"),
    path("swappable-slots", SwappableSlotListView.as_view(), name="swappable-slot-list"),
    path("swap-requests", SwapRequestListView.as_view(), name="swap-request-list"),
    path(
        "swap-requests/<str:request_id>/response",
        SwapResponseView.as_view(),
        name="swap-request-response",
    ),
]
