from swaps.domain.models import Event, EventStatus, SwapRequest, SwapRequestStatus, User
from swaps.domain.projections import (
    DetailedEvent,
    DetailedSwapRequest,
    OwnerSummary,
    SwapRequestLists,
)
from swaps.domain.value_objects import EmailAddress, EventId, SwapRequestId, TimeSlot, UserId

__all__ = [
    "User",
    "Event",
    "SwapRequest",
    "EventStatus",
    "SwapRequestStatus",
    "DetailedEvent",
    "DetailedSwapRequest",
    "OwnerSummary",
    "SwapRequestLists",
    "UserId",
    "EventId",
    "SwapRequestId",
    "TimeSlot",
    "EmailAddress",
]
