"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in swaps/models.py (persistence layer).
"""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

from swaps.domain.value_objects import EmailAddress, EventId, SwapRequestId, TimeSlot, UserId


class EventStatus(Enum):
    """Availability of a calendar slot."""

    BUSY = "BUSY"
    SWAPPABLE = "SWAPPABLE"
    SWAP_PENDING = "SWAP_PENDING"


class SwapRequestStatus(Enum):
    """Lifecycle of a swap request. ACCEPTED and REJECTED are terminal."""

    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class User:
    """Domain representation of a User."""

    id: UserId
    name: str
    email: EmailAddress
    password_hash: str


@dataclass(frozen=True)
class Event:
    """Domain representation of a calendar Event (a slot)."""

    id: EventId
    title: str
    slot: TimeSlot
    owner_id: UserId
    status: EventStatus

    @property
    def starts_at(self) -> datetime:
        return self.slot.starts_at

    @property
    def ends_at(self) -> datetime:
        return self.slot.ends_at

    def is_owned_by(self, user_id: UserId) -> bool:
        return self.owner_id == user_id

    def with_status(self, status: EventStatus) -> "Event":
        return replace(self, status=status)

    def handed_to(self, owner_id: UserId) -> "Event":
        """Return this event owned by ``owner_id`` and back to BUSY."""
        return replace(self, owner_id=owner_id, status=EventStatus.BUSY)


@dataclass(frozen=True)
class SwapRequest:
    """Domain representation of a proposed one-for-one trade."""

    id: SwapRequestId
    requester_id: UserId
    requester_event_id: EventId
    target_user_id: UserId
    target_event_id: EventId
    status: SwapRequestStatus
    created_at: datetime

    @property
    def event_ids(self) -> tuple[EventId, EventId]:
        return (self.requester_event_id, self.target_event_id)

    @property
    def is_pending(self) -> bool:
        return self.status is SwapRequestStatus.PENDING

    def references(self, event_id: EventId) -> bool:
        return event_id in self.event_ids

    def resolved(self, status: SwapRequestStatus) -> "SwapRequest":
        return replace(self, status=status)
