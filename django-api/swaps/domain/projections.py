"""Read models built by joining users, events and swap requests."""

from dataclasses import dataclass

from swaps.domain.models import Event, SwapRequest, User


@dataclass(frozen=True)
class OwnerSummary:
    name: str
    email: str


@dataclass(frozen=True)
class DetailedEvent:
    """An event annotated with its owner's public identity."""

    event: Event
    owner: OwnerSummary


@dataclass(frozen=True)
class DetailedSwapRequest:
    """A swap request annotated with both parties and both slots."""

    request: SwapRequest
    requester: User
    target_user: User
    requester_event: Event
    target_event: Event


@dataclass(frozen=True)
class SwapRequestLists:
    incoming: tuple[DetailedSwapRequest, ...] = ()
    outgoing: tuple[DetailedSwapRequest, ...] = ()
