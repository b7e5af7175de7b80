"""Read-only projections for the dashboard, marketplace and request pages."""

from swaps.domain import (
    DetailedEvent,
    DetailedSwapRequest,
    Event,
    EventStatus,
    OwnerSummary,
    SwapRequest,
    SwapRequestLists,
    SwapRequestStatus,
    UserId,
)
from swaps.services.common import parse_id
from swaps.stores.interfaces import SwapStore


class ProjectionService:
    """Joins users, events and swap requests without mutating them."""

    def __init__(self, store: SwapStore) -> None:
        self._store = store

    def list_own_events(self, user_id: str | UserId) -> list[Event]:
        """Return the user's events ordered by start time."""
        owner = parse_id(UserId, user_id, "user id")
        return self._store.list_events(owner_id=owner)

    def list_own_swappable_slots(self, user_id: str | UserId) -> list[Event]:
        """Return the user's SWAPPABLE events, i.e. what they can offer."""
        owner = parse_id(UserId, user_id, "user id")
        return self._store.list_events(owner_id=owner, status=EventStatus.SWAPPABLE)

    def list_swappable_slots(self, user_id: str | UserId) -> list[DetailedEvent]:
        """Return the marketplace: other users' SWAPPABLE events with owner details."""
        viewer = parse_id(UserId, user_id, "user id")
        with self._store.read():
            events = self._store.list_events(
                status=EventStatus.SWAPPABLE, exclude_owner_id=viewer
            )
            owners = self._store.get_users(event.owner_id for event in events)

        return [
            DetailedEvent(
                event=event,
                owner=OwnerSummary(
                    name=owners[event.owner_id].name,
                    email=str(owners[event.owner_id].email),
                ),
            )
            for event in events
        ]

    def list_swap_requests(self, user_id: str | UserId) -> SwapRequestLists:
        """Return the user's PENDING incoming and outgoing requests."""
        uid = parse_id(UserId, user_id, "user id")
        with self._store.read():
            incoming = self._store.list_swap_requests(
                target_user_id=uid, status=SwapRequestStatus.PENDING
            )
            outgoing = self._store.list_swap_requests(
                requester_id=uid, status=SwapRequestStatus.PENDING
            )
            requests = incoming + outgoing
            users = self._store.get_users(
                party
                for request in requests
                for party in (request.requester_id, request.target_user_id)
            )
            events = self._store.get_events(
                event_id for request in requests for event_id in request.event_ids
            )

        def detail(request: SwapRequest) -> DetailedSwapRequest:
            return DetailedSwapRequest(
                request=request,
                requester=users[request.requester_id],
                target_user=users[request.target_user_id],
                requester_event=events[request.requester_event_id],
                target_event=events[request.target_event_id],
            )

        return SwapRequestLists(
            incoming=tuple(detail(request) for request in incoming),
            outgoing=tuple(detail(request) for request in outgoing),
        )
