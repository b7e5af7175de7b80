"""Swap service - creates and resolves swap requests.

Each operation runs as one unit of work against the store. Preconditions
are checked before the first write; every write is compare-and-set, so a
request that lost a race fails with InvalidStateError and its unit of
work rolls back without leaving either event half-updated.
"""

import logging
from datetime import datetime, timezone

from swaps.domain import (
    Event,
    EventId,
    EventStatus,
    SwapRequest,
    SwapRequestId,
    SwapRequestStatus,
    UserId,
)
from swaps.domain.errors import (
    InvalidStateError,
    NotFoundError,
    NotOwnerError,
    SelfSwapError,
)
from swaps.services.common import parse_id, settle_status, write_event
from swaps.stores.interfaces import SwapStore

logger = logging.getLogger(__name__)


class SwapService:
    """Service for the swap request lifecycle."""

    def __init__(self, store: SwapStore) -> None:
        self._store = store

    def get_swap_request(self, request_id: str | SwapRequestId) -> SwapRequest:
        """Return a swap request by ID.

        Raises:
            ValidationError: If the request_id is not a valid UUID.
            NotFoundError: If the request does not exist.
        """
        rid = parse_id(SwapRequestId, request_id, "swap request id")
        request = self._store.get_swap_request(rid)
        if request is None:
            raise NotFoundError("Swap request", rid)
        return request

    def create_swap_request(
        self,
        requester_id: str | UserId,
        requester_slot_id: str | EventId,
        target_slot_id: str | EventId,
    ) -> SwapRequest:
        """Offer ``requester_slot_id`` in exchange for ``target_slot_id``.

        On success both events are SWAP_PENDING and a PENDING request exists.

        Raises:
            ValidationError: If any id is malformed.
            NotFoundError: If either event does not exist.
            NotOwnerError: If the requester does not own the offered slot.
            SelfSwapError: If both slots belong to the same user.
            InvalidStateError: If either slot is not SWAPPABLE.
        """
        requester = parse_id(UserId, requester_id, "user id")
        offered_id = parse_id(EventId, requester_slot_id, "event id")
        target_id = parse_id(EventId, target_slot_id, "event id")

        with self._store.atomic():
            events = self._store.get_events([offered_id, target_id], for_update=True)
            offered = events.get(offered_id)
            if offered is None:
                raise NotFoundError("Event", offered_id)
            target = events.get(target_id)
            if target is None:
                raise NotFoundError("Event", target_id)

            if not offered.is_owned_by(requester):
                raise NotOwnerError("You can only offer events you own")
            if offered.owner_id == target.owner_id:
                raise SelfSwapError()
            if offered.status is not EventStatus.SWAPPABLE:
                raise InvalidStateError("Your offered slot is not available for swapping")
            if target.status is not EventStatus.SWAPPABLE:
                raise InvalidStateError("The requested slot is not available for swapping")

            request = SwapRequest(
                id=SwapRequestId.new(),
                requester_id=requester,
                requester_event_id=offered.id,
                target_user_id=target.owner_id,
                target_event_id=target.id,
                status=SwapRequestStatus.PENDING,
                created_at=datetime.now(timezone.utc),
            )
            write_event(self._store, offered, offered.with_status(EventStatus.SWAP_PENDING))
            write_event(self._store, target, target.with_status(EventStatus.SWAP_PENDING))
            self._store.add_swap_request(request)

        logger.info(
            "Swap request %s created: user %s offers %s for %s",
            request.id,
            requester,
            offered.id,
            target.id,
        )
        return request

    def respond_to_swap_request(
        self, request_id: str | SwapRequestId, responder_id: str | UserId, accept: bool
    ) -> SwapRequest:
        """Accept or reject a pending swap request as its recipient.

        Raises:
            ValidationError: If any id is malformed.
            NotFoundError: If the request does not exist.
            InvalidStateError: If the request is already resolved or its
                slots changed underneath it.
            NotOwnerError: If the responder does not own the requested slot.
        """
        rid = parse_id(SwapRequestId, request_id, "swap request id")
        responder = parse_id(UserId, responder_id, "user id")

        with self._store.atomic():
            request = self._store.get_swap_request(rid, for_update=True)
            if request is None:
                raise NotFoundError("Swap request", rid)
            if not request.is_pending:
                raise InvalidStateError(
                    f"Swap request has already been {request.status.value.lower()}"
                )

            events = self._store.get_events(request.event_ids, for_update=True)
            offered = events.get(request.requester_event_id)
            target = events.get(request.target_event_id)
            for event_id, event in (
                (request.requester_event_id, offered),
                (request.target_event_id, target),
            ):
                if event is None:
                    raise NotFoundError("Event", event_id)

            if not target.is_owned_by(responder):
                raise NotOwnerError("Only the recipient can respond to this swap request")
            if not offered.is_owned_by(request.requester_id):
                raise InvalidStateError("The offered slot has changed hands")
            for event in (offered, target):
                if event.status is not EventStatus.SWAP_PENDING:
                    raise InvalidStateError("Swap request no longer matches its slots")

            if accept:
                resolved = self._accept(request, offered, target)
            else:
                resolved = self._reject(request, offered, target)

        return resolved

    def _resolve(self, request: SwapRequest, status: SwapRequestStatus) -> SwapRequest:
        resolved = request.resolved(status)
        if not self._store.update_swap_request(
            resolved, expected_status=SwapRequestStatus.PENDING
        ):
            raise InvalidStateError("Swap request was resolved by another request")
        return resolved

    def _accept(self, request: SwapRequest, offered: Event, target: Event) -> SwapRequest:
        accepted = self._resolve(request, SwapRequestStatus.ACCEPTED)
        write_event(self._store, offered, offered.handed_to(target.owner_id))
        write_event(self._store, target, target.handed_to(offered.owner_id))

        cascaded = self._reject_others_referencing({offered.id, target.id})
        logger.info(
            "Swap request %s accepted: %s now owns %s, %s now owns %s (%d cascaded)",
            request.id,
            target.owner_id,
            offered.id,
            offered.owner_id,
            target.id,
            cascaded,
        )
        return accepted

    def _reject(self, request: SwapRequest, offered: Event, target: Event) -> SwapRequest:
        rejected = self._resolve(request, SwapRequestStatus.REJECTED)
        for event in (offered, target):
            settle_status(self._store, event)
        logger.info("Swap request %s rejected", request.id)
        return rejected

    def _reject_others_referencing(self, swapped: set[EventId]) -> int:
        """Reject every remaining PENDING request on the swapped events.

        Slots on the far side of a rejected request are released with the
        same rule as an explicit rejection. Returns the number rejected.
        """
        pending_ids: set[SwapRequestId] = set()
        for event_id in swapped:
            pending_ids |= self._store.pending_request_ids_for_event(event_id)

        released: set[EventId] = set()
        count = 0
        for pending_id in sorted(pending_ids, key=str):
            other = self._store.get_swap_request(pending_id, for_update=True)
            if other is None or not other.is_pending:
                continue
            self._resolve(other, SwapRequestStatus.REJECTED)
            released.update(eid for eid in other.event_ids if eid not in swapped)
            count += 1
            logger.info("Swap request %s rejected: slot already swapped", other.id)

        for event in self._store.get_events(released, for_update=True).values():
            settle_status(self._store, event)
        return count
