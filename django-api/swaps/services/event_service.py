"""Event service - the event lifecycle state machine.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors

Users may only move their own events between BUSY and SWAPPABLE.
SWAP_PENDING is entered and left exclusively by the swap service.
"""

import logging
from datetime import datetime

from swaps.domain import Event, EventId, EventStatus, TimeSlot, UserId
from swaps.domain.errors import InvalidStateError, NotFoundError, ValidationError
from swaps.services.common import parse_id, require_event, require_owner, write_event
from swaps.stores.interfaces import SwapStore

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 255


class EventService:
    """Service for creating events and toggling their availability."""

    def __init__(self, store: SwapStore) -> None:
        self._store = store

    def create_event(
        self, owner_id: str | UserId, title: str, starts_at: datetime, ends_at: datetime
    ) -> Event:
        """Create a BUSY event owned by ``owner_id``.

        Raises:
            ValidationError: If the title is blank, not a string or too long,
                or the slot is malformed.
            NotFoundError: If the owner does not exist.
        """
        owner = parse_id(UserId, owner_id, "user id")
        if title is not None and not isinstance(title, str):
            raise ValidationError("Title must be a string")
        title = (title or "").strip()
        if not title:
            raise ValidationError("Title is required")
        if len(title) > MAX_TITLE_LENGTH:
            raise ValidationError(f"Title must be at most {MAX_TITLE_LENGTH} characters")
        try:
            slot = TimeSlot(starts_at=starts_at, ends_at=ends_at)
        except (TypeError, ValueError) as exc:
            raise ValidationError(str(exc)) from exc

        event = Event(
            id=EventId.new(),
            title=title,
            slot=slot,
            owner_id=owner,
            status=EventStatus.BUSY,
        )
        with self._store.atomic():
            if self._store.get_user(owner) is None:
                raise NotFoundError("User", owner)
            self._store.add_event(event)

        logger.info("Event %s created by user %s", event.id, owner)
        return event

    def get_event(self, event_id: str | EventId) -> Event:
        """Return an event by ID.

        Raises:
            ValidationError: If the event_id is not a valid UUID.
            NotFoundError: If the event does not exist.
        """
        return require_event(self._store, parse_id(EventId, event_id, "event id"))

    def set_swappable(self, event_id: str | EventId, actor_id: str | UserId) -> Event:
        """BUSY -> SWAPPABLE, by the owner only."""
        return self._transition(
            event_id, actor_id, allowed_from=EventStatus.BUSY, to=EventStatus.SWAPPABLE
        )

    def set_busy(self, event_id: str | EventId, actor_id: str | UserId) -> Event:
        """SWAPPABLE -> BUSY, by the owner only.

        A slot under negotiation (SWAP_PENDING) cannot be withdrawn until
        the swap request referencing it is resolved.
        """
        return self._transition(
            event_id, actor_id, allowed_from=EventStatus.SWAPPABLE, to=EventStatus.BUSY
        )

    def set_event_status(
        self, event_id: str | EventId, actor_id: str | UserId, target_status: str | EventStatus
    ) -> Event:
        """Dispatch a user-requested status change to set_busy/set_swappable."""
        try:
            status = EventStatus(target_status)
        except ValueError as exc:
            raise ValidationError(f"Unknown event status: {target_status}") from exc

        if status is EventStatus.SWAPPABLE:
            return self.set_swappable(event_id, actor_id)
        if status is EventStatus.BUSY:
            return self.set_busy(event_id, actor_id)
        raise ValidationError("Events can only be set to BUSY or SWAPPABLE")

    def _transition(
        self,
        event_id: str | EventId,
        actor_id: str | UserId,
        *,
        allowed_from: EventStatus,
        to: EventStatus,
    ) -> Event:
        eid = parse_id(EventId, event_id, "event id")
        actor = parse_id(UserId, actor_id, "user id")

        with self._store.atomic():
            event = require_event(self._store, eid, for_update=True)
            require_owner(event, actor)
            if event.status is not allowed_from:
                logger.debug(
                    "Refused %s -> %s for event %s", event.status.value, to.value, eid
                )
                raise InvalidStateError(
                    f"Cannot mark a {event.status.value} event as {to.value}"
                )
            updated = write_event(self._store, event, event.with_status(to))

        logger.info("Event %s marked %s by user %s", eid, to.value, actor)
        return updated
