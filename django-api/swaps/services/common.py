"""Helpers shared by the services: id parsing, lookups, guarded writes."""

from typing import TypeVar

from swaps.domain import Event, EventId, EventStatus, UserId
from swaps.domain.errors import InvalidStateError, NotFoundError, NotOwnerError, ValidationError
from swaps.stores.interfaces import SwapStore

IdT = TypeVar("IdT")


def parse_id(id_type: type[IdT], raw: object, label: str) -> IdT:
    """Coerce ``raw`` (an id object or its string form) into ``id_type``.

    Raises:
        ValidationError: If ``raw`` is not a valid UUID string.
    """
    if isinstance(raw, id_type):
        return raw
    try:
        return id_type.from_string(str(raw))
    except ValueError as exc:
        raise ValidationError(f"Invalid {label}") from exc


def require_event(store: SwapStore, event_id: EventId, *, for_update: bool = False) -> Event:
    event = store.get_event(event_id, for_update=for_update)
    if event is None:
        raise NotFoundError("Event", event_id)
    return event


def require_owner(event: Event, actor_id: UserId) -> None:
    if not event.is_owned_by(actor_id):
        raise NotOwnerError("You do not own this event")


def write_event(store: SwapStore, current: Event, updated: Event) -> Event:
    """Persist ``updated`` only if ``current``'s status is still stored.

    Raises:
        InvalidStateError: If another unit of work changed the event first.
    """
    if not store.update_event(updated, expected_status=current.status):
        raise InvalidStateError("Event was modified by another request; refresh and retry")
    return updated


def settle_status(store: SwapStore, event: Event) -> Event:
    """Return a SWAP_PENDING event to SWAPPABLE once no pending request references it."""
    if event.status is not EventStatus.SWAP_PENDING:
        return event
    if store.pending_request_ids_for_event(event.id):
        return event
    return write_event(store, event, event.with_status(EventStatus.SWAPPABLE))
