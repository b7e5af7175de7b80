"""In-process implementation of the SwapStore.

Records live in id-indexed dicts. A single re-entrant lock serializes
units of work and reads, so no caller ever observes a half-applied
operation. The outermost ``atomic()`` snapshots the tables and restores
them if the unit raises; nested units join the outer one.
``read()`` only holds the lock.
"""

import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from swaps.domain import (
    EmailAddress,
    Event,
    EventId,
    EventStatus,
    SwapRequest,
    SwapRequestId,
    SwapRequestStatus,
    User,
    UserId,
)
from swaps.stores.interfaces import SwapStore


class InMemorySwapStore(SwapStore):
    """Thread-safe dict-backed store, used for tests and single-process runs."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._depth = 0
        self._users: dict[UserId, User] = {}
        self._user_ids_by_email: dict[EmailAddress, UserId] = {}
        self._events: dict[EventId, Event] = {}
        self._requests: dict[SwapRequestId, SwapRequest] = {}
        # event id -> ids of PENDING requests referencing it
        self._pending_by_event: dict[EventId, set[SwapRequestId]] = {}

    @contextmanager
    def atomic(self) -> Iterator[None]:
        with self._lock:
            outermost = self._depth == 0
            snapshot = self._snapshot() if outermost else None
            self._depth += 1
            try:
                yield
            except BaseException:
                if snapshot is not None:
                    self._restore(snapshot)
                raise
            finally:
                self._depth -= 1

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._lock:
            yield

    def _snapshot(self) -> tuple:
        return (
            dict(self._users),
            dict(self._user_ids_by_email),
            dict(self._events),
            dict(self._requests),
            {event_id: set(ids) for event_id, ids in self._pending_by_event.items()},
        )

    def _restore(self, snapshot: tuple) -> None:
        (
            self._users,
            self._user_ids_by_email,
            self._events,
            self._requests,
            self._pending_by_event,
        ) = snapshot

    # Users

    def add_user(self, user: User) -> bool:
        with self._lock:
            if user.email in self._user_ids_by_email:
                return False
            self._users[user.id] = user
            self._user_ids_by_email[user.email] = user.id
            return True

    def get_user(self, user_id: UserId) -> User | None:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_email(self, email: EmailAddress) -> User | None:
        with self._lock:
            user_id = self._user_ids_by_email.get(email)
            return self._users.get(user_id) if user_id is not None else None

    def get_users(self, user_ids: Iterable[UserId]) -> dict[UserId, User]:
        with self._lock:
            return {uid: self._users[uid] for uid in set(user_ids) if uid in self._users}

    # Events

    def add_event(self, event: Event) -> None:
        with self._lock:
            if event.id in self._events:
                raise KeyError(f"Duplicate event id {event.id}")
            self._events[event.id] = event

    def get_event(self, event_id: EventId, *, for_update: bool = False) -> Event | None:
        with self._lock:
            return self._events.get(event_id)

    def get_events(
        self, event_ids: Iterable[EventId], *, for_update: bool = False
    ) -> dict[EventId, Event]:
        with self._lock:
            return {eid: self._events[eid] for eid in set(event_ids) if eid in self._events}

    def update_event(self, event: Event, *, expected_status: EventStatus) -> bool:
        with self._lock:
            current = self._events.get(event.id)
            if current is None or current.status is not expected_status:
                return False
            self._events[event.id] = event
            return True

    def list_events(
        self,
        *,
        owner_id: UserId | None = None,
        status: EventStatus | None = None,
        exclude_owner_id: UserId | None = None,
    ) -> list[Event]:
        with self._lock:
            events = [
                event
                for event in self._events.values()
                if (owner_id is None or event.owner_id == owner_id)
                and (status is None or event.status is status)
                and (exclude_owner_id is None or event.owner_id != exclude_owner_id)
            ]
        return sorted(events, key=lambda e: (e.starts_at, str(e.id)))

    # Swap requests

    def add_swap_request(self, request: SwapRequest) -> None:
        with self._lock:
            if request.id in self._requests:
                raise KeyError(f"Duplicate swap request id {request.id}")
            self._requests[request.id] = request
            self._reindex(request)

    def get_swap_request(
        self, request_id: SwapRequestId, *, for_update: bool = False
    ) -> SwapRequest | None:
        with self._lock:
            return self._requests.get(request_id)

    def update_swap_request(
        self, request: SwapRequest, *, expected_status: SwapRequestStatus
    ) -> bool:
        with self._lock:
            current = self._requests.get(request.id)
            if current is None or current.status is not expected_status:
                return False
            self._requests[request.id] = request
            self._reindex(request)
            return True

    def pending_request_ids_for_event(self, event_id: EventId) -> set[SwapRequestId]:
        with self._lock:
            return set(self._pending_by_event.get(event_id, ()))

    def list_swap_requests(
        self,
        *,
        requester_id: UserId | None = None,
        target_user_id: UserId | None = None,
        status: SwapRequestStatus | None = None,
    ) -> list[SwapRequest]:
        with self._lock:
            requests = [
                request
                for request in self._requests.values()
                if (requester_id is None or request.requester_id == requester_id)
                and (target_user_id is None or request.target_user_id == target_user_id)
                and (status is None or request.status is status)
            ]
        return sorted(requests, key=lambda r: (r.created_at, str(r.id)))

    def _reindex(self, request: SwapRequest) -> None:
        for event_id in request.event_ids:
            if request.is_pending:
                self._pending_by_event.setdefault(event_id, set()).add(request.id)
                continue
            pending = self._pending_by_event.get(event_id)
            if pending is not None:
                pending.discard(request.id)
                if not pending:
                    del self._pending_by_event[event_id]
