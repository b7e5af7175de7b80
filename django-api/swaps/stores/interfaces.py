"""Store interfaces (repository pattern).

Stores must be swappable and return domain models. Every mutation a
service performs happens inside ``atomic()``; status writes are
compare-and-set so a unit of work that lost a race can detect it and
roll back.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from contextlib import AbstractContextManager

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


class SwapStore(ABC):
    """Interface for user, event and swap request persistence."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Open a unit of work. Either all writes inside it commit or none do."""
        ...

    @abstractmethod
    def read(self) -> AbstractContextManager[None]:
        """Open a read-only unit. Reads inside it see one consistent state."""
        ...

    # Users

    @abstractmethod
    def add_user(self, user: User) -> bool:
        """Insert a user. Return False if the email is already registered."""
        ...

    @abstractmethod
    def get_user(self, user_id: UserId) -> User | None:
        """Return a user by ID, or None if not found."""
        ...

    @abstractmethod
    def get_user_by_email(self, email: EmailAddress) -> User | None:
        """Return the user registered with ``email``, or None."""
        ...

    @abstractmethod
    def get_users(self, user_ids: Iterable[UserId]) -> dict[UserId, User]:
        """Return the existing users among ``user_ids`` keyed by ID."""
        ...

    # Events

    @abstractmethod
    def add_event(self, event: Event) -> None:
        """Insert a new event."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId, *, for_update: bool = False) -> Event | None:
        """Return an event by ID, or None if not found.

        ``for_update`` locks the row until the enclosing unit of work ends.
        """
        ...

    @abstractmethod
    def get_events(
        self, event_ids: Iterable[EventId], *, for_update: bool = False
    ) -> dict[EventId, Event]:
        """Return the existing events among ``event_ids`` keyed by ID.

        Rows are locked in ID order when ``for_update`` is set.
        """
        ...

    @abstractmethod
    def update_event(self, event: Event, *, expected_status: EventStatus) -> bool:
        """Replace an event if its stored status is still ``expected_status``.

        Return False when the stored status differs (or the event is gone).
        """
        ...

    @abstractmethod
    def list_events(
        self,
        *,
        owner_id: UserId | None = None,
        status: EventStatus | None = None,
        exclude_owner_id: UserId | None = None,
    ) -> list[Event]:
        """Return matching events ordered by starts_at ascending."""
        ...

    # Swap requests

    @abstractmethod
    def add_swap_request(self, request: SwapRequest) -> None:
        """Insert a new swap request."""
        ...

    @abstractmethod
    def get_swap_request(
        self, request_id: SwapRequestId, *, for_update: bool = False
    ) -> SwapRequest | None:
        """Return a swap request by ID, or None if not found."""
        ...

    @abstractmethod
    def update_swap_request(
        self, request: SwapRequest, *, expected_status: SwapRequestStatus
    ) -> bool:
        """Replace a swap request if its stored status is still ``expected_status``."""
        ...

    @abstractmethod
    def pending_request_ids_for_event(self, event_id: EventId) -> set[SwapRequestId]:
        """Return IDs of PENDING requests that reference ``event_id`` on either side."""
        ...

    @abstractmethod
    def list_swap_requests(
        self,
        *,
        requester_id: UserId | None = None,
        target_user_id: UserId | None = None,
        status: SwapRequestStatus | None = None,
    ) -> list[SwapRequest]:
        """Return matching swap requests ordered by created_at ascending."""
        ...
