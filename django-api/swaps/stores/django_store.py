"""Django ORM implementation of the SwapStore.

Rows read ``for_update`` are locked with SELECT ... FOR UPDATE (a no-op on
SQLite, which serializes writers itself). Status writes are conditional
UPDATEs, so a writer that lost a race sees zero affected rows.
"""

from collections.abc import Iterable
from contextlib import AbstractContextManager

from django.db import IntegrityError, transaction
from django.db.models import Q
from django.utils import timezone

from swaps import models as db
from swaps.domain import (
    EmailAddress,
    Event,
    EventId,
    EventStatus,
    SwapRequest,
    SwapRequestId,
    SwapRequestStatus,
    TimeSlot,
    User,
    UserId,
)
from swaps.stores.interfaces import SwapStore


def _user_to_domain(row: db.User) -> User:
    return User(
        id=UserId(row.id),
        name=row.name,
        email=EmailAddress(row.email),
        password_hash=row.password_hash,
    )


def _event_to_domain(row: db.Event) -> Event:
    return Event(
        id=EventId(row.id),
        title=row.title,
        slot=TimeSlot(starts_at=row.starts_at, ends_at=row.ends_at),
        owner_id=UserId(row.owner_id),
        status=EventStatus(row.status),
    )


def _request_to_domain(row: db.SwapRequest) -> SwapRequest:
    return SwapRequest(
        id=SwapRequestId(row.id),
        requester_id=UserId(row.requester_id),
        requester_event_id=EventId(row.requester_event_id),
        target_user_id=UserId(row.target_user_id),
        target_event_id=EventId(row.target_event_id),
        status=SwapRequestStatus(row.status),
        created_at=row.created_at,
    )


class DjangoSwapStore(SwapStore):
    """Relational store using Django ORM."""

    def atomic(self) -> AbstractContextManager[None]:
        return transaction.atomic()

    def read(self) -> AbstractContextManager[None]:
        return transaction.atomic()

    # Users

    def add_user(self, user: User) -> bool:
        if db.User.objects.filter(email=user.email.value).exists():
            return False
        try:
            with transaction.atomic():
                db.User.objects.create(
                    id=user.id.value,
                    name=user.name,
                    email=user.email.value,
                    password_hash=user.password_hash,
                )
        except IntegrityError:
            # Lost a race against a concurrent sign-up with the same email.
            return False
        return True

    def get_user(self, user_id: UserId) -> User | None:
        row = db.User.objects.filter(pk=user_id.value).first()
        return _user_to_domain(row) if row is not None else None

    def get_user_by_email(self, email: EmailAddress) -> User | None:
        row = db.User.objects.filter(email=email.value).first()
        return _user_to_domain(row) if row is not None else None

    def get_users(self, user_ids: Iterable[UserId]) -> dict[UserId, User]:
        rows = db.User.objects.filter(pk__in={uid.value for uid in user_ids})
        return {UserId(row.id): _user_to_domain(row) for row in rows}

    # Events

    def add_event(self, event: Event) -> None:
        db.Event.objects.create(
            id=event.id.value,
            owner_id=event.owner_id.value,
            title=event.title,
            starts_at=event.starts_at,
            ends_at=event.ends_at,
            status=event.status.value,
        )

    def get_event(self, event_id: EventId, *, for_update: bool = False) -> Event | None:
        queryset = db.Event.objects.filter(pk=event_id.value)
        if for_update:
            queryset = queryset.select_for_update()
        row = queryset.first()
        return _event_to_domain(row) if row is not None else None

    def get_events(
        self, event_ids: Iterable[EventId], *, for_update: bool = False
    ) -> dict[EventId, Event]:
        queryset = db.Event.objects.filter(pk__in={eid.value for eid in event_ids}).order_by("pk")
        if for_update:
            queryset = queryset.select_for_update()
        return {EventId(row.id): _event_to_domain(row) for row in queryset}

    def update_event(self, event: Event, *, expected_status: EventStatus) -> bool:
        updated = db.Event.objects.filter(
            pk=event.id.value, status=expected_status.value
        ).update(
            owner_id=event.owner_id.value,
            title=event.title,
            starts_at=event.starts_at,
            ends_at=event.ends_at,
            status=event.status.value,
            updated_at=timezone.now(),
        )
        return updated == 1

    def list_events(
        self,
        *,
        owner_id: UserId | None = None,
        status: EventStatus | None = None,
        exclude_owner_id: UserId | None = None,
    ) -> list[Event]:
        queryset = db.Event.objects.all()
        if owner_id is not None:
            queryset = queryset.filter(owner_id=owner_id.value)
        if status is not None:
            queryset = queryset.filter(status=status.value)
        if exclude_owner_id is not None:
            queryset = queryset.exclude(owner_id=exclude_owner_id.value)
        return [_event_to_domain(row) for row in queryset.order_by("starts_at", "id")]

    # Swap requests

    def add_swap_request(self, request: SwapRequest) -> None:
        db.SwapRequest.objects.create(
            id=request.id.value,
            requester_id=request.requester_id.value,
            requester_event_id=request.requester_event_id.value,
            target_user_id=request.target_user_id.value,
            target_event_id=request.target_event_id.value,
            status=request.status.value,
            created_at=request.created_at,
        )

    def get_swap_request(
        self, request_id: SwapRequestId, *, for_update: bool = False
    ) -> SwapRequest | None:
        queryset = db.SwapRequest.objects.filter(pk=request_id.value)
        if for_update:
            queryset = queryset.select_for_update()
        row = queryset.first()
        return _request_to_domain(row) if row is not None else None

    def update_swap_request(
        self, request: SwapRequest, *, expected_status: SwapRequestStatus
    ) -> bool:
        updated = db.SwapRequest.objects.filter(
            pk=request.id.value, status=expected_status.value
        ).update(status=request.status.value, updated_at=timezone.now())
        return updated == 1

    def pending_request_ids_for_event(self, event_id: EventId) -> set[SwapRequestId]:
        ids = (
            db.SwapRequest.objects.filter(status=SwapRequestStatus.PENDING.value)
            .filter(Q(requester_event_id=event_id.value) | Q(target_event_id=event_id.value))
            .values_list("id", flat=True)
        )
        return {SwapRequestId(value) for value in ids}

    def list_swap_requests(
        self,
        *,
        requester_id: UserId | None = None,
        target_user_id: UserId | None = None,
        status: SwapRequestStatus | None = None,
    ) -> list[SwapRequest]:
        queryset = db.SwapRequest.objects.all()
        if requester_id is not None:
            queryset = queryset.filter(requester_id=requester_id.value)
        if target_user_id is not None:
            queryset = queryset.filter(target_user_id=target_user_id.value)
        if status is not None:
            queryset = queryset.filter(status=status.value)
        return [_request_to_domain(row) for row in queryset.order_by("created_at", "id")]
