"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
Primary keys are generated by the domain layer, so none of them have defaults.
"""

from django.db import models

from swaps.domain import EventStatus, SwapRequestStatus

EVENT_STATUS_CHOICES = [(status.value, status.value) for status in EventStatus]
SWAP_REQUEST_STATUS_CHOICES = [(status.value, status.value) for status in SwapRequestStatus]


class User(models.Model):
    """Persistence model for users."""

    id = models.UUIDField(primary_key=True, editable=False)
    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=255, unique=True)
    password_hash = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return self.email


class Event(models.Model):
    """Persistence model for calendar events."""

    id = models.UUIDField(primary_key=True, editable=False)
    owner = models.ForeignKey(User, on_delete=models.PROTECT, related_name="events")
    title = models.CharField(max_length=255)
    starts_at = models.DateTimeField()
    ends_at = models.DateTimeField()
    status = models.CharField(
        max_length=20, choices=EVENT_STATUS_CHOICES, default=EventStatus.BUSY.value
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["starts_at"]
        indexes = [
            models.Index(fields=["owner", "starts_at"], name="swaps_event_owner_i_5c1f0e_idx"),
            models.Index(fields=["status", "starts_at"], name="swaps_event_status_8b2d47_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(ends_at__gt=models.F("starts_at")),
                name="event_ends_after_start",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.title} - {self.starts_at}"


class SwapRequest(models.Model):
    """Persistence model for swap requests."""

    id = models.UUIDField(primary_key=True, editable=False)
    requester = models.ForeignKey(
        User, on_delete=models.PROTECT, related_name="outgoing_swap_requests"
    )
    requester_event = models.ForeignKey(
        Event, on_delete=models.PROTECT, related_name="offered_in"
    )
    target_user = models.ForeignKey(
        User, on_delete=models.PROTECT, related_name="incoming_swap_requests"
    )
    target_event = models.ForeignKey(
        Event, on_delete=models.PROTECT, related_name="requested_in"
    )
    status = models.CharField(
        max_length=20,
        choices=SWAP_REQUEST_STATUS_CHOICES,
        default=SwapRequestStatus.PENDING.value,
    )
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["requester_event", "status"], name="swaps_swapr_request_3e9a21_idx"),
            models.Index(fields=["target_event", "status"], name="swaps_swapr_target__7d4c10_idx"),
            models.Index(fields=["requester", "status"], name="swaps_swapr_request_a61f5b_idx"),
            models.Index(fields=["target_user", "status"], name="swaps_swapr_target__02be93_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.requester_event_id} -> {self.target_event_id} ({self.status})"
