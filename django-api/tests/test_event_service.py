"""Unit tests for EventService.

These test the BUSY/SWAPPABLE state machine and ownership checks.
Run with: pytest tests/test_event_service.py -v
"""

from datetime import datetime, timedelta, timezone

import pytest

from swaps.domain import EventStatus, UserId
from swaps.domain.errors import InvalidStateError, NotFoundError, NotOwnerError, ValidationError

BASE_TIME = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


class TestCreateEvent:
    """Tests for EventService.create_event."""

    def test_creates_busy_event(self, event_service, alice):
        """A new event starts BUSY and belongs to its creator."""
        event = event_service.create_event(
            alice.id, "Dentist", BASE_TIME, BASE_TIME + timedelta(hours=1)
        )

        assert event.status is EventStatus.BUSY
        assert event.owner_id == alice.id
        assert event_service.get_event(str(event.id)) == event

    def test_title_is_trimmed(self, event_service, alice):
        event = event_service.create_event(
            alice.id, "  Gym  ", BASE_TIME, BASE_TIME + timedelta(hours=1)
        )
        assert event.title == "Gym"

    @pytest.mark.parametrize("title", ["", "   ", None])
    def test_blank_title_raises_validation_error(self, event_service, alice, title):
        with pytest.raises(ValidationError, match="Title"):
            event_service.create_event(alice.id, title, BASE_TIME, BASE_TIME + timedelta(hours=1))

    @pytest.mark.parametrize("title", [42, ["Gym"], b"Gym"])
    def test_non_string_title_raises_validation_error(self, event_service, alice, title):
        with pytest.raises(ValidationError, match="must be a string"):
            event_service.create_event(alice.id, title, BASE_TIME, BASE_TIME + timedelta(hours=1))

    def test_overlong_title_raises_validation_error(self, event_service, alice):
        with pytest.raises(ValidationError, match="at most 255"):
            event_service.create_event(
                alice.id, "x" * 256, BASE_TIME, BASE_TIME + timedelta(hours=1)
            )

    def test_title_limit_applies_after_trimming(self, event_service, alice):
        event = event_service.create_event(
            alice.id, "  " + "x" * 255 + "  ", BASE_TIME, BASE_TIME + timedelta(hours=1)
        )
        assert len(event.title) == 255

    @pytest.mark.parametrize("delta", [timedelta(0), timedelta(hours=-1)])
    def test_end_not_after_start_raises_validation_error(self, event_service, alice, delta):
        with pytest.raises(ValidationError, match="after start"):
            event_service.create_event(alice.id, "Late", BASE_TIME, BASE_TIME + delta)

    def test_mixed_timezones_raise_validation_error(self, event_service, alice):
        with pytest.raises(ValidationError):
            event_service.create_event(alice.id, "Naive", BASE_TIME, datetime(2026, 3, 2, 12, 0))

    def test_unknown_owner_raises_not_found(self, event_service):
        with pytest.raises(NotFoundError):
            event_service.create_event(
                UserId.new(), "Ghost", BASE_TIME, BASE_TIME + timedelta(hours=1)
            )

    def test_malformed_owner_id_raises_validation_error(self, event_service):
        with pytest.raises(ValidationError, match="Invalid user id"):
            event_service.create_event(
                "nope", "Ghost", BASE_TIME, BASE_TIME + timedelta(hours=1)
            )


class TestStatusTransitions:
    """Tests for set_swappable / set_busy / set_event_status."""

    def test_busy_to_swappable_and_back(self, event_service, make_slot, alice):
        event = make_slot(alice, 1, swappable=False)

        swappable = event_service.set_swappable(event.id, alice.id)
        busy = event_service.set_busy(event.id, str(alice.id))

        assert swappable.status is EventStatus.SWAPPABLE
        assert busy.status is EventStatus.BUSY
        assert event_service.get_event(event.id).status is EventStatus.BUSY

    def test_non_owner_cannot_mark_swappable(self, event_service, make_slot, alice, bob):
        event = make_slot(alice, 1, swappable=False)

        with pytest.raises(NotOwnerError):
            event_service.set_swappable(event.id, bob.id)
        assert event_service.get_event(event.id).status is EventStatus.BUSY

    def test_non_owner_cannot_mark_busy(self, event_service, make_slot, alice, bob):
        event = make_slot(alice, 1)

        with pytest.raises(NotOwnerError):
            event_service.set_busy(event.id, bob.id)
        assert event_service.get_event(event.id).status is EventStatus.SWAPPABLE

    def test_swappable_twice_raises_invalid_state(self, event_service, make_slot, alice):
        event = make_slot(alice, 1)

        with pytest.raises(InvalidStateError):
            event_service.set_swappable(event.id, alice.id)

    def test_busy_twice_raises_invalid_state(self, event_service, make_slot, alice):
        event = make_slot(alice, 1, swappable=False)

        with pytest.raises(InvalidStateError):
            event_service.set_busy(event.id, alice.id)

    def test_pending_slot_cannot_be_withdrawn(
        self, event_service, swap_service, make_slot, alice, bob
    ):
        """A slot under negotiation stays SWAP_PENDING until the request resolves."""
        mine = make_slot(alice, 1)
        theirs = make_slot(bob, 2)
        swap_service.create_swap_request(bob.id, theirs.id, mine.id)

        with pytest.raises(InvalidStateError):
            event_service.set_busy(mine.id, alice.id)
        with pytest.raises(InvalidStateError):
            event_service.set_swappable(mine.id, alice.id)
        assert event_service.get_event(mine.id).status is EventStatus.SWAP_PENDING

    def test_set_event_status_dispatches(self, event_service, make_slot, alice):
        event = make_slot(alice, 1, swappable=False)

        assert event_service.set_event_status(event.id, alice.id, "SWAPPABLE").status is (
            EventStatus.SWAPPABLE
        )
        assert event_service.set_event_status(event.id, alice.id, EventStatus.BUSY).status is (
            EventStatus.BUSY
        )

    @pytest.mark.parametrize("target", ["SWAP_PENDING", "FREE", ""])
    def test_set_event_status_rejects_other_targets(self, event_service, make_slot, alice, target):
        event = make_slot(alice, 1, swappable=False)

        with pytest.raises(ValidationError):
            event_service.set_event_status(event.id, alice.id, target)
        assert event_service.get_event(event.id).status is EventStatus.BUSY

    def test_unknown_event_raises_not_found(self, event_service, alice):
        with pytest.raises(NotFoundError):
            event_service.set_swappable("12345678-1234-5678-1234-567812345678", alice.id)

    def test_malformed_event_id_raises_validation_error(self, event_service, alice):
        with pytest.raises(ValidationError, match="Invalid event id"):
            event_service.get_event("not-a-uuid")
