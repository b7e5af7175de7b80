"""Integration tests for the HTTP surface.

These drive the full flow (sign-up, events, marketplace, swap requests)
through DRF against the Django ORM store.
Run with: pytest tests/test_swap_api.py -v
"""

import pytest
from rest_framework.test import APIClient


def _register(client: APIClient, name: str) -> dict:
    response = client.post(
        "/api/users",
        {"name": name, "email": f"{name.lower()}@example.com", "password": f"{name}-pw"},
    )
    assert response.status_code == 201
    return response.json()


def _as(client: APIClient, user: dict) -> APIClient:
    client.credentials(HTTP_X_ACTOR_ID=user["id"])
    return client


def _swappable_event(client: APIClient, user: dict, title: str, hour: int) -> dict:
    _as(client, user)
    created = client.post(
        "/api/events",
        {
            "title": title,
            "starts_at": f"2026-03-02T{hour:02d}:00:00Z",
            "ends_at": f"2026-03-02T{hour + 1:02d}:00:00Z",
        },
    )
    assert created.status_code == 201
    assert created.json()["status"] == "BUSY"
    updated = client.patch(f"/api/events/{created.json()['id']}/status", {"status": "SWAPPABLE"})
    assert updated.status_code == 200
    return updated.json()


@pytest.fixture
def alice(api_client):
    return _register(api_client, "Alice")


@pytest.fixture
def bob(api_client):
    return _register(api_client, "Bob")


@pytest.mark.django_db
class TestUsers:
    """Tests for POST /api/users and /api/users/login"""

    def test_register_returns_public_fields(self, api_client):
        user = _register(api_client, "Dana")

        assert user["name"] == "Dana"
        assert user["email"] == "dana@example.com"
        assert "password" not in user
        assert "password_hash" not in user

    def test_register_duplicate_email(self, api_client, alice):
        response = api_client.post(
            "/api/users", {"name": "Again", "email": "alice@example.com", "password": "x"}
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_login(self, api_client, alice):
        ok = api_client.post("/api/users/login", {"email": "alice@example.com", "password": "Alice-pw"})
        bad = api_client.post("/api/users/login", {"email": "alice@example.com", "password": "nope"})

        assert ok.status_code == 200
        assert ok.json()["id"] == alice["id"]
        assert bad.status_code == 400


@pytest.mark.django_db
class TestEvents:
    """Tests for /api/events"""

    def test_requires_actor(self, api_client):
        response = api_client.get("/api/events")
        assert response.status_code == 401

    def test_invalid_actor_header(self, api_client):
        api_client.credentials(HTTP_X_ACTOR_ID="not-a-uuid")
        response = api_client.get("/api/events")
        assert response.status_code == 401

    def test_list_own_events_ordered(self, api_client, alice):
        _swappable_event(api_client, alice, "Late", 15)
        _swappable_event(api_client, alice, "Early", 8)

        response = _as(api_client, alice).get("/api/events")

        assert response.status_code == 200
        assert [event["title"] for event in response.json()] == ["Early", "Late"]

    def test_end_before_start_is_rejected(self, api_client, alice):
        response = _as(api_client, alice).post(
            "/api/events",
            {"title": "Oops", "starts_at": "2026-03-02T10:00:00Z", "ends_at": "2026-03-02T09:00:00Z"},
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_overlong_title_is_a_domain_error(self, api_client, alice):
        response = _as(api_client, alice).post(
            "/api/events",
            {"title": "x" * 256, "starts_at": "2026-03-02T09:00:00Z", "ends_at": "2026-03-02T10:00:00Z"},
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_malformed_datetime_is_rejected(self, api_client, alice):
        response = _as(api_client, alice).post(
            "/api/events", {"title": "Oops", "starts_at": "tomorrow", "ends_at": "later"}
        )
        assert response.status_code == 400

    def test_non_owner_cannot_change_status(self, api_client, alice, bob):
        event = _swappable_event(api_client, alice, "Mine", 9)

        response = _as(api_client, bob).patch(
            f"/api/events/{event['id']}/status", {"status": "BUSY"}
        )

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "NOT_OWNER"

    def test_cannot_set_swap_pending_directly(self, api_client, alice):
        event = _swappable_event(api_client, alice, "Mine", 9)

        response = _as(api_client, alice).patch(
            f"/api/events/{event['id']}/status", {"status": "SWAP_PENDING"}
        )

        assert response.status_code == 400

    def test_own_swappable_slots(self, api_client, alice):
        offer = _swappable_event(api_client, alice, "Offer", 9)
        _as(api_client, alice).post(
            "/api/events",
            {"title": "Busy", "starts_at": "2026-03-02T12:00:00Z", "ends_at": "2026-03-02T13:00:00Z"},
        )

        response = api_client.get("/api/events/swappable")

        assert [event["id"] for event in response.json()] == [offer["id"]]


@pytest.mark.django_db
class TestSwapFlow:
    """End-to-end swap negotiation over HTTP."""

    def test_marketplace_shows_other_users_slots(self, api_client, alice, bob):
        _swappable_event(api_client, alice, "Alice slot", 10)
        bobs = _swappable_event(api_client, bob, "Bob slot", 14)

        response = _as(api_client, alice).get("/api/swappable-slots")

        assert response.status_code == 200
        slots = response.json()
        assert [slot["id"] for slot in slots] == [bobs["id"]]
        assert slots[0]["owner"] == {"name": "Bob", "email": "bob@example.com"}

    def test_request_and_accept(self, api_client, alice, bob):
        e1 = _swappable_event(api_client, alice, "Alice slot", 10)
        e2 = _swappable_event(api_client, bob, "Bob slot", 14)

        created = _as(api_client, bob).post(
            "/api/swap-requests", {"requester_event_id": e2["id"], "target_event_id": e1["id"]}
        )
        assert created.status_code == 201
        request_id = created.json()["id"]
        assert created.json()["status"] == "PENDING"

        lists = _as(api_client, alice).get("/api/swap-requests").json()
        assert lists["outgoing"] == []
        assert [item["id"] for item in lists["incoming"]] == [request_id]
        incoming = lists["incoming"][0]
        assert incoming["requester"]["name"] == "Bob"
        assert incoming["requester_event"]["title"] == "Bob slot"
        assert incoming["target_event"]["status"] == "SWAP_PENDING"

        accepted = api_client.post(f"/api/swap-requests/{request_id}/response", {"accept": True})
        assert accepted.status_code == 200
        assert accepted.json()["status"] == "ACCEPTED"

        alice_events = api_client.get("/api/events").json()
        assert [(e["id"], e["status"]) for e in alice_events] == [(e2["id"], "BUSY")]
        bob_events = _as(api_client, bob).get("/api/events").json()
        assert [(e["id"], e["status"]) for e in bob_events] == [(e1["id"], "BUSY")]

        retry = _as(api_client, alice).post(
            f"/api/swap-requests/{request_id}/response", {"accept": True}
        )
        assert retry.status_code == 409
        assert retry.json()["error"]["code"] == "INVALID_STATE"

    def test_request_and_reject(self, api_client, alice, bob):
        e1 = _swappable_event(api_client, alice, "Alice slot", 10)
        e2 = _swappable_event(api_client, bob, "Bob slot", 14)
        created = _as(api_client, bob).post(
            "/api/swap-requests", {"requester_event_id": e2["id"], "target_event_id": e1["id"]}
        ).json()

        rejected = _as(api_client, alice).post(
            f"/api/swap-requests/{created['id']}/response", {"accept": False}
        )

        assert rejected.json()["status"] == "REJECTED"
        assert [e["status"] for e in api_client.get("/api/events").json()] == ["SWAPPABLE"]
        assert api_client.get("/api/swap-requests").json() == {"incoming": [], "outgoing": []}

    def test_only_recipient_may_respond(self, api_client, alice, bob):
        e1 = _swappable_event(api_client, alice, "Alice slot", 10)
        e2 = _swappable_event(api_client, bob, "Bob slot", 14)
        created = _as(api_client, bob).post(
            "/api/swap-requests", {"requester_event_id": e2["id"], "target_event_id": e1["id"]}
        ).json()

        response = api_client.post(f"/api/swap-requests/{created['id']}/response", {"accept": True})

        assert response.status_code == 403

    def test_self_swap_is_rejected(self, api_client, alice):
        e1 = _swappable_event(api_client, alice, "One", 10)
        e2 = _swappable_event(api_client, alice, "Two", 12)

        response = _as(api_client, alice).post(
            "/api/swap-requests", {"requester_event_id": e1["id"], "target_event_id": e2["id"]}
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "SELF_SWAP"

    def test_unknown_target_is_not_found(self, api_client, alice):
        e1 = _swappable_event(api_client, alice, "One", 10)

        response = _as(api_client, alice).post(
            "/api/swap-requests",
            {"requester_event_id": e1["id"], "target_event_id": "12345678-1234-5678-1234-567812345678"},
        )

        assert response.status_code == 404
        assert response.json() == {"error": {"code": "NOT_FOUND", "message": "Event not found"}}

    def test_malformed_request_id(self, api_client, alice):
        response = _as(api_client, alice).post(
            "/api/swap-requests/abc/response", {"accept": True}
        )
        assert response.status_code == 400
