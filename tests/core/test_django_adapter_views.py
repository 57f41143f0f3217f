from __future__ import annotations

import json
import uuid

import pytest

from adapters.django_api.wiring import (
    DEV_PARTICIPANT_ID,
    DEV_PARTICIPANT_TOKEN,
    build_dependencies,
    reset_dependencies,
)
from core.sessions.proposals import SessionProposal

AUTH = {"HTTP_AUTHORIZATION": f"Bearer {DEV_PARTICIPANT_TOKEN}"}


@pytest.fixture
def memory_backend(settings):
    settings.AGORA_STORE_BACKEND = "memory"
    settings.AGORA_TOTAL_CREDITS = 100
    reset_dependencies()
    yield build_dependencies()
    reset_dependencies()


def _approved_session(deps, title="Open source civic tools"):
    record = deps.store.propose_session(
        SessionProposal(title=title, format="talk", duration=30, host_id="h", host_name="H")
    )
    return deps.store.set_session_status(record.session_id, "approved").session_id


def _post(client, path, body, **extra):
    return client.post(path, data=json.dumps(body), content_type="application/json", **extra)


def test_wiring_is_a_singleton(memory_backend) -> None:
    assert build_dependencies() is memory_backend


def test_unknown_backend_is_rejected(settings) -> None:
    settings.AGORA_STORE_BACKEND = "redis"
    reset_dependencies()
    try:
        with pytest.raises(ValueError, match="AGORA_STORE_BACKEND"):
            build_dependencies()
    finally:
        reset_dependencies()


def test_cast_vote_and_read_ballot(client, memory_backend) -> None:
    sid = _approved_session(memory_backend)

    response = _post(client, "/v1/votes/cast", {"session_id": str(sid), "delta": 1}, **AUTH)
    assert response.status_code == 200
    assert response.json()["data"]["vote_count"] == 1

    response = client.get("/v1/votes", **AUTH)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["participant_id"] == DEV_PARTICIPANT_ID
    assert data["credits_remaining"] == 99


def test_cast_vote_without_token_is_401(client, memory_backend) -> None:
    sid = _approved_session(memory_backend)
    response = _post(client, "/v1/votes/cast", {"session_id": str(sid), "delta": 1})
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTH_REQUIRED"


def test_over_budget_is_409(client, memory_backend) -> None:
    sid = _approved_session(memory_backend)
    assert _post(
        client, "/v1/votes/cast", {"session_id": str(sid), "delta": 10}, **AUTH
    ).status_code == 200

    response = _post(client, "/v1/votes/cast", {"session_id": str(sid), "delta": 1}, **AUTH)
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "BUDGET_EXCEEDED"


@pytest.mark.parametrize(
    "body",
    [
        {"session_id": "not-a-uuid", "delta": 1},
        {"delta": 1},
        {"session_id": "00000000-0000-0000-0000-000000000001", "delta": 0},
        {"session_id": "00000000-0000-0000-0000-000000000001", "delta": "1"},
    ],
)
def test_cast_vote_bad_request(client, memory_backend, body) -> None:
    response = _post(client, "/v1/votes/cast", body, **AUTH)
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_REQUEST"


def test_cast_vote_rejects_non_json(client, memory_backend) -> None:
    response = client.post(
        "/v1/votes/cast", data="not json", content_type="application/json", **AUTH
    )
    assert response.status_code == 400


def test_wrong_method_is_405(client, memory_backend) -> None:
    assert client.get("/v1/votes/cast", **AUTH).status_code == 405
    assert client.post("/v1/votes", **AUTH).status_code == 405


def test_session_listing_and_detail(client, memory_backend) -> None:
    sid = _approved_session(memory_backend)

    response = client.get("/v1/sessions", {"sort": "alpha", "search": "civic"})
    assert response.status_code == 200
    assert [s["id"] for s in response.json()["data"]["sessions"]] == [str(sid)]

    response = client.get(f"/v1/sessions/{sid}")
    assert response.status_code == 200
    assert response.json()["data"]["title"] == "Open source civic tools"

    response = client.get(f"/v1/sessions/{uuid.uuid4()}")
    assert response.status_code == 404


def test_session_listing_bad_sort_is_400(client, memory_backend) -> None:
    response = client.get("/v1/sessions", {"sort": "random"})
    assert response.status_code == 400


def test_propose_session(client, memory_backend) -> None:
    response = _post(
        client,
        "/v1/sessions/propose",
        {"title": "Budget games", "format": "workshop", "duration": 60, "topic_tags": ["Play"]},
        **AUTH,
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "pending"
    assert data["host_id"] == DEV_PARTICIPANT_ID
    assert data["topic_tags"] == ["play"]

    response = _post(
        client,
        "/v1/sessions/propose",
        {"title": "Budget games", "format": "keynote", "duration": 60},
        **AUTH,
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_PROPOSAL"


@pytest.mark.parametrize(
    "extra",
    [
        {"topic_tags": "ai"},
        {"topic_tags": {"ai": True}},
        {"topic_tags": ["ai", 3]},
        {"is_self_hosted": "false"},
        {"is_self_hosted": 1},
        {"format": ["talk"]},
    ],
)
def test_propose_session_rejects_malformed_fields(client, memory_backend, extra) -> None:
    body = {"title": "Budget games", "format": "talk", "duration": 30}
    body.update(extra)

    response = _post(client, "/v1/sessions/propose", body, **AUTH)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_REQUEST"
    assert memory_backend.store.list_sessions(("pending",)) == ()


def test_propose_session_accepts_null_optionals(client, memory_backend) -> None:
    response = _post(
        client,
        "/v1/sessions/propose",
        {
            "title": "Budget games",
            "format": "talk",
            "duration": 30,
            "topic_tags": None,
            "is_self_hosted": None,
        },
        **AUTH,
    )
    assert response.status_code == 200
    assert response.json()["data"]["topic_tags"] == []
    assert response.json()["data"]["is_self_hosted"] is False


def test_favorite_endpoints(client, memory_backend) -> None:
    sid = _approved_session(memory_backend)

    response = client.post(f"/v1/sessions/{sid}/favorite", **AUTH)
    assert response.status_code == 200
    assert response.json()["data"]["is_favorite"] is True

    listed = client.get("/v1/sessions", **AUTH).json()["data"]["sessions"]
    assert listed[0]["is_favorite"] is True

    favorites = client.get("/v1/favorites", **AUTH).json()["data"]["sessions"]
    assert [s["id"] for s in favorites] == [str(sid)]

    response = client.delete(f"/v1/sessions/{sid}/favorite", **AUTH)
    assert response.status_code == 200
    assert client.get("/v1/favorites", **AUTH).json()["data"]["sessions"] == []


def test_favorite_endpoint_errors(client, memory_backend) -> None:
    sid = _approved_session(memory_backend)

    assert client.post(f"/v1/sessions/{sid}/favorite").status_code == 401
    assert client.post(f"/v1/sessions/{uuid.uuid4()}/favorite", **AUTH).status_code == 404
    assert client.get(f"/v1/sessions/{sid}/favorite", **AUTH).status_code == 405
    assert client.get("/v1/favorites").status_code == 401
