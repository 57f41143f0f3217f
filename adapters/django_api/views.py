"""
Agora Django Adapter Views
==========================
Pass-through HTTP views over core/http_api handlers.
"""

from __future__ import annotations

import json
import uuid
from typing import Any

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from adapters.django_api.wiring import build_dependencies
from core.commands.rejection import ReasonCode
from core.http_api.contracts import (
    SessionListHttpRequest,
    SessionProposeHttpRequest,
    SessionReadRequest,
    VoteCastHttpRequest,
)
from core.http_api.errors import error_response, status_for_code
from core.http_api.handlers import (
    delete_session_favorite,
    get_ballot,
    get_session,
    list_favorites,
    list_sessions,
    post_session_favorite,
    post_session_propose,
    post_vote_cast,
)
from core.sessions.catalog import FORMAT_ALL, SORT_VOTES


def _headers_from_request(request: HttpRequest) -> dict[str, str]:
    return {str(key): str(value) for key, value in request.headers.items()}


def _json_error(code: str, message: str, status: int = 400) -> JsonResponse:
    return JsonResponse(
        error_response(code=code, message=message, details={}),
        status=status,
    )


def _respond(payload: dict[str, Any]) -> JsonResponse:
    if payload.get("ok"):
        return JsonResponse(payload)
    return JsonResponse(payload, status=status_for_code(payload["error"]["code"]))


def _parse_uuid(value: Any, field_name: str) -> uuid.UUID:
    try:
        return uuid.UUID(str(value))
    except ValueError as exc:
        raise ValueError(f"{field_name} must be a valid UUID.") from exc


def _parse_json_body(request: HttpRequest) -> dict[str, Any]:
    if not request.body:
        return {}
    try:
        parsed = json.loads(request.body.decode("utf-8"))
    except ValueError as exc:
        raise ValueError("Request body must be valid JSON.") from exc
    if not isinstance(parsed, dict):
        raise ValueError("Request body must be a JSON object.")
    return parsed


def _optional_string_list(body: dict[str, Any], key: str) -> tuple[str, ...]:
    value = body.get(key)
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ValueError(f"{key} must be a JSON array of strings.")
    return tuple(value)


def _optional_bool(body: dict[str, Any], key: str, default: bool = False) -> bool:
    value = body.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be a JSON boolean.")
    return value


def _method_not_allowed() -> JsonResponse:
    return _json_error(
        "METHOD_NOT_ALLOWED",
        "Method not allowed for this endpoint.",
        status=405,
    )


# ── Votes ─────────────────────────────────────────────────────

def ballot_view(request: HttpRequest):
    if request.method != "GET":
        return _method_not_allowed()
    return _respond(
        get_ballot(build_dependencies(), headers=_headers_from_request(request))
    )


@csrf_exempt
def vote_cast_view(request: HttpRequest):
    if request.method != "POST":
        return _method_not_allowed()
    try:
        body = _parse_json_body(request)
        contract = VoteCastHttpRequest(
            session_id=_parse_uuid(body["session_id"], "session_id"),
            delta=body["delta"],
        )
    except (ValueError, KeyError) as exc:
        return _json_error(ReasonCode.INVALID_REQUEST, str(exc), status=400)

    return _respond(
        post_vote_cast(
            contract,
            build_dependencies(),
            headers=_headers_from_request(request),
        )
    )


# ── Sessions ──────────────────────────────────────────────────

def sessions_list_view(request: HttpRequest):
    if request.method != "GET":
        return _method_not_allowed()
    try:
        contract = SessionListHttpRequest(
            search=request.GET.get("search") or None,
            format=request.GET.get("format", FORMAT_ALL),
            sort=request.GET.get("sort", SORT_VOTES),
        )
    except ValueError as exc:
        return _json_error(ReasonCode.INVALID_REQUEST, str(exc), status=400)

    return _respond(
        list_sessions(
            contract,
            build_dependencies(),
            headers=_headers_from_request(request),
        )
    )


def session_detail_view(request: HttpRequest, session_id: uuid.UUID):
    if request.method != "GET":
        return _method_not_allowed()
    return _respond(
        get_session(
            SessionReadRequest(session_id=session_id),
            build_dependencies(),
            headers=_headers_from_request(request),
        )
    )


@csrf_exempt
def session_propose_view(request: HttpRequest):
    if request.method != "POST":
        return _method_not_allowed()
    try:
        body = _parse_json_body(request)
        contract = SessionProposeHttpRequest(
            title=body["title"],
            format=body["format"],
            duration=body["duration"],
            description=body.get("description"),
            topic_tags=_optional_string_list(body, "topic_tags"),
            is_self_hosted=_optional_bool(body, "is_self_hosted"),
            custom_location=body.get("custom_location"),
        )
    except (ValueError, KeyError, TypeError) as exc:
        return _json_error(ReasonCode.INVALID_REQUEST, str(exc), status=400)

    return _respond(
        post_session_propose(
            contract,
            build_dependencies(),
            headers=_headers_from_request(request),
        )
    )


# ── Favorites ─────────────────────────────────────────────────

def favorites_list_view(request: HttpRequest):
    if request.method != "GET":
        return _method_not_allowed()
    return _respond(
        list_favorites(build_dependencies(), headers=_headers_from_request(request))
    )


@csrf_exempt
def session_favorite_view(request: HttpRequest, session_id: uuid.UUID):
    if request.method == "POST":
        handler = post_session_favorite
    elif request.method == "DELETE":
        handler = delete_session_favorite
    else:
        return _method_not_allowed()
    return _respond(
        handler(
            SessionReadRequest(session_id=session_id),
            build_dependencies(),
            headers=_headers_from_request(request),
        )
    )
