"""
Agora HTTP API - Framework-Agnostic Handlers
============================================
Pure handler functions over contracts and injected dependencies.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

from core.commands.rejection import ReasonCode, RejectionReason
from core.http_api.auth.resolver import resolve_auth_principal
from core.http_api.contracts import (
    SessionListHttpRequest,
    SessionProposeHttpRequest,
    SessionReadRequest,
    VoteCastHttpRequest,
)
from core.http_api.dependencies import HttpApiDependencies
from core.http_api.errors import error_response, rejection_response, success_response
from core.sessions.catalog import list_votable_sessions
from core.sessions.proposals import SessionProposal, SessionRecord
from core.vote_store.contracts import SessionNotFound, VoteStoreError

logger = logging.getLogger("agora.http_api")


def _persistence_error(exc: VoteStoreError) -> dict[str, Any]:
    logger.error(f"Store failure while handling request: {exc}", exc_info=True)
    return error_response(
        code=ReasonCode.PERSISTENCE_FAILED,
        message="The vote store is unavailable. Please try again.",
    )


def _session_not_found(session_id: uuid.UUID) -> dict[str, Any]:
    return error_response(
        code=ReasonCode.SESSION_NOT_FOUND,
        message=f"Session {session_id} does not exist.",
    )


def _favorite_ids(
    dependencies: HttpApiDependencies,
    headers: dict[str, Any] | None,
) -> frozenset[uuid.UUID]:
    """Favorites of the caller, or none for anonymous or unrecognised callers."""
    principal = resolve_auth_principal(headers, dependencies.auth_provider)
    if isinstance(principal, RejectionReason):
        return frozenset()
    return frozenset(
        dependencies.store.list_favorite_session_ids(principal.participant_id)
    )


def _session_payload(session: SessionRecord, favorites: frozenset) -> dict[str, Any]:
    data = session.to_dict()
    data["is_favorite"] = session.session_id in favorites
    return data


# ══════════════════════════════════════════════════════════════
# VOTES
# ══════════════════════════════════════════════════════════════

def get_ballot(
    dependencies: HttpApiDependencies,
    *,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    principal = resolve_auth_principal(headers, dependencies.auth_provider)
    if isinstance(principal, RejectionReason):
        return rejection_response(principal)

    try:
        ballot = dependencies.voting_service.load_ballot(principal.participant_id)
        data = ballot.to_dict()
        for row in data["votes"]:
            session = dependencies.store.get_session(uuid.UUID(row["session_id"]))
            row["session"] = None if session is None else {
                "title": session.title,
                "format": session.format,
                "host_name": session.host_name,
            }
    except VoteStoreError as exc:
        return _persistence_error(exc)
    return success_response(data)


def post_vote_cast(
    request: VoteCastHttpRequest,
    dependencies: HttpApiDependencies,
    *,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    principal = resolve_auth_principal(headers, dependencies.auth_provider)
    if isinstance(principal, RejectionReason):
        return rejection_response(principal)

    try:
        outcome = dependencies.voting_service.cast_vote(
            principal.participant_id,
            request.session_id,
            request.delta,
        )
    except VoteStoreError as exc:
        return _persistence_error(exc)

    if outcome.reason is not None:
        return rejection_response(
            outcome.reason,
            extra_details={
                "vote_count": outcome.vote_count,
                "credits_spent": outcome.credits_spent,
                "credits_remaining": outcome.credits_remaining,
            },
        )
    return success_response(outcome.to_dict())


# ══════════════════════════════════════════════════════════════
# SESSIONS
# ══════════════════════════════════════════════════════════════

def list_sessions(
    request: SessionListHttpRequest,
    dependencies: HttpApiDependencies,
    *,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    try:
        sessions = list_votable_sessions(
            dependencies.store,
            dependencies.rules.votable_statuses,
            search=request.search,
            format=request.format,
            sort=request.sort,
        )
        favorites = _favorite_ids(dependencies, headers)
    except VoteStoreError as exc:
        return _persistence_error(exc)
    return success_response(
        {"sessions": [_session_payload(s, favorites) for s in sessions]}
    )


def get_session(
    request: SessionReadRequest,
    dependencies: HttpApiDependencies,
    *,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    try:
        session = dependencies.store.get_session(request.session_id)
        if session is None:
            return _session_not_found(request.session_id)
        favorites = _favorite_ids(dependencies, headers)
    except VoteStoreError as exc:
        return _persistence_error(exc)
    return success_response(_session_payload(session, favorites))


def post_session_propose(
    request: SessionProposeHttpRequest,
    dependencies: HttpApiDependencies,
    *,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    principal = resolve_auth_principal(headers, dependencies.auth_provider)
    if isinstance(principal, RejectionReason):
        return rejection_response(principal)

    try:
        proposal = SessionProposal(
            title=request.title,
            format=request.format,
            duration=request.duration,
            host_id=principal.participant_id,
            host_name=principal.display_name or principal.participant_id,
            description=request.description,
            topic_tags=request.topic_tags,
            is_self_hosted=request.is_self_hosted,
            custom_location=request.custom_location,
        )
    except ValueError as exc:
        return error_response(code=ReasonCode.INVALID_PROPOSAL, message=str(exc))

    try:
        session = dependencies.store.propose_session(proposal)
    except VoteStoreError as exc:
        return _persistence_error(exc)

    logger.info(
        f"Session {session.session_id} proposed by {principal.participant_id}"
    )
    return success_response(session.to_dict())


# ══════════════════════════════════════════════════════════════
# FAVORITES
# ══════════════════════════════════════════════════════════════

def list_favorites(
    dependencies: HttpApiDependencies,
    *,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    principal = resolve_auth_principal(headers, dependencies.auth_provider)
    if isinstance(principal, RejectionReason):
        return rejection_response(principal)

    store = dependencies.store
    try:
        sessions = [
            session
            for session in (
                store.get_session(session_id)
                for session_id in store.list_favorite_session_ids(
                    principal.participant_id
                )
            )
            if session is not None
        ]
    except VoteStoreError as exc:
        return _persistence_error(exc)
    favorites = frozenset(s.session_id for s in sessions)
    return success_response(
        {"sessions": [_session_payload(s, favorites) for s in sessions]}
    )


def post_session_favorite(
    request: SessionReadRequest,
    dependencies: HttpApiDependencies,
    *,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    principal = resolve_auth_principal(headers, dependencies.auth_provider)
    if isinstance(principal, RejectionReason):
        return rejection_response(principal)

    try:
        dependencies.store.favorite_session(
            principal.participant_id, request.session_id
        )
    except SessionNotFound:
        return _session_not_found(request.session_id)
    except VoteStoreError as exc:
        return _persistence_error(exc)
    return success_response(
        {"session_id": str(request.session_id), "is_favorite": True}
    )


def delete_session_favorite(
    request: SessionReadRequest,
    dependencies: HttpApiDependencies,
    *,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    principal = resolve_auth_principal(headers, dependencies.auth_provider)
    if isinstance(principal, RejectionReason):
        return rejection_response(principal)

    try:
        dependencies.store.unfavorite_session(
            principal.participant_id, request.session_id
        )
    except VoteStoreError as exc:
        return _persistence_error(exc)
    return success_response(
        {"session_id": str(request.session_id), "is_favorite": False}
    )
