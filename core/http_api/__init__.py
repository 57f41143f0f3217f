"""
Agora HTTP API - Public API
===========================
"""

from core.http_api.contracts import (
    HttpApiErrorBody,
    HttpApiResponse,
    SessionListHttpRequest,
    SessionProposeHttpRequest,
    SessionReadRequest,
    VoteCastHttpRequest,
)
from core.http_api.dependencies import HttpApiDependencies
from core.http_api.errors import (
    error_response,
    map_rejection_reason,
    rejection_response,
    status_for_code,
    success_response,
)
from core.http_api.handlers import (
    get_ballot,
    delete_session_favorite,
    get_session,
    list_favorites,
    list_sessions,
    post_session_favorite,
    post_session_propose,
    post_vote_cast,
)

__all__ = [
    "HttpApiErrorBody",
    "HttpApiResponse",
    "SessionListHttpRequest",
    "SessionProposeHttpRequest",
    "SessionReadRequest",
    "VoteCastHttpRequest",
    "HttpApiDependencies",
    "error_response",
    "map_rejection_reason",
    "rejection_response",
    "status_for_code",
    "success_response",
    "get_ballot",
    "delete_session_favorite",
    "get_session",
    "list_favorites",
    "list_sessions",
    "post_session_favorite",
    "post_session_propose",
    "post_vote_cast",
]
