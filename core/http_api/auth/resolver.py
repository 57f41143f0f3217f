"""
Agora HTTP API Auth - Principal Resolver
========================================
Resolve the calling participant from the Authorization header.
"""

from __future__ import annotations

from typing import Any

from core.commands.rejection import ReasonCode, RejectionReason
from core.http_api.auth.provider import AuthPrincipal

HEADER_AUTHORIZATION = "authorization"
BEARER_PREFIX = "bearer "


def _normalize_headers(headers: dict[str, Any] | None) -> dict[str, str]:
    normalized: dict[str, str] = {}
    for key, value in (headers or {}).items():
        normalized[str(key).strip().lower()] = str(value).strip()
    return normalized


def _reject(code: str, message: str) -> RejectionReason:
    return RejectionReason(
        code=code,
        message=message,
        policy_name="http_api_auth_resolver",
    )


def extract_bearer_token(headers: dict[str, Any] | None) -> str | None:
    value = _normalize_headers(headers).get(HEADER_AUTHORIZATION)
    if not value or not value.lower().startswith(BEARER_PREFIX):
        return None
    token = value[len(BEARER_PREFIX):].strip()
    return token or None


def resolve_auth_principal(
    headers: dict[str, Any] | None,
    provider,
) -> AuthPrincipal | RejectionReason:
    token = extract_bearer_token(headers)
    if token is None:
        return _reject(
            ReasonCode.AUTH_REQUIRED,
            "Missing bearer token in Authorization header.",
        )

    principal = provider.resolve_token(token)
    if principal is None:
        return _reject(
            ReasonCode.AUTH_INVALID,
            "Invalid or expired bearer token.",
        )
    return principal
