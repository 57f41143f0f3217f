"""
Agora HTTP API Auth - Provider and Principal Models
===================================================
Deterministic bearer-token principal resolution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Protocol


@dataclass(frozen=True)
class AuthPrincipal:
    participant_id: str
    display_name: Optional[str] = None

    def __post_init__(self):
        if not self.participant_id or not isinstance(self.participant_id, str):
            raise ValueError("participant_id must be a non-empty string.")
        if self.display_name is not None and not isinstance(self.display_name, str):
            raise ValueError("display_name must be a string or None.")


class AuthProvider(Protocol):
    def resolve_token(self, token: str) -> AuthPrincipal | None:
        ...


class InMemoryAuthProvider:
    """
    Deterministic in-memory auth provider for tests/bootstrap.
    """

    def __init__(self, token_to_principal: Mapping[str, AuthPrincipal] | None = None):
        normalized: dict[str, AuthPrincipal] = {}
        for token, principal in sorted(
            dict(token_to_principal or {}).items(),
            key=lambda item: item[0],
        ):
            if not isinstance(token, str) or not token.strip():
                raise ValueError("Token must be a non-empty string.")
            if not isinstance(principal, AuthPrincipal):
                raise ValueError("Principal must be AuthPrincipal.")
            normalized[token] = principal
        self._token_to_principal = normalized

    def resolve_token(self, token: str) -> AuthPrincipal | None:
        if not isinstance(token, str):
            return None
        return self._token_to_principal.get(token)
