"""
Agora Auth - DB-backed Auth Provider
====================================
Resolves bearer tokens from persistent credential storage.
"""

from __future__ import annotations

from django.db.models import Q
from django.utils import timezone

from core.auth.models import CredentialStatus
from core.auth.service import hash_token
from core.http_api.auth.provider import AuthPrincipal, AuthProvider


class DbAuthProvider(AuthProvider):
    def resolve_token(self, token: str) -> AuthPrincipal | None:
        if not isinstance(token, str) or not token.strip():
            return None

        from core.auth.models import ParticipantCredential

        credential = (
            ParticipantCredential.objects.filter(
                token_hash=hash_token(token),
                status=CredentialStatus.ACTIVE,
            )
            .filter(Q(expires_at__isnull=True) | Q(expires_at__gt=timezone.now()))
            .order_by("created_at", "id")
            .first()
        )
        if credential is None:
            return None

        return AuthPrincipal(
            participant_id=credential.participant_id,
            display_name=credential.display_name or credential.email or None,
        )
