"""
Agora Auth - Participant Credential Service
===========================================
Deterministic hashing and record/revoke lifecycle for bearer tokens.
"""

from __future__ import annotations

import hashlib
import uuid
from datetime import datetime
from typing import Any

from django.db import IntegrityError
from django.utils import timezone

from core.auth.models import CredentialStatus, ParticipantCredential


def _ensure_string(value: Any, *, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a non-empty string.")
    stripped = value.strip()
    if not stripped:
        raise ValueError(f"{field_name} must be a non-empty string.")
    return stripped


def hash_token(token: str) -> str:
    raw = _ensure_string(token, field_name="token")
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


def serialize_credential(credential: ParticipantCredential) -> dict[str, Any]:
    return {
        "id": str(credential.id),
        "participant_id": credential.participant_id,
        "email": credential.email or None,
        "display_name": credential.display_name or None,
        "status": credential.status,
        "created_at": credential.created_at.isoformat(),
        "expires_at": (
            None if credential.expires_at is None else credential.expires_at.isoformat()
        ),
        "revoked_at": (
            None if credential.revoked_at is None else credential.revoked_at.isoformat()
        ),
    }


class ParticipantCredentialService:
    @staticmethod
    def record_credential(
        *,
        token: str,
        participant_id: str,
        email: str | None = None,
        display_name: str | None = None,
        expires_at: datetime | None = None,
    ) -> ParticipantCredential:
        try:
            return ParticipantCredential.objects.create(
                token_hash=hash_token(token),
                participant_id=_ensure_string(participant_id, field_name="participant_id"),
                email="" if email is None else str(email).strip().lower(),
                display_name="" if display_name is None else str(display_name).strip(),
                expires_at=expires_at,
                status=CredentialStatus.ACTIVE,
            )
        except IntegrityError as exc:
            raise ValueError("Token hash already exists.") from exc

    @staticmethod
    def revoke_credential(
        *,
        credential_id: uuid.UUID | str | None = None,
        token: str | None = None,
    ) -> ParticipantCredential | None:
        if credential_id is None and token is None:
            raise ValueError("Either credential_id or token must be provided.")

        if credential_id is not None:
            credential = ParticipantCredential.objects.filter(
                id=uuid.UUID(str(credential_id))
            ).first()
        else:
            credential = ParticipantCredential.objects.filter(
                token_hash=hash_token(token)
            ).first()
        if credential is None:
            return None
        if credential.status == CredentialStatus.REVOKED:
            return credential

        credential.status = CredentialStatus.REVOKED
        credential.revoked_at = timezone.now()
        credential.save(update_fields=["status", "revoked_at"])
        return credential

    @staticmethod
    def revoke_all_for_participant(*, participant_id: str) -> int:
        return ParticipantCredential.objects.filter(
            participant_id=_ensure_string(participant_id, field_name="participant_id"),
            status=CredentialStatus.ACTIVE,
        ).update(status=CredentialStatus.REVOKED, revoked_at=timezone.now())
