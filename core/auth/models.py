"""
Agora Auth - Persistent Participant Credentials
===============================================
Stores hashed bearer tokens so a request can be tied to a participant.
Tokens are issued elsewhere (magic-link sign-in); only their hash lands here.
"""

from __future__ import annotations

import uuid

from django.db import models


class CredentialStatus(models.TextChoices):
    ACTIVE = "ACTIVE", "Active"
    REVOKED = "REVOKED", "Revoked"


class ParticipantCredential(models.Model):
    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )
    token_hash = models.CharField(
        max_length=64,
        unique=True,
        db_index=True,
    )
    participant_id = models.CharField(max_length=255)
    email = models.CharField(max_length=255, blank=True, default="")
    display_name = models.CharField(max_length=255, blank=True, default="")
    status = models.CharField(
        max_length=20,
        choices=CredentialStatus.choices,
        default=CredentialStatus.ACTIVE,
    )
    expires_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    revoked_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "agora_participant_credentials"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(
                fields=["participant_id", "status"],
                name="idx_credential_participant",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.participant_id} ({self.status})"
