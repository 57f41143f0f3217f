from __future__ import annotations

from datetime import timedelta

import pytest
from django.utils import timezone

from core.auth.models import CredentialStatus, ParticipantCredential
from core.auth.provider import DbAuthProvider
from core.auth.service import ParticipantCredentialService, hash_token, serialize_credential

pytestmark = pytest.mark.django_db(transaction=True)


def test_db_auth_provider_resolves_active_token_to_principal() -> None:
    ParticipantCredentialService.record_credential(
        token="provider-active-token",
        participant_id="participant-1",
        email="Ada@Example.org",
        display_name="Ada",
    )

    principal = DbAuthProvider().resolve_token("provider-active-token")

    assert principal is not None
    assert principal.participant_id == "participant-1"
    assert principal.display_name == "Ada"


def test_display_name_falls_back_to_email() -> None:
    ParticipantCredentialService.record_credential(
        token="email-only-token",
        participant_id="participant-2",
        email="Grace@Example.org",
    )

    principal = DbAuthProvider().resolve_token("email-only-token")
    assert principal.display_name == "grace@example.org"


def test_db_auth_provider_returns_none_for_revoked_token() -> None:
    credential = ParticipantCredentialService.record_credential(
        token="provider-revoked-token",
        participant_id="participant-3",
    )
    ParticipantCredentialService.revoke_credential(credential_id=credential.id)

    assert DbAuthProvider().resolve_token("provider-revoked-token") is None


def test_db_auth_provider_returns_none_for_expired_token() -> None:
    ParticipantCredentialService.record_credential(
        token="provider-expired-token",
        participant_id="participant-4",
        expires_at=timezone.now() - timedelta(minutes=1),
    )

    assert DbAuthProvider().resolve_token("provider-expired-token") is None


@pytest.mark.parametrize("token", ["", "   ", None, "unknown-token"])
def test_db_auth_provider_rejects_unknown_or_blank_tokens(token) -> None:
    assert DbAuthProvider().resolve_token(token) is None


def test_only_the_hash_is_stored() -> None:
    credential = ParticipantCredentialService.record_credential(
        token="hash-only-token",
        participant_id="participant-5",
    )

    stored = ParticipantCredential.objects.get(id=credential.id)
    assert stored.token_hash == hash_token("hash-only-token")
    assert "hash-only-token" not in stored.token_hash
    assert len(stored.token_hash) == 64


def test_duplicate_token_is_rejected() -> None:
    ParticipantCredentialService.record_credential(
        token="duplicate-token",
        participant_id="participant-6",
    )
    with pytest.raises(ValueError, match="already exists"):
        ParticipantCredentialService.record_credential(
            token="duplicate-token",
            participant_id="participant-7",
        )


def test_revoke_by_token_is_idempotent() -> None:
    ParticipantCredentialService.record_credential(
        token="revoke-twice-token",
        participant_id="participant-8",
    )

    first = ParticipantCredentialService.revoke_credential(token="revoke-twice-token")
    second = ParticipantCredentialService.revoke_credential(token="revoke-twice-token")

    assert first.status == CredentialStatus.REVOKED
    assert second.revoked_at == first.revoked_at
    assert ParticipantCredentialService.revoke_credential(token="never-issued") is None


def test_revoke_requires_an_identifier() -> None:
    with pytest.raises(ValueError, match="credential_id or token"):
        ParticipantCredentialService.revoke_credential()


def test_revoke_all_for_participant() -> None:
    for n in range(3):
        ParticipantCredentialService.record_credential(
            token=f"bulk-token-{n}",
            participant_id="participant-9",
        )

    revoked = ParticipantCredentialService.revoke_all_for_participant(
        participant_id="participant-9"
    )

    assert revoked == 3
    assert DbAuthProvider().resolve_token("bulk-token-0") is None


def test_serialize_credential_omits_hash() -> None:
    credential = ParticipantCredentialService.record_credential(
        token="serialize-token",
        participant_id="participant-10",
        display_name="  Linus ",
    )

    payload = serialize_credential(credential)

    assert payload["participant_id"] == "participant-10"
    assert payload["display_name"] == "Linus"
    assert payload["email"] is None
    assert payload["status"] == CredentialStatus.ACTIVE
    assert payload["revoked_at"] is None
    assert "token_hash" not in payload
