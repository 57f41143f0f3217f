from __future__ import annotations

import pytest

from core.commands.rejection import ReasonCode, RejectionReason
from core.http_api.auth import (
    AuthPrincipal,
    InMemoryAuthProvider,
    extract_bearer_token,
    resolve_auth_principal,
)

PARTICIPANT_ID = "auth-participant-1"
TOKEN = "auth-token-1"


def _provider() -> InMemoryAuthProvider:
    return InMemoryAuthProvider(
        {TOKEN: AuthPrincipal(participant_id=PARTICIPANT_ID, display_name="Ada")}
    )


@pytest.mark.parametrize(
    "headers,expected",
    [
        ({"Authorization": f"Bearer {TOKEN}"}, TOKEN),
        ({"authorization": f"bearer   {TOKEN}  "}, TOKEN),
        ({"AUTHORIZATION": f"BEARER {TOKEN}"}, TOKEN),
        ({"Authorization": f"Basic {TOKEN}"}, None),
        ({"Authorization": "Bearer "}, None),
        ({}, None),
        (None, None),
    ],
)
def test_extract_bearer_token(headers, expected) -> None:
    assert extract_bearer_token(headers) == expected


def test_resolve_auth_principal_success() -> None:
    principal = resolve_auth_principal({"Authorization": f"Bearer {TOKEN}"}, _provider())

    assert isinstance(principal, AuthPrincipal)
    assert principal.participant_id == PARTICIPANT_ID
    assert principal.display_name == "Ada"


def test_missing_token_is_auth_required() -> None:
    rejection = resolve_auth_principal({}, _provider())

    assert isinstance(rejection, RejectionReason)
    assert rejection.code == ReasonCode.AUTH_REQUIRED
    assert rejection.policy_name == "http_api_auth_resolver"


def test_unknown_token_is_auth_invalid() -> None:
    rejection = resolve_auth_principal({"Authorization": "Bearer nope"}, _provider())

    assert isinstance(rejection, RejectionReason)
    assert rejection.code == ReasonCode.AUTH_INVALID


def test_in_memory_provider_validates_entries() -> None:
    with pytest.raises(ValueError, match="Token"):
        InMemoryAuthProvider({" ": AuthPrincipal(participant_id=PARTICIPANT_ID)})
    with pytest.raises(ValueError, match="Principal"):
        InMemoryAuthProvider({TOKEN: {"participant_id": PARTICIPANT_ID}})


def test_principal_requires_participant_id() -> None:
    with pytest.raises(ValueError, match="participant_id"):
        AuthPrincipal(participant_id="")
