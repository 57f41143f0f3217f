"""
Agora Django Adapter Wiring
===========================
Constructs HttpApiDependencies for local/staging live runs.

AGORA_STORE_BACKEND selects the store:
- "db":     Django ORM store + DB-backed bearer credentials
- "memory": in-process store + a fixed development token
"""

from __future__ import annotations

import threading

from django.conf import settings

from core.config.rules import load_voting_rules
from core.http_api.auth import AuthPrincipal, InMemoryAuthProvider
from core.http_api.dependencies import HttpApiDependencies
from core.vote_store.memory import InMemoryVoteStore

DEV_PARTICIPANT_TOKEN = "dev-participant-token"
DEV_PARTICIPANT_ID = "dev-participant"

BACKEND_DB = "db"
BACKEND_MEMORY = "memory"

_DEPENDENCIES_LOCK = threading.Lock()
_DEPENDENCIES: HttpApiDependencies | None = None


def _create_dependencies() -> HttpApiDependencies:
    backend = str(getattr(settings, "AGORA_STORE_BACKEND", BACKEND_DB)).lower()
    rules = load_voting_rules()

    if backend == BACKEND_MEMORY:
        return HttpApiDependencies(
            store=InMemoryVoteStore(),
            auth_provider=InMemoryAuthProvider(
                {
                    DEV_PARTICIPANT_TOKEN: AuthPrincipal(
                        participant_id=DEV_PARTICIPANT_ID,
                        display_name="Dev Participant",
                    )
                }
            ),
            rules=rules,
        )
    if backend != BACKEND_DB:
        raise ValueError(f"Unknown AGORA_STORE_BACKEND: {backend!r}")

    from core.auth.provider import DbAuthProvider
    from core.vote_store.db import DbVoteStore

    return HttpApiDependencies(
        store=DbVoteStore(),
        auth_provider=DbAuthProvider(),
        rules=rules,
    )


def build_dependencies() -> HttpApiDependencies:
    """
    Lazy singleton wiring for adapter runtime.
    """
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        if _DEPENDENCIES is None:
            _DEPENDENCIES = _create_dependencies()
        return _DEPENDENCIES


def reset_dependencies() -> None:
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        _DEPENDENCIES = None
