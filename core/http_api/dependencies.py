"""
Agora HTTP API - Dependencies
=============================
Injected collaborators for handler wiring.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.config.rules import VotingRules
from core.voting.service import VotingService


@dataclass(frozen=True)
class HttpApiDependencies:
    store: object
    auth_provider: object
    rules: VotingRules

    @property
    def voting_service(self) -> VotingService:
        return VotingService(store=self.store, rules=self.rules)
