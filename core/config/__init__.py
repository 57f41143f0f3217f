"""
Agora Core Config — Public API
================================
Deployment-configurable voting rules.
"""

from core.config.rules import (
    DEFAULT_VOTABLE_STATUSES,
    VotingRules,
    load_voting_rules,
)

__all__ = [
    "DEFAULT_VOTABLE_STATUSES",
    "VotingRules",
    "load_voting_rules",
]
