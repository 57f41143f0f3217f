"""
Agora Core Config — Voting Rules
==================================
Doctrine: No hardcoded budgets in voting logic.
The credit budget and the set of votable session statuses come
from deployment settings, not from source code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from core.credits.quadratic import TOTAL_CREDITS

DEFAULT_VOTABLE_STATUSES: Tuple[str, ...] = ("approved", "scheduled")


# ══════════════════════════════════════════════════════════════
# VOTING RULES
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class VotingRules:
    """
    Per-deployment voting configuration.

    total_credits is the per-participant budget supplied to every
    credit calculation. Sessions outside votable_statuses are neither
    listed nor votable.
    """

    total_credits: int = TOTAL_CREDITS
    votable_statuses: Tuple[str, ...] = DEFAULT_VOTABLE_STATUSES

    def __post_init__(self) -> None:
        if isinstance(self.total_credits, bool) or not isinstance(self.total_credits, int):
            raise ValueError("total_credits must be an integer.")
        if self.total_credits <= 0:
            raise ValueError(
                f"total_credits must be positive, got {self.total_credits}."
            )
        if not isinstance(self.votable_statuses, tuple) or not self.votable_statuses:
            raise ValueError("votable_statuses must be a non-empty tuple.")

    def is_votable(self, status: str) -> bool:
        return status in self.votable_statuses


# ══════════════════════════════════════════════════════════════
# LOADING FROM SETTINGS
# ══════════════════════════════════════════════════════════════

def load_voting_rules(settings_obj: Optional[Any] = None) -> VotingRules:
    """
    Build VotingRules from Django settings.

    Reads AGORA_TOTAL_CREDITS and AGORA_VOTABLE_STATUSES; missing
    settings fall back to the reference deployment values.
    """
    if settings_obj is None:
        from django.conf import settings as settings_obj

    raw_total = getattr(settings_obj, "AGORA_TOTAL_CREDITS", TOTAL_CREDITS)
    try:
        total_credits = int(raw_total)
    except (TypeError, ValueError) as exc:
        raise ValueError(
            f"AGORA_TOTAL_CREDITS must be an integer, got {raw_total!r}."
        ) from exc

    raw_statuses = getattr(
        settings_obj, "AGORA_VOTABLE_STATUSES", DEFAULT_VOTABLE_STATUSES
    )
    if isinstance(raw_statuses, str):
        raw_statuses = raw_statuses.split(",")
    statuses = tuple(
        str(s).strip().lower() for s in raw_statuses if str(s).strip()
    )

    return VotingRules(total_credits=total_credits, votable_statuses=statuses)
