"""
Agora Credits — Public API
============================
Quadratic credit arithmetic and the single budget gate.
"""

from core.credits.quadratic import (
    TOTAL_CREDITS,
    InvalidCreditInput,
    VoteChange,
    apply_delta,
    can_decrement,
    can_increment,
    credits_for_votes,
    marginal_cost,
    max_affordable_votes,
    remaining_credits,
    votes_for_credits,
)

__all__ = [
    "TOTAL_CREDITS",
    "InvalidCreditInput",
    "VoteChange",
    "apply_delta",
    "can_decrement",
    "can_increment",
    "credits_for_votes",
    "marginal_cost",
    "max_affordable_votes",
    "remaining_credits",
    "votes_for_credits",
]
