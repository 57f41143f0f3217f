"""
Agora Credits — Quadratic Voting Ledger Model
===============================================
Pure arithmetic governing the cost of votes.

Holding n votes on one session costs n² credits, so the next vote
always costs 2n + 1. Every participant spends from one fixed budget
across all sessions.

RULES (NON-NEGOTIABLE):
- All counts are non-negative integers — NO floats
- credits_spent for a vote row is always vote_count²
- A budget denial is a returned RejectionReason, never an exception
- Negative or non-integer inputs raise InvalidCreditInput

This file contains NO persistence logic.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from core.commands.rejection import ReasonCode, RejectionReason

TOTAL_CREDITS = 100


# ══════════════════════════════════════════════════════════════
# INPUT CONTRACT
# ══════════════════════════════════════════════════════════════

class InvalidCreditInput(ValueError):
    """Raised when a caller passes a value outside the model's domain."""


def _require_count(value, field_name: str) -> int:
    # bool is an int subclass; True votes is a caller bug
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidCreditInput(
            f"{field_name} must be an integer, got {type(value).__name__}."
        )
    if value < 0:
        raise InvalidCreditInput(f"{field_name} must be >= 0, got {value}.")
    return value


def _require_budget(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidCreditInput(
            f"total_budget must be an integer, got {type(value).__name__}."
        )
    if value <= 0:
        raise InvalidCreditInput(f"total_budget must be > 0, got {value}.")
    return value


# ══════════════════════════════════════════════════════════════
# COST FUNCTIONS
# ══════════════════════════════════════════════════════════════

def credits_for_votes(votes: int) -> int:
    """Total cost of holding exactly `votes` votes on one session."""
    votes = _require_count(votes, "votes")
    return votes * votes


def marginal_cost(current_votes: int) -> int:
    """Cost of moving from `current_votes` to `current_votes + 1`."""
    current_votes = _require_count(current_votes, "current_votes")
    return 2 * current_votes + 1


def votes_for_credits(credits: int) -> int:
    """Largest vote count whose cost fits in `credits`."""
    credits = _require_count(credits, "credits")
    return math.isqrt(credits)


def remaining_credits(spent: int, total_budget: int = TOTAL_CREDITS) -> int:
    spent = _require_count(spent, "spent")
    return _require_budget(total_budget) - spent


# ══════════════════════════════════════════════════════════════
# ADMISSION GATES
# ══════════════════════════════════════════════════════════════

def can_increment(
    spent_across_all_sessions: int,
    current_votes_on_this_session: int,
    total_budget: int = TOTAL_CREDITS,
) -> bool:
    spent = _require_count(spent_across_all_sessions, "spent_across_all_sessions")
    budget = _require_budget(total_budget)
    return spent + marginal_cost(current_votes_on_this_session) <= budget


def can_decrement(current_votes_on_this_session: int) -> bool:
    current = _require_count(
        current_votes_on_this_session, "current_votes_on_this_session"
    )
    return current > 0


def max_affordable_votes(
    spent_across_all_sessions: int,
    current_votes_on_this_session: int,
    total_budget: int = TOTAL_CREDITS,
) -> int:
    """
    Highest vote count this session could reach with the rest of the budget.

    The credits already sunk into this session are released first, so the
    answer is never lower than the current vote count while the total is
    within budget.
    """
    spent = _require_count(spent_across_all_sessions, "spent_across_all_sessions")
    budget = _require_budget(total_budget)
    spent_elsewhere = max(0, spent - credits_for_votes(current_votes_on_this_session))
    available = budget - spent_elsewhere
    if available <= 0:
        return 0
    return votes_for_credits(available)


# ══════════════════════════════════════════════════════════════
# VOTE CHANGE (accepted result of apply_delta)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class VoteChange:
    """
    Accepted vote change for one (participant, session) pair.

    Fields:
        previous_votes:    Vote count before the change.
        previous_credits:  previous_votes².
        new_vote_count:    Vote count after the change (never negative).
        new_credits_spent: new_vote_count².
        total_after:       Participant's spend across all sessions afterwards.
    """

    previous_votes: int
    previous_credits: int
    new_vote_count: int
    new_credits_spent: int
    total_after: int

    @property
    def credits_delta(self) -> int:
        return self.new_credits_spent - self.previous_credits

    @property
    def is_noop(self) -> bool:
        return self.new_vote_count == self.previous_votes

    @property
    def deletes_row(self) -> bool:
        """A vote row reaching zero must be removed, not stored."""
        return self.new_vote_count == 0


def apply_delta(
    current_votes: int,
    delta: int,
    spent_across_all_sessions: int,
    total_budget: int = TOTAL_CREDITS,
) -> Union[VoteChange, RejectionReason]:
    """
    Propose `current_votes + delta` (floored at zero) and re-check the budget.

    The participant's total is recomputed from full costs
    (spent - old² + new²), never accumulated from marginal steps.
    A change that does not raise spending is always admitted.
    """
    current = _require_count(current_votes, "current_votes")
    spent = _require_count(spent_across_all_sessions, "spent_across_all_sessions")
    budget = _require_budget(total_budget)
    if isinstance(delta, bool) or not isinstance(delta, int):
        raise InvalidCreditInput(
            f"delta must be an integer, got {type(delta).__name__}."
        )

    new_count = max(0, current + delta)
    previous_credits = credits_for_votes(current)
    new_credits = credits_for_votes(new_count)
    total_after = spent - previous_credits + new_credits

    if new_credits > previous_credits and total_after > budget:
        return RejectionReason(
            code=ReasonCode.BUDGET_EXCEEDED,
            message=(
                f"Moving to {new_count} votes costs {new_credits} credits; "
                f"total would be {total_after} of {budget}."
            ),
            policy_name="apply_delta",
            message_params={
                "requested_votes": new_count,
                "requested_credits": new_credits,
                "total_after": total_after,
                "total_budget": budget,
            },
        )

    return VoteChange(
        previous_votes=current,
        previous_credits=previous_credits,
        new_vote_count=new_count,
        new_credits_spent=new_credits,
        total_after=total_after,
    )
