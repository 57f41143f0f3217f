"""
Agora Command Layer — Rejection Model
=======================================
Structured rejection reasons for denied voting and catalogue requests.

A rejection is an expected outcome, not an error. It is returned,
never raised, and travels unchanged to the HTTP envelope.

Every rejection must be:
- Deterministic (same input → same rejection)
- Machine-readable (code)
- Human-readable (message)
- Attributable (policy_name)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


# ══════════════════════════════════════════════════════════════
# REJECTION REASON (frozen explanation structure)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RejectionReason:
    """
    Structured reason for a denied request.

    Fields:
        code:           Machine-readable rejection code (e.g. 'BUDGET_EXCEEDED').
        message:        Human-readable explanation.
        policy_name:    Name of the check that caused the rejection.
        message_params: Values a client can use to render its own message.
    """

    code: str
    message: str
    policy_name: str
    message_params: Optional[dict[str, Any]] = field(default=None, compare=False)

    def __post_init__(self):
        if not self.code or not isinstance(self.code, str):
            raise ValueError("code must be a non-empty string.")

        if not self.message or not isinstance(self.message, str):
            raise ValueError("message must be a non-empty string.")

        if not self.policy_name or not isinstance(self.policy_name, str):
            raise ValueError("policy_name must be a non-empty string.")

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "policy_name": self.policy_name,
            "message_params": dict(self.message_params or {}),
        }


# ══════════════════════════════════════════════════════════════
# STANDARD REJECTION CODES
# ══════════════════════════════════════════════════════════════

class ReasonCode:
    """
    Known rejection codes.

    Convention: SCREAMING_SNAKE_CASE.
    """

    # ── Credits ───────────────────────────────────────────────
    BUDGET_EXCEEDED = "BUDGET_EXCEEDED"
    VOTE_COUNT_NEGATIVE = "VOTE_COUNT_NEGATIVE"

    # ── Sessions ──────────────────────────────────────────────
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    SESSION_NOT_VOTABLE = "SESSION_NOT_VOTABLE"
    INVALID_PROPOSAL = "INVALID_PROPOSAL"

    # ── Authentication ────────────────────────────────────────
    AUTH_REQUIRED = "AUTH_REQUIRED"
    AUTH_INVALID = "AUTH_INVALID"

    # ── Persistence ───────────────────────────────────────────
    PERSISTENCE_FAILED = "PERSISTENCE_FAILED"

    # ── General ───────────────────────────────────────────────
    INVALID_REQUEST = "INVALID_REQUEST"
