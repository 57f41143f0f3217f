"""
Agora Voting — Vote Outcome Contract
======================================
Every vote request produces exactly one outcome.

ACCEPTED → change persisted, ballot reflects it.
REJECTED → change denied before any write, reason is mandatory.
FAILED   → change admitted but the write failed; the ballot was
           reconciled with the store (or reverted), reason is mandatory.

Rules:
- Outcome is immutable (frozen dataclass)
- REJECTED / FAILED must contain reason (RejectionReason)
- ACCEPTED must contain change and must NOT contain reason
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from core.commands.rejection import RejectionReason
from core.credits.quadratic import VoteChange


class VoteStatus(Enum):
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class VoteOutcome:
    """
    Result of one vote request.

    Fields:
        participant_id:    Who voted.
        session_id:        Which session.
        status:            ACCEPTED, REJECTED or FAILED.
        change:            The admitted VoteChange (None when REJECTED).
        reason:            Mandatory unless ACCEPTED.
        vote_count:        Participant's votes on the session afterwards.
        credits_spent:     Participant's spend across all sessions afterwards.
        credits_remaining: Budget left afterwards.
    """

    participant_id: str
    session_id: uuid.UUID
    status: VoteStatus
    change: Optional[VoteChange]
    reason: Optional[RejectionReason]
    vote_count: int
    credits_spent: int
    credits_remaining: int

    def __post_init__(self):
        if not isinstance(self.status, VoteStatus):
            raise ValueError(
                f"status must be VoteStatus, got {type(self.status).__name__}."
            )

        if self.status == VoteStatus.ACCEPTED:
            if self.reason is not None:
                raise ValueError("ACCEPTED outcome must NOT include a RejectionReason.")
            if self.change is None:
                raise ValueError("ACCEPTED outcome must include the VoteChange.")
        elif self.reason is None:
            raise ValueError(
                f"{self.status.value} outcome must include a RejectionReason. "
                "No silent rejections allowed."
            )

    @property
    def is_accepted(self) -> bool:
        return self.status == VoteStatus.ACCEPTED

    @property
    def is_rejected(self) -> bool:
        return self.status == VoteStatus.REJECTED

    @property
    def is_failed(self) -> bool:
        return self.status == VoteStatus.FAILED

    def to_dict(self) -> dict:
        return {
            "participant_id": self.participant_id,
            "session_id": str(self.session_id),
            "status": self.status.value,
            "vote_count": self.vote_count,
            "credits_spent": self.credits_spent,
            "credits_remaining": self.credits_remaining,
            "reason": None if self.reason is None else self.reason.to_dict(),
        }
