"""
Agora Vote Store — Contracts
==============================
One row per (participant, session) holding the participant's current
allocation. Rows exist only while vote_count > 0.

Every write also maintains the session aggregate:
    total_votes   = Σ vote_count
    voter_count   = number of rows
    total_credits = Σ credits_spent

Favorites are a separate per-participant bookmark list with no credit cost.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import ContextManager, Optional, Protocol, Tuple


# ══════════════════════════════════════════════════════════════
# ERRORS
# ══════════════════════════════════════════════════════════════

class VoteStoreError(Exception):
    """Base class for vote store failures."""


class InvalidVoteRecord(VoteStoreError):
    """Raised when a write would break the vote row invariants."""


class SessionNotFound(VoteStoreError):
    """Raised when a write references a session that does not exist."""


# ══════════════════════════════════════════════════════════════
# RECORDS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class VoteRecord:
    participant_id: str
    session_id: uuid.UUID
    vote_count: int
    credits_spent: int

    def to_dict(self) -> dict:
        return {
            "participant_id": self.participant_id,
            "session_id": str(self.session_id),
            "vote_count": self.vote_count,
            "credits_spent": self.credits_spent,
        }


def validate_vote_row(vote_count: int, credits_spent: int) -> None:
    """Reject rows a store must never hold."""
    if isinstance(vote_count, bool) or not isinstance(vote_count, int):
        raise InvalidVoteRecord("vote_count must be an integer.")
    if isinstance(credits_spent, bool) or not isinstance(credits_spent, int):
        raise InvalidVoteRecord("credits_spent must be an integer.")
    if vote_count <= 0:
        raise InvalidVoteRecord(
            f"vote_count must be > 0 for a stored row, got {vote_count}. "
            "Delete the row instead."
        )
    if credits_spent != vote_count * vote_count:
        raise InvalidVoteRecord(
            f"credits_spent must equal vote_count² "
            f"({vote_count * vote_count}), got {credits_spent}."
        )


# ══════════════════════════════════════════════════════════════
# STORE PROTOCOL
# ══════════════════════════════════════════════════════════════

class VoteStore(Protocol):
    def upsert_vote(
        self,
        participant_id: str,
        session_id: uuid.UUID,
        vote_count: int,
        credits_spent: int,
    ) -> VoteRecord:
        ...

    def delete_vote(self, participant_id: str, session_id: uuid.UUID) -> None:
        ...

    def get_vote(
        self, participant_id: str, session_id: uuid.UUID
    ) -> Optional[VoteRecord]:
        ...

    def list_votes_for_participant(
        self, participant_id: str
    ) -> Tuple[VoteRecord, ...]:
        ...

    def participant_guard(self, participant_id: str) -> ContextManager[None]:
        """
        Hold while reading a participant's ballot, checking the budget and
        writing the change. Changes by the same participant on any session
        are serialized; different participants never wait on each other.
        """
        ...


class FavoriteStore(Protocol):
    def favorite_session(self, participant_id: str, session_id: uuid.UUID) -> bool:
        ...

    def unfavorite_session(self, participant_id: str, session_id: uuid.UUID) -> bool:
        ...

    def list_favorite_session_ids(
        self, participant_id: str
    ) -> Tuple[uuid.UUID, ...]:
        ...
