"""
Agora Voting — Participant Ballot
===================================
One participant's vote allocation across sessions.

credits_spent is always recomputed from the vote map, so every
budget check sees the true current total and never a cached tally.
Sessions with zero votes are never kept in the map.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Union

from core.commands.rejection import ReasonCode, RejectionReason
from core.credits.quadratic import (
    TOTAL_CREDITS,
    VoteChange,
    apply_delta,
    can_decrement,
    can_increment,
    credits_for_votes,
    marginal_cost,
    max_affordable_votes,
)
from core.vote_store.contracts import VoteRecord


@dataclass(frozen=True)
class BallotSnapshot:
    """Vote count for one session before an optimistic change."""
    session_id: uuid.UUID
    vote_count: int


class Ballot:
    def __init__(
        self,
        participant_id: str,
        votes: Mapping[uuid.UUID, int] | None = None,
        total_credits: int = TOTAL_CREDITS,
    ):
        if not participant_id:
            raise ValueError("participant_id must be non-empty.")
        self.participant_id = participant_id
        self.total_credits = total_credits
        self._votes: Dict[uuid.UUID, int] = {}
        self.replace(votes or {})

    @classmethod
    def from_records(
        cls,
        participant_id: str,
        records: Iterable[VoteRecord],
        total_credits: int = TOTAL_CREDITS,
    ) -> "Ballot":
        return cls(
            participant_id,
            {r.session_id: r.vote_count for r in records},
            total_credits=total_credits,
        )

    # ── Queries ───────────────────────────────────────────────

    @property
    def credits_spent(self) -> int:
        return sum(credits_for_votes(v) for v in self._votes.values())

    @property
    def credits_remaining(self) -> int:
        return self.total_credits - self.credits_spent

    @property
    def votes(self) -> Dict[uuid.UUID, int]:
        return dict(self._votes)

    def votes_for(self, session_id: uuid.UUID) -> int:
        return self._votes.get(session_id, 0)

    def next_vote_cost(self, session_id: uuid.UUID) -> int:
        return marginal_cost(self.votes_for(session_id))

    def can_add_vote(self, session_id: uuid.UUID) -> bool:
        return can_increment(
            self.credits_spent, self.votes_for(session_id), self.total_credits
        )

    def can_remove_vote(self, session_id: uuid.UUID) -> bool:
        return can_decrement(self.votes_for(session_id))

    def max_votes_for(self, session_id: uuid.UUID) -> int:
        return max_affordable_votes(
            self.credits_spent, self.votes_for(session_id), self.total_credits
        )

    # ── Changes ───────────────────────────────────────────────

    def propose(
        self, session_id: uuid.UUID, delta: int
    ) -> Union[VoteChange, RejectionReason]:
        current = self.votes_for(session_id)
        if isinstance(delta, int) and delta < 0 and not can_decrement(current):
            return RejectionReason(
                code=ReasonCode.VOTE_COUNT_NEGATIVE,
                message="No votes on this session to remove.",
                policy_name="ballot_propose",
                message_params={"session_id": str(session_id)},
            )
        return apply_delta(current, delta, self.credits_spent, self.total_credits)

    def apply(self, session_id: uuid.UUID, change: VoteChange) -> BallotSnapshot:
        """Apply an accepted change locally and return what to restore on failure."""
        snapshot = BallotSnapshot(session_id=session_id, vote_count=self.votes_for(session_id))
        self._set(session_id, change.new_vote_count)
        return snapshot

    def revert(self, snapshot: BallotSnapshot) -> None:
        self._set(snapshot.session_id, snapshot.vote_count)

    def replace(self, votes: Mapping[uuid.UUID, int]) -> None:
        """Swap in authoritative state, e.g. after a re-fetch."""
        cleaned: Dict[uuid.UUID, int] = {}
        for session_id, count in votes.items():
            if isinstance(count, bool) or not isinstance(count, int) or count < 0:
                raise ValueError(f"Invalid vote count for {session_id}: {count!r}")
            if count:
                cleaned[session_id] = count
        self._votes = cleaned

    def _set(self, session_id: uuid.UUID, count: int) -> None:
        if count:
            self._votes[session_id] = count
        else:
            self._votes.pop(session_id, None)

    def to_dict(self) -> dict:
        return {
            "participant_id": self.participant_id,
            "total_credits": self.total_credits,
            "credits_spent": self.credits_spent,
            "credits_remaining": self.credits_remaining,
            "votes": [
                {
                    "session_id": str(session_id),
                    "vote_count": count,
                    "credits_spent": credits_for_votes(count),
                    "next_vote_cost": marginal_cost(count),
                }
                for session_id, count in sorted(
                    self._votes.items(), key=lambda item: (-item[1], str(item[0]))
                )
            ],
        }
