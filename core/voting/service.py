"""
Agora Voting — Service Layer
==============================
The single call site for vote changes. Session list, session detail
and dashboard all go through cast_vote, so the budget gate is never
recomputed ad hoc.

Flow per request, under the store's participant guard so two changes by
the same participant (on any sessions) never check the budget against
the same stale total:
    1. Load the participant's ballot fresh from the store
    2. Check the session exists and is open for voting
    3. Ask the credit model for the change (may reject)
    4. Apply it to the ballot optimistically
    5. Persist: upsert, or delete when the count reaches zero
    6. On write failure, re-fetch authoritative state; revert if that fails too
"""

from __future__ import annotations

import logging
import uuid

from core.commands.rejection import ReasonCode, RejectionReason
from core.config.rules import VotingRules
from core.voting.ballot import Ballot
from core.voting.outcomes import VoteOutcome, VoteStatus
from core.vote_store.contracts import VoteStoreError

logger = logging.getLogger("agora.voting")


class VotingService:
    """Quadratic voting over a vote store that is also a session catalogue."""

    def __init__(self, *, store, rules: VotingRules | None = None):
        self._store = store
        self._rules = rules or VotingRules()

    @property
    def rules(self) -> VotingRules:
        return self._rules

    def load_ballot(self, participant_id: str) -> Ballot:
        records = self._store.list_votes_for_participant(participant_id)
        return Ballot.from_records(
            participant_id, records, total_credits=self._rules.total_credits
        )

    def _outcome(
        self,
        ballot: Ballot,
        session_id: uuid.UUID,
        status: VoteStatus,
        change=None,
        reason: RejectionReason | None = None,
    ) -> VoteOutcome:
        return VoteOutcome(
            participant_id=ballot.participant_id,
            session_id=session_id,
            status=status,
            change=change,
            reason=reason,
            vote_count=ballot.votes_for(session_id),
            credits_spent=ballot.credits_spent,
            credits_remaining=ballot.credits_remaining,
        )

    def _check_session(self, session_id: uuid.UUID) -> RejectionReason | None:
        session = self._store.get_session(session_id)
        if session is None:
            return RejectionReason(
                code=ReasonCode.SESSION_NOT_FOUND,
                message=f"Session {session_id} does not exist.",
                policy_name="session_must_exist",
            )
        if not self._rules.is_votable(session.status):
            return RejectionReason(
                code=ReasonCode.SESSION_NOT_VOTABLE,
                message=f"Session is {session.status} and not open for voting.",
                policy_name="session_must_be_votable",
                message_params={"status": session.status},
            )
        return None

    def cast_vote(
        self, participant_id: str, session_id: uuid.UUID, delta: int
    ) -> VoteOutcome:
        with self._store.participant_guard(participant_id):
            return self._cast_vote_locked(participant_id, session_id, delta)

    def _cast_vote_locked(
        self, participant_id: str, session_id: uuid.UUID, delta: int
    ) -> VoteOutcome:
        ballot = self.load_ballot(participant_id)

        rejection = self._check_session(session_id)
        if rejection is None:
            proposed = ballot.propose(session_id, delta)
            if isinstance(proposed, RejectionReason):
                rejection = proposed
        if rejection is not None:
            logger.info(
                f"Vote by {participant_id} on {session_id} rejected by "
                f"'{rejection.policy_name}': [{rejection.code}] {rejection.message}"
            )
            return self._outcome(ballot, session_id, VoteStatus.REJECTED, reason=rejection)

        change = proposed
        if change.is_noop:
            return self._outcome(ballot, session_id, VoteStatus.ACCEPTED, change=change)

        snapshot = ballot.apply(session_id, change)
        try:
            if change.deletes_row:
                self._store.delete_vote(participant_id, session_id)
            else:
                self._store.upsert_vote(
                    participant_id,
                    session_id,
                    change.new_vote_count,
                    change.new_credits_spent,
                )
        except VoteStoreError as exc:
            logger.warning(
                f"Vote write by {participant_id} on {session_id} failed: {exc}",
                exc_info=True,
            )
            self._reconcile(ballot, snapshot)
            return self._outcome(
                ballot,
                session_id,
                VoteStatus.FAILED,
                change=change,
                reason=RejectionReason(
                    code=ReasonCode.PERSISTENCE_FAILED,
                    message="Your vote could not be saved. Please try again.",
                    policy_name="vote_store_write",
                ),
            )

        logger.info(
            f"Vote by {participant_id} on {session_id}: "
            f"{change.previous_votes} → {change.new_vote_count} "
            f"(spent {change.total_after}/{self._rules.total_credits})"
        )
        return self._outcome(ballot, session_id, VoteStatus.ACCEPTED, change=change)

    def _reconcile(self, ballot: Ballot, snapshot) -> None:
        """Prefer the store's view after a failed write; fall back to the snapshot."""
        try:
            records = self._store.list_votes_for_participant(ballot.participant_id)
        except VoteStoreError as exc:
            logger.error(
                f"Re-fetch for {ballot.participant_id} failed, reverting locally: {exc}"
            )
            ballot.revert(snapshot)
            return
        ballot.replace({r.session_id: r.vote_count for r in records})
