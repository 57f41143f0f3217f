"""
Agora Vote Store — In-Memory Backend
======================================
Thread-safe store for tests and local wiring.
Holds sessions (with their vote aggregates) and vote rows.
"""

from __future__ import annotations

import dataclasses
import threading
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from core.sessions.proposals import (
    STATUS_PENDING,
    VALID_SESSION_STATUSES,
    SessionProposal,
    SessionRecord,
)
from core.vote_store.contracts import (
    SessionNotFound,
    VoteRecord,
    validate_vote_row,
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryVoteStore:
    """
    In-memory vote store and session catalogue.

    Aggregates are adjusted under the same lock as the vote row,
    so concurrent writers never lose an update.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[], uuid.UUID] = uuid.uuid4,
    ):
        self._clock = clock
        self._id_factory = id_factory
        self._lock = threading.Lock()
        self._sessions: Dict[uuid.UUID, SessionRecord] = {}
        self._votes: Dict[Tuple[str, uuid.UUID], VoteRecord] = {}
        self._favorites: Dict[str, List[uuid.UUID]] = {}
        self._participant_locks: Dict[str, threading.Lock] = {}

    # ── Sessions ──────────────────────────────────────────────

    def propose_session(self, proposal: SessionProposal) -> SessionRecord:
        record = SessionRecord(
            session_id=self._id_factory(),
            title=proposal.title,
            format=proposal.format,
            duration=proposal.duration,
            status=STATUS_PENDING,
            host_id=proposal.host_id,
            host_name=proposal.host_name,
            created_at=self._clock(),
            description=proposal.description,
            topic_tags=proposal.topic_tags,
            is_self_hosted=proposal.is_self_hosted,
            custom_location=proposal.custom_location,
        )
        with self._lock:
            self._sessions[record.session_id] = record
        return record

    def set_session_status(self, session_id: uuid.UUID, status: str) -> SessionRecord:
        if status not in VALID_SESSION_STATUSES:
            raise ValueError(f"Invalid status: {status}")
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFound(f"Session {session_id} not found.")
            updated = dataclasses.replace(session, status=status)
            self._sessions[session_id] = updated
            return updated

    def get_session(self, session_id: uuid.UUID) -> Optional[SessionRecord]:
        with self._lock:
            return self._sessions.get(session_id)

    def list_sessions(self, statuses: Tuple[str, ...]) -> Tuple[SessionRecord, ...]:
        with self._lock:
            return tuple(
                s for s in self._sessions.values() if s.status in statuses
            )

    # ── Votes ─────────────────────────────────────────────────

    def _adjust_aggregate(
        self, session_id: uuid.UUID, votes: int, voters: int, credits: int
    ) -> None:
        session = self._sessions[session_id]
        self._sessions[session_id] = dataclasses.replace(
            session,
            total_votes=session.total_votes + votes,
            voter_count=session.voter_count + voters,
            total_credits=session.total_credits + credits,
        )

    def upsert_vote(
        self,
        participant_id: str,
        session_id: uuid.UUID,
        vote_count: int,
        credits_spent: int,
    ) -> VoteRecord:
        validate_vote_row(vote_count, credits_spent)
        key = (participant_id, session_id)
        record = VoteRecord(
            participant_id=participant_id,
            session_id=session_id,
            vote_count=vote_count,
            credits_spent=credits_spent,
        )
        with self._lock:
            if session_id not in self._sessions:
                raise SessionNotFound(f"Session {session_id} not found.")
            previous = self._votes.get(key)
            if previous is None:
                self._adjust_aggregate(session_id, vote_count, 1, credits_spent)
            else:
                self._adjust_aggregate(
                    session_id,
                    vote_count - previous.vote_count,
                    0,
                    credits_spent - previous.credits_spent,
                )
            self._votes[key] = record
        return record

    def delete_vote(self, participant_id: str, session_id: uuid.UUID) -> None:
        with self._lock:
            previous = self._votes.pop((participant_id, session_id), None)
            if previous is None:
                return
            self._adjust_aggregate(
                session_id, -previous.vote_count, -1, -previous.credits_spent
            )

    def get_vote(
        self, participant_id: str, session_id: uuid.UUID
    ) -> Optional[VoteRecord]:
        with self._lock:
            return self._votes.get((participant_id, session_id))

    def list_votes_for_participant(
        self, participant_id: str
    ) -> Tuple[VoteRecord, ...]:
        with self._lock:
            rows = [v for (pid, _), v in self._votes.items() if pid == participant_id]
        return tuple(sorted(rows, key=lambda v: str(v.session_id)))

    @contextmanager
    def participant_guard(self, participant_id: str) -> Iterator[None]:
        with self._lock:
            lock = self._participant_locks.setdefault(participant_id, threading.Lock())
        with lock:
            yield

    # ── Favorites ─────────────────────────────────────────────

    def favorite_session(self, participant_id: str, session_id: uuid.UUID) -> bool:
        with self._lock:
            if session_id not in self._sessions:
                raise SessionNotFound(f"Session {session_id} not found.")
            favorites = self._favorites.setdefault(participant_id, [])
            if session_id in favorites:
                return False
            favorites.append(session_id)
            return True

    def unfavorite_session(self, participant_id: str, session_id: uuid.UUID) -> bool:
        with self._lock:
            favorites = self._favorites.get(participant_id, [])
            if session_id not in favorites:
                return False
            favorites.remove(session_id)
            return True

    def list_favorite_session_ids(
        self, participant_id: str
    ) -> Tuple[uuid.UUID, ...]:
        with self._lock:
            return tuple(self._favorites.get(participant_id, ()))
