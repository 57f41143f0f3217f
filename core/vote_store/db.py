"""
Agora Vote Store - DB-backed Backend
====================================
Django ORM implementation of the vote store and session catalogue.

Vote row and session aggregate change inside one transaction.
Aggregates move through F() expressions so concurrent voters on the
same session never overwrite each other's increments.
"""

from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from core.sessions.proposals import (
    VALID_SESSION_STATUSES,
    SessionProposal,
    SessionRecord,
)
from core.vote_store.contracts import (
    SessionNotFound,
    VoteRecord,
    VoteStoreError,
    validate_vote_row,
)

logger = logging.getLogger("agora.vote_store")


def serialize_session(session) -> SessionRecord:
    return SessionRecord(
        session_id=session.id,
        title=session.title,
        format=session.format,
        duration=session.duration,
        status=session.status,
        host_id=session.host_id,
        host_name=session.host_name,
        created_at=session.created_at,
        description=session.description,
        topic_tags=tuple(session.topic_tags or ()),
        is_self_hosted=session.is_self_hosted,
        custom_location=session.custom_location,
        total_votes=session.total_votes,
        voter_count=session.voter_count,
        total_credits=session.total_credits,
    )


def _to_vote_record(vote) -> VoteRecord:
    return VoteRecord(
        participant_id=vote.participant_id,
        session_id=vote.session_id,
        vote_count=vote.vote_count,
        credits_spent=vote.credits_spent,
    )


class DbVoteStore:
    # ── Sessions ──────────────────────────────────────────────

    def propose_session(self, proposal: SessionProposal) -> SessionRecord:
        from core.vote_store.models import Session

        try:
            session = Session.objects.create(
                title=proposal.title,
                description=proposal.description,
                format=proposal.format,
                duration=proposal.duration,
                host_id=proposal.host_id,
                host_name=proposal.host_name,
                topic_tags=list(proposal.topic_tags),
                is_self_hosted=proposal.is_self_hosted,
                custom_location=proposal.custom_location,
            )
        except DatabaseError as exc:
            raise VoteStoreError(f"Could not store session proposal: {exc}") from exc
        return serialize_session(session)

    def set_session_status(self, session_id: uuid.UUID, status: str) -> SessionRecord:
        from core.vote_store.models import Session

        if status not in VALID_SESSION_STATUSES:
            raise ValueError(f"Invalid status: {status}")
        try:
            updated = Session.objects.filter(id=session_id).update(status=status)
            if not updated:
                raise SessionNotFound(f"Session {session_id} not found.")
            return serialize_session(Session.objects.get(id=session_id))
        except DatabaseError as exc:
            raise VoteStoreError(f"Session status update failed: {exc}") from exc

    def get_session(self, session_id: uuid.UUID) -> Optional[SessionRecord]:
        from core.vote_store.models import Session

        try:
            session = Session.objects.filter(id=session_id).first()
        except DatabaseError as exc:
            raise VoteStoreError(f"Session read failed: {exc}") from exc
        if session is None:
            return None
        return serialize_session(session)

    def list_sessions(self, statuses: Tuple[str, ...]) -> Tuple[SessionRecord, ...]:
        from core.vote_store.models import Session

        try:
            return tuple(
                serialize_session(session)
                for session in Session.objects.filter(status__in=list(statuses))
            )
        except DatabaseError as exc:
            raise VoteStoreError(f"Session listing failed: {exc}") from exc

    # ── Votes ─────────────────────────────────────────────────

    def upsert_vote(
        self,
        participant_id: str,
        session_id: uuid.UUID,
        vote_count: int,
        credits_spent: int,
    ) -> VoteRecord:
        from core.vote_store.models import Session, Vote

        validate_vote_row(vote_count, credits_spent)
        try:
            with transaction.atomic():
                if not Session.objects.filter(id=session_id).exists():
                    raise SessionNotFound(f"Session {session_id} not found.")

                vote = (
                    Vote.objects.select_for_update()
                    .filter(participant_id=participant_id, session_id=session_id)
                    .first()
                )
                if vote is None:
                    vote = Vote.objects.create(
                        participant_id=participant_id,
                        session_id=session_id,
                        vote_count=vote_count,
                        credits_spent=credits_spent,
                    )
                    Session.objects.filter(id=session_id).update(
                        total_votes=F("total_votes") + vote_count,
                        voter_count=F("voter_count") + 1,
                        total_credits=F("total_credits") + credits_spent,
                    )
                else:
                    vote_diff = vote_count - vote.vote_count
                    credit_diff = credits_spent - vote.credits_spent
                    vote.vote_count = vote_count
                    vote.credits_spent = credits_spent
                    vote.save(update_fields=["vote_count", "credits_spent", "updated_at"])
                    Session.objects.filter(id=session_id).update(
                        total_votes=F("total_votes") + vote_diff,
                        total_credits=F("total_credits") + credit_diff,
                    )
        except IntegrityError as exc:
            raise VoteStoreError(
                f"Vote write for {participant_id} on {session_id} violated a constraint."
            ) from exc
        except DatabaseError as exc:
            logger.error(
                f"Vote upsert failed for {participant_id} on {session_id}: {exc}",
                exc_info=True,
            )
            raise VoteStoreError(f"Vote upsert failed: {exc}") from exc
        return _to_vote_record(vote)

    def delete_vote(self, participant_id: str, session_id: uuid.UUID) -> None:
        from core.vote_store.models import Session, Vote

        try:
            with transaction.atomic():
                vote = (
                    Vote.objects.select_for_update()
                    .filter(participant_id=participant_id, session_id=session_id)
                    .first()
                )
                if vote is None:
                    return
                Session.objects.filter(id=session_id).update(
                    total_votes=F("total_votes") - vote.vote_count,
                    voter_count=F("voter_count") - 1,
                    total_credits=F("total_credits") - vote.credits_spent,
                )
                vote.delete()
        except DatabaseError as exc:
            logger.error(
                f"Vote delete failed for {participant_id} on {session_id}: {exc}",
                exc_info=True,
            )
            raise VoteStoreError(f"Vote delete failed: {exc}") from exc

    def get_vote(
        self, participant_id: str, session_id: uuid.UUID
    ) -> Optional[VoteRecord]:
        from core.vote_store.models import Vote

        try:
            vote = Vote.objects.filter(
                participant_id=participant_id, session_id=session_id
            ).first()
        except DatabaseError as exc:
            raise VoteStoreError(f"Vote read failed: {exc}") from exc
        if vote is None:
            return None
        return _to_vote_record(vote)

    def list_votes_for_participant(
        self, participant_id: str
    ) -> Tuple[VoteRecord, ...]:
        from core.vote_store.models import Vote

        try:
            # Savepoint keeps an enclosing participant_guard usable after a failed read
            with transaction.atomic():
                rows = Vote.objects.filter(participant_id=participant_id).order_by(
                    "session_id"
                )
                return tuple(_to_vote_record(vote) for vote in rows)
        except DatabaseError as exc:
            raise VoteStoreError(f"Vote read failed: {exc}") from exc

    @contextmanager
    def participant_guard(self, participant_id: str) -> Iterator[None]:
        from core.vote_store.models import ParticipantLock

        try:
            with transaction.atomic():
                now = timezone.now()
                # An UPDATE first, so the lock is taken before anything is read
                locked = ParticipantLock.objects.filter(
                    participant_id=participant_id
                ).update(locked_at=now)
                if not locked:
                    ParticipantLock.objects.get_or_create(
                        participant_id=participant_id,
                        defaults={"locked_at": now},
                    )
                    ParticipantLock.objects.filter(
                        participant_id=participant_id
                    ).update(locked_at=now)
                yield
        except DatabaseError as exc:
            logger.error(
                f"Participant lock for {participant_id} failed: {exc}",
                exc_info=True,
            )
            raise VoteStoreError(f"Participant lock failed: {exc}") from exc

    # ── Favorites ─────────────────────────────────────────────

    def favorite_session(self, participant_id: str, session_id: uuid.UUID) -> bool:
        from core.vote_store.models import Favorite, Session

        try:
            with transaction.atomic():
                if not Session.objects.filter(id=session_id).exists():
                    raise SessionNotFound(f"Session {session_id} not found.")
                _, created = Favorite.objects.get_or_create(
                    participant_id=participant_id,
                    session_id=session_id,
                )
        except DatabaseError as exc:
            raise VoteStoreError(f"Favorite write failed: {exc}") from exc
        return created

    def unfavorite_session(self, participant_id: str, session_id: uuid.UUID) -> bool:
        from core.vote_store.models import Favorite

        try:
            deleted, _ = Favorite.objects.filter(
                participant_id=participant_id,
                session_id=session_id,
            ).delete()
        except DatabaseError as exc:
            raise VoteStoreError(f"Favorite delete failed: {exc}") from exc
        return bool(deleted)

    def list_favorite_session_ids(
        self, participant_id: str
    ) -> Tuple[uuid.UUID, ...]:
        from core.vote_store.models import Favorite

        try:
            return tuple(
                Favorite.objects.filter(participant_id=participant_id)
                .order_by("created_at", "id")
                .values_list("session_id", flat=True)
            )
        except DatabaseError as exc:
            raise VoteStoreError(f"Favorite read failed: {exc}") from exc
