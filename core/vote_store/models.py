"""
Agora Vote Store - Relational Voting State
==========================================
Sessions carry denormalized vote aggregates; votes hold one row per
(participant, session) with credits_spent = vote_count².
"""

from __future__ import annotations

import uuid

from django.db import models


class SessionStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    APPROVED = "approved", "Approved"
    REJECTED = "rejected", "Rejected"
    SCHEDULED = "scheduled", "Scheduled"


class SessionFormat(models.TextChoices):
    TALK = "talk", "Talk"
    WORKSHOP = "workshop", "Workshop"
    DISCUSSION = "discussion", "Discussion"
    PANEL = "panel", "Panel"
    DEMO = "demo", "Demo"


class Session(models.Model):
    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )
    title = models.CharField(max_length=200)
    description = models.TextField(null=True, blank=True)
    format = models.CharField(max_length=20, choices=SessionFormat.choices)
    duration = models.PositiveSmallIntegerField()
    status = models.CharField(
        max_length=20,
        choices=SessionStatus.choices,
        default=SessionStatus.PENDING,
    )
    host_id = models.CharField(max_length=255)
    host_name = models.CharField(max_length=255)
    topic_tags = models.JSONField(default=list)
    is_self_hosted = models.BooleanField(default=False)
    custom_location = models.CharField(max_length=255, null=True, blank=True)
    total_votes = models.PositiveIntegerField(default=0)
    voter_count = models.PositiveIntegerField(default=0)
    total_credits = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "agora_sessions"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["status", "total_votes"], name="idx_session_status_votes"),
        ]

    def __str__(self) -> str:
        return f"{self.id} ({self.title})"


class Vote(models.Model):
    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )
    participant_id = models.CharField(max_length=255, db_index=True)
    session = models.ForeignKey(
        Session,
        on_delete=models.CASCADE,
        related_name="votes",
    )
    vote_count = models.PositiveIntegerField()
    credits_spent = models.PositiveIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "agora_votes"
        ordering = ["participant_id", "session_id"]
        constraints = [
            models.UniqueConstraint(
                fields=["participant_id", "session"],
                name="uniq_vote_participant_session",
            ),
            models.CheckConstraint(
                condition=models.Q(vote_count__gt=0),
                name="chk_vote_count_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(
                    credits_spent=models.F("vote_count") * models.F("vote_count")
                ),
                name="chk_vote_credits_quadratic",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.participant_id} → {self.session_id} ({self.vote_count})"


class ParticipantLock(models.Model):
    """
    One row per participant, updated at the start of every vote change.

    The UPDATE takes the row lock (Postgres) or the write lock (SQLite),
    so a participant's budget check and write never interleave with
    another change by the same participant on a different session.
    """

    participant_id = models.CharField(max_length=255, primary_key=True)
    locked_at = models.DateTimeField()

    class Meta:
        db_table = "agora_participant_locks"

    def __str__(self) -> str:
        return self.participant_id


class Favorite(models.Model):
    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )
    participant_id = models.CharField(max_length=255, db_index=True)
    session = models.ForeignKey(
        Session,
        on_delete=models.CASCADE,
        related_name="favorites",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "agora_favorites"
        ordering = ["participant_id", "created_at", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["participant_id", "session"],
                name="uniq_favorite_participant_session",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.participant_id} favorite {self.session_id}"
