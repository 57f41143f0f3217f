"""
Agora Sessions — Proposals and Session Records
================================================
A participant proposes a session; it enters the catalogue as
`pending` with empty vote aggregates. Review (approve / reject /
schedule) happens outside this package.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

# ── Statuses ──────────────────────────────────────────────────

STATUS_PENDING = "pending"
STATUS_APPROVED = "approved"
STATUS_REJECTED = "rejected"
STATUS_SCHEDULED = "scheduled"

VALID_SESSION_STATUSES = frozenset({
    STATUS_PENDING, STATUS_APPROVED, STATUS_REJECTED, STATUS_SCHEDULED,
})

# ── Formats & durations ───────────────────────────────────────

FORMAT_TALK = "talk"
FORMAT_WORKSHOP = "workshop"
FORMAT_DISCUSSION = "discussion"
FORMAT_PANEL = "panel"
FORMAT_DEMO = "demo"

VALID_SESSION_FORMATS = frozenset({
    FORMAT_TALK, FORMAT_WORKSHOP, FORMAT_DISCUSSION, FORMAT_PANEL, FORMAT_DEMO,
})

VALID_DURATIONS = frozenset({30, 60, 90})

MAX_TITLE_LENGTH = 200
MAX_TAGS = 10


def normalize_tags(tags) -> Tuple[str, ...]:
    """Lower-case, strip, drop blanks and duplicates; keep first-seen order."""
    if tags is None:
        return ()
    if isinstance(tags, (str, bytes)):
        raise ValueError("topic_tags must be a list of strings.")
    seen = []
    for tag in tags:
        value = str(tag).strip().lower()
        if value and value not in seen:
            seen.append(value)
    if len(seen) > MAX_TAGS:
        raise ValueError(f"At most {MAX_TAGS} topic tags are allowed.")
    return tuple(seen)


# ══════════════════════════════════════════════════════════════
# PROPOSAL (validated input)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SessionProposal:
    """Validated session proposal submitted by a participant."""
    title: str
    format: str
    duration: int
    host_id: str
    host_name: str
    description: Optional[str] = None
    topic_tags: Tuple[str, ...] = ()
    is_self_hosted: bool = False
    custom_location: Optional[str] = None

    def __post_init__(self):
        title = self.title.strip() if isinstance(self.title, str) else ""
        if not title:
            raise ValueError("title must be non-empty.")
        if len(title) > MAX_TITLE_LENGTH:
            raise ValueError(f"title must be at most {MAX_TITLE_LENGTH} characters.")
        object.__setattr__(self, "title", title)

        if not isinstance(self.format, str) or self.format not in VALID_SESSION_FORMATS:
            raise ValueError(f"Invalid format: {self.format!r}")
        if (
            isinstance(self.duration, bool)
            or not isinstance(self.duration, int)
            or self.duration not in VALID_DURATIONS
        ):
            raise ValueError(f"Invalid duration: {self.duration}")
        if not self.host_id:
            raise ValueError("host_id must be non-empty.")
        if not self.host_name or not str(self.host_name).strip():
            raise ValueError("host_name must be non-empty.")

        if self.description is not None and not isinstance(self.description, str):
            raise ValueError("description must be a string or None.")
        description = (self.description or "").strip()
        object.__setattr__(self, "description", description or None)
        object.__setattr__(self, "topic_tags", normalize_tags(self.topic_tags))

        if self.custom_location is not None and not isinstance(self.custom_location, str):
            raise ValueError("custom_location must be a string or None.")
        location = (self.custom_location or "").strip()
        if not self.is_self_hosted:
            location = ""
        object.__setattr__(self, "custom_location", location or None)


# ══════════════════════════════════════════════════════════════
# SESSION RECORD (read model with vote aggregates)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SessionRecord:
    session_id: uuid.UUID
    title: str
    format: str
    duration: int
    status: str
    host_id: str
    host_name: str
    created_at: datetime
    description: Optional[str] = None
    topic_tags: Tuple[str, ...] = ()
    is_self_hosted: bool = False
    custom_location: Optional[str] = None
    total_votes: int = 0
    voter_count: int = 0
    total_credits: int = 0

    def to_dict(self) -> dict:
        return {
            "id": str(self.session_id),
            "title": self.title,
            "description": self.description,
            "format": self.format,
            "duration": self.duration,
            "status": self.status,
            "host_id": self.host_id,
            "host_name": self.host_name,
            "topic_tags": list(self.topic_tags),
            "is_self_hosted": self.is_self_hosted,
            "custom_location": self.custom_location,
            "created_at": self.created_at.isoformat(),
            "total_votes": self.total_votes,
            "voter_count": self.voter_count,
            "total_credits": self.total_credits,
        }
