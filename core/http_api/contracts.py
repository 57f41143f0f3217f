"""
Agora HTTP API - Contracts
==========================
Framework-agnostic request/response DTOs for voting and catalogue endpoints.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Optional

from core.sessions.catalog import FORMAT_ALL, SORT_VOTES, VALID_SORTS
from core.sessions.proposals import VALID_SESSION_FORMATS


@dataclass(frozen=True)
class VoteCastHttpRequest:
    session_id: uuid.UUID
    delta: int

    def __post_init__(self):
        if not isinstance(self.session_id, uuid.UUID):
            raise ValueError("session_id must be UUID.")
        if isinstance(self.delta, bool) or not isinstance(self.delta, int):
            raise ValueError("delta must be an integer.")
        if self.delta == 0:
            raise ValueError("delta must be non-zero.")


@dataclass(frozen=True)
class SessionReadRequest:
    session_id: uuid.UUID

    def __post_init__(self):
        if not isinstance(self.session_id, uuid.UUID):
            raise ValueError("session_id must be UUID.")


@dataclass(frozen=True)
class SessionListHttpRequest:
    search: Optional[str] = None
    format: str = FORMAT_ALL
    sort: str = SORT_VOTES

    def __post_init__(self):
        if self.search is not None and not isinstance(self.search, str):
            raise ValueError("search must be a string or None.")
        if self.format != FORMAT_ALL and self.format not in VALID_SESSION_FORMATS:
            raise ValueError(f"Invalid format: {self.format}")
        if self.sort not in VALID_SORTS:
            raise ValueError(f"Invalid sort: {self.sort}")


@dataclass(frozen=True)
class SessionProposeHttpRequest:
    title: str
    format: str
    duration: int
    description: Optional[str] = None
    topic_tags: tuple[str, ...] = field(default_factory=tuple)
    is_self_hosted: bool = False
    custom_location: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.title, str):
            raise ValueError("title must be a string.")
        if not isinstance(self.format, str):
            raise ValueError("format must be a string.")
        if self.description is not None and not isinstance(self.description, str):
            raise ValueError("description must be a string or None.")
        if isinstance(self.duration, bool) or not isinstance(self.duration, int):
            raise ValueError("duration must be an integer.")
        if not isinstance(self.topic_tags, tuple):
            raise ValueError("topic_tags must be a tuple.")
        if not all(isinstance(tag, str) for tag in self.topic_tags):
            raise ValueError("topic_tags must contain only strings.")
        if not isinstance(self.is_self_hosted, bool):
            raise ValueError("is_self_hosted must be a boolean.")
        if self.custom_location is not None and not isinstance(self.custom_location, str):
            raise ValueError("custom_location must be a string or None.")


@dataclass(frozen=True)
class HttpApiErrorBody:
    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class HttpApiResponse:
    ok: bool
    data: Any = None
    error: Optional[HttpApiErrorBody] = None

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            return {"ok": True, "data": self.data}
        if self.error is None:
            raise ValueError("error must be set when ok is False.")
        return {"ok": False, "error": self.error.to_dict()}
