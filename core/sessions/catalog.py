"""
Agora Sessions — Catalogue Queries
====================================
Search, format filter and sort over session records.
Shared by every store backend so listings agree everywhere.
"""

from __future__ import annotations

import uuid
from typing import Iterable, List, Optional, Protocol, Tuple

from core.sessions.proposals import SessionProposal, SessionRecord, VALID_SESSION_FORMATS

SORT_VOTES = "votes"
SORT_RECENT = "recent"
SORT_ALPHA = "alpha"

VALID_SORTS = frozenset({SORT_VOTES, SORT_RECENT, SORT_ALPHA})

FORMAT_ALL = "all"


class SessionCatalog(Protocol):
    def propose_session(self, proposal: SessionProposal) -> SessionRecord:
        ...

    def get_session(self, session_id: uuid.UUID) -> Optional[SessionRecord]:
        ...

    def list_sessions(self, statuses: Tuple[str, ...]) -> Tuple[SessionRecord, ...]:
        ...


def _matches_search(session: SessionRecord, needle: str) -> bool:
    haystacks = (session.title, session.description or "", session.host_name or "")
    return any(needle in value.lower() for value in haystacks)


def filter_and_sort_sessions(
    sessions: Iterable[SessionRecord],
    *,
    search: Optional[str] = None,
    format: str = FORMAT_ALL,
    sort: str = SORT_VOTES,
) -> List[SessionRecord]:
    if sort not in VALID_SORTS:
        raise ValueError(f"Invalid sort: {sort}")
    if format != FORMAT_ALL and format not in VALID_SESSION_FORMATS:
        raise ValueError(f"Invalid format: {format}")

    filtered = list(sessions)

    needle = (search or "").strip().lower()
    if needle:
        filtered = [s for s in filtered if _matches_search(s, needle)]

    if format != FORMAT_ALL:
        filtered = [s for s in filtered if s.format == format]

    # Stable tie-break on id keeps listings deterministic
    if sort == SORT_VOTES:
        return sorted(filtered, key=lambda s: (-s.total_votes, str(s.session_id)))
    if sort == SORT_RECENT:
        filtered.sort(key=lambda s: str(s.session_id))
        return sorted(filtered, key=lambda s: s.created_at, reverse=True)
    return sorted(filtered, key=lambda s: (s.title.lower(), str(s.session_id)))


def list_votable_sessions(
    catalog: SessionCatalog,
    votable_statuses: Tuple[str, ...],
    *,
    search: Optional[str] = None,
    format: str = FORMAT_ALL,
    sort: str = SORT_VOTES,
) -> List[SessionRecord]:
    return filter_and_sort_sessions(
        catalog.list_sessions(votable_statuses),
        search=search,
        format=format,
        sort=sort,
    )
