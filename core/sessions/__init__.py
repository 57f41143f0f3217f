"""
Agora Sessions — Public API
=============================
Session proposals and catalogue listing.
"""

from core.sessions.catalog import (
    FORMAT_ALL,
    SORT_ALPHA,
    SORT_RECENT,
    SORT_VOTES,
    VALID_SORTS,
    SessionCatalog,
    filter_and_sort_sessions,
    list_votable_sessions,
)
from core.sessions.proposals import (
    STATUS_APPROVED,
    STATUS_PENDING,
    STATUS_REJECTED,
    STATUS_SCHEDULED,
    VALID_DURATIONS,
    VALID_SESSION_FORMATS,
    VALID_SESSION_STATUSES,
    SessionProposal,
    SessionRecord,
    normalize_tags,
)

__all__ = [
    "FORMAT_ALL",
    "SORT_ALPHA",
    "SORT_RECENT",
    "SORT_VOTES",
    "VALID_SORTS",
    "SessionCatalog",
    "filter_and_sort_sessions",
    "list_votable_sessions",
    "STATUS_APPROVED",
    "STATUS_PENDING",
    "STATUS_REJECTED",
    "STATUS_SCHEDULED",
    "VALID_DURATIONS",
    "VALID_SESSION_FORMATS",
    "VALID_SESSION_STATUSES",
    "SessionProposal",
    "SessionRecord",
    "normalize_tags",
]
