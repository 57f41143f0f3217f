"""
Agora Vote Store — Public API
===============================
Vote rows, session aggregates, and their store backends.
"""

from core.vote_store.contracts import (
    InvalidVoteRecord,
    SessionNotFound,
    VoteRecord,
    VoteStore,
    VoteStoreError,
    validate_vote_row,
)
from core.vote_store.db import DbVoteStore
from core.vote_store.memory import InMemoryVoteStore

__all__ = [
    "InvalidVoteRecord",
    "SessionNotFound",
    "VoteRecord",
    "VoteStore",
    "VoteStoreError",
    "validate_vote_row",
    "DbVoteStore",
    "InMemoryVoteStore",
]
