"""
Agora Voting — Public API
===========================
Participant ballots, vote outcomes, and the voting service.
"""

from core.voting.ballot import Ballot, BallotSnapshot
from core.voting.outcomes import VoteOutcome, VoteStatus
from core.voting.service import VotingService

__all__ = [
    "Ballot",
    "BallotSnapshot",
    "VoteOutcome",
    "VoteStatus",
    "VotingService",
]
