"""
Tests for core.config — deployment voting rules.
"""

from types import SimpleNamespace

import pytest

from core.config.rules import DEFAULT_VOTABLE_STATUSES, VotingRules, load_voting_rules


# ── VotingRules Tests ────────────────────────────────────────

class TestVotingRules:
    def test_defaults_match_reference_deployment(self):
        rules = VotingRules()
        assert rules.total_credits == 100
        assert rules.votable_statuses == ("approved", "scheduled")

    def test_is_votable(self):
        rules = VotingRules()
        assert rules.is_votable("approved")
        assert rules.is_votable("scheduled")
        assert not rules.is_votable("pending")
        assert not rules.is_votable("rejected")

    @pytest.mark.parametrize("total", [0, -1])
    def test_non_positive_budget_rejected(self, total):
        with pytest.raises(ValueError, match="positive"):
            VotingRules(total_credits=total)

    def test_empty_statuses_rejected(self):
        with pytest.raises(ValueError, match="votable_statuses"):
            VotingRules(votable_statuses=())

    def test_frozen_immutability(self):
        rules = VotingRules()
        with pytest.raises(AttributeError):
            rules.total_credits = 50


# ── load_voting_rules Tests ──────────────────────────────────

class TestLoadVotingRules:
    def test_missing_settings_fall_back(self):
        rules = load_voting_rules(SimpleNamespace())
        assert rules.total_credits == 100
        assert rules.votable_statuses == DEFAULT_VOTABLE_STATUSES

    def test_reads_string_values(self):
        rules = load_voting_rules(
            SimpleNamespace(
                AGORA_TOTAL_CREDITS="49",
                AGORA_VOTABLE_STATUSES=" Approved , scheduled ,",
            )
        )
        assert rules.total_credits == 49
        assert rules.votable_statuses == ("approved", "scheduled")

    def test_invalid_total_rejected(self):
        with pytest.raises(ValueError, match="AGORA_TOTAL_CREDITS"):
            load_voting_rules(SimpleNamespace(AGORA_TOTAL_CREDITS="lots"))

    def test_reads_django_settings(self, settings):
        settings.AGORA_TOTAL_CREDITS = 64
        rules = load_voting_rules()
        assert rules.total_credits == 64
