"""
Tests for core.credits — quadratic credit arithmetic and the budget gate.
"""

import pytest

from core.commands.rejection import ReasonCode, RejectionReason
from core.credits import (
    TOTAL_CREDITS,
    InvalidCreditInput,
    VoteChange,
    apply_delta,
    can_decrement,
    can_increment,
    credits_for_votes,
    marginal_cost,
    max_affordable_votes,
    remaining_credits,
    votes_for_credits,
)


# ── Cost functions ───────────────────────────────────────────

class TestCostFunctions:
    @pytest.mark.parametrize("votes", range(0, 150))
    def test_credits_are_votes_squared(self, votes):
        assert credits_for_votes(votes) == votes * votes

    @pytest.mark.parametrize("votes", range(0, 150))
    def test_marginal_cost_is_odd_and_increasing(self, votes):
        cost = marginal_cost(votes)
        assert cost == 2 * votes + 1
        assert cost % 2 == 1
        assert marginal_cost(votes + 1) > cost

    @pytest.mark.parametrize("votes", range(0, 50))
    def test_marginal_cost_is_difference_of_totals(self, votes):
        assert marginal_cost(votes) == credits_for_votes(votes + 1) - credits_for_votes(votes)

    @pytest.mark.parametrize("credits", range(0, 300))
    def test_votes_for_credits_is_largest_affordable(self, credits):
        votes = votes_for_credits(credits)
        assert credits_for_votes(votes) <= credits < credits_for_votes(votes + 1)

    @pytest.mark.parametrize(
        "credits,expected",
        [(0, 0), (1, 1), (3, 1), (4, 2), (99, 9), (100, 10)],
    )
    def test_votes_for_credits_reference_values(self, credits, expected):
        assert votes_for_credits(credits) == expected

    def test_votes_for_credits_exact_for_large_values(self):
        big = 10 ** 40
        assert votes_for_credits(big * big) == big
        assert votes_for_credits(big * big - 1) == big - 1

    def test_remaining_credits(self):
        assert remaining_credits(36) == 64
        assert remaining_credits(0, 50) == 50


# ── Admission gates ──────────────────────────────────────────

class TestAdmissionGates:
    @pytest.mark.parametrize("spent", [0, 1, 50, 84, 85, 99, 100])
    @pytest.mark.parametrize("current", [0, 1, 3, 7, 10])
    def test_can_increment_matches_definition(self, spent, current):
        expected = spent + marginal_cost(current) <= 100
        assert can_increment(spent, current, 100) is expected

    @pytest.mark.parametrize("current", range(0, 20))
    def test_can_decrement_above_zero(self, current):
        assert can_decrement(current) is (current > 0)

    def test_default_budget_is_reference_total(self):
        assert TOTAL_CREDITS == 100
        assert can_increment(99, 0)
        assert not can_increment(100, 0)

    def test_max_affordable_votes(self):
        assert max_affordable_votes(0, 0, 100) == 10
        assert max_affordable_votes(90, 0, 100) == 3
        # 9 of the 90 credits are already on this session
        assert max_affordable_votes(90, 3, 100) == 4
        assert max_affordable_votes(100, 10, 100) == 10
        assert max_affordable_votes(120, 0, 100) == 0


# ── apply_delta ──────────────────────────────────────────────

class TestApplyDelta:
    def test_increment_returns_vote_change(self):
        change = apply_delta(0, 1, 0, 100)
        assert isinstance(change, VoteChange)
        assert change.new_vote_count == 1
        assert change.new_credits_spent == 1
        assert change.credits_delta == 1
        assert change.total_after == 1
        assert not change.deletes_row

    def test_rejection_is_returned_not_raised(self):
        result = apply_delta(7, 1, 90, 100)
        assert isinstance(result, RejectionReason)
        assert result.code == ReasonCode.BUDGET_EXCEEDED
        assert result.policy_name == "apply_delta"
        assert result.message_params["total_after"] == 105

    def test_total_uses_full_recomputed_cost(self):
        # 2 → 5 votes: 4 → 25 credits, not 3 marginal steps summed from a tally
        change = apply_delta(2, 3, 30, 100)
        assert change.new_credits_spent == 25
        assert change.total_after == 30 - 4 + 25

    def test_multi_step_jump_rejected_when_over_budget(self):
        result = apply_delta(0, 11, 0, 100)
        assert isinstance(result, RejectionReason)

    def test_exactly_at_budget_is_allowed(self):
        change = apply_delta(0, 10, 0, 100)
        assert change.total_after == 100

    def test_decrement_clamps_at_zero(self):
        change = apply_delta(2, -5, 4, 100)
        assert change.new_vote_count == 0
        assert change.new_credits_spent == 0
        assert change.deletes_row

    def test_zero_delta_is_noop(self):
        change = apply_delta(3, 0, 9, 100)
        assert change.is_noop
        assert change.credits_delta == 0

    def test_decrement_allowed_when_already_over_budget(self):
        # Budget lowered after votes were cast: giving votes back must still work
        change = apply_delta(5, -1, 120, 100)
        assert isinstance(change, VoteChange)
        assert change.total_after == 111

    @pytest.mark.parametrize("votes", range(0, 10))
    @pytest.mark.parametrize("spent_elsewhere", [0, 10, 50])
    def test_plus_then_minus_round_trip(self, votes, spent_elsewhere):
        spent = spent_elsewhere + votes * votes
        up = apply_delta(votes, 1, spent, 1000)
        down = apply_delta(up.new_vote_count, -1, up.total_after, 1000)
        assert (down.new_vote_count, down.new_credits_spent) == (votes, votes * votes)
        assert down.total_after == spent

    def test_vote_change_is_frozen(self):
        change = apply_delta(0, 1, 0, 100)
        with pytest.raises(AttributeError):
            change.new_vote_count = 9


# ── Reference scenarios ──────────────────────────────────────

class TestScenarios:
    def test_scenario_a_five_increments_then_sixth(self):
        votes, spent = 0, 0
        seen = []
        for _ in range(5):
            change = apply_delta(votes, 1, spent, 100)
            votes, spent = change.new_vote_count, change.total_after
            seen.append((votes, change.new_credits_spent))
        assert seen == [(1, 1), (2, 4), (3, 9), (4, 16), (5, 25)]
        assert can_increment(spent, votes, 100)
        assert apply_delta(votes, 1, spent, 100).total_after == 36

    def test_scenario_a_heavy_spender(self):
        assert can_increment(90, 1, 100)
        assert not can_increment(90, 7, 100)
        assert isinstance(apply_delta(7, 1, 90, 100), RejectionReason)

    def test_scenario_b_decrements(self):
        change = apply_delta(4, -1, 16, 100)
        assert change.new_vote_count == 3
        assert change.new_credits_spent == 9
        to_zero = apply_delta(4, -4, 16, 100)
        assert to_zero.new_vote_count == 0
        assert to_zero.deletes_row


# ── Input contract ───────────────────────────────────────────

class TestInvalidInput:
    @pytest.mark.parametrize(
        "call",
        [
            lambda: credits_for_votes(-1),
            lambda: marginal_cost(-3),
            lambda: votes_for_credits(-1),
            lambda: can_increment(-1, 0, 100),
            lambda: can_increment(0, -1, 100),
            lambda: can_decrement(-1),
            lambda: apply_delta(-1, 1, 0, 100),
            lambda: apply_delta(0, 1, -5, 100),
        ],
    )
    def test_negative_inputs_raise(self, call):
        with pytest.raises(InvalidCreditInput, match=">= 0"):
            call()

    @pytest.mark.parametrize("value", [1.0, "3", None, True])
    def test_non_integer_votes_raise(self, value):
        with pytest.raises(InvalidCreditInput, match="integer"):
            credits_for_votes(value)

    @pytest.mark.parametrize("budget", [0, -10])
    def test_non_positive_budget_raises(self, budget):
        with pytest.raises(InvalidCreditInput, match="total_budget"):
            can_increment(0, 0, budget)

    def test_non_integer_delta_raises(self):
        with pytest.raises(InvalidCreditInput, match="delta"):
            apply_delta(0, 0.5, 0, 100)

    def test_invalid_input_is_a_value_error(self):
        assert issubclass(InvalidCreditInput, ValueError)
