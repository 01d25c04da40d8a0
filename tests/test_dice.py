"""Unit tests for the d6 pool roller."""

import pytest

from infected.modules.dice.roller import (
    MAX_BONUS_DICE,
    DieResult,
    Outcome,
    RollOutcome,
    classify,
    critical_ones,
    format_roll,
    push_roll,
    roll_pool,
    with_extra_hit,
)
from infected.modules.dice.source import RandomSource


class TestRollPool:
    def test_roll_returns_correct_structure(self, scripted):
        result = roll_pool(3, source=scripted(5, 3, 2))
        assert isinstance(result, RollOutcome)
        assert [d.value for d in result.dice] == [5, 3, 2]
        assert result.bonus_dice == ()
        assert result.total_hits == 1
        assert result.description is Outcome.PARTIAL_SUCCESS
        assert result.is_critical_failure is False
        assert result.pushed is False

    def test_hits_are_fives_and_sixes(self, scripted):
        result = roll_pool(4, source=scripted(4, 5, 1, 3))
        assert [d.is_hit for d in result.dice] == [False, True, False, False]

    @pytest.mark.parametrize("size", [0, -3])
    def test_roll_minimum_one_die(self, scripted, size):
        result = roll_pool(size, source=scripted(4))
        assert len(result.dice) == 1

    def test_six_grants_bonus_die(self, scripted):
        result = roll_pool(3, source=scripted(6, 2, 3, 5))
        assert len(result.bonus_dice) == 1
        bonus = result.bonus_dice[0]
        assert bonus == DieResult(value=5, is_hit=True, is_explosion=True)
        assert result.total_hits == 2
        assert result.description is Outcome.SUCCESS

    def test_bonus_dice_capped_at_three(self, scripted):
        source = scripted(6, 6, 6, 6, 6, 6, 6, 6)
        result = roll_pool(5, source=source)
        assert len(result.bonus_dice) == MAX_BONUS_DICE
        assert result.total_hits == 5 + MAX_BONUS_DICE
        assert source.remaining == 0

    def test_bonus_dice_chain_under_shared_cap(self, scripted):
        result = roll_pool(1, source=scripted(6, 6, 6, 2))
        assert [d.value for d in result.bonus_dice] == [6, 6, 2]
        assert result.total_hits == 3
        assert result.description is Outcome.STRONG_SUCCESS

    def test_bonus_chain_stops_on_non_six(self, scripted):
        source = scripted(6, 1, 6, 3)
        result = roll_pool(2, source=source)
        assert [d.value for d in result.bonus_dice] == [6, 3]
        assert source.remaining == 0

    def test_random_rolls_stay_within_bounds(self):
        source = RandomSource(2024)
        for size in range(1, 9):
            for _ in range(50):
                result = roll_pool(size, source=source)
                assert len(result.dice) == size
                assert len(result.bonus_dice) <= MAX_BONUS_DICE
                assert result.total_hits <= size + MAX_BONUS_DICE
                hits = sum(d.is_hit for d in result.dice + result.bonus_dice)
                assert result.total_hits == hits
                assert all(1 <= d.value <= 6 for d in result.dice)
                assert not any(d.is_critical_one for d in result.dice)


class TestCriticalFailure:
    def test_more_than_half_ones_without_hits(self, scripted):
        result = roll_pool(3, source=scripted(1, 1, 2))
        assert result.is_critical_failure is True
        assert result.description is Outcome.CRITICAL_FAILURE
        assert result.total_hits == 0

    def test_single_one_is_critical(self, scripted):
        assert roll_pool(1, source=scripted(1)).is_critical_failure is True

    def test_exactly_half_ones_is_plain_failure(self, scripted):
        result = roll_pool(4, source=scripted(1, 1, 2, 3))
        assert result.is_critical_failure is False
        assert result.description is Outcome.FAILURE

    def test_any_hit_prevents_critical(self, scripted):
        result = roll_pool(3, source=scripted(1, 1, 5))
        assert result.is_critical_failure is False
        assert result.description is Outcome.PARTIAL_SUCCESS

    def test_pushed_roll_never_critical(self, scripted):
        result = roll_pool(3, is_push=True, source=scripted(1, 1, 2))
        assert result.is_critical_failure is False
        assert result.description is Outcome.FAILURE
        assert [d.is_critical_one for d in result.dice] == [True, True, False]

    def test_bonus_dice_never_flag_critical_ones(self, scripted):
        result = roll_pool(2, is_push=True, source=scripted(6, 1, 1))
        assert result.dice[1].is_critical_one is True
        assert result.bonus_dice[0].value == 1
        assert result.bonus_dice[0].is_critical_one is False


@pytest.mark.parametrize(
    "hits, expected",
    [
        (0, Outcome.FAILURE),
        (1, Outcome.PARTIAL_SUCCESS),
        (2, Outcome.SUCCESS),
        (3, Outcome.STRONG_SUCCESS),
        (7, Outcome.STRONG_SUCCESS),
    ],
)
def test_classify(hits, expected):
    assert classify(hits) is expected


def test_classify_critical_overrides():
    assert classify(0, critical_failure=True) is Outcome.CRITICAL_FAILURE


class TestPush:
    def test_push_keeps_hits_and_rerolls_the_rest(self, scripted):
        original = roll_pool(3, source=scripted(5, 2, 1))
        pushed = push_roll(original, source=scripted(6, 3, 4))
        assert [d.value for d in pushed.dice] == [5, 6, 3]
        assert [d.value for d in pushed.bonus_dice] == [4]
        assert pushed.total_hits == 2
        assert pushed.description is Outcome.SUCCESS
        assert pushed.pushed is True

    def test_push_flags_critical_ones(self, scripted):
        original = roll_pool(2, source=scripted(2, 2))
        pushed = push_roll(original, source=scripted(1, 5))
        assert critical_ones(pushed) == 1
        assert pushed.is_critical_failure is False
        assert pushed.total_hits == 1

    def test_push_cannot_fail_critically(self, scripted):
        original = roll_pool(2, source=scripted(2, 3))
        pushed = push_roll(original, source=scripted(1, 1))
        assert pushed.total_hits == 0
        assert pushed.is_critical_failure is False
        assert pushed.description is Outcome.FAILURE

    def test_push_respects_remaining_bonus_cap(self, scripted):
        original = roll_pool(4, source=scripted(6, 6, 6, 2, 2, 2, 2))
        assert len(original.bonus_dice) == 3
        source = scripted(6)
        pushed = push_roll(original, source=source)
        assert len(pushed.bonus_dice) == 3
        assert pushed.total_hits == 4
        assert source.remaining == 0

    def test_cannot_push_a_pushed_roll(self, scripted):
        original = roll_pool(2, source=scripted(2, 3))
        pushed = push_roll(original, source=scripted(4, 4))
        with pytest.raises(ValueError):
            push_roll(pushed, source=scripted(4, 4))


def test_extra_hit_upgrades_outcome(scripted):
    result = roll_pool(2, source=scripted(1, 1))
    assert result.is_critical_failure is True
    boosted = with_extra_hit(result)
    assert boosted.total_hits == 1
    assert boosted.is_critical_failure is False
    assert boosted.description is Outcome.PARTIAL_SUCCESS


class TestFormat:
    def test_format_without_bonus(self, scripted):
        result = roll_pool(2, source=scripted(5, 2))
        assert format_roll(result) == "[5]✓ [2] = 1 hits (Partial Success)"

    def test_format_with_bonus(self, scripted):
        result = roll_pool(2, source=scripted(6, 2, 3))
        assert format_roll(result) == "[6]✓ [2] → [3] = 1 hits (Partial Success)"

    def test_outcome_labels(self):
        assert Outcome.CRITICAL_FAILURE.label == "CRITICAL FAILURE"
        assert Outcome.STRONG_SUCCESS.label == "Strong Success"
