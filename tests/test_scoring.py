import pytest

from samegame.systems.scoring import ScoringRules, squared_remaining_penalty


def test_move_points_follow_square_rule():
    rules = ScoringRules()
    assert rules.points_for_move(2) == 0
    assert rules.points_for_move(3) == 1
    assert rules.points_for_move(10) == 64


def test_singleton_is_not_a_move():
    with pytest.raises(ValueError):
        ScoringRules().points_for_move(1)


def test_default_loss_penalty_is_remaining_count():
    rules = ScoringRules()
    assert rules.penalty_for_loss(0) == 0
    assert rules.penalty_for_loss(7) == 7


def test_custom_loss_policy():
    rules = ScoringRules(loss_penalty=squared_remaining_penalty)
    assert rules.penalty_for_loss(3) == 9


def test_negative_penalty_policy_is_rejected():
    rules = ScoringRules(loss_penalty=lambda remaining: -remaining)
    with pytest.raises(ValueError):
        rules.penalty_for_loss(2)


def test_minimum_group_size_validation():
    with pytest.raises(ValueError):
        ScoringRules(min_group_size=1)
    rules = ScoringRules(min_group_size=3)
    with pytest.raises(ValueError):
        rules.points_for_move(2)
    assert rules.points_for_move(3) == 1
