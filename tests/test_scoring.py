from datetime import timedelta

import pytest

from focusquest.services.scoring import (
    ScorePolicy,
    decayed_score,
    elapsed_days,
    next_streak,
    score_update,
    whole_days_between,
)

from helpers import T0


def test_score_formula_default_weights():
    policy = ScorePolicy()
    assert policy.score(1, 35, 1) == 18.0
    assert policy.score(2, 60, 2) == 36.0
    assert policy.score(8, 120, 5) == 80 + 12 + 25


def test_streak_bonus_is_capped():
    policy = ScorePolicy()
    assert policy.streak_bonus(20) == 100
    assert policy.streak_bonus(400) == 100
    assert policy.score(0, 0, 400) == 100.0


def test_score_is_monotonic_in_each_input():
    policy = ScorePolicy()
    base = policy.score(3, 90, 4)
    assert policy.score(4, 90, 4) > base
    assert policy.score(3, 100, 4) > base
    assert policy.score(3, 90, 5) > base


def test_score_clamps_negative_inputs():
    assert ScorePolicy().score(-1, -50, -3) == 0.0


def test_policy_from_config():
    policy = ScorePolicy.from_config(
        {
            "SCORE_SESSION_WEIGHT": 3,
            "SCORE_DURATION_DIVISOR": 5,
            "SCORE_STREAK_WEIGHT": 2,
            "SCORE_STREAK_CAP": 10,
        }
    )
    assert policy.score(2, 26, 9) == 6 + 5 + 10


def test_whole_days_floors_elapsed_time():
    assert whole_days_between(T0, T0 + timedelta(hours=23, minutes=59)) == 0
    assert whole_days_between(T0, T0 + timedelta(days=1)) == 1
    assert whole_days_between(T0, T0 + timedelta(days=1, hours=23)) == 1
    assert whole_days_between(T0, T0 + timedelta(days=2)) == 2
    assert whole_days_between(T0, T0 - timedelta(hours=1)) == -1


def test_elapsed_days_is_fractional():
    assert elapsed_days(T0, T0 + timedelta(hours=36)) == pytest.approx(1.5)


@pytest.mark.parametrize(
    "previous, gap, expected",
    [
        (0, None, 1),
        (3, timedelta(hours=2), 4),
        (3, timedelta(days=1), 4),
        (3, timedelta(days=1, hours=20), 4),
        (5, timedelta(days=2), 1),
        (5, timedelta(days=3), 1),
        (5, -timedelta(hours=1), 6),
    ],
)
def test_next_streak_increment_policy(previous, gap, expected):
    last_activity = None if gap is None else T0 - gap
    assert next_streak(previous, last_activity, T0) == expected


def test_next_streak_hold_policy_keeps_same_day_streak():
    assert next_streak(3, T0 - timedelta(hours=2), T0, "hold") == 3
    assert next_streak(0, T0 - timedelta(hours=2), T0, "hold") == 1
    assert next_streak(3, T0 - timedelta(days=1), T0, "hold") == 4
    assert next_streak(3, T0 - timedelta(days=4), T0, "hold") == 1


def test_decayed_score():
    assert decayed_score(100.0, 0.98, 2) == pytest.approx(96.04)
    assert decayed_score(100.0, 0.98, 0.5) == pytest.approx(100.0 * 0.98 ** 0.5)
    assert decayed_score(0.0, 0.98, 10) == 0.0
    assert decayed_score(50.0, 0.98, 0) == 50.0


def test_score_update_never_negative_and_moves_clock():
    values = score_update(-4.0, T0)
    assert values == {"leaderboard_score": 0.0, "last_score_update": T0}
