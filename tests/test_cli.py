import json
from datetime import datetime, timedelta

import pytest

from focusquest.models.user_stats import UserStats

from helpers import T0


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


def test_decay_command(db, runner, make_user, make_stats):
    stats = make_stats(
        make_user(), leaderboard_score=100.0, last_score_update=T0 - timedelta(days=2)
    )

    result = runner.invoke(args=["stats", "decay", "--now", "2025-06-02 12:00:00"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"updated_count": 1}
    db.session.expire_all()
    assert db.session.get(UserStats, stats.id).leaderboard_score == pytest.approx(96.04)


def test_leaderboard_command(runner, make_user, make_stats):
    make_stats(make_user(), category="physical", leaderboard_score=10.0)
    make_stats(make_user(), category="mental", leaderboard_score=20.0)

    result = runner.invoke(args=["stats", "leaderboard", "--category", "mental"])

    assert result.exit_code == 0, result.output
    rows = json.loads(result.output)["leaderboard"]
    assert [r["category"] for r in rows] == ["mental"]
    assert rows[0]["leaderboard_score"] == 20.0


def test_reconcile_streaks_command(runner, make_user, make_stats):
    make_stats(make_user(), streak_days=3, last_activity=datetime(2000, 1, 1))

    result = runner.invoke(args=["stats", "reconcile-streaks"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"updated_count": 1}
