# focusquest/services/scoring.py
"""
Score, streak and decay arithmetic shared by the completion path and the
decay sweep. Nothing in here touches the database.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Mapping, Optional

DAY = timedelta(days=1)

STREAK_POLICY_INCREMENT = "increment"
STREAK_POLICY_HOLD = "hold"


@dataclass(frozen=True)
class ScorePolicy:
    """
    score = completed * session_weight
          + floor(duration / duration_divisor)
          + min(streak * streak_weight, streak_cap)
    """

    session_weight: int = 10
    duration_divisor: int = 10
    streak_weight: int = 5
    streak_cap: int = 100

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "ScorePolicy":
        return cls(
            session_weight=int(config.get("SCORE_SESSION_WEIGHT", 10)),
            duration_divisor=int(config.get("SCORE_DURATION_DIVISOR", 10)),
            streak_weight=int(config.get("SCORE_STREAK_WEIGHT", 5)),
            streak_cap=int(config.get("SCORE_STREAK_CAP", 100)),
        )

    def streak_bonus(self, streak_days: int) -> int:
        return min(max(0, int(streak_days)) * self.streak_weight, self.streak_cap)

    def score(self, completed_sessions: int, total_duration: int, streak_days: int) -> float:
        completed_sessions = max(0, int(completed_sessions or 0))
        total_duration = max(0, int(total_duration or 0))
        return float(
            completed_sessions * self.session_weight
            + total_duration // self.duration_divisor
            + self.streak_bonus(streak_days or 0)
        )


def whole_days_between(earlier: datetime, later: datetime) -> int:
    """Floor of the elapsed time in days (negative if `later` is earlier)."""
    return (later - earlier) // DAY


def elapsed_days(earlier: datetime, later: datetime) -> float:
    return (later - earlier) / DAY


def next_streak(
    previous_streak: int,
    last_activity: Optional[datetime],
    now: datetime,
    same_day_policy: str = STREAK_POLICY_INCREMENT,
) -> int:
    """
    Streak after a completion at `now`.

    No prior activity starts a streak at 1. A completion on the next day
    extends it; a gap of two or more whole days starts over at 1. For a
    completion on the same day, "increment" extends the streak like a
    consecutive day, while "hold" leaves it unchanged.
    """
    if last_activity is None:
        return 1

    previous_streak = max(0, int(previous_streak or 0))
    days = whole_days_between(last_activity, now)

    if days > 1:
        return 1
    if days <= 0 and same_day_policy == STREAK_POLICY_HOLD:
        return max(previous_streak, 1)
    return previous_streak + 1


def decayed_score(score: float, factor: float, days: float) -> float:
    if score <= 0 or days <= 0:
        return max(0.0, float(score))
    return float(score) * (factor ** days)


def score_update(score: float, now: datetime) -> dict:
    """
    Column values for a score write. Both writers go through this so the
    score never goes negative and the decay clock always moves with it.
    """
    return {
        "leaderboard_score": max(0.0, float(score)),
        "last_score_update": now,
    }
