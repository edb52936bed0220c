# focusquest/services/stats_aggregator.py
from datetime import datetime
from typing import Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError

from .. import db
from ..clock import utcnow
from ..errors import StatsConflictError
from ..models.user_stats import UserStats
from .scoring import ScorePolicy, next_streak, score_update


def _locked_stats(user_id: int, category: str) -> Optional[UserStats]:
    # Row lock held until commit; a concurrent decay sweep waits on it
    return (
        UserStats.query.filter_by(user_id=user_id, category=category)
        .with_for_update()
        .first()
    )


def _insert_first_completion(
    user_id: int, category: str, duration: int, now: datetime, policy: ScorePolicy
) -> Optional[UserStats]:
    """
    Create the row for a first completion. Returns None when another writer
    created it first (unique constraint on user_id + category).
    """
    stats = UserStats(
        user_id=user_id,
        category=category,
        total_sessions=1,
        completed_sessions=1,
        total_duration=duration,
        streak_days=1,
        last_activity=now,
        created_at=now,
        **score_update(policy.score(1, duration, 1), now),
    )
    try:
        with db.session.begin_nested():
            db.session.add(stats)
    except IntegrityError:
        return None
    return stats


def _apply_completion(
    stats: UserStats,
    duration: int,
    now: datetime,
    policy: ScorePolicy,
    same_day_policy: str,
) -> None:
    stats.total_sessions = int(stats.total_sessions or 0) + 1
    stats.completed_sessions = int(stats.completed_sessions or 0) + 1
    stats.total_duration = int(stats.total_duration or 0) + duration
    stats.streak_days = next_streak(
        stats.streak_days, stats.last_activity, now, same_day_policy
    )
    stats.last_activity = now

    new_score = policy.score(
        stats.completed_sessions, stats.total_duration, stats.streak_days
    )
    for column, value in score_update(new_score, now).items():
        setattr(stats, column, value)


def record_completion(
    user_id: int,
    category: str,
    actual_duration: int,
    now: Optional[datetime] = None,
) -> UserStats:
    """
    Fold one completed session into the (user, category) stats row and
    recompute its leaderboard score. Commits on success; rolls back and
    re-raises on failure.
    """
    now = now or utcnow()
    duration = max(0, int(actual_duration or 0))
    policy = ScorePolicy.from_config(current_app.config)
    same_day_policy = current_app.config.get("STREAK_SAME_DAY_POLICY", "increment")

    try:
        stats = _locked_stats(user_id, category)
        if stats is None:
            stats = _insert_first_completion(user_id, category, duration, now, policy)
            if stats is None:
                # Lost the insert race: the row exists now, update it instead
                stats = _locked_stats(user_id, category)
                if stats is None:
                    raise StatsConflictError(user_id, category)
                _apply_completion(stats, duration, now, policy, same_day_policy)
        else:
            _apply_completion(stats, duration, now, policy, same_day_policy)

        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    current_app.logger.info(
        f"[stats] user_id={user_id} category={category} "
        f"completed={stats.completed_sessions} streak={stats.streak_days} "
        f"score={stats.leaderboard_score:.2f}"
    )
    return stats


def record_completion_safely(
    user_id: int,
    category: str,
    actual_duration: int,
    now: Optional[datetime] = None,
) -> Optional[UserStats]:
    """
    Same as record_completion, but a failure is logged and swallowed so the
    caller's session completion is never blocked by a stats error.
    """
    try:
        return record_completion(user_id, category, actual_duration, now)
    except Exception:
        current_app.logger.exception(
            f"[stats] failed to record completion user_id={user_id} category={category}"
        )
        return None
