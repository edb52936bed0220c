# focusquest/services/leaderboard.py
from datetime import datetime
from typing import Any, List, Optional

from flask import current_app

from .. import db
from ..clock import utcnow
from ..models.focus_session import FocusSession
from ..models.goal import Goal
from ..models.user_stats import UserStats
from .scoring import DAY


def _safe_int(v: Any, default: int) -> int:
    try:
        return int(v)
    except (TypeError, ValueError):
        return default


def _resolve_limit(limit: Any) -> int:
    default = int(current_app.config.get("LEADERBOARD_DEFAULT_LIMIT", 10))
    max_limit = int(current_app.config.get("LEADERBOARD_MAX_LIMIT", 100))
    if limit is None:
        return default
    return max(1, min(_safe_int(limit, default), max_limit))


def get_leaderboard(category: Optional[str] = None, limit: Any = None) -> List[UserStats]:
    """
    Stats rows by leaderboard score, highest first. Ties go to the lower
    user_id, then category. Scores are read as stored: decay only happens
    in the sweep, so rankings are as fresh as the last sweep.
    """
    q = UserStats.query
    if category:
        q = q.filter(UserStats.category == category)

    return (
        q.order_by(
            UserStats.leaderboard_score.desc(),
            UserStats.user_id.asc(),
            UserStats.category.asc(),
        )
        .limit(_resolve_limit(limit))
        .all()
    )


def reconcile_stale_streaks(
    user_id: Optional[int] = None, now: Optional[datetime] = None
) -> int:
    """
    Zero the streak on rows whose last activity is two or more whole days
    old, unless the user completed a session in that category within the
    last day (a completion whose stats write was lost still counts).

    The horizon is two whole days rather than 24 hours: a completion one
    day and some hours after the last one still extends the streak, so
    zeroing it earlier would break streaks the next completion would keep.

    Runs as a single UPDATE so it cannot overwrite a concurrent completion.
    Returns the number of rows changed.
    """
    now = now or utcnow()
    recent_completion = (
        db.select(FocusSession.id)
        .join(Goal, Goal.id == FocusSession.goal_id)
        .where(
            FocusSession.user_id == UserStats.user_id,
            Goal.category == UserStats.category,
            FocusSession.status == "completed",
            FocusSession.completed_at > now - DAY,
        )
        .correlate(UserStats)
        .exists()
    )
    stmt = (
        db.update(UserStats)
        .where(
            UserStats.last_activity.isnot(None),
            UserStats.last_activity <= now - 2 * DAY,
            UserStats.streak_days > 0,
            ~recent_completion,
        )
        .values(streak_days=0)
        .execution_options(synchronize_session=False)
    )
    if user_id is not None:
        stmt = stmt.where(UserStats.user_id == user_id)

    try:
        result = db.session.execute(stmt)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    if result.rowcount:
        current_app.logger.info(
            f"[stats] reset {result.rowcount} stale streak(s) user_id={user_id}"
        )
    return result.rowcount


def get_user_stats(
    user_id: int,
    category: Optional[str] = None,
    now: Optional[datetime] = None,
    reconcile: bool = True,
) -> List[UserStats]:
    """
    All stats rows for one user, optionally for one category.

    With reconcile=True (the default) this is a writing read: stale streaks
    for the user are zeroed first via reconcile_stale_streaks. Pass
    reconcile=False for a pure query.
    """
    if reconcile:
        reconcile_stale_streaks(user_id=user_id, now=now)

    q = UserStats.query.filter(UserStats.user_id == user_id)
    if category:
        q = q.filter(UserStats.category == category)

    return q.order_by(UserStats.category.asc()).all()
