# focusquest/services/score_decay.py
"""
Scheduled leaderboard decay.

Every stats row whose score has not been written for longer than the grace
window loses DECAY_FACTOR of its score per elapsed day, fractional days
included. The sweep is idempotent: touched rows get last_score_update = now,
so running it again at the same instant selects nothing.
"""
from datetime import datetime, timedelta
from typing import Dict, Optional

from flask import current_app

from .. import db
from ..clock import utcnow
from ..models.user_stats import UserStats
from .scoring import decayed_score, elapsed_days, score_update


def _eligible_rows(cutoff: datetime):
    return (
        UserStats.query.filter(
            UserStats.last_score_update < cutoff,
            UserStats.leaderboard_score > 0,
        )
        .order_by(UserStats.id.asc())
        .with_for_update()
        .all()
    )


def sweep_and_decay(now: Optional[datetime] = None) -> Dict[str, int]:
    """
    Decay all stale scores as of `now`. Returns {"updated_count": n}.
    Errors are logged and re-raised for the scheduler to see.
    """
    now = now or utcnow()
    factor = float(current_app.config.get("DECAY_FACTOR", 0.98))
    grace = timedelta(hours=int(current_app.config.get("DECAY_GRACE_HOURS", 24)))
    cutoff = now - grace

    try:
        rows = _eligible_rows(cutoff)

        updates = []
        for row in rows:
            days = elapsed_days(row.last_score_update, now)
            new_score = decayed_score(row.leaderboard_score, factor, days)
            updates.append({"id": row.id, **score_update(new_score, now)})

        if updates:
            # Bulk UPDATE ... WHERE id = :id, executed while the rows are locked
            db.session.execute(db.update(UserStats), updates)
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("[decay] leaderboard decay sweep failed")
        raise

    current_app.logger.info(
        f"[decay] swept at {now.isoformat()} cutoff={cutoff.isoformat()} "
        f"factor={factor} updated={len(updates)}"
    )
    return {"updated_count": len(updates)}
