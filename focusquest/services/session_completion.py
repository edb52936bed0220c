# focusquest/services/session_completion.py
from datetime import datetime
from typing import Optional

from flask import current_app

from .. import db
from ..clock import utcnow
from ..errors import SessionNotActiveError, SessionNotFoundError
from ..models.focus_session import FocusSession, SessionBlock
from .stats_aggregator import record_completion_safely


def complete_session(
    session_id: int,
    actual_duration: Optional[int] = None,
    now: Optional[datetime] = None,
) -> FocusSession:
    """
    Complete an active focus session:
      - status -> "completed", completed_at -> now
      - actual_duration falls back to planned_duration
      - every block attached to the session is lifted
      - the goal category's stats row is updated (best effort)

    The session is committed before stats are touched, so a stats failure
    is logged and never undoes or hides the completion.
    """
    now = now or utcnow()

    session = db.session.get(FocusSession, session_id)
    if session is None:
        raise SessionNotFoundError(session_id)
    if session.status != "active":
        raise SessionNotActiveError(session_id, session.status)

    duration = actual_duration or session.planned_duration
    category = session.goal.category

    try:
        session.status = "completed"
        session.completed_at = now
        session.actual_duration = max(0, int(duration or 0))

        SessionBlock.query.filter_by(session_id=session.id, is_active=True).update(
            {"is_active": False}, synchronize_session="fetch"
        )
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    current_app.logger.info(
        f"[sessions] completed session_id={session.id} user_id={session.user_id} "
        f"duration={session.actual_duration}"
    )

    record_completion_safely(
        user_id=session.user_id,
        category=category,
        actual_duration=session.actual_duration,
        now=now,
    )
    return session
