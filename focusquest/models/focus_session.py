# focusquest/models/focus_session.py
from ..clock import utcnow
from .. import db
from .user import ID_TYPE

SESSION_STATUSES = ("scheduled", "active", "completed", "cancelled", "failed")
BLOCK_TYPES = ("app", "website")


class FocusSession(db.Model):
    __tablename__ = "sessions"

    id = db.Column(ID_TYPE, primary_key=True)
    user_id = db.Column(
        ID_TYPE, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    goal_id = db.Column(
        ID_TYPE, db.ForeignKey("goals.id", ondelete="CASCADE"), nullable=False
    )
    milestone_id = db.Column(
        ID_TYPE, db.ForeignKey("milestones.id", ondelete="SET NULL")
    )
    title = db.Column(db.String(200), nullable=False)
    planned_duration = db.Column(db.Integer, nullable=False)  # minutes
    actual_duration = db.Column(db.Integer)                   # minutes
    status = db.Column(
        db.Enum(*SESSION_STATUSES, name="session_status"),
        nullable=False,
        default="scheduled",
    )
    started_at = db.Column(db.DateTime)
    completed_at = db.Column(db.DateTime)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    goal = db.relationship("Goal", backref="sessions")
    blocks = db.relationship(
        "SessionBlock", backref="session", cascade="all, delete-orphan", passive_deletes=True
    )

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "goal_id": self.goal_id,
            "milestone_id": self.milestone_id,
            "title": self.title,
            "planned_duration": self.planned_duration,
            "actual_duration": self.actual_duration,
            "status": self.status,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }


class SessionBlock(db.Model):
    """An app package or website domain blocked while a session is active."""

    __tablename__ = "session_blocks"

    id = db.Column(ID_TYPE, primary_key=True)
    session_id = db.Column(
        ID_TYPE, db.ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False
    )
    block_type = db.Column(db.Enum(*BLOCK_TYPES, name="block_type"), nullable=False)
    identifier = db.Column(db.String(255), nullable=False)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
