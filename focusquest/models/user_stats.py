# focusquest/models/user_stats.py
from ..clock import utcnow
from .. import db
from .user import ID_TYPE


class UserStats(db.Model):
    """Per-user, per-category session aggregate and leaderboard score."""

    __tablename__ = "user_stats"
    __table_args__ = (
        db.UniqueConstraint("user_id", "category", name="uq_user_stats_user_category"),
        db.Index("ix_user_stats_category_score", "category", "leaderboard_score"),
    )

    id = db.Column(ID_TYPE, primary_key=True)
    user_id = db.Column(
        ID_TYPE, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    category = db.Column(db.String(32), nullable=False)

    total_sessions = db.Column(db.Integer, nullable=False, default=0)
    completed_sessions = db.Column(db.Integer, nullable=False, default=0)
    total_duration = db.Column(db.Integer, nullable=False, default=0)  # minutes
    streak_days = db.Column(db.Integer, nullable=False, default=0)
    last_activity = db.Column(db.DateTime)

    leaderboard_score = db.Column(db.Float, nullable=False, default=0.0)
    # Anchor for the decay clock; moves with every score write
    last_score_update = db.Column(db.DateTime, nullable=False, default=utcnow)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    def __repr__(self):
        return (
            f"<UserStats user={self.user_id} {self.category} "
            f"score={self.leaderboard_score}>"
        )

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "category": self.category,
            "total_sessions": self.total_sessions or 0,
            "completed_sessions": self.completed_sessions or 0,
            "total_duration": self.total_duration or 0,
            "streak_days": self.streak_days or 0,
            "last_activity": self.last_activity.isoformat() if self.last_activity else None,
            "leaderboard_score": float(self.leaderboard_score or 0.0),
            "last_score_update": self.last_score_update.isoformat()
            if self.last_score_update
            else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
