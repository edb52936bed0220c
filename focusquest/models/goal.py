# focusquest/models/goal.py
from ..clock import utcnow
from .. import db
from .user import ID_TYPE

GOAL_CATEGORIES = (
    "physical",
    "mental",
    "skill",
    "habit",
    "creative",
    "social",
    "spiritual",
    "professional",
)


class Goal(db.Model):
    __tablename__ = "goals"

    id = db.Column(ID_TYPE, primary_key=True)
    user_id = db.Column(
        ID_TYPE, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    category = db.Column(
        db.Enum(*GOAL_CATEGORIES, name="goal_category"), nullable=False
    )
    target_value = db.Column(db.Float)   # null for non-quantifiable goals
    target_unit = db.Column(db.String(50))  # "reps", "minutes", "pages"
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    milestones = db.relationship(
        "Milestone", backref="goal", cascade="all, delete-orphan", passive_deletes=True
    )


class Milestone(db.Model):
    __tablename__ = "milestones"

    id = db.Column(ID_TYPE, primary_key=True)
    goal_id = db.Column(
        ID_TYPE, db.ForeignKey("goals.id", ondelete="CASCADE"), nullable=False
    )
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    target_value = db.Column(db.Float)
    is_completed = db.Column(db.Boolean, nullable=False, default=False)
    completed_at = db.Column(db.DateTime)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )
