# focusquest/models/user.py
from ..clock import utcnow
from .. import db

# BIGINT ids do not autoincrement on SQLite
ID_TYPE = db.BigInteger().with_variant(db.Integer, "sqlite")


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(ID_TYPE, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    username = db.Column(db.String(50), unique=True, nullable=False)

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=utcnow, onupdate=utcnow, nullable=False
    )

    goals = db.relationship(
        "Goal", backref="user", cascade="all, delete-orphan", passive_deletes=True
    )
    stats = db.relationship(
        "UserStats", backref="user", cascade="all, delete-orphan", passive_deletes=True
    )

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "username": self.username,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
