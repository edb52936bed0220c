import pytest

from config import TestConfig
from focusquest import create_app, db as _db
from focusquest.models.focus_session import FocusSession, SessionBlock
from focusquest.models.goal import Goal
from focusquest.models.user import User
from focusquest.models.user_stats import UserStats
from helpers import T0


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        _db.create_all()
        try:
            yield app
        finally:
            _db.session.remove()
            _db.drop_all()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(username=None):
        counter["n"] += 1
        username = username or f"user{counter['n']}"
        user = User(email=f"{username}@example.com", username=username)
        db.session.add(user)
        db.session.commit()
        return user

    return _make


@pytest.fixture
def make_goal(db):
    def _make(user, category="physical", title="Test Goal"):
        goal = Goal(user_id=user.id, title=title, category=category)
        db.session.add(goal)
        db.session.commit()
        return goal

    return _make


@pytest.fixture
def make_session(db):
    def _make(goal, status="active", planned_duration=30, blocks=()):
        session = FocusSession(
            user_id=goal.user_id,
            goal_id=goal.id,
            title="Focus",
            planned_duration=planned_duration,
            status=status,
            started_at=T0,
        )
        db.session.add(session)
        db.session.flush()
        for block_type, identifier in blocks:
            db.session.add(
                SessionBlock(
                    session_id=session.id,
                    block_type=block_type,
                    identifier=identifier,
                    is_active=True,
                )
            )
        db.session.commit()
        return session

    return _make


@pytest.fixture
def make_stats(db):
    def _make(user, category="physical", **fields):
        values = {
            "total_sessions": 0,
            "completed_sessions": 0,
            "total_duration": 0,
            "streak_days": 0,
            "leaderboard_score": 0.0,
            "last_score_update": T0,
        }
        values.update(fields)
        stats = UserStats(user_id=user.id, category=category, **values)
        db.session.add(stats)
        db.session.commit()
        return stats

    return _make
