# config.py
import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL",
        "mysql+pymysql://root:@localhost/focusquest"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Leaderboard scoring
    SCORE_SESSION_WEIGHT = int(os.environ.get("SCORE_SESSION_WEIGHT", 10))
    SCORE_DURATION_DIVISOR = int(os.environ.get("SCORE_DURATION_DIVISOR", 10))
    SCORE_STREAK_WEIGHT = int(os.environ.get("SCORE_STREAK_WEIGHT", 5))
    SCORE_STREAK_CAP = int(os.environ.get("SCORE_STREAK_CAP", 100))

    # "increment": every completion bumps the streak, same day included
    # "hold": same-day completions keep the streak where it is
    STREAK_SAME_DAY_POLICY = os.environ.get("STREAK_SAME_DAY_POLICY", "increment")

    # Decay sweep: score * DECAY_FACTOR ** days_since_last_update
    DECAY_FACTOR = float(os.environ.get("DECAY_FACTOR", 0.98))
    DECAY_GRACE_HOURS = int(os.environ.get("DECAY_GRACE_HOURS", 24))

    LEADERBOARD_DEFAULT_LIMIT = 10
    LEADERBOARD_MAX_LIMIT = 100


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
