# focusquest/__init__.py

from flask import Flask
from flask_sqlalchemy import SQLAlchemy

from config import Config

db = SQLAlchemy()


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    # Init extensions
    db.init_app(app)

    # -----------------------------
    # MODELS (register tables on db.metadata)
    # -----------------------------
    from .models import user, goal, focus_session, user_stats  # noqa: F401

    # -----------------------------
    # CLI (scheduler entry points)
    # -----------------------------
    from .cli import stats_cli

    app.cli.add_command(stats_cli)

    return app
