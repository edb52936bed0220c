# focusquest/cli.py
import json

import click
from flask.cli import AppGroup

from . import db
from .services.leaderboard import get_leaderboard, reconcile_stale_streaks
from .services.score_decay import sweep_and_decay

stats_cli = AppGroup("stats", help="Leaderboard and statistics maintenance.")


@stats_cli.command("init-db")
def init_db_command():
    """Create all tables."""
    db.create_all()
    click.echo("database initialised")


@stats_cli.command("decay")
@click.option(
    "--now",
    type=click.DateTime(),
    default=None,
    help="Sweep as of this UTC timestamp (default: current time).",
)
def decay_command(now):
    """Apply time decay to stale leaderboard scores (run hourly from a scheduler)."""
    result = sweep_and_decay(now=now)
    click.echo(json.dumps(result))


@stats_cli.command("reconcile-streaks")
@click.option("--user-id", type=int, default=None)
def reconcile_streaks_command(user_id):
    """Zero streaks whose last activity is too old to continue."""
    count = reconcile_stale_streaks(user_id=user_id)
    click.echo(json.dumps({"updated_count": count}))


@stats_cli.command("leaderboard")
@click.option("--category", default=None)
@click.option("--limit", type=int, default=None)
def leaderboard_command(category, limit):
    rows = get_leaderboard(category=category, limit=limit)
    click.echo(json.dumps({"leaderboard": [r.to_dict() for r in rows]}, indent=2))
