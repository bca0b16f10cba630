# fitgam/commands.py
import click
from flask import current_app
from flask.cli import with_appcontext

from . import get_store, get_verifier
from .leaderboard import LEADERBOARD_METRICS, rank_users
from .seed import initialize_default_data


@click.command("seed-defaults")
@with_appcontext
def seed_defaults():
    """
    Seed the demo user, challenges and rewards into empty collections.
    """
    added = initialize_default_data(
        get_store(), get_verifier(), current_app.config["DEMO_USER_PASSWORD"]
    )
    if not any(added.values()):
        click.echo("Store already populated, nothing added.")
        return
    for kind, count in added.items():
        click.echo(f"{kind}: {count} added")


@click.command("leaderboard")
@click.option(
    "--metric",
    type=click.Choice(sorted(LEADERBOARD_METRICS)),
    default="points",
    show_default=True,
)
@click.option("--limit", type=int, default=10, show_default=True)
@with_appcontext
def show_leaderboard(metric, limit):
    """Print the current ranking for one metric."""
    entries = rank_users(get_store().get_users(), metric)
    if not entries:
        click.echo("No users yet.")
        return
    attr = LEADERBOARD_METRICS[metric]
    for entry in entries[:limit]:
        click.echo(f"#{entry.rank:<3} {entry.name:<24} {getattr(entry, attr)}")


def register_cli(app):
    app.cli.add_command(seed_defaults)
    app.cli.add_command(show_leaderboard)
