"""``flask chain ...`` commands: the terminal front end to the store and the streak engine."""
import logging
from functools import wraps

import click
from flask import current_app
from flask.cli import AppGroup
from sqlalchemy.exc import SQLAlchemyError

from Cadence import WeekdayCadence
from errors import ChainError
from models import db
from Streak import build_day_grid, summarize
import store

logger = logging.getLogger(__name__)

chain_cli = AppGroup("chain", help="Track habits as chains of daily links.")

today_option = click.option("--today", "today", default="today", help="Date to treat as today (YYYY-MM-DD).")


def reports_errors(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except ChainError as e:
            raise click.ClickException(e.message)
        except SQLAlchemyError:
            raise click.ClickException("Database error, see log for details")
        except ValueError as e:
            raise click.ClickException(str(e))
    return decorated


def fmt(day):
    return day.strftime("%Y-%m-%d")


def print_streak(summary):
    click.echo(summary.name)
    click.echo(f"Current streak: {summary.current}")
    click.echo(f"Longest streak: {summary.longest}")


def print_grid(grid):
    click.echo(" ".join(f"{marker.day:>2}" for marker in grid))
    click.echo(" ".join(" X" if marker.completed else " ." for marker in grid))


@chain_cli.command("init-db")
def init_db():
    """Create the chain tables if they do not exist."""
    db.create_all()
    click.echo(f"Initialized {current_app.config['SQLALCHEMY_DATABASE_URI']}")


@chain_cli.command("add")
@click.argument("name")
@click.option("--days", default="all", show_default=True,
              help="Comma separated weekdays, or all / weekdays / weekends.")
@reports_errors
def add(name, days):
    """Add a chain, or replace the cadence of an existing one."""
    chain, created = store.add_chain(name, WeekdayCadence.from_days(days))
    click.echo(f'Added "{chain.name}"' if created else f'Updated "{chain.name}"')


@chain_cli.command("ls")
def ls():
    """List chains by name."""
    for chain in store.get_chains():
        click.echo(chain.name)


@chain_cli.command("edit")
@click.argument("name")
@click.option("--name", "new_name", default=None, help="New name for the chain.")
@click.option("--days", default=None, help="Replacement cadence.")
@reports_errors
def edit(name, new_name, days):
    """Rename a chain and/or change its cadence."""
    cadence = WeekdayCadence.from_days(days) if days is not None else None
    chain = store.get_chain_by_name(name)
    old_name = chain.name
    chain = store.edit_chain(chain.id, name=new_name, cadence=cadence)
    if new_name and new_name != old_name:
        click.echo(f'Renamed "{old_name}" to "{chain.name}"')
    if cadence is not None:
        click.echo(f'Updated "{chain.name}": {", ".join(cadence.active_days()) or "no days"}')


@chain_cli.command("rename")
@click.argument("name")
@click.argument("new_name")
@reports_errors
def rename(name, new_name):
    chain = store.get_chain_by_name(name)
    old_name = chain.name
    chain = store.edit_chain(chain.id, name=new_name)
    click.echo(f'Renamed "{old_name}" to "{chain.name}"')


@chain_cli.command("rm")
@click.argument("name")
@reports_errors
def rm(name):
    """Delete a chain and all of its links."""
    chain = store.delete_chain(store.get_chain_by_name(name).id)
    click.echo(f'Deleted "{chain.name}"')


@chain_cli.command("link")
@click.argument("name")
@click.argument("day", default="today")
@today_option
@reports_errors
def link(name, day, today):
    """Record a link for NAME on DAY (default: today)."""
    day = store.parse_date(day, store.parse_date(today))
    chain = store.get_chain_by_name(name)
    store.add_link(chain.id, day)
    click.echo(f'Added link for "{fmt(day)}" to "{chain.name}"')


@chain_cli.command("mv")
@click.argument("name")
@click.argument("old_day")
@click.argument("new_day")
@today_option
@reports_errors
def mv(name, old_day, new_day, today):
    """Move a link from OLD_DAY to NEW_DAY."""
    today = store.parse_date(today)
    old_day = store.parse_date(old_day, today)
    new_day = store.parse_date(new_day, today)
    chain = store.get_chain_by_name(name)
    store.move_link(chain.id, old_day, new_day)
    click.echo(f'Update link from "{fmt(old_day)}" to "{fmt(new_day)}" for "{chain.name}"')


@chain_cli.command("unlink")
@click.argument("name")
@click.argument("day")
@today_option
@reports_errors
def unlink(name, day, today):
    """Delete the link for NAME on DAY."""
    day = store.parse_date(day, store.parse_date(today))
    chain = store.delete_link(store.get_chain_by_name(name).id, day)
    click.echo(f'Deleted link for "{fmt(day)}" from "{chain.name}"')


@chain_cli.command("streak")
@click.argument("name")
@reports_errors
def streak(name):
    chain = store.get_chain_by_name(name)
    print_streak(summarize(chain, store.get_links(chain.id)))


@chain_cli.command("streaks")
@click.option("--all", "show_all", is_flag=True, help="Show every chain, not only those still due today.")
@click.option("--machine", is_flag=True, help="Print only the number of chains still due today.")
@today_option
@reports_errors
def streaks(show_all, machine, today):
    """Show streaks for the chains still due today."""
    today = store.parse_date(today)
    pending = store.pending_chains(today)
    if machine:
        click.echo(len(pending))
        return
    chains = store.get_chains() if show_all else pending
    if not chains:
        click.echo("Congratulations. You completed all of your chains for today.")
        return
    for chain in chains:
        print_streak(summarize(chain, store.get_links(chain.id)))
        click.echo("")


@chain_cli.command("grid")
@click.argument("name")
@click.option("--days", "window", type=int, default=None, help="Number of days to show.")
@today_option
@reports_errors
def grid(name, window, today):
    """Show the last few days of NAME, oldest first."""
    today = store.parse_date(today)
    if window is None:
        window = current_app.config["GRID_WINDOW_DAYS"]
    chain = store.get_chain_by_name(name)
    click.echo(chain.name)
    print_grid(build_day_grid(store.get_links(chain.id), today, window))
