#!/usr/bin/env python3
"""
Attic Database Management CLI
-----------------------------

Command-line interface for the Attic content store.

This module provides the main CLI group and shared context setup
for all commands.

Command Structure:
    - Setup (init, seed)
    - Procedures (call, procedures)
    - Tags (tags merge, tags unused, tags top)
    - Stats & Maintenance (stats, prune-orphans)

Usage:
    # Get general help
    attic --help

    # Run any procedure
    attic call book.getReadingStats '{"year": 2024}'

    # Point at another store
    ATTIC_DB_PATH=/tmp/attic.db attic init
"""
import click
from pathlib import Path

from attic.core.paths import DB_PATH, LOG_DIR
from attic.database import AtticDB


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    default=str(DB_PATH),
    envvar="ATTIC_DB_PATH",
    show_envvar=True,
    help="Path to database file",
)
@click.option(
    "--log-dir",
    type=click.Path(),
    default=str(LOG_DIR),
    envvar="ATTIC_LOG_DIR",
    show_envvar=True,
    help="Path to log directory",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Show detailed errors and tracebacks",
)
@click.pass_context
def cli(ctx, db_path, log_dir, verbose):
    """Attic Database Management CLI"""
    ctx.ensure_object(dict)
    ctx.obj["db_path"] = Path(db_path)
    ctx.obj["log_dir"] = Path(log_dir)
    ctx.obj["verbose"] = verbose
    ctx.call_on_close(lambda: _close_db(ctx))


def get_db(ctx) -> AtticDB:
    """Get or create database instance from context."""
    if "db" not in ctx.obj:
        ctx.obj["db"] = AtticDB(
            db_path=ctx.obj["db_path"],
            log_dir=ctx.obj["log_dir"],
        )
        ctx.obj["logger"] = ctx.obj["db"].logger
    return ctx.obj["db"]


def _close_db(ctx) -> None:
    db = ctx.obj.pop("db", None)
    if db is not None:
        db.close()


# Import and register command modules
# These imports must come after CLI group definition
from .setup import init, seed  # noqa: E402
from .procedures import call, procedures  # noqa: E402
from .tags import tags  # noqa: E402
from .maintenance import stats, prune_orphans  # noqa: E402

# Register top-level commands
cli.add_command(init)
cli.add_command(seed)
cli.add_command(call)
cli.add_command(procedures)
cli.add_command(stats)
cli.add_command(prune_orphans)

# Register command groups
cli.add_command(tags)


if __name__ == "__main__":
    cli(obj={})
