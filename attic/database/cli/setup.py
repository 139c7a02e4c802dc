"""
Setup & Initialization Commands
--------------------------------

Database schema creation and fixture loading.

Commands:
    - init: Create the database schema
    - seed: Load a YAML fixture file
"""
import click

from attic.core.exceptions import AtticError
from attic.core.logging_manager import handle_cli_error
from attic.database.seeder import Seeder
from . import get_db


@click.command()
@click.pass_context
def init(ctx):
    """Initialize the database schema."""
    try:
        db = get_db(ctx)
        click.echo("🗄️  Initializing database schema...")
        db.initialize_schema()
        click.echo(f"✅ Database initialized: {ctx.obj['db_path']}")

    except AtticError as e:
        handle_cli_error(ctx, e, "init")


@click.command()
@click.argument("fixture", type=click.Path(exists=True, dir_okay=False))
@click.option("--reset", is_flag=True, help="Delete all existing rows first")
@click.pass_context
def seed(ctx, fixture, reset):
    """Load tags, books, essays, quotes, notes and collections from FIXTURE."""
    try:
        db = get_db(ctx)
        click.echo(f"🌱 Seeding from {fixture}...")
        counts = Seeder(db).load(fixture, reset=reset)

        click.echo("\n✅ Seed Complete:")
        for section, count in counts.items():
            click.echo(f"  • {section}: {count}")

    except AtticError as e:
        handle_cli_error(ctx, e, "seed", {"fixture": fixture})
