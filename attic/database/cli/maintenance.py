"""
Stats & Maintenance Commands
----------------------------

Reading statistics and collection health.

Commands:
    - stats: Display reading statistics
    - prune-orphans: Remove collection items whose content is gone
"""
import click

from attic.api import call
from attic.core.exceptions import AtticError
from attic.core.logging_manager import handle_cli_error
from . import get_db


@click.command()
@click.option("--year", type=int, help="Year for the books-finished count")
@click.pass_context
def stats(ctx, year):
    """Display reading statistics."""
    try:
        db = get_db(ctx)
        result = call(db, "book.getReadingStats", {"year": year})

        average = result["averageRating"]
        click.echo("📊 Reading Statistics")
        click.echo("=" * 50)
        click.echo(f"Total books:        {result['totalBooks']}")
        click.echo(f"Read:               {result['booksRead']}")
        click.echo(f"Currently reading:  {result['currentlyReading']}")
        click.echo(f"Want to read:       {result['wantToRead']}")
        click.echo(f"Pages read:         {result['pagesRead']:,}")
        click.echo(
            f"Average rating:     {f'{average:.2f}' if average is not None else '-'}"
        )
        click.echo(f"Finished this year: {result['booksThisYear']}")

    except AtticError as e:
        handle_cli_error(ctx, e, "stats", {"year": year})


@click.command("prune-orphans")
@click.option("--dry-run", is_flag=True, help="Preview changes without deleting")
@click.pass_context
def prune_orphans(ctx, dry_run):
    """Remove collection items whose content no longer exists."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            result = db.health.prune_orphaned_items(dry_run=dry_run)

        orphans = result["orphaned_items"]
        if not orphans:
            click.echo("✅ No orphaned collection items found")
            return

        if dry_run:
            click.echo(f"🔍 Would remove {len(orphans)} orphaned item(s):")
        else:
            click.echo(f"✅ Removed {len(orphans)} orphaned item(s):")
        for item in orphans:
            click.echo(
                f"  • item {item['id']} in collection {item['collection_id']}: "
                f"{item['content_type']} {item['content_id']}"
            )

    except AtticError as e:
        handle_cli_error(ctx, e, "prune_orphans")
