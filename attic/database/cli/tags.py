"""
Tag Commands
------------

Tag housekeeping from the shell.

Commands:
    - tags merge: Fold one tag into another
    - tags top: Most used tags
    - tags unused: Tags attached to nothing
"""
import click

from attic.api import call
from attic.core.exceptions import AtticError
from attic.core.logging_manager import handle_cli_error
from . import get_db


@click.group()
@click.pass_context
def tags(ctx: click.Context) -> None:
    """Tag maintenance and usage reports."""
    pass


@tags.command("merge")
@click.argument("source_id", type=int)
@click.argument("target_id", type=int)
@click.pass_context
def merge(ctx, source_id, target_id):
    """Move every use of SOURCE_ID onto TARGET_ID and delete SOURCE_ID."""
    try:
        db = get_db(ctx)
        result = call(
            db, "tag.mergeTags", {"sourceTagId": source_id, "targetTagId": target_id}
        )

        click.echo(f"✅ {result['message']}")
        for kind, count in result["mergedCount"].items():
            if count:
                click.echo(f"  • {kind}: {count}")

    except AtticError as e:
        handle_cli_error(ctx, e, "merge_tags", {"source": source_id, "target": target_id})


@tags.command("top")
@click.option("--limit", type=int, default=10, help="Maximum tags to show")
@click.pass_context
def top(ctx, limit):
    """Show the most used tags."""
    try:
        db = get_db(ctx)
        rows = call(db, "tag.getMostUsedTags", {"limit": limit})

        if not rows:
            click.echo("No tags in use")
            return

        click.echo("🏷️  Most Used Tags")
        click.echo("=" * 50)
        for row in rows:
            click.echo(f"  {row['tag']['name']}: {row['totalUsage']}")

    except AtticError as e:
        handle_cli_error(ctx, e, "most_used_tags")


@tags.command("unused")
@click.option("--limit", type=int, default=10, help="Maximum tags to show")
@click.pass_context
def unused(ctx, limit):
    """Show tags attached to nothing."""
    try:
        db = get_db(ctx)
        rows = call(db, "tag.getUnusedTags", {"limit": limit})

        if not rows:
            click.echo("✅ Every tag is in use")
            return

        click.echo(f"⚠️  {len(rows)} unused tag(s):")
        for tag in rows:
            click.echo(f"  • [{tag['id']}] {tag['name']}")

    except AtticError as e:
        handle_cli_error(ctx, e, "unused_tags")
