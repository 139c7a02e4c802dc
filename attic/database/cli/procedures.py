"""
Procedure Commands
------------------

Run any registered procedure from the shell.

Commands:
    - call: Run one procedure with a JSON payload
    - procedures: List registered procedure names

Examples:
    attic call tag.createTag '{"name": "Stoicism", "color": "#8B5CF6"}'
    attic call book.getBooks '{"status": "READ", "sortBy": "rating"}'
    attic procedures --namespace quote
"""
import json
import click

from attic.api import call as call_procedure, procedure_names
from attic.core.exceptions import AtticError, ValidationError
from attic.core.logging_manager import handle_cli_error
from . import get_db


@click.command()
@click.argument("name")
@click.argument("payload", required=False, default="{}")
@click.pass_context
def call(ctx, name, payload):
    """Run procedure NAME with a JSON PAYLOAD and print the JSON result."""
    try:
        try:
            data = json.loads(payload)
        except json.JSONDecodeError as e:
            raise ValidationError(message=f"Payload is not valid JSON: {e}") from e

        db = get_db(ctx)
        result = call_procedure(db, name, data)
        click.echo(json.dumps(result, indent=2, ensure_ascii=False))

    except AtticError as e:
        handle_cli_error(ctx, e, "call", {"procedure": name})


@click.command()
@click.option("--namespace", "-n", help="Only this namespace (tag, essay, book, ...)")
def procedures(namespace):
    """List registered procedures."""
    names = procedure_names(namespace)
    if not names:
        click.echo("No procedures registered")
        return
    for name in names:
        click.echo(name)
