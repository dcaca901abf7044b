"""
Whole-store commands for the Prompt Pocket CLI: list, search, import, export, reset.
"""
import json
from pathlib import Path
from typing import Optional

import click

from pocket.commands.common import format_tree, get_core, reporting_errors
from pocket.constants import IMPORT_MERGE, IMPORT_STRATEGIES
from pocket.managers.navigation_manager import duplicate_ids
from pocket.managers.transfer_manager import export_to_file, export_tree, import_from_file


@click.command(name="list")
@click.option("-j", "--json", "json_output", is_flag=True, help="Output in JSON format.")
def list_tree(json_output: bool):
    """Show all groups and prompts with their ids."""
    with reporting_errors():
        core = get_core()
        tree = core.store.load()

    if json_output:
        click.echo(export_tree(tree))
    elif not tree.groups:
        click.echo("No groups. Create one with 'pocket group add NAME'.")
    else:
        click.echo("\n".join(format_tree(tree.groups)))


@click.command(name="search")
@click.argument("query", required=False, default="")
@click.option("-g", "--group", "group_id", help="Only search this group and its subgroups.")
@click.option("-j", "--json", "json_output", is_flag=True, help="Output in JSON format.")
def search(query: str, group_id: Optional[str], json_output: bool):
    """Search prompt titles and content (case-insensitive)."""
    with reporting_errors():
        core = get_core()
        matches = core.store.search(query, group_id)
        preview_length = core.load_config().preview_length

    if json_output:
        click.echo(
            json.dumps(
                [
                    {
                        "id": match.prompt.id,
                        "title": match.prompt.title,
                        "group_id": match.group.id,
                        "path": match.path,
                        "color": match.color.value if match.color else None,
                    }
                    for match in matches
                ],
                indent=2,
            )
        )
        return

    if not matches:
        click.echo("No matching prompts.")
        return
    for match in matches:
        click.echo(f"{match.prompt.title} ({match.prompt.id})  [{match.path_label}]")
        click.echo(f"    {match.preview(preview_length)}")


@click.command(name="export")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
def export_data(path: Path):
    """Export all prompts to a JSON file."""
    with reporting_errors():
        core = get_core()
        tree = export_to_file(core.store, path)
    click.echo(f"Exported {len(tree.groups)} groups to {path}.")


@click.command(name="import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-s",
    "--strategy",
    type=click.Choice(IMPORT_STRATEGIES),
    default=IMPORT_MERGE,
    show_default=True,
    help="merge appends the imported groups; replace discards existing data.",
)
@click.option("--rekey", is_flag=True, help="Give imported groups and prompts fresh ids.")
def import_data(path: Path, strategy: str, rekey: bool):
    """Import prompts from a JSON file."""
    with reporting_errors():
        core = get_core()
        tree = import_from_file(core.store, path, strategy, rekey=rekey)
    click.echo(f"Imported prompts from {path} ({strategy}).")

    duplicates = duplicate_ids(tree.groups)
    if duplicates:
        click.echo(
            f"  ⚠ {len(duplicates)} ids are now used more than once: "
            f"{', '.join(duplicates)}. Re-import with --rekey to avoid this.",
            err=True,
        )


@click.command(name="reset")
@click.confirmation_option(prompt="Delete all prompts and restore the sample data on next use?")
def reset_data():
    """Delete all prompt data."""
    with reporting_errors():
        core = get_core()
        core.store.reset()
    click.echo("Prompt Pocket data has been reset.")
