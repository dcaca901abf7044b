"""
Group commands for the Prompt Pocket CLI.

Create, rename, recolor, move, reorder, duplicate and delete groups.
"""
import json
from typing import Optional

import click

from pocket.commands.common import confirm_delete, get_core, reporting_errors
from pocket.models.base import GroupColor

COLOR_CHOICES = [color.value for color in GroupColor] + ["none"]


@click.group()
def group():
    """Manage prompt groups."""
    pass


@group.command(name="add")
@click.argument("name")
@click.option("-p", "--parent", "parent_id", help="Parent group id (root if omitted).")
@click.option("-c", "--color", type=click.Choice(COLOR_CHOICES), help="Group color.")
def add_group(name: str, parent_id: Optional[str], color: Optional[str]):
    """Create a group, at the root or under a parent group."""
    with reporting_errors():
        core = get_core()
        created = core.store.create_group(
            name, color=None if color == "none" else color, parent_id=parent_id
        )
    click.echo(f"Group '{created.name}' created successfully ({created.id}).")


@group.command(name="show")
@click.argument("group_id")
@click.option("-j", "--json", "json_output", is_flag=True, help="Output in JSON format.")
def show_group(group_id: str, json_output: bool):
    """Show a group with its subgroups and prompts."""
    with reporting_errors():
        core = get_core()
        found = core.store.get_group(group_id)

    if json_output:
        click.echo(json.dumps(found.model_dump(mode="json"), indent=2))
        return

    click.echo(f"Name: {found.name}")
    click.echo(f"Color: {found.color or ''}")
    click.echo(f"Subgroups: {len(found.children)}")
    for child in found.children:
        click.echo(f"  + {child.name} ({child.id})")
    click.echo(f"Prompts: {len(found.prompts)}")
    for prompt in found.prompts:
        click.echo(f"  - {prompt.title} ({prompt.id})")


@group.command(name="rename")
@click.argument("group_id")
@click.argument("name")
def rename_group(group_id: str, name: str):
    """Rename a group."""
    with reporting_errors():
        core = get_core()
        core.store.update_group(group_id, name=name)
    click.echo(f"Group renamed to '{name}'.")


@group.command(name="color")
@click.argument("group_id")
@click.argument("color", type=click.Choice(COLOR_CHOICES))
def color_group(group_id: str, color: str):
    """Set a group's color, or 'none' to clear it."""
    with reporting_errors():
        core = get_core()
        core.store.update_group(group_id, color=None if color == "none" else color)
    click.echo(f"Group color set to '{color}'.")


@group.command(name="delete")
@click.argument("group_id")
@click.option("-y", "--yes", is_flag=True, help="Do not ask for confirmation.")
def delete_group(group_id: str, yes: bool):
    """Delete a group.

    WARNING: This deletes all subgroups and prompts inside it as well.
    """
    with reporting_errors():
        core = get_core()
        target = core.store.get_group(group_id)
        confirm_delete(
            core,
            f"Delete group '{target.name}' and everything in it?",
            yes,
        )
        core.store.delete_group(group_id)
    click.echo(f"Group '{target.name}' deleted successfully.")


@group.command(name="reorder")
@click.argument("group_id")
@click.argument("index", type=click.IntRange(min=0))
def reorder_group(group_id: str, index: int):
    """Move a root group to INDEX (0-based) among the root groups."""
    with reporting_errors():
        core = get_core()
        core.store.reorder_group(group_id, index)
    click.echo("Group reordered.")


@group.command(name="move")
@click.argument("group_id")
@click.option("--to", "target_id", help="Target parent group id (root if omitted).")
@click.option("-i", "--index", type=click.IntRange(min=0), help="Position in the target (appends if omitted).")
def move_group(group_id: str, target_id: Optional[str], index: Optional[int]):
    """Move a group under another group, or back to the root."""
    with reporting_errors():
        core = get_core()
        core.store.move_group(group_id, target_id, index)
    click.echo(f"Group moved to {'group ' + repr(target_id) if target_id else 'root'}.")


@group.command(name="duplicate")
@click.argument("group_id")
def duplicate_group(group_id: str):
    """Copy a group and everything in it to a new root group."""
    with reporting_errors():
        core = get_core()
        clone = core.store.duplicate_group(group_id)
    click.echo(f"Duplicated as '{clone.name}' ({clone.id}).")
