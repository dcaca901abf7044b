"""
Prompt commands for the Prompt Pocket CLI.

Create, edit, copy, move, reorder, duplicate and delete prompts.
Commands taking a prompt id look up its group unless -g/--group is given.
"""
from typing import Optional

import click

from pocket.commands.common import (
    confirm_delete,
    get_core,
    reporting_errors,
    resolve_prompt_group,
)


@click.group()
def prompt():
    """Manage prompts."""
    pass


@prompt.command(name="add")
@click.argument("group_id")
@click.option("-t", "--title", required=True, help="Prompt title.")
@click.option("-c", "--content", help="Prompt content.")
@click.option("-e", "--edit", "use_editor", is_flag=True, help="Write the content in $EDITOR.")
def add_prompt(group_id: str, title: str, content: Optional[str], use_editor: bool):
    """Create a prompt in a group."""
    if use_editor:
        content = click.edit(content or "")
        if content is None:
            raise click.ClickException("Editor closed without saving. Prompt not created.")
    with reporting_errors():
        core = get_core()
        created = core.store.create_prompt(group_id, title, content or "")
    click.echo(f"Prompt '{created.title}' created successfully ({created.id}).")


@prompt.command(name="edit")
@click.argument("prompt_id")
@click.option("-g", "--group", "group_id", help="Group owning the prompt.")
@click.option("-t", "--title", help="New title.")
@click.option("-c", "--content", help="New content.")
@click.option("-e", "--edit", "use_editor", is_flag=True, help="Edit the content in $EDITOR.")
def edit_prompt(
    prompt_id: str,
    group_id: Optional[str],
    title: Optional[str],
    content: Optional[str],
    use_editor: bool,
):
    """Edit a prompt's title and/or content.

    Only specified fields are updated.
    """
    with reporting_errors():
        core = get_core()
        owner_id = resolve_prompt_group(core, prompt_id, group_id)
        if use_editor:
            edited = click.edit(core.store.get_prompt_text(prompt_id))
            if edited is not None:
                content = edited

        updates = {}
        if title is not None:
            updates["title"] = title
        if content is not None:
            updates["content"] = content
        if not updates:
            raise click.ClickException(
                "No update parameters provided. "
                "Specify at least one of: -t/--title, -c/--content, -e/--edit."
            )
        updated = core.store.update_prompt(owner_id, prompt_id, **updates)
    click.echo(f"Prompt '{updated.title}' updated successfully.")


@prompt.command(name="copy")
@click.argument("prompt_id")
def copy_prompt(prompt_id: str):
    """Print a prompt's content, ready to pipe to a clipboard tool."""
    with reporting_errors():
        core = get_core()
        found = core.store.get_prompt(prompt_id)
        notify = core.load_config().show_copy_notification
    click.echo(found.content)
    if notify:
        click.echo(f"Copied: {found.title}", err=True)


@prompt.command(name="delete")
@click.argument("prompt_id")
@click.option("-g", "--group", "group_id", help="Group owning the prompt.")
@click.option("-y", "--yes", is_flag=True, help="Do not ask for confirmation.")
def delete_prompt(prompt_id: str, group_id: Optional[str], yes: bool):
    """Delete a prompt from its group."""
    with reporting_errors():
        core = get_core()
        owner_id = resolve_prompt_group(core, prompt_id, group_id)
        confirm_delete(core, f"Delete prompt '{prompt_id}'?", yes)
        removed = core.store.delete_prompt(owner_id, prompt_id)
    click.echo(f"Prompt '{removed.title}' deleted successfully.")


@prompt.command(name="reorder")
@click.argument("prompt_id")
@click.argument("index", type=click.IntRange(min=0))
@click.option("-g", "--group", "group_id", help="Group owning the prompt.")
def reorder_prompt(prompt_id: str, index: int, group_id: Optional[str]):
    """Move a prompt to INDEX (0-based) within its group."""
    with reporting_errors():
        core = get_core()
        owner_id = resolve_prompt_group(core, prompt_id, group_id)
        core.store.reorder_prompt(owner_id, prompt_id, index)
    click.echo("Prompt reordered.")


@prompt.command(name="move")
@click.argument("prompt_id")
@click.option("--to", "to_group_id", required=True, help="Destination group id.")
@click.option("--from", "from_group_id", help="Source group id (looked up if omitted).")
@click.option("-i", "--index", type=click.IntRange(min=0), help="Position in the destination (appends if omitted).")
def move_prompt(
    prompt_id: str, to_group_id: str, from_group_id: Optional[str], index: Optional[int]
):
    """Move a prompt into another group."""
    with reporting_errors():
        core = get_core()
        source_id = resolve_prompt_group(core, prompt_id, from_group_id)
        core.store.move_prompt_to_group(prompt_id, source_id, to_group_id, index)
    click.echo(f"Prompt moved to group '{to_group_id}'.")


@prompt.command(name="duplicate")
@click.argument("prompt_id")
def duplicate_prompt(prompt_id: str):
    """Copy a prompt within its group."""
    with reporting_errors():
        core = get_core()
        duplicate = core.store.duplicate_prompt(prompt_id)
    click.echo(f"Duplicated as '{duplicate.title}' ({duplicate.id}).")
