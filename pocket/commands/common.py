"""
Shared helpers for Prompt Pocket CLI commands.
"""
import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional

import click

from pocket.core import PocketCore
from pocket.exceptions import (
    DuplicateError,
    InvalidImportError,
    InvalidOperationError,
    NotFoundError,
    PocketError,
    StorageError,
    ValidationError,
)
from pocket.managers.events import CallbackListener, Event
from pocket.models.base import Group

logger = logging.getLogger(__name__)


def log_change(event: Event) -> None:
    """Log a store change. Shown with --verbose."""
    node_id = getattr(event, "node_id", "")
    logger.debug("Store change: %s %s", event.type.value, node_id)


def get_core() -> PocketCore:
    """Build a PocketCore for the data directory chosen on the root command."""
    ctx = click.get_current_context(silent=True)
    data_dir = None
    if ctx is not None:
        root_obj = ctx.find_root().obj
        if isinstance(root_obj, dict):
            data_dir = root_obj.get("data_dir")
    core = PocketCore(data_dir)
    core.event_bus.subscribe(CallbackListener(log_change))
    return core


@contextmanager
def reporting_errors() -> Iterator[None]:
    """Turn store errors into click errors with a message per error kind."""
    try:
        yield
    except NotFoundError as e:
        raise click.ClickException(str(e))
    except (ValidationError, DuplicateError) as e:
        raise click.ClickException(f"Validation Error: {e}")
    except InvalidOperationError as e:
        raise click.ClickException(f"Operation Error: {e}")
    except InvalidImportError as e:
        raise click.ClickException(f"Import Error: {e}")
    except StorageError as e:
        raise click.ClickException(f"Storage Error: {e}")
    except PocketError as e:
        raise click.ClickException(f"Error: {e}")


def confirm_delete(core: PocketCore, message: str, assume_yes: bool) -> None:
    """Ask before a destructive operation unless disabled in config or by --yes."""
    if assume_yes or not core.load_config().confirm_delete:
        return
    click.confirm(message, abort=True)


def resolve_prompt_group(core: PocketCore, prompt_id: str, group_id: Optional[str]) -> str:
    """Use the given group id, or look up the group that owns the prompt."""
    if group_id:
        return group_id
    return core.store.find_prompt_group(prompt_id).id


def format_tree(groups: List[Group], indent: int = 0) -> List[str]:
    """Render groups, subgroups and prompts as indented lines with ids."""
    lines: List[str] = []
    pad = "  " * indent
    for group in groups:
        color = f" [{group.color}]" if group.color else ""
        lines.append(f"{pad}+ {group.name}{color} ({group.id})")
        for prompt in group.prompts:
            lines.append(f"{pad}  - {prompt.title} ({prompt.id})")
        lines.extend(format_tree(group.children, indent + 1))
    return lines
