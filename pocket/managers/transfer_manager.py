"""
Import and export of prompt trees as JSON text.

Exported files use the same field names as the stored snapshot, so an
export can be imported into any store.
"""

import json
import logging
from pathlib import Path

from pocket.constants import IMPORT_MERGE, MAX_GROUP_DEPTH
from pocket.exceptions import InvalidImportError, StorageError
from pocket.managers.store_manager import StoreManager
from pocket.models.files import PromptTree
from pocket.models.validation import parse_tree

logger = logging.getLogger(__name__)


def export_tree(tree: PromptTree) -> str:
    """Serialize a tree to indented JSON text."""
    return json.dumps(tree.model_dump(mode="json"), indent=2, ensure_ascii=False)


def load_import(text: str) -> PromptTree:
    """Parse and validate JSON text as a prompt tree.

    Raises:
        InvalidImportError: If the text is not JSON or not a valid tree.
    """
    try:
        candidate = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidImportError(f"Import file is not valid JSON: {e}")
    except RecursionError:
        raise InvalidImportError(
            f"Import file is nested too deeply (groups may nest at most {MAX_GROUP_DEPTH} levels)"
        )

    result = parse_tree(candidate)
    if not result.ok:
        raise InvalidImportError(f"Invalid prompt data format: {result.error}")
    return result.tree


def export_to_file(store: StoreManager, path: Path) -> PromptTree:
    """Write the current store to a JSON file.

    Returns:
        The exported tree.

    Raises:
        StorageError: If the file cannot be written.
    """
    tree = store.load()
    try:
        Path(path).write_text(export_tree(tree) + "\n", encoding="utf-8")
    except OSError as e:
        raise StorageError(f"Failed to export to {path}: {e}")
    logger.info("Exported %d groups to %s", len(tree.groups), path)
    return tree


def import_from_file(
    store: StoreManager, path: Path, strategy: str = IMPORT_MERGE, rekey: bool = False
) -> PromptTree:
    """Import a JSON file into the store.

    Args:
        store: Target store.
        path: File to read.
        strategy: "merge" or "replace".
        rekey: Give imported groups and prompts fresh ids.

    Returns:
        The stored tree after import.

    Raises:
        StorageError: If the file cannot be read.
        InvalidImportError: If the file content is not a valid tree.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise StorageError(f"Failed to read {path}: {e}")
    return store.import_tree(load_import(text), strategy, rekey=rekey)
