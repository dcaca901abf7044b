"""
Structural checks for prompt tree data.

Used for untrusted input such as import files. Only the shape and the
nesting depth (at most MAX_GROUP_DEPTH levels of groups) are checked;
id uniqueness and cycle-freedom are not.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from pydantic import ValidationError

from pocket.constants import MAX_GROUP_DEPTH

from .base import Group, NodeKind, Prompt
from .files import PromptTree


def is_group(node: Any) -> bool:
    """Check whether a node is a group.

    Model instances are told apart by their node kind. Raw mappings count as
    groups when they carry a children or prompts collection.
    """
    if isinstance(node, (Group, Prompt)):
        return node.node_kind == NodeKind.GROUP
    if isinstance(node, Mapping):
        return "children" in node or "prompts" in node
    return False


def is_prompt(node: Any) -> bool:
    """Check whether a node is a prompt.

    Raw mappings count as prompts when they carry content and no children.
    """
    if isinstance(node, (Group, Prompt)):
        return node.node_kind == NodeKind.PROMPT
    if isinstance(node, Mapping):
        return "content" in node and "children" not in node
    return False


def _prompt_error(prompt: Any, where: str) -> Optional[str]:
    if not isinstance(prompt, Mapping):
        return f"{where}: prompt must be an object"
    for key in ("id", "title", "content"):
        if not isinstance(prompt.get(key), str):
            return f"{where}: '{key}' must be a string"
    return None


def find_shape_error(candidate: Any) -> Optional[str]:
    """Walk a candidate tree and describe the first shape problem.

    The walk uses an explicit stack so deeply nested input cannot exhaust
    the interpreter's recursion limit.

    Args:
        candidate: Value of unknown shape, e.g. parsed JSON.

    Returns:
        Error description naming the offending node, or None if the shape is valid.
    """
    if not isinstance(candidate, Mapping):
        return "root must be an object"
    groups = candidate.get("groups")
    if not isinstance(groups, list):
        return "'groups' must be a list"

    stack: List[Tuple[Any, str, int]] = [
        (group, f"groups[{i}]", 1) for i, group in reversed(list(enumerate(groups)))
    ]
    while stack:
        group, where, depth = stack.pop()
        if depth > MAX_GROUP_DEPTH:
            return f"{where}: groups nested deeper than {MAX_GROUP_DEPTH} levels"
        if not isinstance(group, Mapping):
            return f"{where}: group must be an object"
        if not isinstance(group.get("id"), str):
            return f"{where}: 'id' must be a string"
        if not isinstance(group.get("name"), str):
            return f"{where}: 'name' must be a string"
        children = group.get("children")
        prompts = group.get("prompts")
        if not isinstance(children, list):
            return f"{where}: 'children' must be a list"
        if not isinstance(prompts, list):
            return f"{where}: 'prompts' must be a list"

        for i, prompt in enumerate(prompts):
            error = _prompt_error(prompt, f"{where}.prompts[{i}]")
            if error:
                return error
        for i in reversed(range(len(children))):
            stack.append((children[i], f"{where}.children[{i}]", depth + 1))

    return None


def validate_tree(candidate: Any) -> bool:
    """Check that a value has the prompt tree shape.

    Pure predicate: never raises, and any malformed node anywhere
    rejects the whole candidate.
    """
    return find_shape_error(candidate) is None


@dataclass
class TreeParseResult:
    """Outcome of parse_tree: either a tree or an error message."""

    tree: Optional[PromptTree] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.tree is not None


def parse_tree(candidate: Any) -> TreeParseResult:
    """Parse untrusted data into a PromptTree.

    Args:
        candidate: Value of unknown shape.

    Returns:
        TreeParseResult holding the tree on success or the reason for rejection.
    """
    error = find_shape_error(candidate)
    if error:
        return TreeParseResult(error=error)
    try:
        return TreeParseResult(tree=PromptTree.model_validate(candidate))
    except ValidationError as e:
        return TreeParseResult(error=str(e))
