"""
Tree traversal helpers for the Prompt Pocket store.

Handles lookup of groups and prompts by id, removal of subtrees and
path discovery. All walks are depth-first, pre-order: a group is visited
before its children, and each root's subtree is exhausted before the next
root. Walks use an explicit stack rather than recursion.
"""

from collections import Counter
from typing import Iterator, List, Optional, Sequence, Tuple

from pocket.models.base import Group, Prompt
from pocket.utils import generate_id


def walk(roots: Sequence[Group]) -> Iterator[Tuple[Group, Tuple[Group, ...]]]:
    """Yield every group in pre-order together with its ancestors.

    Args:
        roots: Root group sequence.

    Yields:
        (group, ancestors) where ancestors runs from the root down to the parent.
    """
    stack: List[Tuple[Group, Tuple[Group, ...]]] = [
        (group, ()) for group in reversed(roots)
    ]
    while stack:
        group, ancestors = stack.pop()
        yield group, ancestors
        lineage = ancestors + (group,)
        for child in reversed(group.children):
            stack.append((child, lineage))


def iter_groups(roots: Sequence[Group]) -> Iterator[Group]:
    """Yield every group in pre-order."""
    for group, _ in walk(roots):
        yield group


def iter_prompts(roots: Sequence[Group]) -> Iterator[Tuple[Group, Prompt]]:
    """Yield (owning group, prompt) for every prompt in pre-order."""
    for group in iter_groups(roots):
        for prompt in group.prompts:
            yield group, prompt


def find_group(roots: Sequence[Group], group_id: str) -> Optional[Group]:
    """Find a group anywhere in the forest.

    Returns:
        The first matching group, or None if not found.
    """
    for group in iter_groups(roots):
        if group.id == group_id:
            return group
    return None


def find_prompt(roots: Sequence[Group], prompt_id: str) -> Optional[Prompt]:
    """Find a prompt anywhere in the forest.

    Each visited group's prompts are scanned before descending into its children.
    """
    for _, prompt in iter_prompts(roots):
        if prompt.id == prompt_id:
            return prompt
    return None


def find_parent_group(roots: Sequence[Group], prompt_id: str) -> Optional[Group]:
    """Find the group whose prompts list contains prompt_id."""
    for group, prompt in iter_prompts(roots):
        if prompt.id == prompt_id:
            return group
    return None


def find_group_container(
    roots: List[Group], group_id: str
) -> Optional[Tuple[List[Group], int, Optional[Group]]]:
    """Locate the list that holds a group.

    Resolves the same group as find_group when ids are repeated, which is
    the group move_group acts on.

    Returns:
        (container, index, parent) where parent is None for root groups,
        or None if the group is not in the forest.
    """
    for group, ancestors in walk(roots):
        if group.id != group_id:
            continue
        parent = ancestors[-1] if ancestors else None
        container = parent.children if parent is not None else roots
        for index, member in enumerate(container):
            if member is group:
                return container, index, parent
    return None


def remove_group(roots: List[Group], group_id: str) -> Optional[Group]:
    """Detach a group, and with it its whole subtree, from the forest.

    Each list of groups is searched in full before descending into its
    members' children, starting from the roots. With repeated ids a root
    group is removed before any nested group of the same id.

    Returns:
        The detached group, or None if not found.
    """
    stack: List[List[Group]] = [roots]
    while stack:
        container = stack.pop()
        for index, group in enumerate(container):
            if group.id == group_id:
                return container.pop(index)
        for group in reversed(container):
            stack.append(group.children)
    return None


def contains_group(group: Group, group_id: str) -> bool:
    """Check whether group_id is group itself or one of its descendants."""
    return find_group([group], group_id) is not None


def group_path(roots: Sequence[Group], group_id: str) -> Optional[List[str]]:
    """Names of the groups from the root down to group_id, inclusive."""
    for group, ancestors in walk(roots):
        if group.id == group_id:
            return [ancestor.name for ancestor in ancestors] + [group.name]
    return None


def group_depth(roots: Sequence[Group], group_id: str) -> Optional[int]:
    """Nesting level of group_id, where root groups are at level 1."""
    for group, ancestors in walk(roots):
        if group.id == group_id:
            return len(ancestors) + 1
    return None


def subtree_height(group: Group) -> int:
    """Number of group levels in a subtree, counting group itself."""
    return max(len(ancestors) for _, ancestors in walk([group])) + 1


def duplicate_ids(roots: Sequence[Group]) -> List[str]:
    """List ids used by more than one group or prompt, sorted."""
    counts: Counter = Counter()
    for group in iter_groups(roots):
        counts[group.id] += 1
        for prompt in group.prompts:
            counts[prompt.id] += 1
    return sorted(entity_id for entity_id, count in counts.items() if count > 1)


def clone_group(group: Group, name_suffix: str = "") -> Group:
    """Deep-copy a group's subtree, giving every group and prompt a fresh id.

    Args:
        group: Subtree root to copy.
        name_suffix: Appended to the name of every copied group.

    Returns:
        The detached copy.
    """
    clone = group.model_copy(deep=True)
    for member in iter_groups([clone]):
        member.id = generate_id()
        member.name = f"{member.name}{name_suffix}"
        for prompt in member.prompts:
            prompt.id = generate_id()
    return clone
