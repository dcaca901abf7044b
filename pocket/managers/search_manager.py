"""
Prompt search for the Prompt Pocket store.

Collects prompts with their group path and the color they display with,
optionally filtered by a text query and a group scope.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from pocket.constants import DEFAULT_PREVIEW_LENGTH
from pocket.managers.navigation_manager import find_group, walk
from pocket.models.base import Group, GroupColor, Prompt
from pocket.utils import make_preview


@dataclass
class PromptMatch:
    """A prompt found by a search, with where it lives."""

    prompt: Prompt
    group: Group
    path: List[str]
    color: Optional[GroupColor] = None

    @property
    def path_label(self) -> str:
        return " > ".join(self.path)

    def preview(self, length: int = DEFAULT_PREVIEW_LENGTH) -> str:
        return make_preview(self.prompt.content, length)


def _matches(prompt: Prompt, query: str) -> bool:
    return query in prompt.title.lower() or query in prompt.content.lower()


def search_prompts(
    roots: Sequence[Group], query: str = "", group_id: Optional[str] = None
) -> List[PromptMatch]:
    """Find prompts by text, optionally within one group's subtree.

    Args:
        roots: Root group sequence.
        query: Case-insensitive text matched against title and content.
            An empty query matches everything.
        group_id: When given, only prompts in this group or its descendants.

    Returns:
        Matches in pre-order, each group's prompts in their stored order.
        An unknown group_id yields no matches.
    """
    scope: Sequence[Group] = roots
    scope_ancestors: List[Group] = []
    if group_id is not None:
        scoped = find_group(roots, group_id)
        if scoped is None:
            return []
        for group, ancestors in walk(roots):
            if group is scoped:
                scope_ancestors = list(ancestors)
                break
        scope = [scoped]

    needle = query.lower()
    inherited: Optional[GroupColor] = None
    for ancestor in scope_ancestors:
        inherited = ancestor.get_color() or inherited
    base_path = [ancestor.name for ancestor in scope_ancestors]

    results: List[PromptMatch] = []
    for group, ancestors in walk(scope):
        lineage = list(ancestors) + [group]
        color = inherited
        for member in lineage:
            color = member.get_color() or color
        path = base_path + [member.name for member in lineage]
        for prompt in group.prompts:
            if not needle or _matches(prompt, needle):
                results.append(
                    PromptMatch(prompt=prompt, group=group, path=path, color=color)
                )
    return results


def collect_prompts(roots: Sequence[Group]) -> List[PromptMatch]:
    """Every prompt in the forest, unfiltered."""
    return search_prompts(roots)
