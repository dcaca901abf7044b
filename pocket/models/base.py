"""
Tree node models for the Prompt Pocket store.

Groups and prompts form a forest: each group owns an ordered list of child
groups and an ordered list of prompts.
"""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field, PrivateAttr, field_validator

from pocket.utils import generate_id


class NodeKind(str, Enum):
    """Discriminator for the two tree node variants."""

    GROUP = "group"
    PROMPT = "prompt"


class GroupColor(str, Enum):
    """Valid display colors for a group."""

    RED = "red"
    ORANGE = "orange"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"
    PURPLE = "purple"
    PINK = "pink"


class Prompt(BaseModel):
    """Prompt model - a titled text snippet owned by exactly one group."""

    id: str = Field(default_factory=generate_id)
    title: str
    content: str = ""
    _node_kind: NodeKind = PrivateAttr(default=NodeKind.PROMPT)

    @property
    def node_kind(self) -> NodeKind:
        """Get the node kind."""
        return self._node_kind


class Group(BaseModel):
    """
    Group model - a named container of subgroups and prompts.

    Fields:
    - id: Unique identifier (shared namespace with prompts)
    - name: Display name
    - color: Optional display color, stored as a string (see get_color)
    - children: Child groups in display order
    - prompts: Prompts in display order
    """

    id: str = Field(default_factory=generate_id)
    name: str
    color: Optional[str] = None
    children: List["Group"] = Field(default_factory=list)
    prompts: List[Prompt] = Field(default_factory=list)
    _node_kind: NodeKind = PrivateAttr(default=NodeKind.GROUP)

    @property
    def node_kind(self) -> NodeKind:
        """Get the node kind."""
        return self._node_kind

    @field_validator("color", mode="before")
    @classmethod
    def coerce_color(cls, v: Any) -> Optional[str]:
        """Keep string colors as given and drop anything else."""
        if isinstance(v, GroupColor):
            return v.value
        if isinstance(v, str):
            return v
        return None

    def get_color(self) -> Optional[GroupColor]:
        """Get color as GroupColor enum, or None when unset or unknown."""
        if self.color is None:
            return None
        try:
            return GroupColor(self.color)
        except ValueError:
            return None

    def set_color(self, value: GroupColor | str | None = None) -> None:
        """Set color from string or GroupColor enum. None clears it."""
        if isinstance(value, GroupColor):
            self.color = value.value
        elif isinstance(value, str):
            self.color = GroupColor(value).value
        else:
            self.color = None

    def get_prompt(self, prompt_id: str) -> Optional[Prompt]:
        """Find a prompt directly owned by this group."""
        for prompt in self.prompts:
            if prompt.id == prompt_id:
                return prompt
        return None

    def prompt_index(self, prompt_id: str) -> int:
        """Position of a directly owned prompt, or -1 if absent."""
        for index, prompt in enumerate(self.prompts):
            if prompt.id == prompt_id:
                return index
        return -1
