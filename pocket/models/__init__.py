"""
Data models for the Prompt Pocket store.

Import models explicitly from their modules:
    from pocket.models.base import Group, Prompt, GroupColor, NodeKind
    from pocket.models.files import PromptTree, ConfigFile
    from pocket.models.updates import GroupUpdate, PromptUpdate
    from pocket.models.validation import validate_tree, parse_tree
"""

from .base import Group, Prompt

Group.model_rebuild()
Prompt.model_rebuild()
