"""
Snapshot models for the Prompt Pocket store.

Models representing the values kept under each storage key.
"""

from typing import List

from pydantic import BaseModel, Field

from pocket.constants import (
    DEFAULT_CONFIRM_DELETE,
    DEFAULT_PREVIEW_LENGTH,
    DEFAULT_SHOW_COPY_NOTIFICATION,
)

from .base import Group


class PromptTree(BaseModel):
    """Model for the persisted prompt snapshot.

    The whole forest of root groups, always read and written as one value.
    """

    groups: List[Group] = Field(default_factory=list)


class ConfigFile(BaseModel):
    """Model for the stored user settings."""

    show_copy_notification: bool = DEFAULT_SHOW_COPY_NOTIFICATION
    confirm_delete: bool = DEFAULT_CONFIRM_DELETE
    preview_length: int = Field(default=DEFAULT_PREVIEW_LENGTH, gt=0)
