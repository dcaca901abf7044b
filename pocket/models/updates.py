"""
Partial update models for groups and prompts.

Only fields explicitly passed are applied; unknown fields are rejected.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from pocket.exceptions import ValidationError as PocketValidationError

from .base import GroupColor


class GroupUpdate(BaseModel):
    """Fields of a group that can be patched. Setting color to None clears it."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    color: Optional[GroupColor] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("Group name cannot be null")
        return v


class PromptUpdate(BaseModel):
    """Fields of a prompt that can be patched."""

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    content: Optional[str] = None

    @field_validator("title", "content")
    @classmethod
    def validate_not_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("Prompt fields cannot be null")
        return v


def build_changes(model: type[BaseModel], updates: Dict[str, Any]) -> Dict[str, Any]:
    """Validate a patch and return only the fields that were provided.

    Args:
        model: GroupUpdate or PromptUpdate.
        updates: Raw field values.

    Returns:
        Mapping of field name to JSON-compatible value.

    Raises:
        ValidationError: If no fields are given or a field is unknown or invalid.
    """
    if not updates:
        raise PocketValidationError(
            "No update fields provided. "
            f"Please specify at least one of: {', '.join(model.model_fields)}."
        )
    try:
        patch = model.model_validate(updates)
    except ValidationError as e:
        raise PocketValidationError(f"Invalid update: {e}") from e
    return patch.model_dump(mode="json", exclude_unset=True)
