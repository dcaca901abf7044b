"""
Custom exceptions for the Prompt Pocket store.
"""


class PocketError(Exception):
    """Base exception for all Prompt Pocket errors."""
    pass


class ValidationError(PocketError):
    """Raised when validation fails for an update or operation argument."""
    pass


class InvalidOperationError(PocketError):
    """Raised when an operation would break the tree structure."""
    pass


class InvalidImportError(PocketError):
    """Raised when imported data does not have the prompt tree shape."""
    pass


class StorageError(PocketError):
    """Raised when the persistence layer fails to read or write a snapshot."""
    pass


class NotFoundError(PocketError):
    """Raised when a requested entity is not found.

    Attributes:
        entity_id: Identifier that failed to resolve.
    """

    label = "Item"

    def __init__(self, entity_id: str, message: str | None = None) -> None:
        self.entity_id = entity_id
        super().__init__(message or f"{self.label} not found: '{entity_id}'")


class GroupNotFoundError(NotFoundError):
    """Raised when a group id does not resolve."""

    label = "Group"


class ParentGroupNotFoundError(GroupNotFoundError):
    """Raised when the parent of a new subgroup does not resolve."""

    label = "Parent group"


class SourceGroupNotFoundError(GroupNotFoundError):
    """Raised when the group a prompt is moved from does not resolve."""

    label = "Source group"


class DestinationGroupNotFoundError(GroupNotFoundError):
    """Raised when the group something is moved into does not resolve."""

    label = "Destination group"


class PromptNotFoundError(NotFoundError):
    """Raised when a prompt id does not resolve in the searched scope."""

    label = "Prompt"


class DuplicateError(PocketError):
    """Raised when a new group or prompt reuses an id already in the tree."""
    pass
