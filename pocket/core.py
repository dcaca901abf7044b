"""
PocketCore - wiring for the Prompt Pocket store.

Builds the storage backend, event bus and store once, and hands out
references to them. Adapters receive a PocketCore instead of reaching for
module-level state.
"""

import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from pocket.constants import CONFIG_KEY
from pocket.exceptions import StorageError, ValidationError
from pocket.managers import EventBus, StorageManager, StoragePort, StoreManager
from pocket.models.files import ConfigFile
from pocket.utils import resolve_data_dir

logger = logging.getLogger(__name__)


class PocketCore:
    """
    Core object for the store and its settings.

    Orchestrates:
    - StoragePort: Persistence (JSON files in the data directory by default)
    - EventBus: Change notifications
    - StoreManager: All prompt tree operations
    - ConfigFile: User settings stored alongside the tree
    """

    def __init__(
        self,
        data_dir: Optional[Path] = None,
        storage: Optional[StoragePort] = None,
    ):
        """
        Initialize the PocketCore.

        Args:
            data_dir: Data directory. Defaults to $PROMPT_POCKET_HOME or ~/.prompt-pocket.
            storage: Backend to use instead of files in data_dir.
        """
        if storage is None:
            self.data_dir = resolve_data_dir(data_dir)
            storage = StorageManager(self.data_dir)
        else:
            self.data_dir = None
        self.storage = storage
        self.event_bus = EventBus()
        self.store = StoreManager(self.storage, self.event_bus)

    def load_config(self) -> ConfigFile:
        """Load user settings, falling back to defaults."""
        data = self.storage.get(CONFIG_KEY)
        if data is None:
            return ConfigFile()
        try:
            return ConfigFile.model_validate(data)
        except PydanticValidationError as e:
            raise StorageError(f"Failed to load config: {e}")

    def save_config(self, config: ConfigFile) -> None:
        """Save user settings."""
        self.storage.set(CONFIG_KEY, config.model_dump(mode="json"))

    def set_config_value(self, key: str, value: Any) -> ConfigFile:
        """Set one setting, coercing the value through ConfigFile.

        Raises:
            ValidationError: If key is unknown or value is invalid for it.
        """
        config = self.load_config()
        if key not in ConfigFile.model_fields:
            raise ValidationError(
                f"Unknown config key: '{key}'. "
                f"Valid keys are: {', '.join(ConfigFile.model_fields)}."
            )
        data = config.model_dump()
        data[key] = value
        try:
            updated = ConfigFile.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid value for '{key}': {e}")
        self.save_config(updated)
        logger.debug("Config %s set to %r", key, getattr(updated, key))
        return updated
