"""
Managers for the Prompt Pocket store.

This package contains focused modules that handle specific aspects of the store:
- StorageManager / MemoryStorage: Key-value persistence of snapshots
- StoreManager: Transactional CRUD, move and reorder on the prompt tree
- navigation_manager: Tree traversal, lookup and removal helpers
- search_manager: Prompt search with group paths and inherited colors
- transfer_manager: JSON import and export
- EventBus: Change notifications for views
"""

from pocket.managers.storage_manager import MemoryStorage, StorageManager, StoragePort
from pocket.managers.store_manager import StoreManager
from pocket.managers.search_manager import PromptMatch, collect_prompts, search_prompts
from pocket.managers.events import (
    CallbackListener,
    Event,
    EventBus,
    EventListener,
    EventType,
    NodeEvent,
)

__all__ = [
    "StoragePort",
    "StorageManager",
    "MemoryStorage",
    "StoreManager",
    "PromptMatch",
    "collect_prompts",
    "search_prompts",
    "CallbackListener",
    "Event",
    "EventBus",
    "EventListener",
    "EventType",
    "NodeEvent",
]
