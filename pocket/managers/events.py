"""
Event system for the Prompt Pocket store.

Lets views refresh after the store changes, without the store knowing about them.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class EventType(str, Enum):
    """Types of events published by the store."""
    GROUP_CREATED = "group.created"
    GROUP_UPDATED = "group.updated"
    GROUP_DELETED = "group.deleted"
    GROUP_MOVED = "group.moved"
    PROMPT_CREATED = "prompt.created"
    PROMPT_UPDATED = "prompt.updated"
    PROMPT_DELETED = "prompt.deleted"
    PROMPT_MOVED = "prompt.moved"
    STORE_SAVED = "store.saved"
    STORE_IMPORTED = "store.imported"
    STORE_RESET = "store.reset"


@dataclass
class Event:
    """Base event class."""
    type: EventType
    timestamp: datetime = field(default_factory=datetime.now)
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class NodeEvent(Event):
    """Event for group and prompt changes."""
    node_id: str = ""
    group_id: Optional[str] = None


class EventListener(ABC):
    """Base class for event listeners."""

    @abstractmethod
    def handle(self, event: Event) -> None:
        """Handle an event.

        Args:
            event: The event to handle.
        """
        pass

    @property
    @abstractmethod
    def subscribed_events(self) -> List[EventType]:
        """Return list of event types this listener subscribes to."""
        pass


class CallbackListener(EventListener):
    """Listener that forwards events to a plain callable."""

    def __init__(
        self,
        callback: Callable[[Event], None],
        event_types: Optional[List[EventType]] = None,
    ) -> None:
        self.callback = callback
        self._event_types = event_types or list(EventType)

    def handle(self, event: Event) -> None:
        self.callback(event)

    @property
    def subscribed_events(self) -> List[EventType]:
        return self._event_types


class EventBus:
    """
    Event bus for publishing and subscribing to events.

    Each bus is an ordinary instance; create one per store and pass it along.
    """

    def __init__(self) -> None:
        self._listeners: Dict[EventType, List[EventListener]] = {}

    def subscribe(self, listener: EventListener) -> None:
        """Subscribe a listener to events.

        Args:
            listener: The listener to subscribe.
        """
        for event_type in listener.subscribed_events:
            self._listeners.setdefault(event_type, []).append(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        """Unsubscribe a listener from all events.

        Args:
            listener: The listener to unsubscribe.
        """
        for listeners in self._listeners.values():
            if listener in listeners:
                listeners.remove(listener)

    def publish(self, event: Event) -> None:
        """Publish an event to all subscribed listeners.

        Args:
            event: The event to publish.
        """
        for listener in list(self._listeners.get(event.type, [])):
            try:
                listener.handle(event)
            except Exception:
                # Log error but don't stop other listeners
                logger.exception(
                    "Listener %s failed on %s", listener.__class__.__name__, event.type.value
                )

    def clear(self) -> None:
        """Clear all listeners (useful for testing)."""
        self._listeners.clear()
