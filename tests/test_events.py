"""
Tests for the event bus.
"""

from pocket.managers.events import (
    CallbackListener,
    Event,
    EventBus,
    EventListener,
    EventType,
    NodeEvent,
)


class RecordingListener(EventListener):
    def __init__(self, event_types):
        self._event_types = event_types
        self.events = []

    def handle(self, event):
        self.events.append(event)

    @property
    def subscribed_events(self):
        return self._event_types


class TestEventBus:
    """Test subscribe / publish / unsubscribe."""

    def test_listener_receives_subscribed_events_only(self, event_bus):
        listener = RecordingListener([EventType.GROUP_CREATED])
        event_bus.subscribe(listener)

        event_bus.publish(NodeEvent(type=EventType.GROUP_CREATED, node_id="g1"))
        event_bus.publish(NodeEvent(type=EventType.PROMPT_CREATED, node_id="p1"))

        assert [e.node_id for e in listener.events] == ["g1"]

    def test_callback_listener_defaults_to_all_events(self, event_bus):
        received = []
        event_bus.subscribe(CallbackListener(received.append))
        for event_type in EventType:
            event_bus.publish(Event(type=event_type))
        assert [e.type for e in received] == list(EventType)

    def test_unsubscribe(self, event_bus):
        listener = RecordingListener([EventType.STORE_SAVED])
        event_bus.subscribe(listener)
        event_bus.unsubscribe(listener)
        event_bus.publish(Event(type=EventType.STORE_SAVED))
        assert listener.events == []

    def test_failing_listener_does_not_stop_others(self, event_bus, caplog):
        def explode(event):
            raise RuntimeError("listener bug")

        received = []
        event_bus.subscribe(CallbackListener(explode))
        event_bus.subscribe(CallbackListener(received.append))

        event_bus.publish(Event(type=EventType.STORE_RESET))

        assert len(received) == 1
        assert "listener bug" in caplog.text

    def test_buses_are_independent(self):
        first, second = EventBus(), EventBus()
        received = []
        first.subscribe(CallbackListener(received.append))
        second.publish(Event(type=EventType.STORE_SAVED))
        assert received == []

    def test_clear(self, event_bus):
        listener = RecordingListener([EventType.STORE_SAVED])
        event_bus.subscribe(listener)
        event_bus.clear()
        event_bus.publish(Event(type=EventType.STORE_SAVED))
        assert listener.events == []
