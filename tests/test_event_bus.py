from gemfall.events.bus import EventBus


def test_event_bus_subscribe_emit():
    bus = EventBus()
    received = {}

    def handler(sender, **kwargs):
        received.update(kwargs)

    bus.subscribe('test_event', handler)
    bus.emit('test_event', value=42)
    assert received.get('value') == 42


def test_emit_without_subscribers_is_noop():
    EventBus().emit('nobody_listens', value=1)


def test_unsubscribe_stops_delivery():
    bus = EventBus()
    calls = []

    def handler(sender, **kwargs):
        calls.append(kwargs)

    bus.subscribe('evt', handler)
    bus.unsubscribe('evt', handler)
    bus.emit('evt', value=1)
    assert calls == []
