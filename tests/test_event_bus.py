from chartviz.gui.services.event_bus import EventBus, GUIEvent


def test_subscribe_and_publish_order():
    bus = EventBus()
    order = []

    bus.subscribe(GUIEvent.CONFIG_CHANGED, lambda e: order.append(("h1", e.name)))
    bus.subscribe(GUIEvent.CONFIG_CHANGED, lambda e: order.append(("h2", e.name)))
    evt = bus.publish(GUIEvent.CONFIG_CHANGED, {"title": "T"})
    assert order == [
        ("h1", GUIEvent.CONFIG_CHANGED.value),
        ("h2", GUIEvent.CONFIG_CHANGED.value),
    ]
    assert evt.payload == {"title": "T"}


def test_once_subscription():
    bus = EventBus()
    calls = []
    bus.subscribe(GUIEvent.POINTS_REPLACED, lambda e: calls.append(e.name), once=True)
    bus.publish(GUIEvent.POINTS_REPLACED)
    bus.publish(GUIEvent.POINTS_REPLACED)
    assert calls == [GUIEvent.POINTS_REPLACED.value]
    assert bus.subscriber_count(GUIEvent.POINTS_REPLACED) == 0


def test_unsubscribe_and_cancel():
    bus = EventBus()
    calls = []
    sub = bus.subscribe(GUIEvent.DATA_IMPORTED, lambda e: calls.append(1))
    bus.publish(GUIEvent.DATA_IMPORTED)
    sub.cancel()
    bus.publish(GUIEvent.DATA_IMPORTED)
    bus.unsubscribe(sub)
    assert calls == [1]
    assert bus.subscriber_count(GUIEvent.DATA_IMPORTED) == 0


def test_error_isolation():
    bus = EventBus()
    calls = []

    def bad(e):
        raise RuntimeError("boom")

    bus.subscribe(GUIEvent.EXPORT_FAILED, bad)
    bus.subscribe(GUIEvent.EXPORT_FAILED, lambda e: calls.append("ok"))
    bus.publish(GUIEvent.EXPORT_FAILED)
    assert calls == ["ok"]
    assert len(bus.errors) == 1


def test_custom_string_events_and_clear():
    bus = EventBus()
    calls = []
    bus.subscribe("custom", lambda e: calls.append(e.payload))
    bus.publish("custom", 5)
    bus.clear()
    bus.publish("custom", 6)
    assert calls == [5]


def test_handler_may_subscribe_during_dispatch():
    bus = EventBus()
    calls = []

    def first(e):
        bus.subscribe(GUIEvent.CONFIG_CHANGED, lambda e2: calls.append("late"))
        calls.append("first")

    bus.subscribe(GUIEvent.CONFIG_CHANGED, first, once=True)
    bus.publish(GUIEvent.CONFIG_CHANGED)
    bus.publish(GUIEvent.CONFIG_CHANGED)
    assert calls == ["first", "late"]
