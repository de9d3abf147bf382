from samegame.events.bus import EventBus


def test_event_bus_emit_subscribe():
    bus = EventBus()
    received = {}

    def handler(sender, **kwargs):
        received.update(kwargs)

    bus.subscribe("test", handler)
    bus.emit("test", value=42, msg="hello")

    assert received["value"] == 42
    assert received["msg"] == "hello"


def test_emit_without_subscribers_is_a_no_op():
    EventBus().emit("nobody_listens", value=1)


def test_tolerant_emit_skips_failing_receiver(caplog):
    bus = EventBus()
    calls = []

    def broken(sender, **kwargs):
        raise RuntimeError("boom")

    def healthy(sender, **kwargs):
        calls.append(kwargs["value"])

    bus.subscribe("test", broken)
    bus.subscribe("test", healthy)
    bus.emit("test", tolerant=True, value=7)

    assert calls == [7]
    assert "failed while handling test" in caplog.text
