from pytest import raises

from textmesh.utils import Event, EventTarget, EventType, LinkEvent


def test_event_type_values():
    assert EventType.UPDATE == "update"
    assert EventType.LINK_CLICK == "link_click"
    assert EventType.LINK_HOVER == "link_hover"
    assert EventType.LINK_LEAVE == "link_leave"


def test_add_and_remove_handler():
    target = EventTarget()
    events = []

    def handler(event):
        events.append(event)

    target.add_event_handler(handler, "update", "other")
    target.dispatch_event("update", property="font_size")
    target.dispatch_event("other")
    assert len(events) == 2
    assert events[0].type == "update"
    assert events[0].property == "font_size"
    assert events[0].target is target

    target.remove_event_handler(handler, "update")
    target.dispatch_event("update")
    assert len(events) == 2


def test_handler_decorator():
    target = EventTarget()
    events = []

    @target.add_event_handler("update")
    def handler(event):
        events.append(event.type)

    target.dispatch_event(EventType.UPDATE)
    assert events == ["update"]

    with raises(ValueError):
        target.add_event_handler(handler)
    with raises(TypeError):
        target.add_event_handler(handler, 3)


def test_link_event():
    target = EventTarget()
    events = []
    target.add_event_handler(events.append, "link_click")

    event = target.dispatch_event("link_click", link_id="home", link=None, x=1, y=2)
    assert isinstance(event, LinkEvent)
    assert events == [event]
    assert event.link_id == "home"
    assert (event.x, event.y) == (1, 2)


def test_cancel_event():
    target = EventTarget()
    calls = []

    def first(event):
        calls.append(1)
        event.cancel()

    def second(event):
        calls.append(2)

    target.add_event_handler(first, "update")
    target.add_event_handler(second, "update")
    event = target.dispatch_event("update")
    assert calls == [1]
    assert event.cancelled


def test_handler_errors_are_logged(caplog):
    target = EventTarget()
    calls = []

    def bad(event):
        raise RuntimeError("oops in handler")

    target.add_event_handler(bad, "update")
    target.add_event_handler(lambda e: calls.append(e), "update")
    target.dispatch_event("update")

    assert len(calls) == 1
    assert "oops in handler" in caplog.text


def test_event_repr():
    assert repr(Event("update")) == "<Event 'update'>"
