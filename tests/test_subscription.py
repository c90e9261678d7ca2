import gc
import logging
import warnings

import pytest

from colloquy.errors import HandlerFailure, InvalidRecipientError
from colloquy.subscription import SubscriptionList


def test_subscribe_unsubscribe_resubscribe():
    clicks = SubscriptionList()
    fired = []

    def on_click(item):
        fired.append(item)

    clicks.subscribe(on_click)
    clicks.fire("e1")
    clicks.unsubscribe(on_click)
    clicks.fire("e2")
    clicks.subscribe(on_click)
    clicks.fire("e3")

    assert fired == ["e1", "e3"]


def test_handlers_run_in_subscription_order():
    events = SubscriptionList()
    calls = []

    for tag in "abc":
        events.subscribe(lambda event, tag=tag: calls.append(tag + event))

    report = events.fire("!")

    assert calls == ["a!", "b!", "c!"]
    assert report.recipients == report.delivered == 3
    assert report.ok


def test_duplicate_handlers_are_called_once_per_subscription():
    events = SubscriptionList()
    calls = []
    handler = calls.append

    events.subscribe(handler)
    events.subscribe(handler)
    events.fire("x")

    assert calls == ["x", "x"]
    assert len(events) == 2


def test_unsubscribe_removes_every_subscription_by_default():
    events = SubscriptionList()
    calls = []

    events.subscribe(calls.append)
    events.subscribe(calls.append)
    events.unsubscribe(calls.append)

    assert events.fire("x").recipients == 0
    assert calls == []


def test_unsubscribe_earliest_only():
    events = SubscriptionList()
    calls = []

    events.subscribe(calls.append)
    events.subscribe(calls.append)
    events.unsubscribe(calls.append, every=False)
    events.fire("x")

    assert calls == ["x"]


def test_unsubscribing_unknown_handler_is_a_no_op():
    events = SubscriptionList()
    events.subscribe(print)
    events.unsubscribe(len)

    assert events.handlers() == (print,)


def test_subscribe_as_decorator():
    events = SubscriptionList()
    calls = []

    @events.subscribe
    def on_event(event):
        calls.append(event)

    events("decorated")

    assert on_event in events
    assert calls == ["decorated"]


def test_unsubscribing_during_fire_keeps_the_current_pass():
    events = SubscriptionList()
    calls = []

    def first(event):
        calls.append("first")
        events.unsubscribe(first)
        events.unsubscribe(second)

    def second(event):
        calls.append("second")

    events.subscribe(first)
    events.subscribe(second)

    report = events.fire("go")

    assert calls == ["first", "second"]
    assert report.delivered == 2
    assert events.fire("again").recipients == 0


def test_subscribing_during_fire_waits_for_the_next_pass():
    events = SubscriptionList()
    calls = []

    def late(event):
        calls.append("late " + event)

    def early(event):
        calls.append("early " + event)
        events.subscribe(late)

    events.subscribe(early)
    events.fire("1")
    events.unsubscribe(early)
    events.fire("2")

    assert calls == ["early 1", "late 2"]


def test_scope_is_passed_before_the_event():
    events = SubscriptionList()
    calls = []

    events.subscribe(lambda scope, event: calls.append((scope, event)))
    events.fire("e", scope="button")

    assert calls == [("button", "e")]


def test_default_scope():
    events = SubscriptionList(default_scope="window")
    calls = []

    events.subscribe(lambda scope, event: calls.append((scope, event)))
    events.fire("e")
    events.fire("f", scope="frame")

    assert calls == [("window", "e"), ("frame", "f")]


def test_handler_failures_are_isolated(caplog):
    events = SubscriptionList()
    calls = []

    def broken(event):
        raise ValueError("nope")

    events.subscribe(calls.append)
    events.subscribe(broken)
    events.subscribe(calls.append)

    with caplog.at_level(logging.ERROR):
        report = events.fire("boom")

    assert calls == ["boom", "boom"]
    assert report.recipients == 3
    assert report.delivered == 2
    assert not report.ok

    (failure,) = report.failures
    assert isinstance(failure, HandlerFailure)
    assert failure.handler is broken
    assert failure.event == "boom"
    assert failure.describe() == "ValueError: nope"

    assert "failed on event 'boom'" in caplog.text


def test_invalid_handler_raises_before_any_delivery():
    events = SubscriptionList()
    calls = []

    events.subscribe(calls.append)
    events.subscribe(None)

    with pytest.raises(InvalidRecipientError):
        events.fire("x")

    assert calls == []


def test_non_callable_handler_is_invalid():
    events = SubscriptionList()
    events.subscribe("not a function")

    with pytest.raises(TypeError, match="not callable"):
        events.fire("x")


def test_coroutine_handlers_fail_on_sync_fire():
    events = SubscriptionList()
    calls = []

    async def later(event):
        calls.append(event)

    events.subscribe(later)
    events.subscribe(calls.append)

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        report = events.fire("e")
        gc.collect()

    assert calls == ["e"]
    assert report.delivered == 1
    assert not report.ok

    (failure,) = report.failures
    assert failure.handler is later
    assert isinstance(failure.error, InvalidRecipientError)
    assert "fire_async" in str(failure.error)

    assert not [w for w in caught if issubclass(w.category, RuntimeWarning)]


def test_explicit_none_scope_overrides_default():
    events = SubscriptionList(default_scope="window")
    calls = []

    events.subscribe(lambda *args: calls.append(args))
    events.fire("e", scope=None)
    events.fire("f")

    assert calls == [("e",), ("window", "f")]
