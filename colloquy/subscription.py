"""
The Subscription List: anonymous handlers on a single event stream.
"""

import logging
from typing import Any, Callable, Optional

from .dispatch import (
    DispatchReport,
    dispatch,
    dispatch_async,
    ensure_callable,
    failure_collector,
)
from .registry import OrderedRegistry


# Default scope argument of fire; None asks for an unbound call.
_DEFAULT_SCOPE = object()


class SubscriptionList:
    """
    An ordered list of handlers, all of which are notified whenever
    an event is fired.

        >>> clicks = SubscriptionList()
        >>> def on_click(item):
        ...     print('fired: ' + item)
        ...
        >>> clicks.subscribe(on_click) is on_click
        True
        >>> report = clicks.fire('event #1')
        fired: event #1
        >>> clicks.unsubscribe(on_click)
        >>> report = clicks.fire('event #2')
        >>> report.recipients
        0

    A handler that raises does not keep the handlers after it from
    being called; its failure is logged and collected in the
    DispatchReport that fire returns.
    """

    def __init__(
        self, default_scope: Any = None, logger: Optional[logging.Logger] = None
    ):
        """
        Keyword Arguments:
            default_scope {Any} -- The scope handlers are bound to when fire is
                                   not given one. None means handlers are called
                                   with the event alone. (default: {None})
            logger {Optional[logging.Logger]} -- Where handler failures are
                                                 logged. (default: the module logger)
        """

        self.default_scope = default_scope
        self.logger = logger or logging.getLogger(__name__)

        self._handlers = OrderedRegistry()

    def subscribe(self, handler: Callable) -> Callable:
        """Adds a handler. The same handler may be added more than once,
        in which case it is called once per subscription.

        Returns the handler, so this can also be used as a decorator.
        """

        self._handlers.insert(handler)
        return handler

    def unsubscribe(self, handler: Callable, every: bool = True):
        """Removes a handler. Does nothing if it is not subscribed.

        Arguments:
            handler {Callable} -- The handler to remove. Compared by equality,
                                  so bound methods can be passed anew.

        Keyword Arguments:
            every {bool} -- Remove all of its subscriptions, rather than only
                            the earliest one. (default: {True})
        """

        self._handlers.discard(handler, every=every)

    def handlers(self) -> tuple[Callable, ...]:
        """All subscribed handlers, in subscription order."""
        return self._handlers.values()

    def clear(self):
        """Unsubscribes everything."""
        self._handlers.clear()

    def _prepare(self, scope: Any) -> tuple[tuple[Callable, ...], Any]:
        handlers = self._handlers.values()

        for handler in handlers:
            ensure_callable(handler)

        if scope is _DEFAULT_SCOPE:
            scope = self.default_scope

        return handlers, scope

    @staticmethod
    def _caller(event: Any, scope: Any) -> Callable[[Callable], Any]:
        if scope is None:
            return lambda handler: handler(event)

        return lambda handler: handler(scope, event)

    def fire(self, event: Any, scope: Any = _DEFAULT_SCOPE) -> DispatchReport:
        """Notifies every handler subscribed at the time of the call.

        Handlers are called in subscription order. Subscribing or
        unsubscribing while firing only affects later calls to fire.

        Arguments:
            event {Any} -- The event; passed to each handler.

        Keyword Arguments:
            scope {Any} -- If not None, handlers are called as handler(scope, event)
                           instead of handler(event). Passing None explicitly
                           overrides default_scope for this call.
                           (default: self.default_scope)

        Raises:
            InvalidRecipientError: a subscribed handler is None or not callable.
                                   Nothing is delivered in that case. Coroutine
                                   handlers are not raised for, but reported as
                                   failures; they need fire_async.

        Returns: a DispatchReport of this pass. (type: {DispatchReport})
        """

        handlers, scope = self._prepare(scope)

        report = DispatchReport(recipients=len(handlers))
        report.delivered = dispatch(
            handlers,
            self._caller(event, scope),
            isolate=failure_collector(report, event, self.logger),
        )

        return report

    async def fire_async(
        self, event: Any, scope: Any = _DEFAULT_SCOPE, concurrent: bool = False
    ) -> DispatchReport:
        """Like fire, but from within trio; coroutine handlers are awaited.

        Keyword Arguments:
            scope {Any} -- See fire. (default: self.default_scope)
            concurrent {bool} -- Start every handler in a nursery, in subscription
                                 order, instead of awaiting them one by one.
                                 (default: {False})

        Returns: a DispatchReport of this pass. (type: {DispatchReport})
        """

        handlers, scope = self._prepare(scope)

        report = DispatchReport(recipients=len(handlers))
        report.delivered = await dispatch_async(
            handlers,
            self._caller(event, scope),
            isolate=failure_collector(report, event, self.logger),
            concurrent=concurrent,
        )

        return report

    def __call__(self, event: Any, scope: Any = _DEFAULT_SCOPE) -> DispatchReport:
        return self.fire(event, scope)

    def __contains__(self, handler: Callable) -> bool:
        return handler in self._handlers.values()

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self):
        return "{}({} handlers)".format(type(self).__name__, len(self))
