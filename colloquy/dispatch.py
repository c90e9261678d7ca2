"""
The dispatch routine shared by Channels and Subscription Lists.

A dispatch pass walks a snapshot of registry values, in order, and
hands each one to a delivery callback. Whether a failing delivery
aborts the pass or is merely reported depends on the caller.
"""

import inspect
import logging
import typing
from collections.abc import Iterable
from typing import Any, Callable, Optional

import attr
import trio

from .errors import HandlerFailure, InvalidRecipientError


logger = logging.getLogger(__name__)


@attr.s(auto_attribs=True)
class DispatchReport:
    """The outcome of a single dispatch pass."""

    # How many recipients were in the snapshot.
    recipients: int = 0

    # How many deliveries completed without raising.
    delivered: int = 0

    # Everything that went wrong, in delivery order.
    failures: list[HandlerFailure] = attr.Factory(list)

    @property
    def ok(self) -> bool:
        """Whether no delivery failed."""
        return not self.failures

    def __bool__(self):
        return self.ok


def _deliver_sync(deliver: Callable[[Any], Any], entry: Any):
    result = deliver(entry)

    if inspect.isawaitable(result):
        if hasattr(result, "close"):
            result.close()

        raise InvalidRecipientError(
            entry, "coroutine recipient; use fire_async/send_async"
        )


def dispatch(
    entries: Iterable[Any],
    deliver: Callable[[Any], Any],
    isolate: Optional[Callable[[Any, Exception], None]] = None,
) -> int:
    """Delivers to each entry, in order.

    Arguments:
        entries {Iterable[Any]} -- An already-taken snapshot of recipients.
        deliver {Callable[[Any], Any]} -- Called once per entry.

    Keyword Arguments:
        isolate {Optional[Callable]} -- If given, exceptions raised by a delivery
                                        are passed here, together with the entry,
                                        and the pass goes on. Otherwise they
                                        propagate. (default: {None})

    Raises:
        InvalidRecipientError: a delivery returned an awaitable, which is closed
                               unawaited. Reported to isolate instead, if given.

    Returns: how many deliveries completed. (type: {int})
    """

    delivered = 0

    for entry in entries:
        if isolate is None:
            _deliver_sync(deliver, entry)

        else:
            # (Handlers are arbitrary user code; any of them failing must
            # not keep the others from running.)
            # pylint: disable=broad-except
            try:
                _deliver_sync(deliver, entry)

            except Exception as err:
                isolate(entry, err)
                continue

        delivered += 1

    return delivered


async def _deliver_async(deliver: Callable[[Any], Any], entry: Any):
    result = deliver(entry)

    if inspect.isawaitable(result):
        await result


async def dispatch_async(
    entries: Iterable[Any],
    deliver: Callable[[Any], Any],
    isolate: Optional[Callable[[Any, Exception], None]] = None,
    concurrent: bool = False,
) -> int:
    """The trio counterpart of dispatch.

    Deliveries may return awaitables, which are awaited. Sequential
    passes await each delivery before starting the next one; concurrent
    passes start every delivery, in order, in a single nursery.

        >>> import trio
        >>> seen = []
        >>> async def loud(item):
        ...     seen.append(item.upper())
        ...
        >>> trio.run(dispatch_async, ['a', 'b'], loud)
        2
        >>> seen
        ['A', 'B']

    Arguments:
        entries {Iterable[Any]} -- An already-taken snapshot of recipients.
        deliver {Callable[[Any], Any]} -- Called once per entry.

    Keyword Arguments:
        isolate {Optional[Callable]} -- See dispatch. (default: {None})
        concurrent {bool} -- Fan out in a nursery. (default: {False})

    Returns: how many deliveries completed. (type: {int})
    """

    delivered = 0

    async def _one(entry):
        nonlocal delivered

        if isolate is None:
            await _deliver_async(deliver, entry)

        else:
            # pylint: disable=broad-except
            try:
                await _deliver_async(deliver, entry)

            except Exception as err:
                isolate(entry, err)
                return

        delivered += 1

    if concurrent:
        async with trio.open_nursery() as nursery:
            for entry in entries:
                nursery.start_soon(_one, entry)

    else:
        for entry in entries:
            await _one(entry)

    return delivered


def failure_collector(
    report: DispatchReport, event: Any, log: Optional[logging.Logger] = None
) -> Callable[[Any, Exception], None]:
    """
    Makes an isolate callback that logs each failure and records it
    in the given report.
    """

    log = log or logger

    def _isolate(handler: Any, err: Exception):
        failure = HandlerFailure(handler, event, err)
        report.failures.append(failure)

        log.error(
            "Handler %r failed on event %r",
            handler,
            event,
            exc_info=(type(err), err, err.__traceback__),
        )

    return _isolate


def ensure_callable(recipient: Any, what: str = "handler") -> typing.Callable:
    """Returns the recipient if it can be called, or raises InvalidRecipientError."""
    if recipient is None:
        raise InvalidRecipientError(recipient, "{} is None".format(what))

    if not callable(recipient):
        raise InvalidRecipientError(recipient, "{} is not callable".format(what))

    return recipient
