"""
Exceptions and failure records raised or collected by Colloquy.

Registering an already known name, or removing something that is not
registered, are *not* errors: the former overwrites the old entry in
place and the latter does nothing.
"""

import typing

import attr


class ColloquyError(Exception):
    """
    A common superclass for all
    exceptions regarding Colloquy.
    """
    pass

# == Delivery errors ==

class InvalidRecipientError(ColloquyError, TypeError):
    """
    Raised when a message or event is about to be delivered
    to something that cannot receive it, such as None, a
    non-callable handler, or an object with no callable
    `receive` method.

    This is a programming error, so it is always raised to
    the caller of send or fire, never swallowed.
    """

    def __init__(self, recipient: typing.Any, reason: str):
        super().__init__(
            "Cannot deliver to {}: {}".format(repr(recipient), reason)
        )
        self.recipient = recipient
        self.reason = reason

# == Participant errors ==

class ParticipantDetachedError(ColloquyError):
    """
    Raised when a Participant tries to send a message
    while not registered in any Channel.
    """
    pass


@attr.s(auto_attribs=True, frozen=True)
class HandlerFailure:
    """
    An exception raised by a single handler while an event was
    being fired. It is collected instead of propagated, so that
    the remaining handlers of the same pass still get called.
    """

    # The handler that raised.
    handler: typing.Any

    # The event it was being called with.
    event: typing.Any

    # What it raised.
    error: BaseException

    def describe(self) -> str:
        """A single-line summary, in the form 'TypeName: message'."""
        return "{}: {}".format(type(self.error).__name__, str(self.error))
