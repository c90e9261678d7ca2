"""
The Channel class.

A Channel is a mediator between named participants: they never refer
to each other directly, they ask the Channel to deliver for them,
either to one participant or to everyone else registered.
"""

import logging
import typing
from typing import Any, Hashable, Iterable, Optional

import attr

from .base import Addressable, Recipient, identity_of
from .dispatch import dispatch, dispatch_async
from .errors import InvalidRecipientError
from .mutator import Mutator
from .registry import OrderedRegistry
from .subscription import SubscriptionList


# Compares unequal to every registered name.
_NO_IDENTITY = object()


@attr.s(auto_attribs=True, frozen=True)
class ChannelEvent:
    """
    Fired on Channel.events whenever the channel's membership changes.
    """

    # Either 'join' or 'part'.
    kind: str

    # The channel whose membership changed.
    channel: "Channel" = attr.ib(repr=False)

    # The identity that joined or parted.
    name: Hashable

    # The participant, when known. Always set for 'join'.
    participant: Optional[Addressable] = None


class Channel:
    """
    A registry of named participants, with addressed and broadcast delivery.

        >>> from colloquy.participant import Participant
        >>> room = Channel('chatroom')
        >>> yoko, john = Participant('Yoko'), Participant('John')
        >>> room.register(yoko)
        >>> room.register(john)
        >>> room.send('All you need is love.', yoko)
        1
        >>> john.inbox
        [('Yoko', 'All you need is love.')]
        >>> yoko.inbox
        []

    Registering a name that is already registered replaces the old
    participant where it stood; unregistering an unknown name does
    nothing. Neither is an error.
    """

    def __init__(
        self,
        name: str = "channel",
        mutators: Iterable[Mutator] = (),
        logger: Optional[logging.Logger] = None,
    ):
        """
        Keyword Arguments:
            name {str} -- A descriptive name for this channel. (default: {"channel"})
            mutators {Iterable[Mutator]} -- Mutators to register right away.
                                            (default: none)
            logger {Optional[logging.Logger]} -- The logger of this channel.
                                                 (default: the module logger)
        """

        self.name = name
        self.logger = logger or logging.getLogger(__name__)
        self.mutators: list[Mutator] = []

        # Membership changes are announced here, as ChannelEvents.
        self.events = SubscriptionList(logger=self.logger)

        self._participants = OrderedRegistry()

        for mutator in mutators:
            self.register_mutator(mutator)

    def register_mutator(self, mutator: Mutator):
        """
        Registers an individual mutator. Mutators are applied in
        the order they were registered.
        """

        self.mutators.append(mutator)

    def register(self, participant: Addressable):
        """Registers a participant, keyed by its name.

        If the participant has a `channel` attribute, it is pointed at
        this channel, so that the participant can send through it.

        Arguments:
            participant {Addressable} -- The participant to register.

        Raises:
            InvalidRecipientError: the participant has no name.
        """

        if not hasattr(participant, "name"):
            raise InvalidRecipientError(participant, "participant has no name")

        name = participant.name
        evicted = self._participants.get(name)

        self._participants.insert(participant, key=name)

        if evicted is not None and evicted is not participant:
            self.logger.debug(
                "%s: %r replaces %r under the name %r",
                self.name,
                participant,
                evicted,
                name,
            )
            self._detach(evicted)

        if hasattr(participant, "channel"):
            participant.channel = self

        for mutator in self.mutators:
            mutator.on_register(self, participant)

        self.events.fire(ChannelEvent("join", self, name, participant))

    def unregister(self, name: Hashable) -> bool:
        """Unregisters a participant by name. Does nothing if there
        is no such participant.

        Returns: whether a participant was removed. (type: {bool})
        """

        participant = self._participants.get(name)

        if not self._participants.remove(name):
            return False

        self._detach(participant)

        for mutator in self.mutators:
            mutator.on_unregister(self, name)

        self.events.fire(ChannelEvent("part", self, name, participant))
        return True

    def _detach(self, participant: Any):
        if getattr(participant, "channel", None) is self:
            participant.channel = None

    def get(self, name: Hashable) -> Optional[Addressable]:
        """Finds a registered participant by name."""
        return self._participants.get(name)

    def names(self) -> tuple[Hashable, ...]:
        """The names of all participants, in registration order."""
        return self._participants.keys()

    def participants(self) -> tuple[Addressable, ...]:
        """All participants, in registration order."""
        return self._participants.values()

    def _recipients(self, sender: Any, to: Optional[Recipient]) -> list[Recipient]:
        if to is not None:
            recipients = [to]

        else:
            sender_name = identity_of(sender, _NO_IDENTITY)

            recipients = [
                participant
                for name, participant in self._participants.snapshot()
                if name != sender_name
            ]

        for recipient in recipients:
            if recipient is None:
                raise InvalidRecipientError(recipient, "recipient is None")

            if not callable(getattr(recipient, "receive", None)):
                raise InvalidRecipientError(
                    recipient, "recipient has no callable receive method"
                )

        return recipients

    def _mutate(self, sender: Any, recipient: Recipient, message: Any) -> Any:
        for mutator in self.mutators:
            message = mutator.modify_message(self, sender, recipient, message)

            if message is None:
                break

        return message

    def _deliverer(self, message: Any, sender: Any, cancelled: list):
        def _deliver(recipient: Recipient):
            mutated = self._mutate(sender, recipient, message)

            if mutated is None:
                cancelled.append(recipient)
                return None

            return recipient.receive(mutated, sender)

        return _deliver

    def send(self, message: Any, sender: Any, to: Optional[Recipient] = None) -> int:
        """Delivers a message.

        With a target, only the target receives it; the target is used as
        given, and does not need to be registered here. Without a target,
        the message is broadcast to every participant registered at the time
        of the call, in registration order, except the one whose name is the
        sender's.

        Exceptions raised by recipients propagate, aborting the rest of a
        broadcast.

        Arguments:
            message {Any} -- The message to deliver.
            sender {Any} -- Whoever is sending it. Need not be registered.

        Keyword Arguments:
            to {Optional[Recipient]} -- The single recipient, if any. (default: {None})

        Raises:
            InvalidRecipientError: a recipient cannot receive messages. Nothing
                                   is delivered in that case.
            InvalidRecipientError: a recipient returned an awaitable; coroutine
                                   recipients need send_async.

        Returns: how many recipients received the message. (type: {int})
        """

        recipients = self._recipients(sender, to)
        cancelled = []

        delivered = dispatch(recipients, self._deliverer(message, sender, cancelled))
        return delivered - len(cancelled)

    async def send_async(
        self, message: Any, sender: Any, to: Optional[Recipient] = None
    ) -> int:
        """Like send, but from within trio. Recipients whose receive
        returns an awaitable are awaited, one at a time, in order."""

        recipients = self._recipients(sender, to)
        cancelled = []

        delivered = await dispatch_async(
            recipients, self._deliverer(message, sender, cancelled)
        )
        return delivered - len(cancelled)

    def __contains__(self, name: Hashable) -> bool:
        return name in self._participants

    def __len__(self) -> int:
        return len(self._participants)

    def __iter__(self) -> typing.Iterator[Addressable]:
        return iter(self._participants)

    def __repr__(self):
        return "{}('{}': {} participants)".format(
            type(self).__name__, self.name, len(self)
        )
