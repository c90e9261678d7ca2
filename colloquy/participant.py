"""
A ready-made participant, for chatrooms and the like.
"""

import logging
import typing
from typing import Any, Hashable, Optional

import attr

from .base import identity_of
from .errors import ParticipantDetachedError

if typing.TYPE_CHECKING:
    from .base import Recipient
    from .channel import Channel


logger = logging.getLogger(__name__)


@attr.s(auto_attribs=True, eq=False)
class Participant:
    """
    A named chat participant.

    Once registered in a Channel, it keeps a reference to it, and can
    send messages through it. Every message it receives is logged and
    kept in its inbox, along with the name of its sender.
    """

    # The participant's identity in its channel.
    name: Hashable

    # The channel it is registered in, if any.
    channel: Optional["Channel"] = attr.ib(default=None, repr=False)

    # (sender name, message) pairs, oldest first.
    inbox: list[tuple[Any, Any]] = attr.ib(factory=list, repr=False)

    def send(self, message: Any, to: Optional["Recipient"] = None) -> int:
        """Sends a message through this participant's channel; to a
        single recipient if given, to everyone else otherwise.

        Raises:
            ParticipantDetachedError: this participant is not registered anywhere.

        Returns: how many recipients received the message. (type: {int})
        """

        if self.channel is None:
            raise ParticipantDetachedError(
                "Participant {!r} is not registered in any channel".format(self.name)
            )

        return self.channel.send(message, self, to)

    def receive(self, message: Any, sender: Any):
        """Records and logs a message sent to this participant."""

        sender_name = identity_of(sender)
        self.inbox.append((sender_name, message))

        logger.info("%s to %s: %s", sender_name, self.name, message)
