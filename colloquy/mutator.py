"""
Mutators are extensions that can modify the behavior of Colloquy channels.
"""

import typing

if typing.TYPE_CHECKING:
    from .base import Addressable, Recipient
    from .channel import Channel


class Mutator:
    """
    The base Mutator superclass. Supposed to be subclassed.

    Mutators are registered in a Channel in order to filter or
    rewrite the messages it delivers, and to follow who joins
    and leaves it.
    """

    def on_register(self, channel: "Channel", participant: "Addressable"):
        """
        Called whenever a participant is registered in the channel,
        after it has been inserted.

        Arguments:
            channel {colloquy.channel.Channel} -- The channel.
            participant {Addressable} -- The newly registered participant.
        """
        pass

    def on_unregister(self, channel: "Channel", name: typing.Hashable):
        """
        Called whenever a participant is unregistered from the channel,
        after it has been removed.

        Arguments:
            channel {colloquy.channel.Channel} -- The channel.
            name {Hashable} -- The identity that was removed.
        """
        pass

    def modify_message(
        self,
        channel: "Channel",
        sender: typing.Any,
        recipient: "Recipient",
        message: typing.Any,
    ) -> typing.Optional[typing.Any]:
        """
        Modifies a message right before it is delivered to a single
        recipient. Returns the modified version of this message, or
        None to skip delivering it to this recipient.

        Arguments:
            channel {colloquy.channel.Channel} -- The channel delivering.
            sender {Any} -- Whoever sent the message. May be unregistered.
            recipient {Recipient} -- Whoever is about to receive it.
            message {Any} -- The message, as returned by the previous mutator.
        """
        return message
