"""
A mutator preset that silences chosen participants in a channel.
"""

import typing

from colloquy.base import identity_of
from colloquy.mutator import Mutator

if typing.TYPE_CHECKING:
    from colloquy.channel import Channel


class Mute(Mutator):
    """
    A mutator that cancels every message sent by a muted identity,
    whether broadcast or addressed.

    Muted identities stay muted if they leave and join again.
    """

    def __init__(self, *names: typing.Hashable):
        self.muted = set(names)

    def mute(self, name: typing.Hashable):
        """Silences an identity."""
        self.muted.add(name)

    def unmute(self, name: typing.Hashable):
        """Lets an identity talk again. Does nothing if it was not muted."""
        self.muted.discard(name)

    # pylint: disable=unused-argument
    def modify_message(
        self, channel: "Channel", sender: typing.Any, recipient, message
    ):
        if identity_of(sender) in self.muted:
            return None

        return message
