"""
Basic components at the core of Colloquy's definition of delivery.

Nothing here needs to be inherited from. Any object with a matching
`receive` method is a Recipient, and any Recipient with a `name` is
Addressable; any plain callable can be a handler.
"""

import typing


class Recipient(typing.Protocol):
    """Anything that messages can be delivered to."""

    def receive(self, message: typing.Any, sender: typing.Any) -> None:
        """React to a message. The return value is ignored,
        unless it is awaitable and delivery happens from trio,
        in which case it is awaited."""
        ...


class Addressable(Recipient, typing.Protocol):
    """
    A Recipient with a stable, externally chosen identity.

    The name must not change while the object is registered in a
    Channel, since it is what the Channel keys it by.
    """

    name: typing.Hashable


Handler = typing.Callable[..., typing.Any]


def identity_of(obj: typing.Any, default: typing.Any = None) -> typing.Any:
    """Returns the name of an Addressable, or the default if it has none."""
    return getattr(obj, "name", default)
