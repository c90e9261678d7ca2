"""
# Colloquy

In-process message delivery between a dynamic set of recipients.

## The subscription list

An ordered list of anonymous handlers, all of which are called,
in order, whenever an event is fired.

## The channel

A mediator between named participants. A message is either
addressed to a single recipient, or broadcast to every registered
participant except its sender.

Both walk an immutable snapshot of their registry on every delivery,
so recipients may join or leave while a delivery is going on without
affecting it.
"""

from .base import Addressable, Handler, Recipient
from .channel import Channel, ChannelEvent
from .dispatch import DispatchReport
from .errors import (
    ColloquyError,
    HandlerFailure,
    InvalidRecipientError,
    ParticipantDetachedError,
)
from .mutator import Mutator
from .participant import Participant
from .registry import OrderedRegistry
from .subscription import SubscriptionList

__all__ = [
    "Addressable",
    "Channel",
    "ChannelEvent",
    "ColloquyError",
    "DispatchReport",
    "Handler",
    "HandlerFailure",
    "InvalidRecipientError",
    "Mutator",
    "OrderedRegistry",
    "Participant",
    "ParticipantDetachedError",
    "Recipient",
    "SubscriptionList",
]
