"""
The ordered registry shared by Channels and Subscription Lists.

Iteration order is always insertion order. Replacing the value of an
existing key keeps that key where it was.
"""

import itertools
import threading
import typing
from typing import Any, Hashable


_anonymous_slots = itertools.count()

# Default key of OrderedRegistry.insert; None is a valid key.
_NO_KEY = object()


class AnonymousSlot:
    """
    The key of an entry that was inserted without one.

    Each slot is unique, so the same value can be inserted any
    number of times, each insertion occupying a slot of its own.
    """

    __slots__ = ("number",)

    def __init__(self):
        self.number = next(_anonymous_slots)

    def __repr__(self):
        return "AnonymousSlot(#{})".format(self.number)


class OrderedRegistry:
    """
    An insertion-ordered, thread-safe mapping of keys to recipients.

        >>> reg = OrderedRegistry()
        >>> reg.insert('first', key='a')
        >>> reg.insert('second', key='b')
        >>> reg.insert('replaced', key='a')
        >>> list(reg)
        ['replaced', 'second']
        >>> reg.remove('nobody')
        False

    Mutations and snapshot-taking share one lock; anything that walks
    a snapshot does not need to hold it.
    """

    def __init__(self):
        self._entries: dict[Hashable, Any] = {}
        self._lock = threading.Lock()

    def insert(self, value: Any, key: Hashable = _NO_KEY):
        """Appends an entry.

        Arguments:
            value {Any} -- The recipient to store.

        Keyword Arguments:
            key {Hashable} -- The identity of this entry. If it is already
                              present, its value is overwritten in place.
                              If omitted, the entry gets an anonymous slot
                              of its own. (default: an anonymous slot)
        """

        if key is _NO_KEY:
            key = AnonymousSlot()

        with self._lock:
            # dict assignment keeps the position of existing keys
            self._entries[key] = value

    def remove(self, key: Hashable) -> bool:
        """Removes the entry with the given key, if there is one.

        Returns: whether anything was removed. (type: {bool})
        """

        with self._lock:
            if key not in self._entries:
                return False

            del self._entries[key]
            return True

    def discard(self, value: Any, every: bool = True) -> int:
        """Removes entries whose value equals the given one.

        Arguments:
            value {Any} -- The value to look for.

        Keyword Arguments:
            every {bool} -- Remove every equal entry, rather than only the
                            first one. (default: {True})

        Returns: how many entries were removed. (type: {int})
        """

        with self._lock:
            doomed = [key for key, item in self._entries.items() if item == value]

            if not every:
                doomed = doomed[:1]

            for key in doomed:
                del self._entries[key]

            return len(doomed)

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Looks up a value by key."""
        with self._lock:
            return self._entries.get(key, default)

    def snapshot(self) -> tuple[tuple[Hashable, Any], ...]:
        """Returns an immutable, ordered copy of all (key, value) pairs."""
        with self._lock:
            return tuple(self._entries.items())

    def keys(self) -> tuple[Hashable, ...]:
        """Returns the keys of all entries, in order."""
        with self._lock:
            return tuple(self._entries)

    def values(self) -> tuple[Any, ...]:
        """Returns the values of all entries, in order."""
        with self._lock:
            return tuple(self._entries.values())

    def clear(self):
        """Removes every entry."""
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> typing.Iterator[Any]:
        return iter(self.values())

    def __repr__(self):
        return "{}({} entries)".format(type(self).__name__, len(self))
