import pytest

from colloquy.channel import Channel

from .helpers import Listener


@pytest.fixture
def journal() -> list:
    return []


@pytest.fixture
def beatles(journal):
    room = Channel("abbey road")
    members = {
        name: Listener(name, journal) for name in ("Yoko", "John", "Paul", "Ringo")
    }

    for member in members.values():
        room.register(member)

    return room, members
