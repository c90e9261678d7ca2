import typing


class Listener:
    """A named recipient that writes every delivery to a shared journal."""

    def __init__(self, name: str, journal: list):
        self.name = name
        self.journal = journal

    def receive(self, message: typing.Any, sender: typing.Any):
        self.journal.append((self.name, message, getattr(sender, "name", sender)))
