"""
Runs a small chatroom, where four participants talk through a Channel,
either to everyone else or to a single one of them.
"""

import logging

from colloquy.channel import Channel
from colloquy.participant import Participant



def main():
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    yoko = Participant("Yoko")
    john = Participant("John")
    paul = Participant("Paul")
    ringo = Participant("Ringo")

    chatroom = Channel("chatroom")

    @chatroom.events.subscribe
    def on_membership(event):
        logging.info("* %s %ss %s", event.name, event.kind, chatroom.name)

    for participant in (yoko, john, paul, ringo):
        chatroom.register(participant)

    yoko.send("All you need is love.")
    yoko.send("I love you John.")
    john.send("Hey, no need to broadcast", yoko)
    paul.send("Ha, I heard that!")
    ringo.send("Paul, what do you think?", paul)


if __name__ == "__main__":
    main()
