"""
Subscribes a click handler, fires a few clicks, and unsubscribes it
in between, to show which clicks it gets to see.
"""

import trio

from colloquy.subscription import SubscriptionList



def on_click(item):
    print("fired: " + item)


async def on_click_later(item):
    await trio.sleep(0.1)
    print("fired later: " + item)


def main():
    click = SubscriptionList()

    click.subscribe(on_click)
    click.fire("event #1")
    click.unsubscribe(on_click)
    click.fire("event #2")
    click.subscribe(on_click)
    click.fire("event #3")

    # Coroutine handlers need trio.
    click.subscribe(on_click_later)
    trio.run(click.fire_async, "event #4")


if __name__ == "__main__":
    main()
