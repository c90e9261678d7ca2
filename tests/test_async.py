import trio

from colloquy.channel import Channel
from colloquy.participant import Participant
from colloquy.subscription import SubscriptionList


def test_fire_async_awaits_handlers_in_order():
    events = SubscriptionList()
    calls = []

    async def slow(event):
        await trio.sleep(0.01)
        calls.append("slow " + event)

    def quick(event):
        calls.append("quick " + event)

    events.subscribe(slow)
    events.subscribe(quick)

    report = trio.run(events.fire_async, "e")

    assert calls == ["slow e", "quick e"]
    assert report.delivered == 2


def test_fire_async_concurrently_isolates_failures():
    events = SubscriptionList()
    calls = []

    async def broken(event):
        await trio.sleep(0)
        raise KeyError(event)

    async def fine(event):
        await trio.sleep(0)
        calls.append(event)

    events.subscribe(broken)
    events.subscribe(fine)

    async def _run():
        return await events.fire_async("e", concurrent=True)

    report = trio.run(_run)

    assert calls == ["e"]
    assert report.recipients == 2
    assert report.delivered == 1
    assert isinstance(report.failures[0].error, KeyError)


def test_send_async_awaits_coroutine_receivers():
    room = Channel()
    order = []

    class Slowpoke:
        name = "slowpoke"

        async def receive(self, message, sender):
            await trio.sleep(0.01)
            order.append(self.name)

    speaker = Participant("speaker")
    quick = Participant("quick")

    room.register(speaker)
    room.register(Slowpoke())
    room.register(quick)

    async def _run():
        return await room.send_async("hello", speaker)

    assert trio.run(_run) == 2
    assert order == ["slowpoke"]
    assert quick.inbox == [("speaker", "hello")]
    assert speaker.inbox == []
