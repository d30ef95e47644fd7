"""Handing tray menu commands to the asyncio loop."""

import asyncio
import threading

from chorething_tray.commands import Command, CommandChannel


async def test_post_from_another_thread():
    channel = CommandChannel(asyncio.get_running_loop())
    channel.open()

    results = []
    thread = threading.Thread(target=lambda: results.append(channel.post(Command.CHECK)))
    thread.start()

    command = await asyncio.wait_for(channel.get(), 1)
    thread.join()

    assert command is Command.CHECK
    assert results == [True]


async def test_commands_arrive_in_order():
    channel = CommandChannel(asyncio.get_running_loop())
    channel.open()

    for command in (Command.TOGGLE_AUTO_CHECK, Command.OPEN_WEB, Command.QUIT):
        channel.post(command)

    received = [await asyncio.wait_for(channel.get(), 1) for _ in range(3)]
    assert received == [Command.TOGGLE_AUTO_CHECK, Command.OPEN_WEB, Command.QUIT]


def test_post_after_loop_closed_is_dropped():
    loop = asyncio.new_event_loop()
    channel = CommandChannel(loop)
    channel.open()
    loop.close()

    assert channel.post(Command.CHECK) is False


def test_post_racing_loop_close_is_dropped():
    class ClosingLoop:
        def is_closed(self):
            return False

        def call_soon_threadsafe(self, callback, *args):
            raise RuntimeError("Event loop is closed")

    channel = CommandChannel(ClosingLoop())
    channel.open()

    assert channel.post(Command.QUIT) is False
