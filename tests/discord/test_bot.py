from __future__ import annotations

import asyncio

import pytest

from dayz_monitor.discord_bot import StatusBot, create
from dayz_monitor.services.a2s_client import A2SQueryClient
from tests.helpers.factories import make_config


class StubStatusMessage:
    def __init__(self):
        self.config = make_config()
        self.message_id = None
        self.runs = 0
        self.release = asyncio.Event()

    async def run(self, bot):
        self.runs += 1
        await self.release.wait()


def test_create_wires_query_client_from_config():
    bot = create(make_config(query_timeout_secs=2.5, status_message_id=99))

    assert isinstance(bot.status_message.query_client, A2SQueryClient)
    assert bot.status_message.query_client.timeout == 2.5
    assert bot.status_message.message_id == 99


@pytest.mark.asyncio
async def test_status_loop_is_started_only_once():
    status_message = StubStatusMessage()
    bot = StatusBot(status_message=status_message)

    assert bot.start_status_loop() is True
    assert bot.start_status_loop() is False
    await asyncio.sleep(0)
    assert status_message.runs == 1

    status_message.release.set()
    await bot.status_task
    assert bot.start_status_loop() is True
    bot.status_task.cancel()
