import asyncio
import logging
from typing import Optional

import discord
from discord.ext import commands

from dayz_monitor.config import MonitorConfig
from dayz_monitor.services.a2s_client import A2SQueryClient
from dayz_monitor.services.status_message import StatusMessage

logger = logging.getLogger(__name__)


def create(config: MonitorConfig):
    query_client = A2SQueryClient(timeout=config.query_timeout_secs)
    status_message = StatusMessage(query_client, config)
    return StatusBot(status_message=status_message)


class StatusBot(commands.Bot):
    def __init__(self, status_message: StatusMessage):
        self.status_message = status_message
        self.status_task: Optional[asyncio.Task] = None

        intents = discord.Intents.default()

        super().__init__(command_prefix="/", intents=intents)

    def start_status_loop(self) -> bool:
        # on_ready fires again after every reconnect; only one loop may run.
        if self.status_task is not None and not self.status_task.done():
            return False
        self.status_task = asyncio.create_task(self.status_message.run(self))
        return True

    async def setup_hook(self):
        @self.event
        async def on_ready():
            logger.info(f"Logged in as {self.user} (id={self.user.id})")
            if self.start_status_loop():
                logger.info(
                    "Status loop started (interval=%ss, message_id=%s)",
                    self.status_message.config.update_interval_secs,
                    self.status_message.message_id,
                )
