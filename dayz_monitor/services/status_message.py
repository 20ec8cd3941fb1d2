import asyncio
import logging
from typing import Optional

import discord
from discord import Embed

from dayz_monitor.config import MonitorConfig
from dayz_monitor.embeds import build_offline_embed, build_online_embed, build_placeholder_embed
from dayz_monitor.errors import KeywordsMissing, MessageEditFailure, MessageSendFailure, TransportError
from dayz_monitor.services.game_server_client import GameServerClient
from dayz_monitor.services.server_info import format_address, retrieve_server_info
from dayz_monitor.utils.time import now_in


logger = logging.getLogger(__name__)


class StatusMessage:
    """
    Keeps exactly one Discord message in sync with the game server.

    Without a known message id the controller is uninitialised and each tick
    first tries to post a placeholder. Once an id is known (posted or taken
    from the configuration) every tick queries the server and edits that
    message. A failed edit keeps the id; a message deleted by someone else is
    not recreated.
    """

    def __init__(self, query_client: GameServerClient, config: MonitorConfig, *, sleep=asyncio.sleep):
        self.query_client = query_client
        self.config = config
        self.message_id: Optional[int] = config.status_message_id
        self._lock = asyncio.Lock()
        self._sleep = sleep

    @property
    def active(self) -> bool:
        return self.message_id is not None

    async def _resolve_channel(self, bot):
        channel_id = self.config.text_channel_id
        channel = bot.get_channel(channel_id)
        if channel is None:
            channel = await bot.fetch_channel(channel_id)
        return channel

    async def _send_placeholder(self, bot) -> int:
        try:
            channel = await self._resolve_channel(bot)
            msg = await channel.send(embed=build_placeholder_embed(self.config.server_name))
        except discord.HTTPException as exc:
            raise MessageSendFailure(f"Could not post status message in channel {self.config.text_channel_id}: {exc}") from exc
        return msg.id

    async def _edit(self, bot, message_id: int, embed: Embed) -> None:
        try:
            channel = await self._resolve_channel(bot)
            await channel.get_partial_message(message_id).edit(embed=embed)
        except discord.HTTPException as exc:
            raise MessageEditFailure(f"Could not edit status message {message_id}: {exc}") from exc

    async def ensure_message(self, bot) -> Optional[int]:
        # Check and create under one lock so two ticks never post two messages.
        async with self._lock:
            if self.message_id is None:
                try:
                    self.message_id = await self._send_placeholder(bot)
                except MessageSendFailure as exc:
                    logger.error("%s", exc)
                    return None
                logger.info("Posted status message %s in channel %s", self.message_id, self.config.text_channel_id)
            return self.message_id

    async def build_embed(self) -> Embed:
        updated_at = now_in(self.config.display_timezone)
        try:
            status = await retrieve_server_info(self.query_client, self.config.server_address)
        except (TransportError, KeywordsMissing) as exc:
            logger.warning("Server %s reported offline (%s): %s", format_address(self.config.server_address), exc.kind, exc)
            return build_offline_embed(self.config.server_name, updated_at)
        except Exception as exc:
            logger.exception("Unexpected error querying %s: %s", format_address(self.config.server_address), exc)
            return build_offline_embed(self.config.server_name, updated_at)
        return build_online_embed(self.config.server_name, status, updated_at)

    async def tick(self, bot) -> bool:
        """Run one update. Returns False when the tick was skipped."""
        message_id = await self.ensure_message(bot)
        if message_id is None:
            return False

        embed = await self.build_embed()
        try:
            await self._edit(bot, message_id, embed)
        except MessageEditFailure as exc:
            logger.error("%s", exc)
            return False
        return True

    async def run(self, bot) -> None:
        while True:
            try:
                await self.tick(bot)
            except Exception as exc:
                logger.exception("Status update failed: %s", exc)
            await self._sleep(self.config.update_interval_secs)
