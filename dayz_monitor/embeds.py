from datetime import datetime

import discord
from discord import Embed

from dayz_monitor.models import ServerStatus
from dayz_monitor.utils.time import fmt_updated


ONLINE_COLOUR = discord.Colour.green()
OFFLINE_COLOUR = discord.Colour.red()


def _footer(embed: Embed, updated_at: datetime) -> Embed:
    embed.set_footer(text=f"Last updated {fmt_updated(updated_at)}")
    return embed


def build_placeholder_embed(server_name: str) -> Embed:
    return Embed(title=server_name, description="Fetching server status...")


def build_online_embed(server_name: str, status: ServerStatus, updated_at: datetime) -> Embed:
    e = Embed(title=server_name, colour=ONLINE_COLOUR)
    e.add_field(name="Status", value="🟢 Online", inline=False)
    e.add_field(name="Players", value=f"{status.players}/{status.max_players}", inline=True)
    queue = status.players_in_queue
    e.add_field(name="Queue", value=str(queue) if queue is not None else "—", inline=True)
    e.add_field(name="Server time", value=status.server_time or "Unknown", inline=True)
    return _footer(e, updated_at)


def build_offline_embed(server_name: str, updated_at: datetime) -> Embed:
    e = Embed(title=server_name, colour=OFFLINE_COLOUR)
    e.add_field(name="Status", value="🔴 Offline", inline=False)
    return _footer(e, updated_at)
