from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ServerQueryResult:
    """Raw A2S info reply, reduced to the fields the monitor cares about."""

    players: int
    max_players: int
    keywords: Optional[str] = None


@dataclass
class ServerStatus:
    server_time: Optional[str] = None
    players_in_queue: Optional[int] = None
    players: int = 0
    max_players: int = 0
