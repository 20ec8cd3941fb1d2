from typing import Protocol, Tuple

from dayz_monitor.models import ServerQueryResult


Address = Tuple[str, int]


class GameServerClient(Protocol):
    """Interface for querying the game server regardless of transport."""

    async def get_info(self, address: Address) -> ServerQueryResult:
        """Return player counts and the keyword string for the given query address."""
