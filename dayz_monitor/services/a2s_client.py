
import a2s

from dayz_monitor.models import ServerQueryResult
from dayz_monitor.services.game_server_client import Address


class A2SQueryClient:
    def __init__(self, timeout: float = 3.0, encoding: str = "utf-8"):
        self.timeout = timeout
        self.encoding = encoding

    async def get_info(self, address: Address) -> ServerQueryResult:
        info = await a2s.ainfo(address, timeout=self.timeout, encoding=self.encoding)
        # GoldSrc replies and Source replies without the EDF keywords flag carry no keywords.
        keywords = getattr(info, "keywords", None)
        return ServerQueryResult(
            players=int(info.player_count),
            max_players=int(info.max_players),
            keywords=keywords if isinstance(keywords, str) else None,
        )
