import asyncio
import logging

import a2s

from dayz_monitor.errors import TransportError
from dayz_monitor.models import ServerStatus
from dayz_monitor.services.game_server_client import Address, GameServerClient
from dayz_monitor.services.keywords import parse_keywords


logger = logging.getLogger(__name__)

TRANSPORT_ERRORS = (
    OSError,
    asyncio.TimeoutError,
    a2s.BrokenMessageError,
    a2s.BufferExhaustedError,
)


def format_address(address: Address) -> str:
    host, port = address
    return f"{host}:{port}"


async def retrieve_server_info(client: GameServerClient, address: Address) -> ServerStatus:
    """
    Query the server once and return its normalised status.

    Raises TransportError when the query itself fails and KeywordsMissing when
    the reply has no keyword string. Retrying is left to the caller.
    """
    logger.debug("Querying server info for '%s'", format_address(address))
    try:
        info = await client.get_info(address)
    except TRANSPORT_ERRORS as exc:
        raise TransportError(f"A2S query to {format_address(address)} failed: {exc}") from exc

    status = parse_keywords(info.keywords)
    status.players = info.players
    status.max_players = info.max_players
    return status
