from __future__ import annotations

from typing import Optional

from dayz_monitor.errors import KeywordsMissing
from dayz_monitor.models import ServerStatus


QUEUE_PREFIX = "lqs"
MAX_TIME_TOKEN_LENGTH = 8
MAX_QUEUE = 2**32 - 1


def _parse_count(raw: str) -> Optional[int]:
    # int() would also accept signs, whitespace and underscores.
    if not raw or not raw.isascii() or not raw.isdigit():
        return None
    # Anything wider than an unsigned 32-bit counter is garbage.
    if len(raw) > 10:
        return None
    value = int(raw)
    return value if value <= MAX_QUEUE else None


def parse_keywords(keywords: Optional[str]) -> ServerStatus:
    """
    Pull the queue length and the in-game clock out of an A2S keyword string.

    DayZ packs loosely structured values into the comma separated keywords
    field. The queue is encoded as ``lqs<number>`` and the server clock is a
    short token such as ``12:34``. Player counts are left at zero; the caller
    fills them in from the authoritative fields of the reply.
    """
    if keywords is None:
        raise KeywordsMissing()

    status = ServerStatus()
    for token in keywords.split(","):
        if token.startswith(QUEUE_PREFIX):
            queue = _parse_count(token[len(QUEUE_PREFIX):])
            if queue is not None:
                status.players_in_queue = queue
            continue

        if ":" in token and status.server_time is None and len(token) <= MAX_TIME_TOKEN_LENGTH:
            status.server_time = token

    return status
