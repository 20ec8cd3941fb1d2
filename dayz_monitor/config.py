import json
import os
from dataclasses import dataclass
from typing import Mapping, Optional

import pytz

from dayz_monitor.errors import ConfigError


DEFAULT_SERVER_NAME = "DayZ Server"
DEFAULT_UPDATE_INTERVAL_SECS = 60
DEFAULT_QUERY_TIMEOUT_SECS = 3.0


class Config:
    def __init__(self, path: str):
        self._data = {}
        self._path = path
        self.reload()

    def reload(self):
        # The JSON file is optional; environment variables alone are enough.
        if not os.path.exists(self._path):
            self._data = {}
            return
        try:
            with open(self._path, "r") as f:
                self._data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigError(f"Could not read {self._path}: {exc}") from exc
        if not isinstance(self._data, dict):
            raise ConfigError(f"{self._path} must contain a JSON object")

    def get(self, key: str, default=None):
        return self._data.get(key, default)


@dataclass(frozen=True)
class MonitorConfig:
    discord_token: str
    server_host: str
    server_port: int
    text_channel_id: int
    server_name: str = DEFAULT_SERVER_NAME
    status_message_id: Optional[int] = None
    update_interval_secs: int = DEFAULT_UPDATE_INTERVAL_SECS
    query_timeout_secs: float = DEFAULT_QUERY_TIMEOUT_SECS
    display_timezone: str = "UTC"
    log_level: str = "INFO"
    log_file: str = "app.log"

    @property
    def server_address(self):
        return (self.server_host, self.server_port)


def parse_address(raw: str):
    """Split ``host:port`` (or ``[v6]:port``) into a host string and an int port."""
    host, sep, port = raw.strip().rpartition(":")
    if not sep or not host or not port:
        raise ConfigError(f"SERVER_ADDRESS must look like host:port, got {raw!r}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    try:
        port_num = int(port)
    except ValueError as exc:
        raise ConfigError(f"SERVER_ADDRESS has a non-numeric port: {raw!r}") from exc
    if not 0 < port_num < 65536:
        raise ConfigError(f"SERVER_ADDRESS port out of range: {raw!r}")
    return host, port_num


def _pick(environ: Mapping[str, str], config: Config, env_key: str, key: str):
    value = environ.get(env_key)
    if value is not None and str(value).strip() != "":
        return str(value).strip()
    value = config.get(key)
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _as_int(name: str, value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from exc


def _as_float(name: str, value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be a number, got {value!r}") from exc


def load_config(path: str = "config.json", environ: Optional[Mapping[str, str]] = None) -> MonitorConfig:
    """
    Build the immutable monitor configuration.

    Environment variables win over keys in the optional JSON file. Anything
    missing or malformed raises ConfigError so the process stops before the
    bot logs in.
    """
    environ = os.environ if environ is None else environ
    config = Config(path)

    token = _pick(environ, config, "DISCORD_TOKEN", "discord_token")
    if not token:
        raise ConfigError("DISCORD_TOKEN missing")

    address = _pick(environ, config, "SERVER_ADDRESS", "server_address")
    if not address:
        raise ConfigError("SERVER_ADDRESS missing")
    host, port = parse_address(str(address))

    channel = _pick(environ, config, "TEXT_CHANNEL_ID", "text_channel_id")
    if channel is None:
        raise ConfigError("TEXT_CHANNEL_ID missing")
    text_channel_id = _as_int("TEXT_CHANNEL_ID", channel)

    message = _pick(environ, config, "STATUS_MESSAGE_ID", "status_message_id")
    status_message_id = _as_int("STATUS_MESSAGE_ID", message) if message is not None else None

    interval = _pick(environ, config, "UPDATE_INTERVAL_SECS", "update_interval_secs")
    update_interval_secs = _as_int("UPDATE_INTERVAL_SECS", interval) if interval is not None else DEFAULT_UPDATE_INTERVAL_SECS
    if update_interval_secs <= 0:
        raise ConfigError("UPDATE_INTERVAL_SECS must be greater than zero")

    timeout = _pick(environ, config, "QUERY_TIMEOUT_SECS", "query_timeout_secs")
    query_timeout_secs = _as_float("QUERY_TIMEOUT_SECS", timeout) if timeout is not None else DEFAULT_QUERY_TIMEOUT_SECS
    if query_timeout_secs <= 0:
        raise ConfigError("QUERY_TIMEOUT_SECS must be greater than zero")

    tz_name = _pick(environ, config, "DISPLAY_TIMEZONE", "display_timezone") or "UTC"
    try:
        pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError as exc:
        raise ConfigError(f"Unknown DISPLAY_TIMEZONE {tz_name!r}") from exc

    logging_config = config.get("logging") or {}
    if not isinstance(logging_config, dict):
        raise ConfigError("logging must be a JSON object")
    log_level = environ.get("LOG_LEVEL") or logging_config.get("level") or "INFO"
    log_file = environ.get("LOG_FILE") or logging_config.get("file") or "app.log"

    return MonitorConfig(
        discord_token=token,
        server_host=host,
        server_port=port,
        text_channel_id=text_channel_id,
        server_name=_pick(environ, config, "SERVER_NAME", "server_name") or DEFAULT_SERVER_NAME,
        status_message_id=status_message_id,
        update_interval_secs=update_interval_secs,
        query_timeout_secs=query_timeout_secs,
        display_timezone=tz_name,
        log_level=str(log_level).upper(),
        log_file=log_file,
    )
