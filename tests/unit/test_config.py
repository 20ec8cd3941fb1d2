import dataclasses
import json

import pytest

from dayz_monitor.config import DEFAULT_SERVER_NAME, load_config, parse_address
from dayz_monitor.errors import ConfigError


BASE_ENV = {
    "DISCORD_TOKEN": "secret",
    "SERVER_ADDRESS": "203.0.113.5:27016",
    "TEXT_CHANNEL_ID": "123456789",
}


def test_load_config_from_environment_applies_defaults(tmp_path):
    cfg = load_config(path=str(tmp_path / "missing.json"), environ=dict(BASE_ENV))

    assert cfg.discord_token == "secret"
    assert cfg.server_address == ("203.0.113.5", 27016)
    assert cfg.text_channel_id == 123456789
    assert cfg.server_name == DEFAULT_SERVER_NAME
    assert cfg.status_message_id is None
    assert cfg.update_interval_secs == 60
    assert cfg.display_timezone == "UTC"
    assert cfg.log_level == "INFO"


def test_load_config_environment_overrides_json_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "server_address": "10.0.0.1:2303",
                "text_channel_id": 1,
                "server_name": "From File",
                "status_message_id": 42,
                "update_interval_secs": 30,
                "logging": {"level": "debug", "file": "monitor.log"},
            }
        ),
        encoding="utf-8",
    )
    env = {"DISCORD_TOKEN": "secret", "UPDATE_INTERVAL_SECS": "15"}

    cfg = load_config(path=str(path), environ=env)

    assert cfg.server_address == ("10.0.0.1", 2303)
    assert cfg.server_name == "From File"
    assert cfg.status_message_id == 42
    assert cfg.update_interval_secs == 15
    assert cfg.log_level == "DEBUG"
    assert cfg.log_file == "monitor.log"


def test_load_config_is_frozen(tmp_path):
    cfg = load_config(path=str(tmp_path / "missing.json"), environ=dict(BASE_ENV))

    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.update_interval_secs = 5


@pytest.mark.parametrize(
    "overrides",
    [
        {"DISCORD_TOKEN": ""},
        {"SERVER_ADDRESS": "no-port"},
        {"SERVER_ADDRESS": "host:99999"},
        {"TEXT_CHANNEL_ID": "abc"},
        {"STATUS_MESSAGE_ID": "12x"},
        {"UPDATE_INTERVAL_SECS": "0"},
        {"QUERY_TIMEOUT_SECS": "-1"},
        {"DISPLAY_TIMEZONE": "Mars/Olympus"},
    ],
)
def test_load_config_rejects_bad_values(tmp_path, overrides):
    env = dict(BASE_ENV)
    env.update(overrides)
    if env.get("DISCORD_TOKEN") == "":
        del env["DISCORD_TOKEN"]

    with pytest.raises(ConfigError):
        load_config(path=str(tmp_path / "missing.json"), environ=env)


def test_load_config_rejects_broken_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(path=str(path), environ=dict(BASE_ENV))


def test_parse_address_handles_bracketed_ipv6():
    assert parse_address("[2001:db8::1]:2303") == ("2001:db8::1", 2303)


def test_load_config_rejects_non_object_logging_section(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"logging": "debug"}), encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(path=str(path), environ=dict(BASE_ENV))
