import os
import tomllib

import pytest

from pedestal.config import (
    DEFAULT_DB_CONNECTION,
    AppBaseConfig,
    ConfigError,
    HostConfig,
    PluginConfigure,
    PortalConfig,
    parse_connection,
)
from pedestal.license import encrypt_aes

AES_KEY_TEXT = "k" * 32


@pytest.fixture(autouse=True)
def _separator(monkeypatch):
    monkeypatch.setenv("Separator", os.sep)


def test_parse_connection():
    result = parse_connection("user=postgres  host=localhost\tport=5432 bad =x a=b=c")
    assert result == {"user": "postgres", "host": "localhost", "port": "5432", "a": "b=c"}


def test_parse_connection_empty():
    assert parse_connection("   ") == {}


def test_load_creates_defaults(tmp_path):
    cfg_dir = tmp_path / "config"
    cfg = HostConfig()
    with pytest.raises(ConfigError):
        cfg.load(cfg_dir, "config.toml")
    written = tomllib.loads((cfg_dir / "config.toml").read_text(encoding="utf-8"))
    assert written["service_port"] == 8081
    assert written["host_pub_url"] == "ipc:///tmp/PubSub.ipc"
    assert written["survey_url"] == "tcp://127.0.0.1:8901"
    assert written["file_port"] == 8902
    assert written["db_connection"] == DEFAULT_DB_CONNECTION
    assert len(written["host_uuid"]) == 36
    assert "file_path" not in written


def test_load_after_defaults_round_trip(tmp_path):
    first = HostConfig()
    with pytest.raises(ConfigError):
        first.load(tmp_path, "config.toml")
    second = HostConfig()
    second.load(tmp_path, "config.toml")
    assert second.host_uuid == first.host_uuid
    assert second.message_port == first.message_port
    assert second.plugin_dir == "plugin"


def test_load_reads_values(tmp_path):
    (tmp_path / "c.toml").write_text(
        'is_debug = true\nservice_port = 9000\nself_name = "node"\nunknown = 1\n',
        encoding="utf-8",
    )
    cfg = HostConfig()
    cfg.load(tmp_path, "c.toml")
    assert cfg.is_debug is True
    assert cfg.service_port == 9000
    assert cfg.self_name == "node"
    assert cfg.survey_url == ""


def test_load_rejects_wrong_type(tmp_path):
    (tmp_path / "c.toml").write_text('service_port = "abc"\n', encoding="utf-8")
    with pytest.raises(ConfigError):
        HostConfig().load(tmp_path, "c.toml")


def test_load_fails_when_parent_missing(tmp_path):
    with pytest.raises(ConfigError):
        HostConfig().load(tmp_path / "a" / "b", "c.toml")


def test_update_persists_changes(tmp_path):
    cfg = PortalConfig()
    with pytest.raises(ConfigError):
        cfg.load(tmp_path, "portal.toml")
    cfg.survey_url = "tcp://10.0.0.1:1"
    cfg.update()
    reloaded = PortalConfig()
    reloaded.load(tmp_path, "portal.toml")
    assert reloaded.survey_url == "tcp://10.0.0.1:1"
    assert reloaded.db_driver_dir == "dbDriver"


def test_update_without_load():
    with pytest.raises(ConfigError):
        HostConfig().update()


def test_portal_defaults():
    cfg = PortalConfig()
    cfg.set_default()
    assert cfg.service_port == 8080
    assert cfg.plugin_dir == "plugin"
    assert cfg.db_driver_dir == "dbDriver"
    assert cfg.db_connection == DEFAULT_DB_CONNECTION


def test_get_connection_decrypts(monkeypatch):
    monkeypatch.setenv("DEFAULT_KEY", AES_KEY_TEXT)
    cfg = AppBaseConfig(db_connection=encrypt_aes("user=u host=h", AES_KEY_TEXT))
    assert cfg.get_connection() == {"user": "u", "host": "h"}
    assert cfg.db_connection == "user=u host=h"


def test_get_connection_empty():
    with pytest.raises(ConfigError):
        AppBaseConfig().get_connection()


def test_plugin_configure_dict():
    assert PluginConfigure(plugin_name="p").to_dict() == {"is_debug": False, "plugin_name": "p"}