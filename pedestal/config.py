"""TOML configuration of the host and the portal."""

from __future__ import annotations

import os
import tomllib
import uuid
from dataclasses import dataclass, field, fields
from typing import Any

import tomli_w

from .license import decrypt_aes, default_key

DEFAULT_DB_CONNECTION = (
    "user=postgres password=secret host=localhost port=5432 dbname=postgres "
    "sslmode=disable pool_max_conns=10 client_encoding=UTF8"
)


class ConfigError(Exception):
    """The configuration cannot be read, written or used."""


def parse_connection(text: str) -> dict[str, str]:
    """Split 'key=value key=value' into a mapping; parts without '=' are skipped."""
    result = {}
    for part in text.split():
        key, sep, value = part.partition("=")
        key = key.strip()
        if sep and key:
            result[key] = value.strip()
    return result


def _opt(name: str, default: Any) -> Any:
    return field(default=default, metadata={"toml": name})


def _matches(expected: type, value: Any) -> bool:
    if expected is bool:
        return isinstance(value, bool)
    if expected is int:
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, expected)


@dataclass
class AppBaseConfig:
    """Settings shared by every service: debug flag, port and database."""

    is_debug: bool = _opt("is_debug", False)
    service_port: int = _opt("service_port", 0)
    db_connection: str = _opt("db_connection", "")
    file_path: str = field(default="", repr=False, compare=False)

    def set_default(self) -> None:
        self.is_debug = False
        self.service_port = 8080
        self.db_connection = DEFAULT_DB_CONNECTION

    def _to_toml(self) -> dict[str, Any]:
        return {f.metadata["toml"]: getattr(self, f.name) for f in fields(self) if "toml" in f.metadata}

    def _apply(self, data: dict[str, Any]) -> None:
        for f in fields(self):
            name = f.metadata.get("toml")
            if name is None or name not in data:
                continue
            value = data[name]
            expected = type(f.default)
            if not _matches(expected, value):
                raise ConfigError(
                    f"{name}: expected {expected.__name__}, got {type(value).__name__}"
                )
            setattr(self, f.name, value)

    def load(self, directory: str | os.PathLike, file_name: str) -> None:
        """Read the file; when it is missing write defaults and raise ConfigError."""
        dir_path = os.fspath(directory)
        try:
            os.stat(dir_path)
        except FileNotFoundError:
            try:
                os.mkdir(dir_path, 0o755)
            except OSError as exc:
                raise ConfigError(f"创建目录{dir_path}出错:{exc}") from exc
        except OSError as exc:
            raise ConfigError(f"读取目录{dir_path}出错:{exc}") from exc

        self.file_path = dir_path + os.environ.get("Separator", os.sep) + file_name
        try:
            with open(self.file_path, "rb") as fh:
                data = tomllib.load(fh)
        except FileNotFoundError:
            self.set_default()
            try:
                with open(self.file_path, "wb") as fh:
                    tomli_w.dump(self._to_toml(), fh)
            except OSError as exc:
                raise ConfigError(str(exc)) from exc
            raise ConfigError("请配置系统配置信息") from None
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(str(exc)) from exc
        except OSError as exc:
            raise ConfigError(str(exc)) from exc
        self._apply(data)

    def update(self) -> None:
        """Write the current settings back to the file they were loaded from."""
        if not self.file_path:
            raise ConfigError("配置文件尚未加载")
        payload = tomli_w.dumps(self._to_toml()).encode()
        with open(self.file_path, "r+b") as fh:
            fh.write(payload)
            fh.truncate()

    def get_connection(self) -> dict[str, str]:
        """Decrypt the database connection in place and return its options."""
        if not self.db_connection:
            raise ConfigError("数据库连接字符串为空")
        self.db_connection = decrypt_aes(self.db_connection, default_key())
        return parse_connection(self.db_connection)


@dataclass
class HostConfig(AppBaseConfig):
    """Settings of a plugin host."""

    host_uuid: str = _opt("host_uuid", "")
    survey_url: str = _opt("survey_url", "")
    publish_url: str = _opt("host_pub_url", "")
    local_rep_url: str = _opt("local_rep_url", "")
    publish_pool_size: int = _opt("publish_pool_size", 0)
    self_name: str = _opt("self_name", "")
    self_ip: str = _opt("self_ip", "")
    message_port: int = _opt("message_port", 0)
    file_serv_port: int = _opt("file_port", 0)
    plugin_dir: str = _opt("plugin_dir", "")
    db_driver_dir: str = _opt("db_driver_dir", "")
    clickhouse_cfg: str = _opt("clickhouse_cfg", "")

    def set_default(self) -> None:
        super().set_default()
        self.host_uuid = str(uuid.uuid4())
        self.survey_url = "tcp://127.0.0.1:8901"
        self.publish_url = "ipc:///tmp/PubSub.ipc"
        self.local_rep_url = "ipc:///tmp/ReqRep.ipc"
        self.publish_pool_size = 1000
        self.self_name = "host001"
        self.self_ip = "127.0.0.1"
        self.service_port = 8081
        self.file_serv_port = 8902
        self.message_port = 8903
        self.plugin_dir = "plugin"
        self.db_driver_dir = "dbDriver"
        self.clickhouse_cfg = ""


@dataclass
class PortalConfig(AppBaseConfig):
    """Settings of the portal."""

    survey_url: str = _opt("survey_url", "")
    plugin_dir: str = _opt("plugin_dir", "")
    db_driver_dir: str = _opt("db_driver_dir", "")

    def set_default(self) -> None:
        super().set_default()
        self.survey_url = "tcp://127.0.0.1:8901"
        self.plugin_dir = "plugin"
        self.db_connection = DEFAULT_DB_CONNECTION
        self.db_driver_dir = "dbDriver"


@dataclass
class PluginConfigure:
    """Base settings every plugin accepts."""

    is_debug: bool = False
    plugin_name: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"is_debug": self.is_debug, "plugin_name": self.plugin_name}