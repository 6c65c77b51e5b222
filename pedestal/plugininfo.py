"""Plugin descriptions, operation requests and the plugin call interface."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Protocol, runtime_checkable

from .response import Response


@dataclass
class PluginInfo:
    """Descriptive record of an installed plugin."""

    plugin_uuid: str = ""
    plugin_name: str = ""
    plugin_type: str = ""
    plugin_desc: str = ""
    plugin_file_name: str = ""
    plugin_config: str = ""
    plugin_version: str = ""
    run_type: str = ""
    serial_number: str = ""
    status: str = ""

    def to_dict(self) -> dict[str, str]:
        """JSON form; empty fields are left out."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PluginInfo":
        """Build from the JSON form; unknown keys are ignored."""
        kwargs = {}
        for f in fields(cls):
            value = data.get(f.name)
            if value is None:
                continue
            if not isinstance(value, str):
                raise TypeError(f"{f.name} must be a string")
            kwargs[f.name] = value
        return cls(**kwargs)


@dataclass
class PluginOperate:
    """A call of a plugin's own interface on behalf of a user."""

    user_id: int = 0
    plugin_uuid: str = ""
    operate_name: str = ""
    params: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """JSON form; the plugin UUID is left out when empty."""
        result: dict[str, Any] = {"user_id": self.user_id}
        if self.plugin_uuid:
            result["plugin_uuid"] = self.plugin_uuid
        result["operate_name"] = self.operate_name
        result["params"] = self.params
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PluginOperate":
        """Build from the JSON form."""
        user_id = data.get("user_id")
        if user_id is None:
            user_id = 0
        elif not isinstance(user_id, int) or isinstance(user_id, bool):
            raise TypeError("user_id must be an integer")
        plugin_uuid = data.get("plugin_uuid") or ""
        operate_name = data.get("operate_name") or ""
        if not isinstance(plugin_uuid, str) or not isinstance(operate_name, str):
            raise TypeError("plugin_uuid and operate_name must be strings")
        params = data.get("params")
        if params is not None and not isinstance(params, dict):
            raise TypeError("params must be an object")
        return cls(user_id, plugin_uuid, operate_name, params)


@runtime_checkable
class PluginProtocol(Protocol):
    """Calls a host makes on a running plugin."""

    def run(self, config: str) -> Response: ...

    def running(self) -> Response: ...

    def stop(self) -> Response: ...

    def get_config_template(self) -> Response: ...

    def custom_interface(self, plugin_operate: PluginOperate) -> Response: ...

    def get_system_usage(self) -> str: ...