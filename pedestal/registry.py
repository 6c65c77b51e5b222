"""In-memory registry of the plugins installed on a host."""

from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from typing import Any, Iterator

from .plugininfo import PluginInfo

AUTO_START = "自动启动"


@dataclass
class Plugin(PluginInfo):
    """An installed plugin together with its licence data."""

    license_code: str = ""
    product_code: str = ""

    def to_dict(self) -> dict[str, str]:
        """JSON form; licence fields are always present."""
        result = super().to_dict()
        result["license_code"] = self.license_code
        result["product_code"] = self.product_code
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Plugin":
        """Build from the JSON form; unknown keys are ignored."""
        info = PluginInfo.from_dict(data)
        extra = {}
        for name in ("license_code", "product_code"):
            value = data.get(name)
            if value is None:
                continue
            if not isinstance(value, str):
                raise TypeError(f"{name} must be a string")
            extra[name] = value
        return cls(**vars(info), **extra)


class PluginNotFound(LookupError):
    """No plugin with the given UUID is registered."""

    def __init__(self, plugin_uuid: str) -> None:
        super().__init__(f"plugin {plugin_uuid} not found")
        self.plugin_uuid = plugin_uuid


class PluginRegistry:
    """Plugins keyed by UUID, safe to use from several threads."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._plugins: dict[str, Plugin] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._plugins)

    def __contains__(self, plugin_uuid: object) -> bool:
        with self._lock:
            return plugin_uuid in self._plugins

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._plugins))

    def add(self, plugin: Plugin) -> None:
        """Register a plugin, or update file, run type, config and serial of a known one."""
        with self._lock:
            existing = self._plugins.get(plugin.plugin_uuid)
            if existing is None:
                self._plugins[plugin.plugin_uuid] = plugin
                return
            existing.plugin_file_name = plugin.plugin_file_name
            existing.run_type = plugin.run_type
            existing.plugin_config = plugin.plugin_config
            existing.serial_number = plugin.serial_number

    def remove(self, plugin_uuid: str) -> Plugin:
        """Take a plugin out of the registry and return it."""
        if not plugin_uuid:
            raise ValueError("plugin uuid is empty")
        with self._lock:
            try:
                return self._plugins.pop(plugin_uuid)
            except KeyError:
                raise PluginNotFound(plugin_uuid) from None

    def get(self, plugin_uuid: str) -> Plugin:
        """The registered plugin with the given UUID."""
        with self._lock:
            try:
                return self._plugins[plugin_uuid]
            except KeyError:
                raise PluginNotFound(plugin_uuid) from None

    def items(self) -> list[tuple[str, Plugin]]:
        """Snapshot of the registered (uuid, plugin) pairs."""
        with self._lock:
            return list(self._plugins.items())

    def set_license_code(self, plugin_uuid: str, product_code: str, license_code: str) -> None:
        """Store the product and licence codes of a registered plugin."""
        with self._lock:
            plugin = self.get(plugin_uuid)
            plugin.license_code = license_code
            plugin.product_code = product_code

    def auto_run_plugins(self) -> list[Plugin]:
        """Copies of the licensed, configured plugins that start automatically."""
        with self._lock:
            return [
                replace(plugin)
                for plugin in self._plugins.values()
                if plugin.run_type == AUTO_START
                and plugin.license_code
                and plugin.plugin_config
                and plugin.plugin_file_name
            ]