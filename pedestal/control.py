"""Host-side management of installed plugins: licences, configuration, registry."""

from __future__ import annotations

import json
import os
from dataclasses import replace
from typing import Any

from .config import HostConfig
from .license import (
    decrypt_aes,
    default_key,
    file_hash,
    generate_license_code,
    generate_product_code,
)
from .paths import current_path
from .plugininfo import PluginProtocol
from .registry import Plugin, PluginNotFound, PluginRegistry
from .response import Response, failure, resp_data, success

_UUID_LEN = 36
_CODE_LEN = 19


class PluginControl:
    """Operations a host performs on its plugins on behalf of the portal."""

    def __init__(
        self,
        registry: PluginRegistry,
        host_config: HostConfig,
        base_dir: str | os.PathLike | None = None,
    ) -> None:
        self.registry = registry
        self.host_config = host_config
        if base_dir is None:
            base_dir = os.environ.get("FilePath") or current_path()
        self.base_dir = os.fspath(base_dir)
        self.plugins: dict[str, PluginProtocol] = {}

    def plugin_path(self, plugin: Plugin) -> str:
        """Location of the plugin's executable file."""
        return os.path.join(
            self.base_dir,
            self.host_config.plugin_dir,
            plugin.plugin_uuid,
            plugin.plugin_file_name,
        )

    def _file_hash(self, plugin: Plugin) -> str:
        try:
            return file_hash(self.plugin_path(plugin))
        except OSError as exc:
            raise ValueError(f"读取文件失败: {exc}") from exc

    def check_license(self, plugin: Plugin) -> None:
        """Raise ValueError unless file, product code and licence code all agree."""
        digest = self._file_hash(plugin)
        if digest != plugin.serial_number:
            raise ValueError("插件被篡改，禁止运行")
        if plugin.product_code != generate_product_code(plugin.plugin_uuid, digest):
            raise ValueError("产品序列号错误,请联系授权人")
        if generate_license_code(plugin.plugin_uuid, plugin.product_code) != plugin.license_code:
            raise ValueError("授权码错误")

    def get_product_key(self, plugin_uuid: str) -> Response:
        """This machine's product code for the plugin and whether its licence is valid."""
        try:
            plugin = replace(self.registry.get(plugin_uuid))
            digest = self._file_hash(plugin)
        except (PluginNotFound, ValueError) as exc:
            return failure(str(exc))
        product_code = generate_product_code(plugin.plugin_uuid, digest)
        result: dict[str, Any] = {"license_code": "", "product_code": product_code, "is_valid": False}
        if not plugin.product_code or not plugin.license_code:
            return resp_data(1, result, None)
        license_code = generate_license_code(plugin.plugin_uuid, product_code)
        if license_code != plugin.license_code or product_code != plugin.product_code:
            result["license_code"] = plugin.license_code
            return resp_data(1, result, None)
        result["license_code"] = license_code
        result["is_valid"] = True
        return resp_data(1, result, None)

    def gen_plugin_config(self, plugin: Plugin) -> str:
        """The plugin's own configuration extended with what the host provides."""
        config = json.loads(plugin.plugin_config)
        if not isinstance(config, dict):
            raise ValueError("plugin config must be a JSON object")
        config["plugin_uuid"] = plugin.plugin_uuid
        config["db_connection"] = self.host_config.db_connection
        config["plugin_name"] = plugin.plugin_name
        config["host_reply_url"] = self.host_config.local_rep_url
        config["host_pub_url"] = self.host_config.publish_url
        config["db_driver_dir"] = os.path.join(self.base_dir, self.host_config.db_driver_dir)
        config["clickhouse_cfg"] = decrypt_aes(self.host_config.clickhouse_cfg, default_key())
        return json.dumps(config, ensure_ascii=False, sort_keys=True, separators=(",", ":"))

    def update_file_name(self, plugin_uuid: str, file_name: str) -> Response:
        """Rename the plugin's file; allowed only for a loaded plugin that is not running."""
        if not file_name:
            return failure("文件名不能为空")
        try:
            plugin = self.registry.get(plugin_uuid)
        except PluginNotFound as exc:
            return failure(str(exc))
        handle = self.plugins.get(plugin_uuid)
        if handle is None:
            return failure(f"插件{plugin.plugin_file_name}未运行")
        if handle.running().info == "true":
            return failure(f"{plugin.plugin_name} is running")
        plugin.plugin_file_name = file_name
        return success(None)

    def delete_plugin(self, plugin_uuid: str) -> Response:
        """Drop the plugin from the registry."""
        try:
            self.registry.remove(plugin_uuid)
        except (PluginNotFound, ValueError) as exc:
            return failure(str(exc))
        return success(None)

    def set_license(self, data: bytes) -> bytes:
        """Store codes sent as UUID, product code and licence code; reply as JSON."""
        if len(data) != _UUID_LEN + _CODE_LEN * 2:
            return self._encode(failure("请提供正确的序列号和授权码格式"))
        plugin_uuid = data[:_UUID_LEN].decode(errors="replace")
        if plugin_uuid not in self.registry:
            return self._encode(failure(f"插件{plugin_uuid}不存在"))
        product_code = data[_UUID_LEN : _UUID_LEN + _CODE_LEN].decode(errors="replace")
        license_code = data[_UUID_LEN + _CODE_LEN :].decode(errors="replace")
        try:
            self.registry.set_license_code(plugin_uuid, product_code, license_code)
        except PluginNotFound as exc:
            return self._encode(failure(str(exc)))
        return self._encode(success(None))

    @staticmethod
    def _encode(response: Response) -> bytes:
        return response.to_json().encode()