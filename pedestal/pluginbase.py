"""Behaviour every plugin shares: status, config template and resource usage."""

from __future__ import annotations

import json
import math
import os
import time
from dataclasses import dataclass, field

import psutil

from .config import PluginConfigure, parse_connection
from .response import Response, failure, success
from .status import RunStatus


def truncate(num: float, width: int) -> float:
    """Cut a number to the given count of decimal places without rounding."""
    factor = math.pow(10, width)
    return math.trunc(num * factor) / factor


def _usage_json(cpu_usage: str, memory_usage: float) -> str:
    return json.dumps(
        {"cpu_usage": cpu_usage, "memory_usage": memory_usage}, separators=(",", ":")
    )


@dataclass
class BasePlugin:
    """Common part of a plugin; concrete plugins add run and custom_interface."""

    is_debug: bool = False
    plugin_uuid: str = ""
    plugin_name: str = ""
    db_connection: str = ""
    status: RunStatus = field(default_factory=RunStatus, repr=False, compare=False)

    def get_config_template(self) -> Response:
        """Reply whose message is the default plugin configuration as JSON."""
        try:
            text = json.dumps(PluginConfigure().to_dict(), ensure_ascii=False, separators=(",", ":"))
        except (TypeError, ValueError) as exc:
            return failure(str(exc))
        return Response(0, None, text)

    def running(self) -> Response:
        """Reply whose message is "true" or "false"."""
        return Response(0, None, "true" if self.status.is_running() else "false")

    def stop(self) -> Response:
        self.status.set_running(False)
        return success(None)

    def set_connection(self, source: str) -> None:
        self.db_connection = source

    def convert_connect_option(self, connection: str) -> dict[str, str]:
        """Split 'key=value key=value' into a mapping."""
        return parse_connection(connection)

    def get_system_usage(self) -> str:
        """CPU and resident memory (MiB) of this process, as JSON."""
        try:
            process = psutil.Process(os.getpid())
            rss = process.memory_info().rss
            times = process.cpu_times()
            elapsed = time.time() - process.create_time()
        except (psutil.Error, OSError):
            return _usage_json("0.0000%", 0.0)
        cpu_percent = 0.0
        if elapsed > 0:
            cpu_percent = 100 * (times.user + times.system) / elapsed
        return _usage_json(f"{cpu_percent:.2f}%", truncate(rss / 1024 / 1024, 4))