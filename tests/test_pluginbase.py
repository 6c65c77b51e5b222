import json
from unittest import mock

import psutil

from pedestal.pluginbase import BasePlugin, truncate


def test_truncate_cuts_without_rounding():
    assert truncate(1.23456789, 4) == 1.2345
    assert truncate(-1.99, 1) == -1.9
    assert truncate(5.0, 2) == 5.0


def test_config_template():
    resp = BasePlugin().get_config_template()
    assert resp.code == 0
    assert json.loads(resp.info) == {"is_debug": False, "plugin_name": ""}


def test_running_and_stop():
    plugin = BasePlugin()
    assert plugin.running().info == "false"
    plugin.status.set_running(True)
    assert plugin.running().info == "true"
    resp = plugin.stop()
    assert resp.code == 0
    assert resp.info == "success"
    assert plugin.running().info == "false"


def test_set_connection():
    plugin = BasePlugin()
    plugin.set_connection("host=db user=me")
    assert plugin.db_connection == "host=db user=me"


def test_convert_connect_option():
    plugin = BasePlugin()
    result = plugin.convert_connect_option("host=db  port=9000 junk cluster=c=1")
    assert result == {"host": "db", "port": "9000", "cluster": "c=1"}


def test_system_usage_shape():
    data = json.loads(BasePlugin().get_system_usage())
    assert set(data) == {"cpu_usage", "memory_usage"}
    assert data["cpu_usage"].endswith("%")
    assert data["memory_usage"] > 0


def test_system_usage_on_error():
    with mock.patch("pedestal.pluginbase.psutil.Process", side_effect=psutil.NoSuchProcess(1)):
        data = json.loads(BasePlugin().get_system_usage())
    assert data == {"cpu_usage": "0.0000%", "memory_usage": 0.0}