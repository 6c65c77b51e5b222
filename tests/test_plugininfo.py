import pytest

from pedestal.plugininfo import PluginInfo, PluginOperate


def test_plugin_info_omits_empty_fields():
    info = PluginInfo(plugin_uuid="u-1", plugin_name="pull")
    assert info.to_dict() == {"plugin_uuid": "u-1", "plugin_name": "pull"}


def test_plugin_info_round_trip():
    info = PluginInfo(
        plugin_uuid="u-1",
        plugin_name="pull",
        plugin_type="数据抽取",
        plugin_file_name="pull.bin",
        run_type="自动启动",
        serial_number="abc",
    )
    assert PluginInfo.from_dict(info.to_dict()) == info


def test_plugin_info_ignores_unknown_and_null():
    info = PluginInfo.from_dict({"plugin_name": "x", "other": 1, "status": None})
    assert info == PluginInfo(plugin_name="x")


def test_plugin_info_rejects_non_string():
    with pytest.raises(TypeError):
        PluginInfo.from_dict({"plugin_name": 5})


def test_plugin_operate_keeps_required_fields():
    op = PluginOperate(user_id=0, operate_name="list")
    assert op.to_dict() == {"user_id": 0, "operate_name": "list", "params": None}


def test_plugin_operate_round_trip():
    op = PluginOperate(user_id=7, plugin_uuid="u-2", operate_name="get", params={"a": 1})
    assert PluginOperate.from_dict(op.to_dict()) == op


def test_plugin_operate_rejects_bad_params():
    with pytest.raises(TypeError):
        PluginOperate.from_dict({"params": [1, 2]})