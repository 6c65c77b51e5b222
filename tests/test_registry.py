import pytest

from pedestal.registry import AUTO_START, Plugin, PluginNotFound, PluginRegistry

UUID_A = "11111111-2222-3333-4444-555555555555"
UUID_B = "66666666-7777-8888-9999-000000000000"


def make_plugin(uuid=UUID_A, **kwargs):
    base = dict(
        plugin_uuid=uuid,
        plugin_name="loader",
        plugin_type="数据抽取",
        plugin_file_name="loader.bin",
        plugin_config='{"is_debug": false}',
        run_type=AUTO_START,
        serial_number="serial",
        license_code="lic",
        product_code="prod",
    )
    base.update(kwargs)
    return Plugin(**base)


def test_add_and_get():
    registry = PluginRegistry()
    plugin = make_plugin()
    registry.add(plugin)
    assert registry.get(UUID_A) is plugin
    assert UUID_A in registry
    assert len(registry) == 1


def test_add_existing_updates_selected_fields():
    registry = PluginRegistry()
    registry.add(make_plugin())
    registry.add(
        make_plugin(
            plugin_name="other",
            plugin_file_name="new.bin",
            run_type="手动启动",
            plugin_config="{}",
            serial_number="serial2",
            license_code="",
        )
    )
    stored = registry.get(UUID_A)
    assert stored.plugin_file_name == "new.bin"
    assert stored.run_type == "手动启动"
    assert stored.plugin_config == "{}"
    assert stored.serial_number == "serial2"
    assert stored.plugin_name == "loader"
    assert stored.license_code == "lic"


def test_remove():
    registry = PluginRegistry()
    registry.add(make_plugin())
    removed = registry.remove(UUID_A)
    assert removed.plugin_uuid == UUID_A
    assert UUID_A not in registry


def test_remove_missing_raises():
    registry = PluginRegistry()
    with pytest.raises(PluginNotFound, match=UUID_B):
        registry.remove(UUID_B)


def test_remove_empty_uuid_raises():
    with pytest.raises(ValueError, match="plugin uuid is empty"):
        PluginRegistry().remove("")


def test_get_missing_raises():
    with pytest.raises(PluginNotFound) as info:
        PluginRegistry().get(UUID_A)
    assert info.value.plugin_uuid == UUID_A


def test_items_snapshot():
    registry = PluginRegistry()
    registry.add(make_plugin(UUID_A))
    registry.add(make_plugin(UUID_B))
    assert sorted(uuid for uuid, _ in registry.items()) == sorted([UUID_A, UUID_B])
    assert sorted(registry) == sorted([UUID_A, UUID_B])


def test_set_license_code():
    registry = PluginRegistry()
    registry.add(make_plugin(license_code="", product_code=""))
    registry.set_license_code(UUID_A, "p-code", "l-code")
    stored = registry.get(UUID_A)
    assert stored.product_code == "p-code"
    assert stored.license_code == "l-code"


def test_set_license_code_missing():
    with pytest.raises(PluginNotFound):
        PluginRegistry().set_license_code(UUID_A, "p", "l")


@pytest.mark.parametrize(
    "override",
    [
        {"run_type": "手动启动"},
        {"license_code": ""},
        {"plugin_config": ""},
        {"plugin_file_name": ""},
    ],
)
def test_auto_run_filters(override):
    registry = PluginRegistry()
    registry.add(make_plugin(UUID_A))
    registry.add(make_plugin(UUID_B, **override))
    assert [p.plugin_uuid for p in registry.auto_run_plugins()] == [UUID_A]


def test_auto_run_returns_copies():
    registry = PluginRegistry()
    registry.add(make_plugin())
    copy = registry.auto_run_plugins()[0]
    copy.plugin_name = "changed"
    assert registry.get(UUID_A).plugin_name == "loader"
    assert copy == make_plugin(plugin_name="changed")


def test_plugin_dict_round_trip():
    plugin = make_plugin(license_code="")
    data = plugin.to_dict()
    assert data["license_code"] == ""
    assert data["product_code"] == "prod"
    assert "plugin_desc" not in data
    assert Plugin.from_dict(data) == plugin


def test_plugin_from_dict_rejects_bad_type():
    with pytest.raises(TypeError):
        Plugin.from_dict({"plugin_uuid": UUID_A, "license_code": 5})