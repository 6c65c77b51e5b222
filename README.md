# pedestal

Building blocks for a host that manages plugins: an in-memory registry of
known plugins, licence checking, TOML configuration, request/response
envelopes and a few compact wire formats exchanged with a portal.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## What is inside

| Module | Purpose |
| --- | --- |
| `pedestal.response` | `Response` / `RespDataSet` envelopes and the helpers `success`, `failure`, `ongoing`, `return_int`, `return_str`, `resp_data` |
| `pedestal.status` | `RunStatus`, a thread-safe running flag |
| `pedestal.enmap` | typed lookups in loosely typed dictionaries (`get_int`, `get_int32`, `get_int64`, `get_float64`, `get_string`, `get_int_array`) and `map_to_string`, `string_to_map`, `convert_to_str_map` |
| `pedestal.timefmt` | `time_spent`, a human readable duration between two Unix timestamps |
| `pedestal.pagebuffer` | `PageBuffer`, splits a list of ids into pages |
| `pedestal.hostinfo` | `HostInfo`, the heartbeat record and its binary form |
| `pedestal.queryfilter` | `DataType`, `FilterCondition`, `FilterValue` and `conditions_to_json`, `json_to_conditions`, `json_to_values` |
| `pedestal.paths` | `gen_file_path`, `current_path`, `is_safe_sql` |
| `pedestal.license` | product and licence codes, `hash_string`, `file_hash`, `default_key`, `read_bashrc_variable`, AES-CFB `encrypt_aes` / `decrypt_aes` |
| `pedestal.config` | `AppBaseConfig`, `HostConfig`, `PortalConfig`, `PluginConfigure`, `ConfigError` and `parse_connection` |
| `pedestal.plugininfo` | `PluginInfo`, `PluginOperate` and the `PluginProtocol` a plugin implements |
| `pedestal.jobs` | pull/push job, table and log records, `TableInfo`, `ColumnInfo`, and `to_dict` / `from_dict` for them |
| `pedestal.pluginbase` | `BasePlugin`, the common part of every plugin, and `truncate` |
| `pedestal.registry` | `Plugin`, `PluginRegistry`, `PluginNotFound` |
| `pedestal.control` | `PluginControl`: licence checks, product keys, plugin configuration and registry operations |

## Examples

Response envelopes serialise to the JSON shape the portal expects:

```python
from pedestal.response import failure, resp_data

print(failure("plugin not found").to_json())
print(resp_data(2, ["a", "b"], None).to_dict())
```

Paging a list of ids:

```python
from pedestal.pagebuffer import PageBuffer

pages = PageBuffer(1, "", 3, [1, 2, 3, 4, 5])
print(pages.get_page_ids(0))   # "1,2,3"
print(pages.get_page_ids(1))   # "4,5"
```

Durations:

```python
from pedestal.timefmt import time_spent

print(time_spent(0, 3725))     # "1时2分5秒"
```

Heartbeat records round-trip through their binary form:

```python
from pedestal.hostinfo import HostInfo

info = HostInfo(
    host_uuid="00000000-0000-0000-0000-000000000000",
    host_name="host001",
    host_ip="127.0.0.1",
    host_port=8081,
    file_serv_port=8902,
    message_port=8903,
)
assert HostInfo.from_bytes(info.to_bytes()) == info
```

Licence codes are derived from the plugin UUID and the plugin file's hash;
the product code also takes in this machine's network hardware addresses:

```python
from pedestal.license import file_hash, generate_license_code, generate_product_code

digest = file_hash("plugin/worker")
product = generate_product_code("00000000-0000-0000-0000-000000000000", digest)
licence = generate_license_code("00000000-0000-0000-0000-000000000000", product)
```

Encrypted configuration values use the key returned by `default_key()`,
which comes from the `DEFAULT_KEY` environment variable, an `export` line in
`~/.bashrc`, or a built-in fallback:

```python
from pedestal.license import decrypt_aes, default_key, encrypt_aes

sealed = encrypt_aes("host=localhost dbname=postgres", default_key())
print(decrypt_aes(sealed, default_key()))
```

Loading a host configuration creates `config.toml` with defaults on first
use and raises `ConfigError` asking for it to be filled in. The
`db_connection` value is expected to be encrypted; `get_connection()`
decrypts it and returns its `key=value` options as a dictionary:

```python
from pedestal.config import ConfigError, HostConfig

config = HostConfig()
try:
    config.load("config", "config.toml")
except ConfigError as exc:
    print(exc)
```

Keeping track of plugins. `auto_run_plugins()` returns copies of the plugins
whose run type is `自动启动` and which have a licence code, a configuration
and a file name:

```python
from pedestal.registry import Plugin, PluginRegistry

registry = PluginRegistry()
registry.add(Plugin(
    plugin_uuid="00000000-0000-0000-0000-000000000000",
    plugin_name="demo",
    plugin_file_name="worker",
    plugin_config="{}",
    run_type="自动启动",
    license_code="0000-0000-0000-0000",
))
for plugin in registry.auto_run_plugins():
    print(plugin.plugin_name)
```

`PluginControl` works on such a registry together with a `HostConfig`. It
looks for plugin files under `<base_dir>/<plugin_dir>/<plugin uuid>/<file name>`,
and its `plugins` dictionary holds the objects (anything following
`PluginProtocol`) that the caller has started, keyed by plugin UUID.

## What it does not do

- It does not start, stop or talk to plugin processes; the caller puts
  running plugin objects into `PluginControl.plugins` itself.
- It serves no HTTP API, runs no message or file service and sends no
  heartbeats; `HostInfo` only provides the heartbeat record's binary form.
- The plugin registry lives in memory only; nothing is read from or written
  to a database.
- There is no command-line program.