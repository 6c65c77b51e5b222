"""Records describing pull and push jobs, their tables and their logs."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, TypeVar

T = TypeVar("T")


def _f(name: str, default: Any, omitempty: bool = True) -> Any:
    return field(default=default, metadata={"json": name, "omitempty": omitempty})


def _hidden(default: Any) -> Any:
    return field(default=default, metadata={})


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or (value == 0 and not isinstance(value, str))


def _matches(expected: type, value: Any) -> bool:
    if expected is int:
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, expected)


def to_dict(record: Any) -> dict[str, Any]:
    """JSON form of a record; hidden fields and empty optional fields are left out."""
    result = {}
    for f in fields(record):
        name = f.metadata.get("json")
        if name is None:
            continue
        value = getattr(record, f.name)
        if f.metadata.get("omitempty") and _is_empty(value):
            continue
        result[name] = value
    return result


def from_dict(cls: type[T], data: dict[str, Any]) -> T:
    """Build a record of the given class from its JSON form."""
    kwargs = {}
    for f in fields(cls):
        name = f.metadata.get("json")
        if name is None or data.get(name) is None:
            continue
        value = data[name]
        expected = type(f.default)
        if not _matches(expected, value):
            raise TypeError(f"{name}: expected {expected.__name__}, got {type(value).__name__}")
        kwargs[f.name] = value
    return cls(**kwargs)


@dataclass
class _Job:
    user_id: int = _f("user_id", 0)
    job_id: int = _f("job_id", 0)
    job_name: str = _f("job_name", "")
    plugin_uuid: str = _f("plugin_uuid", "")
    ds_id: int = _f("ds_id", 0)
    cron_expression: str = _f("cron_expression", "")
    skip_hour: str = _f("skip_hour", "")
    is_debug: str = _f("is_debug", "")
    status: str = _f("status", "")
    last_run: int = _hidden(0)
    run_info: str = _f("run_info", "")
    load_status: str = _f("load_status", "")


@dataclass
class PullJob(_Job):
    """A scheduled job that pulls tables from a data source."""


@dataclass
class PushJob(_Job):
    """A scheduled job that pushes tables to a data source."""


@dataclass
class PullTable:
    """A source table handled by a pull job."""

    job_id: int = _f("job_id", 0)
    table_id: int = _f("table_id", 0)
    table_code: str = _f("table_code", "")
    table_name: str = _f("table_name", "")
    dest_table: str = _f("dest_table", "")
    select_sql: str = _f("select_sql", "")
    filter_col: str = _f("filter_col", "")
    filter_val: str = _f("filter_val", "")
    key_col: str = _f("key_col", "")
    buffer: int = _f("buffer", 0)
    status: str = _f("status", "")
    last_run: int = _hidden(0)
    run_info: str = _f("run_info", "")


@dataclass
class PushTable:
    """A table written by a push job."""

    job_id: int = _f("job_id", 0)
    table_id: int = _f("table_id", 0)
    dest_table: str = _f("dest_table", "")
    source_table: str = _f("source_table", "")
    insert_col: str = _f("insert_col", "")
    select_sql: str = _f("select_sql", "")
    filter_col: str = _f("filter_col", "")
    filter_val: str = _f("filter_val", "")
    key_col: str = _f("key_col", "")
    buffer: int = _f("buffer", 0)
    status: str = _f("status", "")
    last_run: int = _hidden(0)
    run_info: str = _f("run_info", "")


@dataclass
class _JobLog:
    job_id: int = _f("job_id", 0, False)
    start_time: str = _f("start_time", "", False)
    stop_time: str = _f("stop_time", "", False)
    time_spent: str = _f("time_spent", "", False)
    status: str = _f("status", "", False)
    error_info: str = _f("error_info", "", False)


@dataclass
class PullJobLog(_JobLog):
    """One run of a pull job."""


@dataclass
class PushJobLog(_JobLog):
    """One run of a push job."""


@dataclass
class _TableLog:
    job_id: int = _f("job_id", 0, False)
    table_id: int = _f("table_id", 0, False)
    start_time: str = _f("start_time", "", False)
    stop_time: str = _f("stop_time", "", False)
    time_spent: str = _f("time_spent", "", False)
    status: str = _f("status", "", False)
    record_count: int = _f("record_count", 0, False)
    error_info: str = _f("error_info", "", False)


@dataclass
class PullTableLog(_TableLog):
    """One run of a pull job on one table."""


@dataclass
class PushTableLog(_TableLog):
    """One run of a push job on one table."""


@dataclass
class TableInfo:
    """A table's code and display name."""

    table_code: str = _f("table_code", "", False)
    table_name: str = _f("table_name", "")


@dataclass
class ColumnInfo:
    """Description of a table column."""

    column_code: str = _f("column_code", "")
    alias_name: str = _f("alias_name", "")
    is_key: str = _f("is_key", "")
    data_type: str = _f("data_type", "")
    max_length: int = _f("max_length", 0)
    precision: int = _f("precision", 0)
    scale: int = _f("scale", 0)
    is_nullable: str = _f("is_nullable", "")
    comment: str = _f("comment", "")