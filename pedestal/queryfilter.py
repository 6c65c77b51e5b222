"""Typed filter conditions passed around as JSON."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable

TIMESTAMP_COLUMN = "pull_time"

_INT_RE = re.compile(r"[+-]?\d+")
_DATE_RE = re.compile(r"(\d{4})-(\d{2})-(\d{2})")
_DATETIME_RE = re.compile(
    r"(\d{4})-(\d{2})-(\d{2}) (\d{1,2}):(\d{2}):(\d{2})(?:[.,](\d+))?"
)


class DataType(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    DATE = "date"
    DATETIME = "datetime"
    TIMESTAMP = "timestamp"


@dataclass
class FilterCondition:
    """A column, the type of its value and the value as text."""

    column: str = ""
    data_type: DataType | str = DataType.STRING
    value: str = ""


@dataclass
class FilterValue:
    """A column with its value converted to a Python value."""

    column: str
    value: Any


def _escape(text: str) -> str:
    return (
        text.replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
        .replace("\u2028", "\\u2028")
        .replace("\u2029", "\\u2029")
    )


def conditions_to_json(conditions: Iterable[FilterCondition]) -> str:
    """Serialise conditions to a JSON array."""
    items = [
        {
            "column": c.column,
            "dataType": c.data_type.value if isinstance(c.data_type, DataType) else c.data_type,
            "value": c.value,
        }
        for c in conditions
    ]
    return _escape(json.dumps(items, ensure_ascii=False, separators=(",", ":")))


def _text_field(item: dict, name: str) -> str:
    value = item.get(name, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {name!r} must be a string")
    return value


def json_to_conditions(text: str) -> list[FilterCondition]:
    """Parse a JSON array of conditions."""
    data = json.loads(text)
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError("filter conditions must be a JSON array")
    result = []
    for item in data:
        if item is None:
            result.append(FilterCondition(data_type=""))
            continue
        if not isinstance(item, dict):
            raise ValueError("filter condition must be a JSON object")
        raw_type = _text_field(item, "dataType")
        try:
            data_type: DataType | str = DataType(raw_type)
        except ValueError:
            data_type = raw_type
        result.append(
            FilterCondition(_text_field(item, "column"), data_type, _text_field(item, "value"))
        )
    return result


def _parse_int(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    value = int(text)
    if not -(2**63) <= value < 2**63:
        raise ValueError(f"integer out of range: {text!r}")
    return value


def _parse_float(text: str) -> float:
    if text != text.strip() or not text:
        raise ValueError(f"invalid float: {text!r}")
    return float(text)


def _parse_date(text: str) -> datetime:
    match = _DATE_RE.fullmatch(text)
    if not match:
        raise ValueError(f"invalid date: {text!r}")
    year, month, day = (int(g) for g in match.groups())
    return datetime(year, month, day, tzinfo=timezone.utc)


def _parse_datetime(text: str) -> datetime:
    match = _DATETIME_RE.fullmatch(text)
    if not match:
        raise ValueError(f"invalid datetime: {text!r}")
    *parts, fraction = match.groups()
    year, month, day, hour, minute, second = (int(p) for p in parts)
    micro = int((fraction or "0")[:6].ljust(6, "0"))
    return datetime(year, month, day, hour, minute, second, micro, tzinfo=timezone.utc)


_CONVERTERS = {
    DataType.STRING: lambda text: text,
    DataType.INTEGER: _parse_int,
    DataType.FLOAT: _parse_float,
    DataType.DATE: _parse_date,
    DataType.DATETIME: _parse_datetime,
    DataType.TIMESTAMP: _parse_datetime,
}


def json_to_values(text: str) -> list[FilterValue]:
    """Parse conditions and convert each value according to its type."""
    result = []
    for condition in json_to_conditions(text):
        converter = (
            _CONVERTERS.get(condition.data_type)
            if isinstance(condition.data_type, DataType)
            else None
        )
        value = converter(condition.value) if converter else None
        result.append(FilterValue(condition.column, value))
    return result