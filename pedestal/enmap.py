"""Typed lookups in loosely typed mappings and string conversions."""

from __future__ import annotations

import json
import math
import re
from decimal import Decimal
from typing import Any, Mapping

_INT_RE = re.compile(r"[+-]?\d+")


def _require(data: Mapping[str, Any] | None) -> Mapping[str, Any]:
    if data is None:
        raise ValueError("data is nil")
    return data


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_float(value: Any) -> bool:
    return isinstance(value, float)


def get_int(key: str, data: Mapping[str, Any] | None) -> int:
    """Integer at key; floats are truncated, a missing key gives 0."""
    data = _require(data)
    if key not in data:
        return 0
    value = data[key]
    if _is_int(value):
        return value
    if _is_float(value):
        return int(value)
    raise TypeError(f"value is not int or int32 or float64 or int64  by key {key}")


def get_int32(key: str, data: Mapping[str, Any] | None) -> int:
    """Like get_int, wrapped to a signed 32-bit value."""
    value = get_int(key, data)
    return ((value + 2**31) % 2**32) - 2**31


def get_int64(key: str, data: Mapping[str, Any] | None) -> int:
    """Integer at key; a missing key gives 0."""
    data = _require(data)
    if key not in data:
        return 0
    value = data[key]
    if _is_int(value):
        return value
    raise TypeError(f"value is not int64 or int32  by key {key}")


def get_float64(key: str, data: Mapping[str, Any] | None) -> float:
    """Float at key; integers are widened, a missing key gives 0.0."""
    data = _require(data)
    if key not in data:
        return 0.0
    value = data[key]
    if _is_float(value):
        return value
    if _is_int(value):
        return float(value)
    raise TypeError(f"value is not float64 or int32  by key {key}")


def get_string(key: str, data: Mapping[str, Any] | None) -> str:
    """String at key; a missing key gives an empty string."""
    data = _require(data)
    if key not in data:
        return ""
    value = data[key]
    if isinstance(value, str):
        return value
    raise TypeError(f"value is not string  by key {key}")


def get_int_array(key: str, data: Mapping[str, Any] | None) -> list[int] | None:
    """Comma-separated integers stored as a string at key; None when missing."""
    data = _require(data)
    if key not in data:
        return None
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"value is not string  by key {key}")
    result = []
    for part in value.split(","):
        if not _INT_RE.fullmatch(part):
            raise ValueError(f"value is not int array  by key {key}")
        result.append(int(part))
    return result


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    sign, digit_tuple, exponent = Decimal(repr(value)).as_tuple()
    digits = list(digit_tuple)
    while len(digits) > 1 and digits[-1] == 0:
        digits.pop()
        exponent += 1
    text = "".join(str(d) for d in digits)
    nd = len(text)
    dp = nd + exponent
    eprec = 6
    if eprec > nd and nd >= dp:
        eprec = nd
    prefix = "-" if sign else ""
    x = dp - 1
    if x < -4 or x >= eprec:
        mantissa = text[0] + ("." + text[1:] if nd > 1 else "")
        exp_sign = "+" if x >= 0 else "-"
        return f"{prefix}{mantissa}e{exp_sign}{abs(x):02d}"
    if dp <= 0:
        return f"{prefix}0.{'0' * -dp}{text}"
    if dp >= nd:
        return f"{prefix}{text}{'0' * (dp - nd)}"
    return f"{prefix}{text[:dp]}.{text[dp:]}"


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    return str(value)


def map_to_string(data: Mapping[str, Any] | None) -> str:
    """Render a mapping as key1=value1,key2=value2."""
    if data is None:
        return ""
    return ",".join(f"{key}={_format_value(value)}" for key, value in data.items())


def string_to_map(source: str | None) -> dict[str, str]:
    """Parse a JSON object and turn its scalar values into strings."""
    if source is None:
        raise ValueError("source is nil")
    values = json.loads(source, parse_int=float)
    if values is None:
        return {}
    if not isinstance(values, dict):
        raise ValueError("json value is not an object")
    return convert_to_str_map(values)


def convert_to_str_map(values: Mapping[str, Any]) -> dict[str, str]:
    """Turn a mapping of scalar values into a mapping of strings."""
    result = {}
    for key, value in values.items():
        if not isinstance(value, (int, float, str, bool)):
            raise TypeError(f"value is not a supported type for key {key}")
        result[key] = _format_value(value)
    return result