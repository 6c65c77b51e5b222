"""Uniform reply envelope exchanged between host, portal and plugins."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

RESP_SUCCESS = 0
RESP_FAILURE = -1


@dataclass
class RespDataSet:
    """A page of result data together with the total row count."""

    total: int = 0
    arr_data: Any = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"total": self.total}
        if self.arr_data is not None:
            result["list"] = self.arr_data
        return result


@dataclass
class Response:
    """Reply carrying a code, optional data and a message."""

    code: int = RESP_SUCCESS
    data: RespDataSet | None = None
    info: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "data": self.data.to_dict() if self.data is not None else None,
            "message": self.info,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))


def failure(info: str) -> Response:
    """A failed reply with the given message."""
    return Response(RESP_FAILURE, None, info)


def return_int(value: int) -> Response:
    """A reply whose code carries an integer value."""
    return Response(value, None, "success")


def return_str(value: str) -> Response:
    """A successful reply whose message carries a string value."""
    return Response(RESP_SUCCESS, None, value)


def success(data: RespDataSet | None) -> Response:
    """A successful reply carrying the given data set."""
    return Response(RESP_SUCCESS, data, "success")


def ongoing() -> Response:
    """A reply telling that the operation is still in progress."""
    return Response(1, None, "ongoing")


def resp_data(total: int, data: Any, error: BaseException | str | None) -> Response:
    """Wrap data in a successful reply, or report the error as a failure."""
    if error is not None:
        return failure(str(error))
    return success(RespDataSet(total, data))