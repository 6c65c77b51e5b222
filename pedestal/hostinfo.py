"""Host identity record and its compact wire form."""

from __future__ import annotations

import re
from dataclasses import dataclass

_UUID_LEN = 36
_INT_RE = re.compile(rb"[+-]?\d+")
_ERROR = "转换数据出错"


@dataclass
class HostInfo:
    """Identity and service ports a host announces in its heartbeat."""

    host_uuid: str = ""
    host_name: str = ""
    host_ip: str = ""
    host_port: int = 0
    file_serv_port: int = 0
    message_port: int = 0

    def to_bytes(self) -> bytes:
        """UUID followed by length-prefixed name, IP and port numbers."""
        out = bytearray(self.host_uuid.encode())
        for field in (
            self.host_name,
            self.host_ip,
            str(self.host_port),
            str(self.file_serv_port),
            str(self.message_port),
        ):
            encoded = field.encode()
            if len(encoded) > 255:
                raise ValueError(f"field too long for wire format: {field!r}")
            out.append(len(encoded))
            out += encoded
        return bytes(out)

    @classmethod
    def from_bytes(cls, data: bytes) -> "HostInfo":
        """Decode the form written by to_bytes."""
        if len(data) < _UUID_LEN + 1:
            raise ValueError(_ERROR)
        host_uuid = data[:_UUID_LEN].decode(errors="replace")
        index = _UUID_LEN
        fields = []
        for _ in range(5):
            if len(data) < index + 1:
                raise ValueError(_ERROR)
            length = data[index]
            index += 1
            if len(data) < index + length:
                raise ValueError(_ERROR)
            fields.append(data[index : index + length])
            index += length
        ports = []
        for raw in fields[2:]:
            if not _INT_RE.fullmatch(raw):
                raise ValueError(f"invalid port number: {raw!r}")
            ports.append(int(raw))
        return cls(
            host_uuid=host_uuid,
            host_name=fields[0].decode(errors="replace"),
            host_ip=fields[1].decode(errors="replace"),
            host_port=ports[0],
            file_serv_port=ports[1],
            message_port=ports[2],
        )