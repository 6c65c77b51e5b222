"""Product and licence codes, hashing and AES helpers."""

from __future__ import annotations

import base64
import hashlib
import os
import socket
import sys
from pathlib import Path

import psutil
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

_BLOCK_SIZE = 16
_FALLBACK_KEY = "placeholder".ljust(32, "0")


def _fold(parts: list[str]) -> str:
    digest = hashlib.sha256(",".join(parts).encode()).digest()
    folded = bytes(
        a ^ b ^ c ^ d
        for a, b, c, d in zip(digest[0:8], digest[8:16], digest[16:24], digest[24:32])
    )
    text = folded.hex()
    return "-".join(text[i : i + 4] for i in range(0, len(text), 4))


def _interface_index(name: str) -> int:
    try:
        return socket.if_nametoindex(name)
    except (OSError, AttributeError):
        return sys.maxsize


def _hardware_addresses() -> list[str]:
    addresses = []
    interfaces = sorted(psutil.net_if_addrs().items(), key=lambda item: _interface_index(item[0]))
    for _name, entries in interfaces:
        for entry in entries:
            if entry.family != psutil.AF_LINK or not entry.address:
                continue
            address = entry.address.lower().replace("-", ":")
            if set(address) <= {"0", ":"}:
                continue
            addresses.append(address)
    return addresses


def generate_product_code(plugin_uuid: str, file_hash: str) -> str:
    """Product code from the file hash, the plugin UUID and this machine's MACs."""
    parts = [file_hash, plugin_uuid]
    try:
        parts.extend(_hardware_addresses())
    except (OSError, psutil.Error):
        parts.append(default_key())
    return _fold(parts)


def generate_license_code(plugin_uuid: str, serial_number: str) -> str:
    """Licence code derived from the plugin UUID and a serial number."""
    return _fold([plugin_uuid, serial_number])


def hash_string(text: str) -> str:
    """Hex SHA-256 digest of the text."""
    return hashlib.sha256(text.encode()).hexdigest()


def read_bashrc_variable(key: str, path: str | os.PathLike | None = None) -> str:
    """Value of an exported variable in a shell start-up file."""
    if path is None:
        path = os.path.join(os.environ.get("HOME", ""), ".bashrc")
    try:
        content = Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise OSError(f"读取文件失败: {exc}") from exc
    for line in content.splitlines():
        if not line.startswith("export"):
            continue
        name, sep, value = line.partition("=")
        if sep and name.removeprefix("export").strip() == key:
            return value.strip().strip("\"'")
    raise KeyError(f"未找到环境变量: {key}")


def default_key() -> str:
    """Key from DEFAULT_KEY, the shell start-up file, or the built-in fallback."""
    result = os.environ.get("DEFAULT_KEY", "")
    if not result:
        try:
            result = read_bashrc_variable("DEFAULT_KEY")
        except (OSError, KeyError):
            result = ""
        if not result:
            result = _FALLBACK_KEY
        os.environ["DEFAULT_KEY"] = result
    return result


def file_hash(path: str | os.PathLike) -> str:
    """Hex SHA-256 digest of a file's contents."""
    return hashlib.sha256(Path(path).read_bytes()).hexdigest()


def _cipher_key(key: str | bytes) -> bytes:
    raw = key.encode() if isinstance(key, str) else bytes(key)
    if len(raw) not in (16, 24, 32):
        raise ValueError(f"invalid AES key size {len(raw)}")
    return raw


def encrypt_aes(plain_text: str, key: str | bytes) -> str:
    """AES-CFB encrypt with a random IV in front, base64 encoded."""
    aes_key = _cipher_key(key)
    iv = os.urandom(_BLOCK_SIZE)
    encryptor = Cipher(algorithms.AES(aes_key), modes.CFB(iv)).encryptor()
    body = encryptor.update(plain_text.encode()) + encryptor.finalize()
    return base64.b64encode(iv + body).decode("ascii")


def decrypt_aes(cipher_text: str, key: str | bytes) -> str:
    """Reverse encrypt_aes."""
    raw = base64.b64decode(cipher_text, validate=True)
    aes_key = _cipher_key(key)
    if len(raw) < _BLOCK_SIZE:
        raise ValueError("cipherText too short")
    decryptor = Cipher(algorithms.AES(aes_key), modes.CFB(raw[:_BLOCK_SIZE])).decryptor()
    plain = decryptor.update(raw[_BLOCK_SIZE:]) + decryptor.finalize()
    return plain.decode("utf-8", errors="replace")