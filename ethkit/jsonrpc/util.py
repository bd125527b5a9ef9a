"""Hex helpers for JSON-RPC values."""

from __future__ import annotations

import binascii
import re

_UINT64_MAX = (1 << 64) - 1
_DECIMAL = re.compile(r"[0-9]+")
_HEX = re.compile(r"[0-9a-fA-F]+")


def encode_uint_to_hex(value: int) -> str:
    """Return ``value`` as ``0x``-prefixed lower-case hex."""
    return f"0x{value:x}"


def parse_big_int(text: str) -> int:
    """Parse a hex integer with an optional ``0x`` prefix."""
    body = text.removeprefix("0x")
    if not _HEX.fullmatch(body):
        raise ValueError(f"invalid hex integer: {text!r}")
    return int(body, 16)


def parse_uint64_or_hex(text: str) -> int:
    """Parse an unsigned 64-bit integer, hex when prefixed with ``0x``, else decimal."""
    if text.startswith("0x"):
        body, pattern, base = text[2:], _HEX, 16
    else:
        body, pattern, base = text, _DECIMAL, 10
    if not pattern.fullmatch(body):
        raise ValueError(f"invalid syntax: {text!r}")
    value = int(body, base)
    if value > _UINT64_MAX:
        raise ValueError(f"value out of range: {text!r}")
    return value


def encode_to_hex(data: bytes) -> str:
    """Return ``data`` as ``0x``-prefixed hex."""
    return "0x" + bytes(data).hex()


def parse_hex_bytes(text: str) -> bytes:
    """Decode ``0x``-prefixed hex, padding an odd number of digits on the left."""
    if not text.startswith("0x"):
        raise ValueError("it does not have 0x prefix")
    body = text[2:]
    if len(body) % 2:
        body = "0" + body
    try:
        return binascii.unhexlify(body)
    except binascii.Error as exc:
        raise ValueError(str(exc)) from exc