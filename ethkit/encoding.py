"""Hex text encodings for big integers, 64-bit integers and byte strings."""

import re

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]*")
_UINT64_MAX = (1 << 64) - 1


def _as_text(text: str | bytes) -> str:
    if isinstance(text, (bytes, bytearray)):
        return bytes(text).decode("ascii")
    return text


def decode_hex(text: str | bytes) -> bytes:
    """Decode hex text with an optional ``0x`` prefix; odd lengths are left-padded."""
    value = _as_text(text).removeprefix("0x")
    if len(value) % 2:
        value = "0" + value
    if not _HEX_DIGITS.fullmatch(value):
        raise ValueError(f"invalid hex string: {text!r}")
    return bytes.fromhex(value)


def encode_hex(data: bytes) -> str:
    """Encode bytes as ``0x``-prefixed lower-case hex."""
    return "0x" + bytes(data).hex()


def encode_big(value: int) -> str:
    """Encode an integer as ``0x``-prefixed hex without leading zeros."""
    return f"0x{value:x}"


def decode_big(text: str | bytes) -> int:
    """Decode hex text as an unsigned big-endian integer."""
    return int.from_bytes(decode_hex(text), "big")


def encode_uint64(value: int) -> str:
    """Encode an unsigned 64-bit integer as ``0x``-prefixed hex."""
    if not 0 <= value <= _UINT64_MAX:
        raise ValueError(f"value {value} out of range for uint64")
    return f"0x{value:x}"


def decode_uint64(text: str | bytes) -> int:
    """Decode hex text into an unsigned 64-bit integer; empty text means zero."""
    value = _as_text(text).removeprefix("0x") or "0"
    if not _HEX_DIGITS.fullmatch(value):
        raise ValueError(f"invalid hex number: {text!r}")
    number = int(value, 16)
    if number > _UINT64_MAX:
        raise ValueError(f"value {text!r} out of range for uint64")
    return number


def encode_bytes(data: bytes) -> str:
    """Encode a byte string as ``0x``-prefixed hex."""
    return encode_hex(data)


def decode_bytes(text: str | bytes) -> bytes:
    """Decode hex text into bytes; malformed input yields an empty result."""
    try:
        return decode_hex(text)
    except (ValueError, UnicodeDecodeError):
        return b""