"""Key derivation functions and the AES-CTR cipher used by the keystore formats."""

from __future__ import annotations

import binascii
import hashlib
import json
from dataclasses import dataclass
from typing import Any

from Crypto.Cipher import AES

_INT_MAX = (1 << 31) - 1


def _field(data: dict, name: str, default: Any = None) -> Any:
    """Fetch a JSON field by name, falling back to a case-insensitive match."""
    if name in data:
        return data[name]
    lowered = name.lower()
    for key, value in data.items():
        if key.lower() == lowered:
            return value
    return default


def _unhex(value: Any, name: str) -> bytes:
    if value is None:
        return b""
    if not isinstance(value, str):
        raise ValueError(f"field '{name}' must be a hex string")
    try:
        return binascii.unhexlify(value)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"field '{name}' is not valid hex: {exc}") from exc


def _load_object(raw: dict | str | bytes | bytearray) -> dict:
    if isinstance(raw, dict):
        return raw
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("kdf params must be a JSON object")
    return data


def _as_bytes(password: str | bytes) -> bytes:
    if isinstance(password, str):
        return password.encode("utf-8")
    return bytes(password)


def aes_ctr(key: bytes, data: bytes, iv: bytes) -> bytes:
    """Encrypt or decrypt ``data`` with AES in counter mode, ``iv`` being the full counter block."""
    if len(iv) != AES.block_size:
        raise ValueError(f"iv must be {AES.block_size} bytes, got {len(iv)}")
    cipher = AES.new(bytes(key), AES.MODE_CTR, nonce=b"", initial_value=bytes(iv))
    return cipher.encrypt(bytes(data))


@dataclass
class Pbkdf2Params:
    """Parameters of PBKDF2 with HMAC-SHA256."""

    salt: bytes
    c: int
    dklen: int = 32
    prf: str = "hmac-sha256"

    def derive(self, password: str | bytes) -> bytes:
        """Derive a key of ``dklen`` bytes from ``password``."""
        return hashlib.pbkdf2_hmac(
            "sha256", _as_bytes(password), bytes(self.salt), self.c, self.dklen
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "dklen": self.dklen,
            "salt": bytes(self.salt).hex(),
            "c": self.c,
            "prf": self.prf,
        }

    @classmethod
    def from_json(cls, data: dict | str | bytes) -> Pbkdf2Params:
        obj = _load_object(data)
        return cls(
            salt=_unhex(_field(obj, "salt"), "salt"),
            c=int(_field(obj, "c", 0)),
            dklen=int(_field(obj, "dklen", 0)),
            prf=_field(obj, "prf", ""),
        )


@dataclass
class ScryptParams:
    """Parameters of the scrypt key derivation function."""

    salt: bytes
    n: int = 1 << 18
    r: int = 8
    p: int = 1
    dklen: int = 32

    def derive(self, password: str | bytes) -> bytes:
        """Derive a key of ``dklen`` bytes from ``password``."""
        needed = 128 * max(self.r, 0) * (max(self.n, 0) + max(self.p, 0) + 2)
        maxmem = min(needed + (1 << 20), _INT_MAX)
        return hashlib.scrypt(
            _as_bytes(password),
            salt=bytes(self.salt),
            n=self.n,
            r=self.r,
            p=self.p,
            dklen=self.dklen,
            maxmem=maxmem,
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "dklen": self.dklen,
            "salt": bytes(self.salt).hex(),
            "n": self.n,
            "p": self.p,
            "r": self.r,
        }

    @classmethod
    def from_json(cls, data: dict | str | bytes) -> ScryptParams:
        obj = _load_object(data)
        return cls(
            salt=_unhex(_field(obj, "salt"), "salt"),
            n=int(_field(obj, "n", 0)),
            r=int(_field(obj, "r", 0)),
            p=int(_field(obj, "p", 0)),
            dklen=int(_field(obj, "dklen", 0)),
        )


def apply_kdf(
    name: str, password: str | bytes, params: dict | str | bytes
) -> bytes:
    """Derive a key with the kdf called ``name`` ("pbkdf2" or "scrypt")."""
    if name == "pbkdf2":
        pbkdf2 = Pbkdf2Params.from_json(params)
        if pbkdf2.prf != "hmac-sha256":
            raise ValueError(f"prf '{pbkdf2.prf}' not found")
        return pbkdf2.derive(password)
    if name == "scrypt":
        return ScryptParams.from_json(params).derive(password)
    raise ValueError(f"kdf '{name}' not supported")