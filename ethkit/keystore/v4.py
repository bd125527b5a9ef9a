"""Version 4 (EIP-2335) keystore encryption."""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import secrets
import unicodedata
from typing import Any

from .kdf import ScryptParams, aes_ctr, apply_kdf

CIPHER = "aes-128-ctr"


def _field(data: dict, name: str, default: Any = None) -> Any:
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


def _module(crypto: dict, name: str) -> dict:
    value = _field(crypto, name)
    if not isinstance(value, dict):
        raise ValueError(f"crypto module '{name}' missing")
    return value


def normalize_password(password: str) -> str:
    """Apply NFKD and drop single-byte control characters (0x00-0x1F and 0x7F)."""
    decomposed = unicodedata.normalize("NFKD", password)
    return "".join(
        char for char in decomposed if not (ord(char) <= 0x1F or ord(char) == 0x7F)
    )


def _checksum(key: bytes, cipher_text: bytes) -> bytes:
    return hashlib.sha256(key[16:32] + cipher_text).digest()


def encrypt_v4(content: bytes, password: str) -> bytes:
    """Encrypt ``content`` into a version 4 keystore document."""
    password = normalize_password(password)

    params = ScryptParams(salt=secrets.token_bytes(32), n=1 << 18, r=8, p=1, dklen=32)
    key = params.derive(password)

    iv = secrets.token_bytes(16)
    cipher_text = aes_ctr(key[:16], content, iv)

    document = {
        "crypto": {
            "kdf": {"function": "scrypt", "params": params.to_json(), "message": ""},
            "checksum": {
                "function": "sha256",
                "params": None,
                "message": _checksum(key, cipher_text).hex(),
            },
            "cipher": {
                "function": CIPHER,
                "params": {"iv": iv.hex()},
                "message": cipher_text.hex(),
            },
        },
        "description": "",
        "pubkey": "",
        "path": "",
        "version": 4,
        "uuid": "",
    }
    return json.dumps(document, separators=(",", ":")).encode("utf-8")


def decrypt_v4(content: bytes | str, password: str) -> bytes:
    """Decrypt a version 4 keystore document."""
    document = json.loads(content)
    if not isinstance(document, dict):
        raise ValueError("keystore must be a JSON object")
    if _field(document, "version") != 4:
        raise ValueError("only version 4 supported")
    crypto = _field(document, "crypto")
    if not isinstance(crypto, dict):
        raise ValueError("crypto section missing")

    password = normalize_password(password)

    kdf = _module(crypto, "kdf")
    key = apply_kdf(_field(kdf, "function", ""), password, _field(kdf, "params") or {})
    if len(key) < 32:
        raise ValueError("derived key is too short")

    cipher = _module(crypto, "cipher")
    checksum = _module(crypto, "checksum")
    cipher_text = _unhex(_field(cipher, "message"), "cipher message")
    expected = _unhex(_field(checksum, "message"), "checksum message")
    if not hmac.compare_digest(_checksum(key, cipher_text), expected):
        raise ValueError("bad checksum")

    function = _field(cipher, "function", "")
    if function != CIPHER:
        raise ValueError(f"cipher '{function}' not supported")
    cipher_params = _field(cipher, "params") or {}
    if not isinstance(cipher_params, dict):
        raise ValueError("cipher params must be a JSON object")
    iv = _unhex(_field(cipher_params, "iv"), "iv")
    return aes_ctr(key[:16], cipher_text, iv)