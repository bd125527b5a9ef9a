"""Version 3 keystore encryption (scrypt or pbkdf2, AES-128-CTR, Keccak MAC)."""

from __future__ import annotations

import binascii
import hmac
import json
import secrets
from typing import Any

from ..keccak import keccak256
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


def encrypt_v3(
    content: bytes,
    password: str,
    scrypt_n: int = 1 << 18,
    scrypt_p: int = 1,
) -> bytes:
    """Encrypt ``content`` into a version 3 keystore document."""
    iv = secrets.token_bytes(16)
    params = ScryptParams(
        salt=secrets.token_bytes(32), n=scrypt_n, r=8, p=scrypt_p, dklen=32
    )
    key = params.derive(password)
    cipher_text = aes_ctr(key[:16], content, iv)
    mac = keccak256(key[16:32], cipher_text)

    document = {
        "id": "",
        "version": 3,
        "crypto": {
            "cipher": CIPHER,
            "cipherparams": {"iv": iv.hex()},
            "ciphertext": cipher_text.hex(),
            "kdf": "scrypt",
            "kdfparams": params.to_json(),
            "mac": mac.hex(),
        },
    }
    return json.dumps(document, separators=(",", ":")).encode("utf-8")


def decrypt_v3(content: bytes | str, password: str) -> bytes:
    """Decrypt a version 3 keystore document."""
    document = json.loads(content)
    if not isinstance(document, dict):
        raise ValueError("keystore must be a JSON object")
    if _field(document, "version") != 3:
        raise ValueError("only version 3 supported")
    crypto = _field(document, "crypto")
    if not isinstance(crypto, dict):
        raise ValueError("crypto section missing")

    cipher = _field(crypto, "cipher", "")
    if cipher != CIPHER:
        raise ValueError(f"cipher {cipher} not supported")

    key = apply_kdf(
        _field(crypto, "kdf", ""), password, _field(crypto, "kdfparams") or {}
    )
    if len(key) < 32:
        raise ValueError("derived key is too short")

    cipher_text = _unhex(_field(crypto, "ciphertext"), "ciphertext")
    mac = keccak256(key[16:32], cipher_text)
    if not hmac.compare_digest(mac, _unhex(_field(crypto, "mac"), "mac")):
        raise ValueError("incorrect mac")

    cipher_params = _field(crypto, "cipherparams") or {}
    iv = _unhex(_field(cipher_params, "iv"), "iv")
    return aes_ctr(key[:16], cipher_text, iv)