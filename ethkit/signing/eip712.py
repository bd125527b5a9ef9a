"""EIP-712 typed structured data: type encoding, struct hashing and message building."""

from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass
from types import UnionType
from typing import Annotated, Any, Union, get_args, get_origin

from ..keccak import keccak256
from ..types import Address

TAG = "eip712"
"""Dataclass field metadata key holding the EIP-712 name of a field."""

Uint8 = Annotated[int, "uint8"]
Uint16 = Annotated[int, "uint16"]
Uint32 = Annotated[int, "uint32"]
Uint64 = Annotated[int, "uint64"]
Uint256 = int


@dataclass(frozen=True)
class FixedLength:
    """Marks a ``list`` or ``bytes`` annotation as a fixed-size array."""

    size: int


_INT_TYPE = re.compile(r"(u?)int(\d*)")
_BYTES_TYPE = re.compile(r"bytes(\d+)")


@dataclass
class EIP712Type:
    name: str
    type: str


@dataclass
class EIP712Domain:
    name: str = ""
    version: str = ""
    verifying_contract: str = ""
    chain_id: int | None = None
    salt: bytes = b""

    def _objects(self) -> tuple[list[EIP712Type], dict[str, Any]]:
        types: list[EIP712Type] = []
        data: dict[str, Any] = {}

        def add(name: str, typ: str, value: Any) -> None:
            types.append(EIP712Type(name=name, type=typ))
            data[name] = value

        if self.name:
            add("name", "string", self.name)
        if self.version:
            add("version", "string", self.version)
        if self.chain_id is not None:
            add("chainId", "uint256", self.chain_id)
        if self.verifying_contract:
            add("verifyingContract", "address", self.verifying_contract)
        if self.salt:
            add("salt", "bytes32", self.salt)
        return types, data

    def hash_struct(self) -> bytes:
        """Return the domain separator."""
        fields, data = self._objects()
        return hash_struct("EIP712Domain", {"EIP712Domain": fields}, data)


@dataclass
class EIP712TypedData:
    types: dict[str, list[EIP712Type]]
    primary_type: str
    domain: EIP712Domain
    message: dict[str, Any]

    def hash(self) -> bytes:
        """Return the digest to sign: keccak256(0x19 0x01 domain message)."""
        domain_hash = self.domain.hash_struct()
        message_hash = hash_struct(self.primary_type, self.types, self.message)
        return keccak256(b"\x19\x01" + domain_hash + message_hash)


def _field_name(item: dataclasses.Field) -> str:
    return item.metadata.get(TAG) or item.name


def _field_type(item: dataclasses.Field) -> Any:
    """Return the annotation of a message field; it must be an evaluated type."""
    if isinstance(item.type, str):
        raise TypeError(
            f"field '{item.name}' has a string annotation {item.type!r}; "
            "message dataclasses need evaluated annotations"
        )
    return item.type


def _decode_struct(cls: type, result: dict[str, list[EIP712Type]]) -> str:
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise TypeError(f"struct expected but found {cls!r}")
    entries = [
        EIP712Type(name=_field_name(item), type=_decode_type(_field_type(item), result))
        for item in dataclasses.fields(cls)
    ]
    result[cls.__name__] = entries
    return cls.__name__


def _decode_type(hint: Any, result: dict[str, list[EIP712Type]]) -> str:
    origin = get_origin(hint)
    if origin is Annotated:
        base, *extras = get_args(hint)
        for extra in extras:
            if isinstance(extra, str):
                return extra
        for extra in extras:
            if isinstance(extra, FixedLength):
                if isinstance(base, type) and issubclass(base, (bytes, bytearray)):
                    return f"[{extra.size}]byte"
                if get_origin(base) in (list, tuple):
                    elem = get_args(base)[0]
                    return f"{_decode_type(elem, result)}[{extra.size}]"
        return _decode_type(base, result)
    if origin in (Union, UnionType):
        options = [arg for arg in get_args(hint) if arg is not type(None)]
        if len(options) == 1:
            return _decode_type(options[0], result)
        raise TypeError(f"type {hint!r} not found")
    if origin is list:
        return _decode_type(get_args(hint)[0], result) + "[]"
    if isinstance(hint, type):
        if issubclass(hint, Address):
            return "address"
        if hint is bool:
            raise TypeError("type bool not found")
        if issubclass(hint, int):
            return "uint256"
        if issubclass(hint, (bytes, bytearray)):
            return "bytes"
        if issubclass(hint, str):
            return "string"
        if dataclasses.is_dataclass(hint):
            return _decode_struct(hint, result)
    raise TypeError(f"type {hint!r} not found")


def _is_fixed_array(hint: Any) -> bool:
    if get_origin(hint) is not Annotated:
        return False
    base, *extras = get_args(hint)
    if isinstance(base, type) and issubclass(base, (bytes, bytearray)):
        return False
    return any(isinstance(extra, FixedLength) for extra in extras)


def _message_item(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _struct_to_map(value)
    return value


def _struct_to_map(obj: Any) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for item in dataclasses.fields(obj):
        value = getattr(obj, item.name)
        if isinstance(value, (list, tuple)):
            items = [_message_item(elem) for elem in value]
            value = tuple(items) if _is_fixed_array(_field_type(item)) else items
        else:
            value = _message_item(value)
        result[_field_name(item)] = value
    return result


class EIP712MessageBuilder:
    """Derives EIP-712 types from a dataclass and builds typed messages from its instances."""

    def __init__(self, message_type: type, domain: EIP712Domain) -> None:
        self.message_type = message_type
        self.types: dict[str, list[EIP712Type]] = {}
        self.primary_type = _decode_struct(message_type, self.types)
        self.domain = domain

    def encoded_type(self) -> str:
        return encode_type(self.primary_type, self.types)

    def build(self, obj: Any) -> EIP712TypedData:
        if not isinstance(obj, self.message_type):
            raise TypeError(
                f"expected {self.message_type.__name__}, got {type(obj).__name__}"
            )
        return EIP712TypedData(
            types=self.types,
            primary_type=self.primary_type,
            domain=self.domain,
            message=_struct_to_map(obj),
        )


def get_dependencies(primary: str, types: dict[str, list[EIP712Type]]) -> list[str]:
    """Return ``primary`` followed by the struct types it refers to, sorted by name."""
    visited: set[str] = set()
    queue = [primary]
    deps: list[str] = []
    while queue:
        current = queue.pop(0)
        for item in types.get(current, []):
            name = item.type.split("[", 1)[0]
            if name in types and name not in visited:
                deps.append(name)
                queue.append(name)
                visited.add(name)
    return [primary, *sorted(deps)]


def encode_type(primary: str, types: dict[str, list[EIP712Type]]) -> str:
    """Return the EIP-712 type string of ``primary`` with its dependencies."""
    return "".join(
        "{}({})".format(dep, ",".join(f"{item.type} {item.name}" for item in types.get(dep, [])))
        for dep in get_dependencies(primary, types)
    )


def encode_data(
    primary: str, types: dict[str, list[EIP712Type]], data: dict[str, Any]
) -> bytes:
    """Encode the fields of ``data`` in the order ``types[primary]`` declares them."""
    encoded = bytearray()
    for item in types.get(primary, []):
        if item.name not in data:
            raise ValueError(f"field '{item.name}' not found")
        encoded += _encode_item(item.type, types, data[item.name])
    return bytes(encoded)


def hash_struct(
    primary: str, types: dict[str, list[EIP712Type]], data: dict[str, Any]
) -> bytes:
    """Return keccak256(typeHash || encodeData)."""
    encoded = encode_data(primary, types, data)
    type_hash = keccak256(encode_type(primary, types).encode("utf-8"))
    return keccak256(type_hash + encoded)


def _decode_hex_string(text: str) -> bytes:
    if not text.startswith("0x"):
        raise ValueError("0x prefix not found")
    return bytes.fromhex(text[2:])


def _encode_item(typ: str, types: dict[str, list[EIP712Type]], value: Any) -> bytes:
    if typ.endswith("]"):
        sub_type = typ[: typ.rindex("[")]
        if not isinstance(value, (list, tuple)):
            raise TypeError(f"array expected for type {typ}")
        return keccak256(b"".join(_encode_item(sub_type, types, elem) for elem in value))
    if typ in types:
        if not isinstance(value, dict):
            raise TypeError(f"struct value expected for type {typ}")
        return hash_struct(typ, types, value)
    if typ == "string":
        if not isinstance(value, str):
            raise TypeError("string type not found")
        return keccak256(value.encode("utf-8"))
    if typ == "bytes":
        if isinstance(value, str):
            return keccak256(_decode_hex_string(value))
        if isinstance(value, (bytes, bytearray)):
            return keccak256(bytes(value))
        return b""
    return _encode_basic(typ, value)


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError("integer expected, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value, 0)
    raise TypeError(f"integer expected, got {type(value).__name__}")


def _to_bytes(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        return _decode_hex_string(value)
    raise TypeError(f"bytes expected, got {type(value).__name__}")


def _encode_basic(typ: str, value: Any) -> bytes:
    match = _INT_TYPE.fullmatch(typ)
    if match:
        bits = int(match.group(2) or 256)
        if bits < 8 or bits > 256 or bits % 8:
            raise ValueError(f"unsupported type '{typ}'")
        number = _to_int(value)
        if match.group(1):
            low, high = 0, 1 << bits
        else:
            low, high = -(1 << (bits - 1)), 1 << (bits - 1)
        if not low <= number < high:
            raise ValueError(f"value {number} out of range for {typ}")
        return (number % (1 << 256)).to_bytes(32, "big")
    if typ == "address":
        raw = _to_bytes(value)
        if len(raw) != 20:
            raise ValueError(f"address must be 20 bytes, got {len(raw)}")
        return raw.rjust(32, b"\x00")
    if typ == "bool":
        if not isinstance(value, bool):
            raise TypeError("bool expected")
        return (1 if value else 0).to_bytes(32, "big")
    match = _BYTES_TYPE.fullmatch(typ)
    if match:
        size = int(match.group(1))
        if not 1 <= size <= 32:
            raise ValueError(f"unsupported type '{typ}'")
        raw = _to_bytes(value)
        if len(raw) > size:
            raise ValueError(f"{typ} value too long: {len(raw)} bytes")
        return raw.ljust(32, b"\x00")
    raise ValueError(f"unsupported type '{typ}'")