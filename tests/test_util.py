import pytest

from ethkit.jsonrpc.util import (
    encode_to_hex,
    encode_uint_to_hex,
    parse_big_int,
    parse_hex_bytes,
    parse_uint64_or_hex,
)


@pytest.mark.parametrize("value", [0, 1, 255, 1337, 2**64 - 1])
def test_uint_hex_round_trip(value):
    assert parse_uint64_or_hex(encode_uint_to_hex(value)) == value


def test_encode_uint_zero():
    assert encode_uint_to_hex(0) == "0x0"


def test_parse_decimal():
    assert parse_uint64_or_hex(str(2**64 - 1)) == 2**64 - 1


@pytest.mark.parametrize("text", ["", "0x", "-1", "+1", "0xzz", "1 2", str(2**64)])
def test_parse_uint64_rejects(text):
    with pytest.raises(ValueError):
        parse_uint64_or_hex(text)


@pytest.mark.parametrize("value", [0, 1, 2**64, 2**200 + 7])
def test_big_int_round_trip(value):
    assert parse_big_int(encode_uint_to_hex(value)) == value


def test_parse_big_int_rejects_garbage():
    with pytest.raises(ValueError):
        parse_big_int("0xnothex")


def test_encode_to_hex_pinned():
    assert encode_to_hex(b"\x01\x02") == "0x0102"


@pytest.mark.parametrize("data", [b"", b"\x00", b"\x01\x02\x03", bytes(range(256))])
def test_hex_bytes_round_trip(data):
    assert parse_hex_bytes(encode_to_hex(data)) == data


def test_parse_hex_bytes_pads_odd_length():
    assert parse_hex_bytes("0x1") == b"\x01"


def test_parse_hex_bytes_requires_prefix():
    with pytest.raises(ValueError, match="0x prefix"):
        parse_hex_bytes("0102")


def test_parse_hex_bytes_rejects_invalid_digits():
    with pytest.raises(ValueError):
        parse_hex_bytes("0xgg")