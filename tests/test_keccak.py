import pytest

from ethkit.keccak import keccak256


def test_empty_input_digest():
    assert keccak256(b"").hex() == (
        "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
    )


def test_no_arguments_equals_empty_input():
    assert keccak256() == keccak256(b"")


@pytest.mark.parametrize(
    "parts",
    [
        [b"ab", b"c"],
        [b"a", b"b", b"c"],
        [b"", b"abc", b""],
    ],
)
def test_parts_are_concatenated(parts):
    assert keccak256(*parts) == keccak256(b"".join(parts))


def test_digest_length_is_32():
    assert len(keccak256(b"some data")) == 32


def test_different_inputs_differ():
    assert keccak256(b"\x01") != keccak256(b"\x02")
    assert len(keccak256(b"\x01")) == len(keccak256(b"\x02"))


def test_accepts_bytearray():
    assert keccak256(bytearray(b"xyz")) == keccak256(b"xyz")