import pytest

from ethkit.types import (
    EARLIEST,
    LATEST,
    PENDING,
    AccessEntry,
    Address,
    Block,
    BlockNumber,
    Hash,
    Log,
    Receipt,
    Transaction,
    bytes_to_address,
    bytes_to_hash,
    complete_hex,
    encode_block,
    hex_to_address,
    hex_to_hash,
)


def first_byte_address(value):
    return Address(bytes([value]) + bytes(19))


def first_byte_hash(value):
    return Hash(bytes([value]) + bytes(31))


@pytest.mark.parametrize(
    "src, dst",
    [
        (
            "0x5aaeb6053f3e94c9b9a09f33669435e7ef1beaed",
            "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed",
        ),
        (
            "0xfb6916095ca1df60bb79ce92ce3ea74c37c5d359",
            "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359",
        ),
        (
            "0xdbf03b407c01e7cd3cbea99509d93f8dddc8c6fb",
            "0xdbF03B407c01E7cD3CBea99509d93f8DDDC8C6FB",
        ),
        (
            "0xd1220a0cf47c7b9be7a2e6ba89f429762e7b9adb",
            "0xD1220A0cf47c7B9Be7A2E6BA89F429762e7b9aDb",
        ),
    ],
)
def test_address_checksum(src, dst):
    addr = hex_to_address(src)
    assert str(addr) == dst
    assert addr.checksum() == dst


@pytest.mark.parametrize(
    "src",
    [
        "0x1",
        "00000000000000000000000000000000000000001",
        "0000000000000000000000000000000000000001",
    ],
)
def test_address_hex_to_string(src):
    assert str(hex_to_address(src)) == "0x0000000000000000000000000000000000000001"


def test_hash_hex_to_string():
    assert str(hex_to_hash("1")) == (
        "0x0000000000000000000000000000000000000000000000000000000000000001"
    )


def test_hash_location_equals_string():
    h = hex_to_hash("1")
    assert h.location() == str(h)


def test_hex_to_address_invalid_gives_zero():
    assert hex_to_address("0xzz") == Address()


def test_address_from_text_round_trip():
    addr = hex_to_address("0x5aaeb6053f3e94c9b9a09f33669435e7ef1beaed")
    assert Address.from_text(str(addr)) == addr


def test_address_from_text_wrong_length():
    with pytest.raises(ValueError):
        Address.from_text("0x01")


def test_hash_from_text_round_trip():
    h = bytes_to_hash(b"\xaa\xbb")
    assert Hash.from_text(str(h)) == h


def test_address_wrong_length():
    with pytest.raises(ValueError):
        Address(b"\x01\x02")


def test_address_address_returns_self():
    addr = first_byte_address(1)
    assert addr.address() is addr


def test_address_cannot_sign():
    with pytest.raises(RuntimeError):
        first_byte_address(1).sign(bytes(32))


def test_bytes_to_address_pads_and_truncates():
    assert bytes_to_address(b"\x01") == hex_to_address("0x1")
    long = bytes(range(25))
    assert bytes_to_address(long) == Address(long[-20:])


def test_bytes_to_hash_pads():
    assert bytes_to_hash(b"\x01") == hex_to_hash("1")


def test_complete_hex_pads_and_truncates():
    assert complete_hex("0x1", 2) == "0x0001"
    assert complete_hex("123456", 2) == "0x3456"


def test_block_number_strings():
    assert str(LATEST) == "latest"
    assert str(EARLIEST) == "earliest"
    assert str(PENDING) == "pending"
    assert BlockNumber(16).location() == "0x10"


def test_block_number_negative_raises():
    with pytest.raises(ValueError):
        str(BlockNumber(-10))


def test_encode_block():
    assert encode_block() == LATEST
    assert encode_block(5) == BlockNumber(5)
    assert encode_block(1, 2) == LATEST


def test_block_copy():
    b = Block(difficulty=1, transactions=[], extra_data=b"\x01\x02")
    b1 = b.copy()
    assert b == b1


def test_block_copy_is_independent():
    b = Block(transactions=[Transaction(gas=1)])
    b1 = b.copy()
    b1.transactions.append(Transaction())
    b1.transactions[0].gas = 2
    assert len(b.transactions) == 1
    assert b.transactions[0].gas == 1


def test_transaction_copy():
    txn = Transaction(
        gas_price=10,
        input=b"\x01\x02",
        v=b"\x01\x02",
        r=b"\x01\x02",
        s=b"\x01\x02",
        access_list=[
            AccessEntry(address=first_byte_address(1), storage=[first_byte_hash(1)])
        ],
    )
    txn1 = txn.copy()
    assert txn == txn1
    txn1.access_list[0].storage.append(first_byte_hash(2))
    assert len(txn.access_list[0].storage) == 1


def test_receipt_copy():
    r = Receipt(
        logs_bloom=b"\x01\x02",
        logs=[Log(log_index=1, topics=[first_byte_hash(1)])],
        gas_used=10,
    )
    rr = r.copy()
    assert r == rr
    rr.logs[0].log_index = 5
    assert r.logs[0].log_index == 1


def test_log_copy():
    log = Log(data=b"\x01\x02", block_hash=first_byte_hash(1))
    copied = log.copy()
    assert log == copied
    copied.topics.append(first_byte_hash(3))
    assert log.topics == []