"""Core Ethereum value types: addresses, hashes, block numbers and chain objects."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import IntEnum

from .encoding import decode_hex
from .keccak import keccak256

ADDRESS_LENGTH = 20
HASH_LENGTH = 32


class Network(IntEnum):
    """Known chain ids."""

    MAINNET = 1
    ROPSTEN = 3
    RINKEBY = 4
    GOERLI = 5


def _fixed_from_text(text: str | bytes, size: int) -> bytes:
    raw = decode_hex(text)
    if len(raw) != size:
        raise ValueError(f"expected {size} bytes but found {len(raw)}")
    return raw


def _right_aligned(data: bytes, size: int) -> bytes:
    data = bytes(data)
    tail = data[len(data) - min(len(data), size):]
    return tail.rjust(size, b"\x00")


class Address(bytes):
    """A 20-byte account address; its text form is the checksummed hex."""

    def __new__(cls, data: bytes = bytes(ADDRESS_LENGTH)) -> Address:
        if len(data) != ADDRESS_LENGTH:
            raise ValueError(
                f"address must be {ADDRESS_LENGTH} bytes, got {len(data)}"
            )
        return super().__new__(cls, data)

    @classmethod
    def from_text(cls, text: str | bytes) -> Address:
        """Parse exactly 20 bytes of hex text."""
        return cls(_fixed_from_text(text, ADDRESS_LENGTH))

    def address(self) -> Address:
        return self

    def sign(self, digest: bytes) -> bytes:
        raise RuntimeError("an address cannot sign messages")

    def checksum(self) -> str:
        """Return the mixed-case checksum encoding of the address."""
        lower = self.hex()
        digest = keccak256(lower.encode("ascii")).hex()
        return "0x" + "".join(
            char.upper() if int(nibble, 16) > 7 else char
            for char, nibble in zip(lower, digest)
        )

    def __str__(self) -> str:
        return self.checksum()

    def __repr__(self) -> str:
        return f"Address('{self.checksum()}')"


class Hash(bytes):
    """A 32-byte hash."""

    def __new__(cls, data: bytes = bytes(HASH_LENGTH)) -> Hash:
        if len(data) != HASH_LENGTH:
            raise ValueError(f"hash must be {HASH_LENGTH} bytes, got {len(data)}")
        return super().__new__(cls, data)

    @classmethod
    def from_text(cls, text: str | bytes) -> Hash:
        """Parse exactly 32 bytes of hex text."""
        return cls(_fixed_from_text(text, HASH_LENGTH))

    def location(self) -> str:
        return str(self)

    def __str__(self) -> str:
        return "0x" + self.hex()

    def __repr__(self) -> str:
        return f"Hash('{self}')"


ZERO_ADDRESS = Address()
ZERO_HASH = Hash()


def complete_hex(text: str, size: int) -> str:
    """Left-pad or left-truncate hex text to ``size`` bytes, with ``0x`` prefix."""
    digits = size * 2
    body = text.removeprefix("0x")
    if len(body) < digits:
        body = body.rjust(digits, "0")
    else:
        body = body[len(body) - digits:]
    return "0x" + body


def hex_to_address(text: str) -> Address:
    """Convert hex text to an address; malformed text gives the zero address."""
    try:
        return Address.from_text(complete_hex(text, ADDRESS_LENGTH))
    except ValueError:
        return Address()


def bytes_to_address(data: bytes) -> Address:
    """Use the last 20 bytes of ``data``, left-padding with zeros if shorter."""
    return Address(_right_aligned(data, ADDRESS_LENGTH))


def hex_to_hash(text: str) -> Hash:
    """Convert hex text to a hash; malformed text gives the zero hash."""
    try:
        return Hash.from_text(complete_hex(text, HASH_LENGTH))
    except ValueError:
        return Hash()


def bytes_to_hash(data: bytes) -> Hash:
    """Use the last 32 bytes of ``data``, left-padding with zeros if shorter."""
    return Hash(_right_aligned(data, HASH_LENGTH))


class BlockNumber(int):
    """A block height, or one of the tags LATEST, EARLIEST and PENDING."""

    LATEST: BlockNumber
    EARLIEST: BlockNumber
    PENDING: BlockNumber

    def location(self) -> str:
        return str(self)

    def __str__(self) -> str:
        tag = _BLOCK_TAGS.get(int(self))
        if tag is not None:
            return tag
        if self < 0:
            raise ValueError("block number is negative")
        return f"0x{int(self):x}"

    def __repr__(self) -> str:
        return f"BlockNumber({int(self)})"


_BLOCK_TAGS = {-1: "latest", -2: "earliest", -3: "pending"}

BlockNumber.LATEST = BlockNumber(-1)
BlockNumber.EARLIEST = BlockNumber(-2)
BlockNumber.PENDING = BlockNumber(-3)

LATEST = BlockNumber.LATEST
EARLIEST = BlockNumber.EARLIEST
PENDING = BlockNumber.PENDING


def encode_block(*args: int) -> BlockNumber:
    """Return the single block given, or LATEST when not exactly one is given."""
    if len(args) != 1:
        return LATEST
    return BlockNumber(args[0])


class TransactionType(IntEnum):
    LEGACY = 0
    ACCESS_LIST = 1
    DYNAMIC_FEE = 2


@dataclass
class AccessEntry:
    address: Address = ZERO_ADDRESS
    storage: list[Hash] = field(default_factory=list)

    def copy(self) -> AccessEntry:
        return AccessEntry(address=self.address, storage=list(self.storage))


@dataclass
class Transaction:
    type: TransactionType = TransactionType.LEGACY

    hash: Hash = ZERO_HASH
    from_: Address = ZERO_ADDRESS
    to: Address | None = None
    input: bytes = b""
    gas_price: int = 0
    gas: int = 0
    value: int | None = None
    nonce: int = 0
    v: bytes = b""
    r: bytes = b""
    s: bytes = b""

    block_hash: Hash = ZERO_HASH
    block_number: int = 0
    txn_index: int = 0

    chain_id: int | None = None
    access_list: list[AccessEntry] = field(default_factory=list)

    max_priority_fee_per_gas: int | None = None
    max_fee_per_gas: int | None = None

    def copy(self) -> Transaction:
        return dataclasses.replace(
            self, access_list=[entry.copy() for entry in self.access_list]
        )


@dataclass
class Block:
    number: int = 0
    hash: Hash = ZERO_HASH
    parent_hash: Hash = ZERO_HASH
    sha3_uncles: Hash = ZERO_HASH
    transactions_root: Hash = ZERO_HASH
    state_root: Hash = ZERO_HASH
    receipts_root: Hash = ZERO_HASH
    miner: Address = ZERO_ADDRESS
    difficulty: int | None = None
    extra_data: bytes = b""
    gas_limit: int = 0
    gas_used: int = 0
    timestamp: int = 0
    mix_hash: Hash = ZERO_HASH
    nonce: bytes = bytes(8)
    transactions: list[Transaction] = field(default_factory=list)
    transactions_hashes: list[Hash] = field(default_factory=list)
    uncles: list[Hash] = field(default_factory=list)
    base_fee: int | None = None

    def copy(self) -> Block:
        return dataclasses.replace(
            self,
            transactions=[txn.copy() for txn in self.transactions],
            transactions_hashes=list(self.transactions_hashes),
            uncles=list(self.uncles),
        )


@dataclass
class CallMsg:
    from_: Address = ZERO_ADDRESS
    to: Address | None = None
    data: bytes = b""
    gas_price: int = 0
    gas: int | None = None
    value: int | None = None


@dataclass
class LogFilter:
    address: list[Address] = field(default_factory=list)
    topics: list[list[Hash | None]] = field(default_factory=list)
    block_hash: Hash | None = None
    from_block: BlockNumber | None = None
    to_block: BlockNumber | None = None


@dataclass
class Log:
    removed: bool = False
    log_index: int = 0
    transaction_index: int = 0
    transaction_hash: Hash = ZERO_HASH
    block_hash: Hash = ZERO_HASH
    block_number: int = 0
    address: Address = ZERO_ADDRESS
    topics: list[Hash] = field(default_factory=list)
    data: bytes = b""

    def copy(self) -> Log:
        return dataclasses.replace(self, topics=list(self.topics))


@dataclass
class Receipt:
    transaction_hash: Hash = ZERO_HASH
    transaction_index: int = 0
    contract_address: Address = ZERO_ADDRESS
    block_hash: Hash = ZERO_HASH
    from_: Address = ZERO_ADDRESS
    block_number: int = 0
    gas_used: int = 0
    cumulative_gas_used: int = 0
    logs_bloom: bytes = b""
    logs: list[Log] = field(default_factory=list)
    status: int = 0
    to: Address | None = None

    def copy(self) -> Receipt:
        return dataclasses.replace(self, logs=[log.copy() for log in self.logs])


@dataclass
class OverrideAccount:
    nonce: int | None = None
    code: bytes | None = None
    balance: int | None = None
    state: dict[Hash, Hash] | None = None
    state_diff: dict[Hash, Hash] | None = None


StateOverride = dict[Address, OverrideAccount]