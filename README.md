# ethkit

A toolkit for working with Ethereum data in Python.

It provides:

- **Core types** (`ethkit.types`): `Address` (with EIP-55 checksums), `Hash`,
  `BlockNumber` (with the `LATEST`, `EARLIEST` and `PENDING` tags), `Block`,
  `Transaction`, `Receipt`, `Log`, `CallMsg`, `LogFilter`, `OverrideAccount`
  and the `Network` chain ids, plus helpers such as `hex_to_address`,
  `bytes_to_hash`, `complete_hex` and `encode_block`.
- **Hashing** (`ethkit.keccak`): `keccak256`, the Keccak-256 variant Ethereum uses.
- **Hex encodings** (`ethkit.encoding` and `ethkit.jsonrpc.util`): `0x`-prefixed
  hex for big integers, 64-bit integers and byte strings, as found in node
  JSON-RPC values.
- **Keystores** (`ethkit.keystore`): encryption and decryption of secrets in
  the v3 and v4 (EIP-2335) keystore formats, with scrypt or PBKDF2 key
  derivation and AES-128-CTR.
- **EIP-712** (`ethkit.signing.eip712`): typed structured data encoding and hashing.
- **Solidity** (`ethkit.compiler`): a wrapper around a `solc` binary and a
  downloader for its static linux release builds.

## Installation

```
pip install ethkit
```

Python 3.10 or newer is required. The only dependency is `pycryptodome`.

## Quick tour

### Addresses, hashes and block numbers

```python
from ethkit.keccak import keccak256
from ethkit.types import BlockNumber, hex_to_address, hex_to_hash

addr = hex_to_address("0x5aaeb6053f3e94c9b9a09f33669435e7ef1beaed")
print(addr.checksum())   # 0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed

print(hex_to_hash("1").location())
# 0x0000000000000000000000000000000000000000000000000000000000000001

print(BlockNumber.LATEST.location())   # latest
print(BlockNumber(16).location())      # 0x10

digest = keccak256(b"hello", b" ", b"world")
```

`hex_to_address` and `hex_to_hash` pad short input on the left and keep the
last bytes of long input; malformed hex gives the zero value. `Address.from_text`
and `Hash.from_text` are strict and raise `ValueError` unless the text holds
exactly 20 or 32 bytes. The `copy()` methods of `Block`, `Transaction`,
`Receipt` and `Log` return independent copies of their lists.

### Hex encodings

```python
from ethkit.encoding import decode_uint64, encode_big
from ethkit.jsonrpc.util import parse_hex_bytes, parse_uint64_or_hex

print(encode_big(255))              # 0xff
print(decode_uint64("0x"))          # 0
print(parse_uint64_or_hex("42"))    # 42 (decimal without the 0x prefix)
print(parse_hex_bytes("0x102"))     # b'\x01\x02'
```

### Keystores

```python
from ethkit.keystore.v3 import decrypt_v3, encrypt_v3
from ethkit.keystore.v4 import decrypt_v4, encrypt_v4

password = "password"

blob = encrypt_v4(b"\x01\x02", password)
assert decrypt_v4(blob, password) == b"\x01\x02"

# v3 lets the scrypt cost be lowered
blob = encrypt_v3(b"\x01\x02", password, scrypt_n=1 << 12, scrypt_p=1)
assert decrypt_v3(blob, password) == b"\x01\x02"
```

Decryption raises `ValueError` on a wrong password ("incorrect mac" for v3,
"bad checksum" for v4), an unsupported version, cipher or kdf. Passwords for
v4 keystores are normalised as EIP-2335 requires (NFKD, with control
characters removed); `normalize_password` exposes that step.

### EIP-712

```python
from ethkit.signing.eip712 import EIP712Type, encode_type

types = {
    "Mail": [EIP712Type("from", "Person"), EIP712Type("contents", "string")],
    "Person": [EIP712Type("name", "string"), EIP712Type("wallet", "address")],
}
print(encode_type("Mail", types))
# Mail(Person from,string contents)Person(string name,address wallet)
```

`EIP712MessageBuilder` derives the types from a dataclass. Fields are named by
their `eip712` metadata entry when present; `int` maps to `uint256`, and the
`Uint8`, `Uint16`, `Uint32` and `Uint64` aliases give the smaller widths.

```python
from dataclasses import dataclass, field

from ethkit.signing.eip712 import TAG, EIP712Domain, EIP712MessageBuilder, Uint64
from ethkit.types import Address


@dataclass
class Transfer:
    amount: Uint64 = field(default=0, metadata={TAG: "amount"})
    to: Address = field(default=Address(), metadata={TAG: "to"})


builder = EIP712MessageBuilder(Transfer, EIP712Domain(name="name1"))
print(builder.encoded_type())   # Transfer(uint64 amount,address to)
digest = builder.build(Transfer(amount=1)).hash()
```

### Solidity

```python
from ethkit.compiler import Solidity, download_solidity

download_solidity("0.5.5", "/tmp/solc", False)
output = Solidity("/tmp/solc/solidity").compile_code(
    "pragma solidity >0.0.0; contract foo {}"
)
print(sorted(output.contracts))
```

`Solidity.compile` takes file paths instead of inline code. A failing
compiler run raises `RuntimeError` carrying its error output.

## Command line

Installing the package provides an `ethkit` command:

```
ethkit version
ethkit ens
```

`ethkit version` prints the installed version. `ethkit ens` is a command group
with no subcommands of its own; it prints nothing and exits with status 0.
Add `--help` after a command to see its usage.

## What it does not do

The package does not connect to Ethereum nodes: there is no JSON-RPC client or
transport (HTTP, WebSocket or IPC), no subscriptions, and no Etherscan client.
`ethkit.jsonrpc` holds only the hex helpers for JSON-RPC values. It also does
not resolve ENS names, and it does not sign transactions.

## Running the tests

```
pip install "ethkit[test]"
pytest
```