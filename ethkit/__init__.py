"""Ethereum toolkit: core types, Keccak-256, hex encodings, keystores, EIP-712 and Solidity helpers."""

__version__ = "0.1.3"