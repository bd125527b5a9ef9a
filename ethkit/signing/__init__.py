"""Typed structured data hashing (EIP-712)."""