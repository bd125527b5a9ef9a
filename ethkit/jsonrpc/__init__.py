"""Hex parsing and encoding helpers for JSON-RPC values."""