"""Encryption and decryption of secrets in the v3 and v4 keystore formats."""