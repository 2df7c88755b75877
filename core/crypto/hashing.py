"""
Hashing Primitives
Domain-separated SHA3-256 hashing for Merkle leaves and interior nodes.

This module provides:
- SHA3-256 hashing for raw bytes
- Leaf hashing:     H(0x00 || data)
- Interior hashing: H(0x01 || left || right)
- The empty-tree digest H(b"") (no prefix)
- Hex encoding/decoding with 0x prefix

Binary Compatibility Notes:
- The prefix bytes, the hash function and the empty-tree rule are a fixed
  contract. Changing any of them changes every root ever published.
- The empty digest is NOT hash_leaf(b""). It carries no prefix.
"""
from __future__ import annotations

import hashlib


# Domain separation prefixes
LEAF_PREFIX: bytes = b"\x00"
INTERIOR_PREFIX: bytes = b"\x01"

# Digest size in bytes
DIGEST_SIZE: int = 32


def sha3_256(data: bytes) -> bytes:
    """
    Compute SHA3-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA3-256 digest

    Example:
        >>> sha3_256(b"").hex()
        'a7ffc6f8bf1ed76651c14756a061d662f580ff4de43b49fa82d80a4b80f8434a'
    """
    return hashlib.sha3_256(data).digest()


def hash_leaf(data: bytes) -> bytes:
    """
    Hash a leaf: H(0x00 || data).

    Zero-length data is an ordinary leaf and gets the prefix like any other.

    Args:
        data: Raw leaf bytes

    Returns:
        32-byte leaf digest
    """
    h = hashlib.sha3_256()
    h.update(LEAF_PREFIX)
    h.update(data)
    return h.digest()


def hash_interior(left: bytes, right: bytes) -> bytes:
    """
    Hash an interior node: H(0x01 || left || right).

    Args:
        left: Left child digest
        right: Right child digest

    Returns:
        32-byte interior digest
    """
    h = hashlib.sha3_256()
    h.update(INTERIOR_PREFIX)
    h.update(left)
    h.update(right)
    return h.digest()


def hash_empty() -> bytes:
    """Digest of the empty tree: H(b"") with no domain prefix."""
    return sha3_256(b"")


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Args:
        data: Raw bytes

    Returns:
        Hex string with 0x prefix (e.g., "0x1234abcd")

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters

    Example:
        >>> from_hex("0xdeadbeef").hex()
        'deadbeef'
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    # bytes.fromhex tolerates whitespace, the wire format does not
    if any(c.isspace() for c in hex_content):
        raise ValueError("Hex string must not contain whitespace")

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "LEAF_PREFIX",
    "INTERIOR_PREFIX",
    "DIGEST_SIZE",
    "sha3_256",
    "hash_leaf",
    "hash_interior",
    "hash_empty",
    "to_hex",
    "from_hex",
]
