"""
Core cryptographic utilities.

Domain-separated hashing used by the Merkle tree.
"""
from .hashing import (
    LEAF_PREFIX,
    INTERIOR_PREFIX,
    DIGEST_SIZE,
    sha3_256,
    hash_leaf,
    hash_interior,
    hash_empty,
    to_hex,
    from_hex,
)

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
