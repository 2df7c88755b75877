"""
Merkle Tree and Audit Paths
Unbalanced binary Merkle tree: root computation, audit path generation
and verification.

This module provides:
- build_merkle_root: Compute root from raw leaves
- build_audit_path: Generate the audit path for a specific leaf
- verify_audit_path: Verify a path against the full leaf set
- verify_audit_path_against_root: Verify a path against a trusted root

Canonical Commitment Rules:
1. Leaf hashing: sha3_256(0x00 || leaf)
2. Interior hashing: sha3_256(0x01 || left || right)
3. Split: left subtree holds the largest power of two < n leaves
   (n/2 when n is a power of two)
4. Empty tree: sha3_256(b"")
5. Single leaf: root = hash_leaf(leaf)

Usage:
    from core.merkle import build_merkle_root, build_audit_path, verify_audit_path

    items = [b"a", b"b", b"c"]
    root = build_merkle_root(items)
    path = build_audit_path(items, 2)
    assert verify_audit_path(items, 2, path)
"""
from .split import (
    is_power_of_two,
    split_point,
    compute_tree_depth,
    audit_path_length,
)

from .merkle_tree import (
    EMPTY_TREE_ROOT,
    build_merkle_root,
    build_audit_path,
    compute_root_from_path,
    verify_audit_path,
    verify_audit_path_against_root,
    build_inclusion_proof,
    verify_inclusion_proof,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    "EMPTY_TREE_ROOT",
    # Shape
    "is_power_of_two",
    "split_point",
    "compute_tree_depth",
    "audit_path_length",
    # Core functions
    "build_merkle_root",
    "build_audit_path",
    "compute_root_from_path",
    "verify_audit_path",
    "verify_audit_path_against_root",
    "build_inclusion_proof",
    "verify_inclusion_proof",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
