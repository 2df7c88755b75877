"""
Merkle Tree Implementation
Root computation, audit path generation and verification for the
unbalanced binary Merkle tree.

This module provides:
- build_merkle_root: root digest of an ordered leaf sequence
- build_audit_path: ordered audit path for one leaf index
- verify_audit_path: replay a path and compare with the root of the full leaf set
- verify_audit_path_against_root: replay a path and compare with a trusted root
- build_inclusion_proof / verify_inclusion_proof: the same, packaged as InclusionProof

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing:     sha3_256(0x00 || leaf)
2. Interior hashing: sha3_256(0x01 || left || right)
3. Empty tree:       sha3_256(b"") with no prefix
4. Single leaf:      root = leaf hash
5. Shape: a range of n > 1 leaves splits at core.merkle.split.split_point(n)

Determinism Notes:
- The tree is never materialized. Recursion runs over [start, end) index
  ranges of the caller's sequence, which is never copied or mutated.
- Recursion depth is ceil(log2(n)) + 1, so it stays small for any n that
  fits in memory.
- This module never sorts leaves - it trusts input order
"""
from __future__ import annotations

import hmac
import logging
from typing import Sequence

from core.crypto.hashing import hash_empty, hash_interior, hash_leaf
from core.merkle.split import audit_path_length, split_point
from core.schemas.errors import IndexOutOfBoundsException
from core.schemas.proof import AuditHash, AuditPath, InclusionProof, Side


logger = logging.getLogger(__name__)


# Empty tree sentinel: sha3_256 of empty bytes
EMPTY_TREE_ROOT: bytes = hash_empty()


def _check_index(index: int, leaf_count: int) -> None:
    if isinstance(index, bool) or not isinstance(index, int):
        raise TypeError(f"Leaf index must be an int, got {type(index).__name__}")
    if index < 0 or index >= leaf_count:
        raise IndexOutOfBoundsException(index=index, leaf_count=leaf_count)


def _root_of_range(items: Sequence[bytes], start: int, end: int) -> bytes:
    n = end - start
    if n == 1:
        return hash_leaf(items[start])
    mid = start + split_point(n)
    return hash_interior(
        _root_of_range(items, start, mid),
        _root_of_range(items, mid, end),
    )


def build_merkle_root(items: Sequence[bytes]) -> bytes:
    """
    Compute the root digest of an ordered sequence of leaves.

    Algorithm:
    1. If empty: return sha3_256(b"")
    2. If single leaf: return hash_leaf(leaf)
    3. Otherwise split at k = split_point(n) and return
       hash_interior(root(items[:k]), root(items[k:]))

    Performs n leaf hashes and n - 1 interior hashes.

    Args:
        items: Ordered sequence of raw leaf bytes. Order matters.

    Returns:
        32-byte Merkle root

    Example:
        >>> root = build_merkle_root([b"a", b"b", b"c"])
        >>> root == hash_interior(hash_interior(hash_leaf(b"a"), hash_leaf(b"b")), hash_leaf(b"c"))
        True
    """
    if len(items) == 0:
        return EMPTY_TREE_ROOT
    return _root_of_range(items, 0, len(items))


def _path_of_range(
    items: Sequence[bytes],
    start: int,
    end: int,
    index: int,
    path: list[AuditHash],
) -> None:
    n = end - start
    if n == 1:
        return
    mid = start + split_point(n)
    if index < mid:
        _path_of_range(items, start, mid, index, path)
        # Appended after the recursive call so the path stays bottom-up
        path.append(AuditHash(val=_root_of_range(items, mid, end), side=Side.RIGHT))
    else:
        _path_of_range(items, mid, end, index, path)
        path.append(AuditHash(val=_root_of_range(items, start, mid), side=Side.LEFT))


def build_audit_path(items: Sequence[bytes], index: int) -> AuditPath:
    """
    Generate the audit path for the leaf at the given index.

    At every level the sibling subtree's root is recorded together with the
    side it occupies. Entries are ordered from the leaf's immediate sibling
    up to the root's child.

    Args:
        items: Ordered sequence of raw leaf bytes
        index: 0-based index of the leaf to prove

    Returns:
        Tuple of AuditHash, bottom-up. Empty for a single-leaf tree.

    Raises:
        IndexOutOfBoundsException: If index is not in [0, len(items)).
            Raised before any hashing; every index is out of bounds for
            an empty sequence.
        TypeError: If index is not an int
    """
    _check_index(index, len(items))

    path: list[AuditHash] = []
    _path_of_range(items, 0, len(items), index, path)

    logger.debug(
        "Built audit path for leaf %d of %d (%d entries)",
        index, len(items), len(path),
    )
    return tuple(path)


def compute_root_from_path(leaf: bytes, path: Sequence[AuditHash]) -> bytes:
    """
    Replay an audit path starting from a raw leaf.

    Starts from hash_leaf(leaf) and folds in each entry in order:
    RIGHT -> hash_interior(h, val), LEFT -> hash_interior(val, h).

    Args:
        leaf: Raw leaf bytes (not its hash)
        path: Audit path, bottom-up

    Returns:
        The root digest implied by the leaf and path
    """
    h = hash_leaf(leaf)
    for entry in path:
        if entry.side is Side.RIGHT:
            h = hash_interior(h, entry.val)
        else:
            h = hash_interior(entry.val, h)
    return h


def verify_audit_path(
    items: Sequence[bytes],
    index: int,
    path: Sequence[AuditHash],
) -> bool:
    """
    Verify an audit path against the root of the full leaf sequence.

    The expected root is recomputed from `items`, so the caller needs the
    whole leaf set. Use verify_audit_path_against_root when only a trusted
    root digest is available.

    Args:
        items: Ordered sequence of raw leaf bytes
        index: 0-based index of the leaf being proven
        path: Audit path, bottom-up

    Returns:
        True if replaying the path from items[index] reproduces the root

    Raises:
        IndexOutOfBoundsException: If index is not in [0, len(items))
        TypeError: If index is not an int
    """
    _check_index(index, len(items))

    computed = compute_root_from_path(items[index], path)
    ok = hmac.compare_digest(computed, build_merkle_root(items))

    logger.debug("Audit path for leaf %d of %d: %s", index, len(items), "valid" if ok else "INVALID")
    return ok


def verify_audit_path_against_root(
    leaf: bytes,
    path: Sequence[AuditHash],
    root: bytes,
) -> bool:
    """
    Verify that `leaf` is included under a previously trusted `root`.

    Args:
        leaf: Raw leaf bytes
        path: Audit path, bottom-up
        root: Trusted root digest

    Returns:
        True if replaying the path from the leaf reproduces `root`
    """
    return hmac.compare_digest(compute_root_from_path(leaf, path), root)


def build_inclusion_proof(items: Sequence[bytes], index: int) -> InclusionProof:
    """
    Build a self-contained InclusionProof for the leaf at `index`.

    Raises:
        IndexOutOfBoundsException: If index is not in [0, len(items))
    """
    path = build_audit_path(items, index)
    return InclusionProof(
        index=index,
        leaf_count=len(items),
        path=path,
        root=build_merkle_root(items),
    )


def verify_inclusion_proof(
    leaf: bytes,
    proof: InclusionProof,
    root: bytes | None = None,
) -> bool:
    """
    Verify an InclusionProof for a raw leaf.

    The path length must match the shape of a `proof.leaf_count`-leaf tree
    at `proof.index`, and the replayed root must equal `root` if given,
    otherwise the root embedded in the proof. Only the former is
    meaningful when the proof comes from an untrusted party.

    Args:
        leaf: Raw leaf bytes
        proof: InclusionProof to check
        root: Trusted root digest, overriding proof.root

    Returns:
        True if the proof is valid, False otherwise
    """
    if len(proof.path) != audit_path_length(proof.leaf_count, proof.index):
        logger.debug(
            "Proof path length %d does not match tree shape (%d leaves, index %d)",
            len(proof.path), proof.leaf_count, proof.index,
        )
        return False

    expected = proof.root if root is None else root
    return verify_audit_path_against_root(leaf, proof.path, expected)


__all__ = [
    "EMPTY_TREE_ROOT",
    "build_merkle_root",
    "build_audit_path",
    "compute_root_from_path",
    "verify_audit_path",
    "verify_audit_path_against_root",
    "build_inclusion_proof",
    "verify_inclusion_proof",
]
