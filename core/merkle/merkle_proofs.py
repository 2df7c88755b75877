"""
Merkle Proofs Convenience Wrappers
Thin wrappers around core Merkle tree functions for cleaner API.

This module provides class-based interfaces:
- MerkleProver: Generate roots and audit paths
- MerkleVerifier: Verify audit paths and inclusion proofs

These are stateless namespaces over the functions in merkle_tree.py.
"""
from __future__ import annotations

import hmac
from typing import Sequence

from core.crypto.hashing import to_hex
from core.merkle.merkle_tree import (
    build_audit_path,
    build_inclusion_proof,
    build_merkle_root,
    compute_root_from_path,
    verify_audit_path,
    verify_audit_path_against_root,
    verify_inclusion_proof,
)
from core.schemas.errors import ErrorCodes, MerkleVerificationException
from core.schemas.proof import AuditHash, AuditPath, InclusionProof


class MerkleProver:
    """
    Convenience class for generating roots and proofs.

    Example:
        >>> items = [b"a", b"b", b"c"]
        >>> path = MerkleProver.prove(items, index=2)
        >>> len(path)
        1
    """

    @staticmethod
    def compute_root(items: Sequence[bytes]) -> bytes:
        """
        Compute the Merkle root for a sequence of leaves.

        Args:
            items: Ordered sequence of raw leaf bytes

        Returns:
            32-byte Merkle root
        """
        return build_merkle_root(items)

    @staticmethod
    def prove(items: Sequence[bytes], index: int) -> AuditPath:
        """
        Generate the audit path for the leaf at the given index.

        Raises:
            IndexOutOfBoundsException: If index is out of range
        """
        return build_audit_path(items, index)

    @staticmethod
    def prove_inclusion(items: Sequence[bytes], index: int) -> InclusionProof:
        """Generate a self-contained InclusionProof (path, tree size, root)."""
        return build_inclusion_proof(items, index)


class MerkleVerifier:
    """
    Convenience class for verifying audit paths.

    Example:
        >>> items = [b"a", b"b", b"c"]
        >>> MerkleVerifier.verify(items, 0, MerkleProver.prove(items, 0))
        True
    """

    @staticmethod
    def verify(
        items: Sequence[bytes],
        index: int,
        path: Sequence[AuditHash],
    ) -> bool:
        """
        Verify an audit path against the root of the full leaf set.

        Raises:
            IndexOutOfBoundsException: If index is out of range
        """
        return verify_audit_path(items, index, path)

    @staticmethod
    def verify_leaf_in_root(
        leaf: bytes,
        path: Sequence[AuditHash],
        root: bytes,
    ) -> bool:
        """
        Verify a leaf is included under a trusted root.

        Args:
            leaf: Raw leaf bytes
            path: Audit path, bottom-up
            root: Trusted Merkle root

        Returns:
            True if the proof is valid, False otherwise
        """
        return verify_audit_path_against_root(leaf, path, root)

    @staticmethod
    def verify_proof(
        leaf: bytes,
        proof: InclusionProof,
        root: bytes | None = None,
    ) -> bool:
        """Verify an InclusionProof, optionally against a trusted root."""
        return verify_inclusion_proof(leaf, proof, root)

    @staticmethod
    def require_leaf_in_root(
        leaf: bytes,
        path: Sequence[AuditHash],
        root: bytes,
        leaf_index: int | None = None,
    ) -> None:
        """
        Like verify_leaf_in_root, but raise instead of returning False.

        Raises:
            MerkleVerificationException: With code ROOT_MISMATCH if the
                replayed root differs from `root`
        """
        computed = compute_root_from_path(leaf, path)
        if not hmac.compare_digest(computed, root):
            raise MerkleVerificationException(
                message="Audit path does not reproduce the expected root",
                leaf_index=leaf_index,
                code=ErrorCodes.ROOT_MISMATCH,
                details={
                    "expected_root": to_hex(root),
                    "computed_root": to_hex(computed),
                },
            )


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
