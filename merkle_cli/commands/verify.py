"""
CLI Verify Command

Verify an inclusion proof document, either against the full leaf set or
against a single leaf and a trusted root.

Usage:
    merkle verify proof.json --leaves leaves.txt [--hex] [--json]
    merkle verify proof.json --leaf VALUE [--root 0x...] [--hex] [--json]

Without --root, a single-leaf check compares against the root embedded in
the proof, which only shows the proof is self-consistent.
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from core.crypto.hashing import from_hex, to_hex
from core.merkle import (
    build_merkle_root,
    verify_audit_path,
    verify_inclusion_proof,
)
from core.schemas.errors import MerkleException, ProofDecodingException
from core.schemas.proof import InclusionProof
from merkle_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    leaf_encoding,
    wants_json,
)
from merkle_cli.leaves import parse_leaf, read_leaves


logger = logging.getLogger(__name__)


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    proof_path: str = ""
    mode: str = ""  # "leaf-set" or "trusted-root"
    index: int = 0
    leaf_count: int = 0
    root: str = ""
    verified: bool = False
    trusted_root: bool | None = None
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if self.trusted_root is None:
            del d["trusted_root"]
        if not d["errors"]:
            del d["errors"]
        return d

    @property
    def all_ok(self) -> bool:
        """Check if verification passed with no errors."""
        return self.verified and not self.errors


def load_proof(proof_path: Path) -> InclusionProof:
    """Read and decode a proof document."""
    logger.info(f"Loading proof: {proof_path}")
    return InclusionProof.from_json(proof_path.read_bytes())


def verify_with_leaves(proof: InclusionProof, leaves: list[bytes], summary: VerifySummary) -> None:
    """Check the proof against the full leaf set."""
    summary.mode = "leaf-set"

    if len(leaves) != proof.leaf_count:
        summary.errors.append(
            f"Leaf count mismatch: proof is for {proof.leaf_count} leaves, file has {len(leaves)}"
        )
        return

    summary.verified = verify_audit_path(leaves, proof.index, proof.path)
    if not summary.verified:
        summary.errors.append("Audit path does not reproduce the root of the leaf set")

    if build_merkle_root(leaves) != proof.root:
        summary.errors.append("Root embedded in proof does not match the leaf set")


def verify_with_leaf(
    proof: InclusionProof,
    leaf: bytes,
    root: bytes | None,
    summary: VerifySummary,
) -> None:
    """Check the proof for a single leaf against a trusted (or embedded) root."""
    summary.mode = "trusted-root"
    summary.trusted_root = root is not None

    if root is None:
        logger.warning("No --root given; checking against the root embedded in the proof")
    else:
        summary.root = to_hex(root)

    summary.verified = verify_inclusion_proof(leaf, proof, root)
    if not summary.verified:
        summary.errors.append("Audit path does not reproduce the expected root")


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"proof: {summary.proof_path}")
    print(f"mode: {summary.mode}")
    print(f"index: {summary.index} of {summary.leaf_count}")
    print(f"root: {summary.root}")
    if summary.trusted_root is not None:
        print(f"trusted_root: {str(summary.trusted_root).lower()}")
    print(f"verified: {str(summary.verified).lower()}")

    if summary.errors:
        print(f"\nerrors ({len(summary.errors)}):")
        for err in summary.errors:
            print(f"  ✗ {err}")


def print_summary_json(summary: VerifySummary) -> None:
    """Print summary as JSON."""
    print(json.dumps(summary.to_dict(), indent=2))


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    proof_path = Path(args.proof_file)
    encoding = leaf_encoding(args)

    if not proof_path.exists():
        print(f"Error: Proof not found: {proof_path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        proof = load_proof(proof_path)
    except ProofDecodingException as e:
        print(f"Error loading proof: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    summary = VerifySummary(
        proof_path=str(proof_path),
        index=proof.index,
        leaf_count=proof.leaf_count,
        root=to_hex(proof.root),
    )

    try:
        if args.leaves is not None:
            leaves_path = Path(args.leaves)
            if not leaves_path.exists():
                print(f"Error: Leaves file not found: {leaves_path}", file=sys.stderr)
                return EXIT_RUNTIME_ERROR
            verify_with_leaves(proof, read_leaves(leaves_path, encoding), summary)
        else:
            root = None
            if args.root is not None:
                try:
                    root = from_hex(args.root)
                except ValueError as e:
                    print(f"Error: Invalid --root: {e}", file=sys.stderr)
                    return EXIT_RUNTIME_ERROR
            verify_with_leaf(proof, parse_leaf(args.leaf, encoding), root, summary)
    except MerkleException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if wants_json(args):
        print_summary_json(summary)
    else:
        print_summary_human(summary)

    if summary.all_ok:
        logger.info("Verification passed")
        return EXIT_SUCCESS

    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED
