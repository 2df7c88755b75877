"""
CLI Prove Command

Generate an inclusion proof for one leaf of a leaves file.

Usage:
    merkle prove leaves.txt --index 2 [--out proof.json] [--hex] [--json]

Without --out the proof document is printed to stdout.
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from core.crypto.hashing import to_hex
from core.merkle import build_inclusion_proof
from core.schemas.errors import IndexOutOfBoundsException, MerkleException
from merkle_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    get_config,
    leaf_encoding,
    wants_json,
)
from merkle_cli.leaves import read_leaves


logger = logging.getLogger(__name__)


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    leaves_path = Path(args.leaves_file)
    if not leaves_path.exists():
        print(f"Error: Leaves file not found: {leaves_path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        leaves = read_leaves(leaves_path, leaf_encoding(args))
    except MerkleException as e:
        print(f"Error reading leaves: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        proof = build_inclusion_proof(leaves, args.index)
    except IndexOutOfBoundsException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    document = proof.to_json(indent=get_config(args).proof_indent or None)

    if args.out is None:
        print(document)
        return EXIT_SUCCESS

    out_path = Path(args.out)
    out_path.write_text(document + "\n")
    logger.info("Wrote proof for leaf %d to %s", proof.index, out_path)

    summary = {
        "proof_path": str(out_path),
        "index": proof.index,
        "leaf_count": proof.leaf_count,
        "path_length": len(proof.path),
        "root": to_hex(proof.root),
    }
    if wants_json(args):
        print(json.dumps(summary, indent=2))
    else:
        print(f"proof: {summary['proof_path']}")
        print(f"index: {summary['index']} of {summary['leaf_count']}")
        print(f"path_length: {summary['path_length']}")
        print(f"root: {summary['root']}")

    return EXIT_SUCCESS
