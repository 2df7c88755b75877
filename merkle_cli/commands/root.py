"""
CLI Root Command

Compute the Merkle root of a leaves file.

Usage:
    merkle root leaves.txt [--hex] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from core.crypto.hashing import to_hex
from core.merkle import build_merkle_root, compute_tree_depth
from core.schemas.errors import MerkleException
from merkle_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    leaf_encoding,
    wants_json,
)
from merkle_cli.leaves import read_leaves


logger = logging.getLogger(__name__)


def root_cmd(args: Namespace) -> int:
    """
    Execute the root command.

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

    root = build_merkle_root(leaves)
    logger.info("Computed root over %d leaves", len(leaves))

    summary = {
        "leaves_file": str(leaves_path),
        "leaf_count": len(leaves),
        "depth": compute_tree_depth(len(leaves)),
        "root": to_hex(root),
    }

    if wants_json(args):
        print(json.dumps(summary, indent=2))
    else:
        print(f"leaves: {summary['leaf_count']}")
        print(f"depth: {summary['depth']}")
        print(f"root: {summary['root']}")

    return EXIT_SUCCESS
