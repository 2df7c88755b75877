"""
Leaf file reading for the CLI.

A leaves file holds one leaf per line. The line terminator (\\n or \\r\\n)
is not part of the leaf; a blank line is a zero-length leaf. With the
"hex" encoding every line is a 0x-prefixed hex string.
"""

from __future__ import annotations

import logging
from pathlib import Path

from core.crypto.hashing import from_hex
from core.schemas.errors import ErrorCodes, MerkleException


logger = logging.getLogger(__name__)


def parse_leaf(value: str, encoding: str = "utf-8") -> bytes:
    """
    Convert a command-line leaf value to bytes.

    Raises:
        MerkleException: If the value is not valid for the encoding
    """
    if encoding == "hex":
        try:
            return from_hex(value)
        except ValueError as e:
            raise MerkleException(
                message=f"Invalid hex leaf: {e}",
                code=ErrorCodes.SCHEMA_VALIDATION_ERROR,
            ) from e
    return value.encode("utf-8")


def split_lines(data: bytes) -> list[bytes]:
    """Split file contents into leaves, dropping line terminators."""
    if not data:
        return []
    lines = data.split(b"\n")
    # A trailing terminator ends the last leaf, it does not start a new one
    if lines[-1] == b"":
        lines.pop()
    return [line[:-1] if line.endswith(b"\r") else line for line in lines]


def read_leaves(path: Path, encoding: str = "utf-8") -> list[bytes]:
    """
    Read an ordered leaf sequence from a file.

    Args:
        path: Leaves file
        encoding: "utf-8" to take each line's bytes as-is, "hex" to decode
            each line from 0x-prefixed hex

    Returns:
        Leaves in file order

    Raises:
        FileNotFoundError: If the file does not exist
        MerkleException: If a hex line cannot be decoded
    """
    lines = split_lines(Path(path).read_bytes())

    if encoding != "hex":
        logger.debug("Read %d leaves from %s", len(lines), path)
        return lines

    leaves: list[bytes] = []
    for lineno, line in enumerate(lines, start=1):
        try:
            leaves.append(from_hex(line.decode("ascii").strip()))
        except (UnicodeDecodeError, ValueError) as e:
            raise MerkleException(
                message=f"{path}:{lineno}: invalid hex leaf: {e}",
                code=ErrorCodes.SCHEMA_VALIDATION_ERROR,
                details={"path": str(path), "line": lineno},
            ) from e

    logger.debug("Read %d hex leaves from %s", len(leaves), path)
    return leaves
