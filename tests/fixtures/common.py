"""
Common test fixtures shared by all modules.

Provides factory functions for leaf sequences and leaves files.
"""

import random
from pathlib import Path

from core.crypto.hashing import to_hex


def make_items(n: int, prefix: str = "d") -> list[bytes]:
    """Deterministic leaves d0, d1, ... as bytes."""
    return [f"{prefix}{i}".encode("utf-8") for i in range(n)]


def make_random_items(n: int, seed: int = 0, max_len: int = 48) -> list[bytes]:
    """Random-content leaves of random length (including zero-length)."""
    rng = random.Random(seed)
    return [rng.randbytes(rng.randint(0, max_len)) for _ in range(n)]


def write_leaves_file(path: Path, items: list[bytes], hex_lines: bool = False) -> Path:
    """Write one leaf per line, raw or as 0x-hex."""
    if hex_lines:
        path.write_text("".join(to_hex(item) + "\n" for item in items))
    else:
        path.write_bytes(b"".join(item + b"\n" for item in items))
    return path
