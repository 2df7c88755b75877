"""
Split Point Utility
Integer-only tree shape rules for the unbalanced Merkle tree.

For a range of n > 1 leaves the left subtree takes the first k leaves and
the right subtree the remaining n - k, where k is n/2 when n is a power of
two and otherwise the largest power of two strictly less than n.
Equivalently, k is the unique power of two with k < n <= 2k.

All functions use integer bit arithmetic. Floating-point log2 rounds
incorrectly near exact powers of two for large n.
"""
from __future__ import annotations


def is_power_of_two(n: int) -> bool:
    """True for 1, 2, 4, 8, ...; False for 0 and negatives."""
    return n > 0 and n & (n - 1) == 0


def split_point(n: int) -> int:
    """
    Number of leaves in the left subtree of an n-leaf tree.

    Args:
        n: Number of leaves (must be at least 2)

    Returns:
        The power of two k with k < n <= 2k

    Raises:
        ValueError: If n < 2 (a tree of 0 or 1 leaves has no split)

    Example:
        >>> [split_point(n) for n in (2, 3, 4, 5, 8, 9)]
        [1, 2, 2, 4, 4, 8]
    """
    if n < 2:
        raise ValueError(f"No split point exists for {n} leaves")
    if is_power_of_two(n):
        return n >> 1
    return 1 << (n.bit_length() - 1)


def compute_tree_depth(num_leaves: int) -> int:
    """
    Number of interior levels on the longest root-to-leaf path.

    This is ceil(log2(n)) and bounds both the recursion depth and the
    length of any audit path. 0 for trees of 0 or 1 leaves.
    """
    if num_leaves <= 1:
        return 0
    return (num_leaves - 1).bit_length()


def audit_path_length(num_leaves: int, index: int) -> int:
    """
    Exact number of entries in the audit path for leaf `index`.

    Leaves in the right part of an unbalanced tree sit higher up, so their
    paths can be shorter than compute_tree_depth(num_leaves).

    Raises:
        ValueError: If index is not in [0, num_leaves)
    """
    if not 0 <= index < num_leaves:
        raise ValueError(f"Index {index} not in range for {num_leaves} leaves")

    length = 0
    n = num_leaves
    while n > 1:
        k = split_point(n)
        if index < k:
            n = k
        else:
            index -= k
            n -= k
        length += 1
    return length


__all__ = [
    "is_power_of_two",
    "split_point",
    "compute_tree_depth",
    "audit_path_length",
]
