"""
Split Point Unit Tests
Tests for core/merkle/split.py
"""
import pytest

from core.merkle.split import (
    audit_path_length,
    compute_tree_depth,
    is_power_of_two,
    split_point,
)


class TestIsPowerOfTwo:

    @pytest.mark.parametrize("n", [1, 2, 4, 8, 1024, 2**63])
    def test_powers(self, n):
        assert is_power_of_two(n)

    @pytest.mark.parametrize("n", [0, -2, 3, 5, 6, 7, 9, 1023, 2**63 + 1])
    def test_non_powers(self, n):
        assert not is_power_of_two(n)


class TestSplitPoint:
    """Tests for split_point()."""

    @pytest.mark.parametrize(
        "n,expected",
        [(2, 1), (3, 2), (4, 2), (5, 4), (6, 4), (7, 4), (8, 4), (9, 8), (16, 8), (17, 16)],
    )
    def test_small_values(self, n, expected):
        assert split_point(n) == expected

    def test_power_of_two_splits_in_half(self):
        for exp in range(1, 20):
            n = 1 << exp
            assert split_point(n) == n // 2

    def test_invariant_k_lt_n_le_2k(self):
        for n in range(2, 2000):
            k = split_point(n)
            assert is_power_of_two(k)
            assert k < n <= 2 * k

    def test_no_float_rounding_near_large_powers(self):
        """log2-based implementations get these wrong."""
        assert split_point(2**53 - 1) == 2**52
        assert split_point(2**53 + 1) == 2**53
        assert split_point(2**64 - 1) == 2**63
        assert split_point(2**64) == 2**63

    @pytest.mark.parametrize("n", [0, 1, -5])
    def test_no_split_below_two(self, n):
        with pytest.raises(ValueError):
            split_point(n)


class TestComputeTreeDepth:
    """Tests for compute_tree_depth()."""

    @pytest.mark.parametrize(
        "n,expected",
        [(0, 0), (1, 0), (2, 1), (3, 2), (4, 2), (5, 3), (7, 3), (8, 3), (9, 4), (1024, 10), (1025, 11)],
    )
    def test_values(self, n, expected):
        assert compute_tree_depth(n) == expected


class TestAuditPathLength:
    """Tests for audit_path_length()."""

    def test_single_leaf_has_empty_path(self):
        assert audit_path_length(1, 0) == 0

    def test_three_leaves(self):
        assert [audit_path_length(3, i) for i in range(3)] == [2, 2, 1]

    def test_seven_leaves(self):
        assert [audit_path_length(7, i) for i in range(7)] == [3, 3, 3, 3, 3, 3, 2]

    def test_power_of_two_paths_are_uniform(self):
        assert {audit_path_length(8, i) for i in range(8)} == {3}

    def test_nine_leaves_last_is_one_step(self):
        assert audit_path_length(9, 8) == 1
        assert audit_path_length(9, 0) == 4

    def test_never_exceeds_depth(self):
        for n in range(1, 130):
            depth = compute_tree_depth(n)
            assert max(audit_path_length(n, i) for i in range(n)) == depth

    @pytest.mark.parametrize("n,i", [(0, 0), (3, 3), (3, -1)])
    def test_out_of_range(self, n, i):
        with pytest.raises(ValueError):
            audit_path_length(n, i)
