"""
Unit tests for capacity to grid resolution.
"""

import pytest

from flashcard_toolkit.layout import Grid, resolve_grid, SUPPORTED_CAPACITIES


class TestResolveGrid:
    """Tests for resolve_grid()."""

    @pytest.mark.parametrize("capacity", [4, 6, 8, 12])
    def test_resolve_when_supported_then_rows_times_cols_is_capacity(self, capacity):
        """Every supported capacity maps to a grid of exactly that many slots."""
        # Act
        grid = resolve_grid(capacity)

        # Assert
        assert grid.rows * grid.cols == capacity
        assert grid.capacity == capacity

    def test_resolve_when_supported_then_matches_fixed_table(self):
        """Supported capacities use the fixed lookup."""
        assert resolve_grid(4) == Grid(rows=2, cols=2)
        assert resolve_grid(6) == Grid(rows=2, cols=3)
        assert resolve_grid(8) == Grid(rows=2, cols=4)
        assert resolve_grid(12) == Grid(rows=3, cols=4)

    @pytest.mark.parametrize("capacity", [0, 1, 5, 7, 16, 1000, -4, None, "8", 8.0])
    def test_resolve_when_unsupported_then_falls_back_to_eight(self, capacity):
        """Unsupported values never fail; they use the 8-card grid."""
        assert resolve_grid(capacity) == resolve_grid(8)

    def test_supported_capacities_when_listed_then_sorted(self):
        assert SUPPORTED_CAPACITIES == (4, 6, 8, 12)
