"""
Module: layout.grid

Purpose:
    Map a cards-per-sheet capacity to a fixed (rows, cols) grid.

Key Functions:
    - resolve_grid(): Capacity lookup with fallback to the 8-card grid

Used By:
    - layout.paginator
    - web.app: Capacity coercion for PDF downloads
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Grid:
    """Rows and columns of cards on one sheet face."""
    rows: int
    cols: int

    @property
    def capacity(self) -> int:
        """Number of card slots on one face."""
        return self.rows * self.cols


GRID_LAYOUTS: dict[int, Grid] = {
    4: Grid(rows=2, cols=2),
    6: Grid(rows=2, cols=3),
    8: Grid(rows=2, cols=4),
    12: Grid(rows=3, cols=4),
}

DEFAULT_CAPACITY = 8
SUPPORTED_CAPACITIES: tuple[int, ...] = tuple(sorted(GRID_LAYOUTS))


def resolve_grid(capacity: object) -> Grid:
    """
    Resolve the grid for a requested capacity.

    Unsupported values (including 0, negatives and non-integers) fall back
    to the 8-card grid. This never raises.

    Example:
        >>> resolve_grid(12)
        Grid(rows=3, cols=4)
        >>> resolve_grid(5)
        Grid(rows=2, cols=4)
    """
    grid = GRID_LAYOUTS.get(capacity) if isinstance(capacity, int) else None
    if grid is None:
        logger.debug(f"Unsupported capacity {capacity!r}, using {DEFAULT_CAPACITY}-card grid")
        return GRID_LAYOUTS[DEFAULT_CAPACITY]
    return grid
