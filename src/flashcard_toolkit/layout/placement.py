"""
Module: layout.placement

Purpose:
    Slot geometry for cards on a sheet face, and the duplex mirror law.

    Flipping a printed sheet along its long (vertical) edge reverses the
    horizontal axis only. A card's back must therefore be drawn in the
    mirrored column of the same row, or it will not sit behind its front.

Key Functions:
    - slot_for_index(): Row-major slot for a position within a sheet
    - place_card(): Rectangle for a slot
    - mirror_column(): Column shown at the same physical spot after a flip

Used By:
    - layout.paginator
"""

from __future__ import annotations

from .grid import Grid
from .models import Rectangle, Slot


def slot_for_index(index: int, grid: Grid) -> Slot:
    """Row-major slot for position ``index`` within a sheet."""
    return Slot(row=index // grid.cols, col=index % grid.cols)


def mirror_column(col: int, cols: int) -> int:
    """
    Column presented at the same physical position once the sheet is flipped.

    Example:
        >>> mirror_column(0, 4)
        3
        >>> mirror_column(mirror_column(1, 4), 4)
        1
    """
    return cols - 1 - col


def mirror_slot(slot: Slot, grid: Grid) -> Slot:
    """Back-face slot for ``slot``: mirrored column, same row."""
    return Slot(row=slot.row, col=mirror_column(slot.col, grid.cols))


def place_card(
    slot: Slot,
    grid: Grid,
    page_width: float,
    page_height: float,
    margin: float,
    gap: float,
) -> Rectangle:
    """
    Compute the rectangle occupied by ``slot``.

    Card extents are the printable area divided evenly between the grid's
    columns/rows after removing the gaps. A page too small for the grid
    gives non-positive extents; see ``config.check_page_fits``.

    Args:
        slot: Slot within the grid
        grid: Resolved grid
        page_width: Page width
        page_height: Page height
        margin: Margin on every side
        gap: Space between adjacent cards

    Returns:
        Rectangle with top-left origin
    """
    card_width = (page_width - 2 * margin - gap * (grid.cols - 1)) / grid.cols
    card_height = (page_height - 2 * margin - gap * (grid.rows - 1)) / grid.rows
    return Rectangle(
        x=margin + slot.col * (card_width + gap),
        y=margin + slot.row * (card_height + gap),
        width=card_width,
        height=card_height,
    )
