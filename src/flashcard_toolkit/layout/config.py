"""
Module: layout.config

Purpose:
    Configuration for the duplex layout engine.
    Defines page dimensions, margin, inter-card gap and text styling.

Key Classes:
    - LayoutConfig: Immutable layout configuration

Key Functions:
    - check_page_fits(): Validate a page against a grid before paginating

Dependencies:
    - dataclasses (std)

Used By:
    - layout.paginator: Card placement
    - output.renderer: PDF page size and text styling
    - controller: Pre-flight geometry check
"""

from __future__ import annotations

from dataclasses import dataclass

from .grid import Grid


# A4 landscape in PDF points (1/72 inch)
A4_LANDSCAPE_WIDTH_PT = 841.89
A4_LANDSCAPE_HEIGHT_PT = 595.28
DEFAULT_MARGIN_PT = 40.0
DEFAULT_GAP_PT = 10.0


class LayoutError(ValueError):
    """Page geometry cannot hold the requested grid."""
    pass


@dataclass(frozen=True)
class LayoutConfig:
    """
    Configuration for page layout (immutable).

    All lengths are in document units (PDF points) measured from the
    top-left corner of the page.

    Attributes:
        page_width: Page width
        page_height: Page height
        margin: Margin applied on all four sides
        gap: Space between adjacent cards, both axes
        text_inset: Horizontal padding inside a card for wrapped text
        font_name: ReportLab base font for card text
        font_size: Card text size in points

    Example:
        >>> config = LayoutConfig()
        >>> round(config.available_width, 2)
        761.89
    """

    # Page dimensions
    page_width: float = A4_LANDSCAPE_WIDTH_PT
    page_height: float = A4_LANDSCAPE_HEIGHT_PT

    # Spacing
    margin: float = DEFAULT_MARGIN_PT
    gap: float = DEFAULT_GAP_PT

    # Text
    text_inset: float = 10.0
    font_name: str = "Helvetica"
    font_size: float = 16.0

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.page_width <= 0:
            raise ValueError(f"page_width must be positive: {self.page_width}")
        if self.page_height <= 0:
            raise ValueError(f"page_height must be positive: {self.page_height}")
        if self.margin < 0:
            raise ValueError(f"margin must be non-negative: {self.margin}")
        if self.gap < 0:
            raise ValueError(f"gap must be non-negative: {self.gap}")
        if self.font_size <= 0:
            raise ValueError(f"font_size must be positive: {self.font_size}")
        if self.available_width <= 0:
            raise ValueError("Margins exceed page width")
        if self.available_height <= 0:
            raise ValueError("Margins exceed page height")

    @property
    def available_width(self) -> float:
        """Width available for cards (excluding margins)."""
        return self.page_width - 2 * self.margin

    @property
    def available_height(self) -> float:
        """Height available for cards (excluding margins)."""
        return self.page_height - 2 * self.margin


def check_page_fits(config: LayoutConfig, grid: Grid) -> None:
    """
    Raise LayoutError if the page cannot hold ``grid`` with positive card extents.

    The paginator itself does not guard against degenerate geometry; its
    output on a page that fails this check is undefined. Callers run this
    before paginating.

    Args:
        config: Layout configuration
        grid: Resolved grid

    Raises:
        LayoutError: If card width or height would be zero or negative
    """
    card_width = config.available_width - config.gap * (grid.cols - 1)
    card_height = config.available_height - config.gap * (grid.rows - 1)
    if card_width <= 0:
        raise LayoutError(
            f"Page width {config.page_width} too small for {grid.cols} columns "
            f"(margin={config.margin}, gap={config.gap})"
        )
    if card_height <= 0:
        raise LayoutError(
            f"Page height {config.page_height} too small for {grid.rows} rows "
            f"(margin={config.margin}, gap={config.gap})"
        )
