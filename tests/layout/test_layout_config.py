"""
Unit tests for LayoutConfig and the page-fit pre-flight check.
"""

import pytest

from flashcard_toolkit.layout import Grid, LayoutConfig, LayoutError, check_page_fits


class TestLayoutConfig:
    """Tests for LayoutConfig dataclass."""

    def test_init_when_defaults_then_a4_landscape(self):
        """Defaults are A4 landscape in points with margin 40 and gap 10."""
        # Act
        config = LayoutConfig()

        # Assert
        assert config.page_width == pytest.approx(841.89)
        assert config.page_height == pytest.approx(595.28)
        assert config.page_width > config.page_height
        assert config.margin == 40
        assert config.gap == 10

    def test_available_width_when_valid_margins_then_correct(self):
        config = LayoutConfig(page_width=1000, margin=100)
        assert config.available_width == 800

    def test_init_when_margins_exceed_width_then_raises_error(self):
        with pytest.raises(ValueError, match="Margins exceed page width"):
            LayoutConfig(page_width=100, page_height=500, margin=60)

    def test_init_when_negative_gap_then_raises_error(self):
        with pytest.raises(ValueError, match="gap"):
            LayoutConfig(gap=-1)

    def test_init_when_frozen_then_cannot_mutate(self):
        config = LayoutConfig()
        with pytest.raises(AttributeError):
            config.margin = 0


class TestCheckPageFits:
    """Tests for check_page_fits()."""

    def test_check_when_default_page_then_all_grids_fit(self):
        config = LayoutConfig()
        for grid in (Grid(2, 2), Grid(2, 3), Grid(2, 4), Grid(3, 4)):
            check_page_fits(config, grid)

    def test_check_when_gaps_consume_width_then_raises_layout_error(self):
        # available width 20, three gaps of 10 for four columns
        config = LayoutConfig(page_width=100, page_height=500, margin=40, gap=10)

        with pytest.raises(LayoutError, match="4 columns"):
            check_page_fits(config, Grid(2, 4))

    def test_check_when_gaps_consume_height_then_raises_layout_error(self):
        config = LayoutConfig(page_width=500, page_height=100, margin=40, gap=20)

        with pytest.raises(LayoutError, match="3 rows"):
            check_page_fits(config, Grid(3, 4))

    def test_layout_error_when_raised_then_is_value_error(self):
        assert issubclass(LayoutError, ValueError)
