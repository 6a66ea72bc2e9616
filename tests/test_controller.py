"""
Unit tests for the deck build pipeline.
"""

import json
from pathlib import Path

import pytest

from flashcard_toolkit.config import DeckConfig
from flashcard_toolkit.controller import (
    NOTHING_TO_PRINT,
    BuildError,
    _build_metadata,
    _generate_timestamped_subfolder,
    build_deck,
)
from flashcard_toolkit.layout import LayoutConfig, paginate


class TestBuildDeck:
    """Tests for build_deck()."""

    def test_build_when_cards_then_pdf_and_metadata_written(self, tmp_path, make_cards):
        # Arrange
        config = DeckConfig(output_dir=tmp_path, capacity=6, timestamp_subfolder=False)

        # Act
        result = build_deck(make_cards(7), config)

        # Assert
        assert result.pdf_path == tmp_path / "flashcards.pdf"
        assert result.pdf_path.read_bytes().startswith(b"%PDF")
        assert (result.card_count, result.sheet_count, result.page_count) == (7, 2, 4)
        metadata = json.loads((tmp_path / "build_metadata.json").read_text(encoding="utf-8"))
        assert metadata == result.metadata
        assert metadata["grid"] == {"rows": 2, "cols": 3}

    def test_build_when_timestamped_then_new_subfolder(self, tmp_path, make_cards):
        config = DeckConfig(output_dir=tmp_path)

        first = build_deck(make_cards(1), config)
        second = build_deck(make_cards(1), config)

        assert first.output_dir.parent == tmp_path
        assert first.output_dir.name.startswith("deck_")
        assert first.output_dir != second.output_dir

    def test_build_when_previews_requested_then_png_per_page(self, tmp_path, make_cards):
        config = DeckConfig(output_dir=tmp_path, capacity=4, timestamp_subfolder=False, write_previews=True)

        result = build_deck(make_cards(5), config)

        names = [p.name for p in result.preview_paths]
        assert names == ["page_01_front.png", "page_02_back.png", "page_03_front.png", "page_04_back.png"]
        assert all(p.exists() for p in result.preview_paths)

    def test_build_when_metadata_disabled_then_no_file(self, tmp_path, make_cards):
        config = DeckConfig(output_dir=tmp_path, timestamp_subfolder=False, write_metadata=False)

        build_deck(make_cards(2), config)

        assert not (tmp_path / "build_metadata.json").exists()

    def test_build_when_no_cards_then_raises_build_error(self, tmp_path):
        config = DeckConfig(output_dir=tmp_path, timestamp_subfolder=False)

        with pytest.raises(BuildError, match=NOTHING_TO_PRINT):
            build_deck([], config)

        assert not (tmp_path / "flashcards.pdf").exists()

    def test_build_when_page_too_small_then_raises_before_writing(self, tmp_path, make_cards):
        layout = LayoutConfig(page_width=100, page_height=595.28, margin=40, gap=10)
        config = DeckConfig(output_dir=tmp_path / "out", capacity=12, layout=layout)

        with pytest.raises(BuildError, match="Invalid page layout"):
            build_deck(make_cards(3), config)

        assert not (tmp_path / "out").exists()


class TestBuildMetadata:
    def test_metadata_when_capacity_unsupported_then_records_effective(self, make_cards):
        config = DeckConfig(output_dir=Path("/fake"), capacity=5)
        document = paginate(make_cards(3), 5, config.layout)

        metadata = _build_metadata(config, document, Path("/fake/flashcards.pdf"))

        assert metadata["requested_capacity"] == 5
        assert metadata["capacity"] == 8
        assert metadata["pdf"] == "flashcards.pdf"
        assert metadata["duplex"] == "long-edge"
        assert "generator_version" in metadata


class TestTimestampedSubfolder:
    def test_subfolder_when_name_taken_then_counter_appended(self, tmp_path):
        first = _generate_timestamped_subfolder(tmp_path)
        first.mkdir()

        second = _generate_timestamped_subfolder(tmp_path)

        # Same second unless the clock ticked between calls
        assert second != first
        assert second.name.startswith("deck_")
