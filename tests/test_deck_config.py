"""
Tests for DeckConfig and AppSettings.
"""

from pathlib import Path

import pytest

from flashcard_toolkit.config import AppSettings, DeckConfig
from flashcard_toolkit.generation.client import DEFAULT_MODEL
from flashcard_toolkit.layout import LayoutConfig


class TestDeckConfig:
    def test_init_when_defaults_then_eight_per_sheet_a4(self):
        config = DeckConfig(output_dir=Path("out"))

        assert config.capacity == 8
        assert config.layout == LayoutConfig()
        assert config.filename == "flashcards.pdf"

    @pytest.mark.parametrize("filename", ["cards.txt", "nested/cards.pdf", ""])
    def test_init_when_bad_filename_then_raises(self, filename):
        with pytest.raises(ValueError):
            DeckConfig(output_dir=Path("out"), filename=filename)

    def test_init_when_unsupported_capacity_then_accepted(self):
        # Unsupported capacities fall back at layout time
        assert DeckConfig(output_dir=Path("out"), capacity=5).capacity == 5


class TestAppSettingsFromEnv:
    def test_from_env_when_empty_then_defaults(self):
        settings = AppSettings.from_env({})

        assert settings.gemini_api_key is None
        assert settings.model == DEFAULT_MODEL
        assert settings.tokens_path == Path("tokens.json")
        assert settings.require_unlock is True
        assert settings.secure_cookie is True

    def test_from_env_when_set_then_values_read(self):
        env = {
            "GEMINI_API_KEY": "key-123",
            "FLASHCARD_MODEL": "gemini-test",
            "FLASHCARD_TOKENS_PATH": "/data/tokens.json",
            "FLASHCARD_REQUIRE_UNLOCK": "false",
            "FLASHCARD_SECURE_COOKIE": "0",
        }

        settings = AppSettings.from_env(env)

        assert settings.gemini_api_key == "key-123"
        assert settings.model == "gemini-test"
        assert settings.tokens_path == Path("/data/tokens.json")
        assert settings.require_unlock is False
        assert settings.secure_cookie is False

    @pytest.mark.parametrize("value,expected", [("1", True), ("YES", True), (" on ", True), ("off", False), ("", True)])
    def test_from_env_when_flag_variants_then_parsed(self, value, expected):
        settings = AppSettings.from_env({"FLASHCARD_REQUIRE_UNLOCK": value})
        assert settings.require_unlock is expected

    def test_from_env_when_blank_key_then_none(self):
        assert AppSettings.from_env({"GEMINI_API_KEY": ""}).gemini_api_key is None

    def test_from_env_when_no_mapping_then_reads_process_env(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "from-os")
        assert AppSettings.from_env().gemini_api_key == "from-os"
