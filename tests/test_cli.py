"""
Tests for the command-line interface.
"""

import json
from pathlib import Path

import pytest

from flashcard_toolkit import cli
from flashcard_toolkit.generation import Ok
from flashcard_toolkit.layout import Card


@pytest.fixture
def cards_file(tmp_path):
    path = tmp_path / "cards.json"
    path.write_text(json.dumps([{"front": f"Q{i}", "back": f"A{i}"} for i in range(3)]), encoding="utf-8")
    return path


class TestBuildCommand:
    def test_build_when_valid_then_prints_pdf_path(self, tmp_path, cards_file, capsys):
        out_dir = tmp_path / "out"

        code = cli.main(["build", "--cards", str(cards_file), "--out", str(out_dir), "--no-timestamp", "--capacity", "4"])

        assert code == 0
        printed = capsys.readouterr().out.strip()
        assert Path(printed) == out_dir / "flashcards.pdf"
        assert (out_dir / "flashcards.pdf").exists()

    def test_build_when_cards_file_missing_then_exit_1(self, tmp_path):
        code = cli.main(["build", "--cards", str(tmp_path / "nope.json"), "--out", str(tmp_path)])
        assert code == 1

    def test_build_when_margins_exceed_page_then_exit_1(self, tmp_path, cards_file):
        code = cli.main([
            "build", "--cards", str(cards_file), "--out", str(tmp_path),
            "--page-width", "50", "--margin", "40",
        ])
        assert code == 1

    def test_build_when_no_cards_then_exit_1(self, tmp_path):
        empty = tmp_path / "empty.json"
        empty.write_text("[]", encoding="utf-8")

        assert cli.main(["build", "--cards", str(empty), "--out", str(tmp_path)]) == 1


class TestTokensCommand:
    def test_tokens_when_create_redeem_stats_then_consistent(self, tmp_path, capsys):
        # Arrange
        path = tmp_path / "tokens.json"
        assert cli.main(["tokens", "--path", str(path), "create", "--count", "3"]) == 0
        token = json.loads(path.read_text(encoding="utf-8"))[0]["token"]
        capsys.readouterr()

        # Act
        first = cli.main(["tokens", "--path", str(path), "redeem", token])
        second = cli.main(["tokens", "--path", str(path), "redeem", token])
        cli.main(["tokens", "--path", str(path), "stats"])

        # Assert
        lines = capsys.readouterr().out.splitlines()
        assert (first, second) == (0, 1)
        assert lines == ["redeemed", "invalid_or_used", "total=3 used=1 unused=2"]

    def test_tokens_when_path_from_env_then_used(self, tmp_path, monkeypatch):
        path = tmp_path / "env_tokens.json"
        monkeypatch.setenv("FLASHCARD_TOKENS_PATH", str(path))

        assert cli.main(["tokens", "create", "--count", "2"]) == 0
        assert path.exists()

    def test_tokens_when_file_corrupt_then_exit_1(self, tmp_path):
        path = tmp_path / "tokens.json"
        path.write_text("nope", encoding="utf-8")

        assert cli.main(["tokens", "--path", str(path), "redeem", "abc"]) == 1


class TestGenerateCommand:
    def test_generate_when_no_api_key_then_exit_1(self, tmp_path, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        out = tmp_path / "cards.json"

        code = cli.main(["generate", "--topic", "Math", "--grade", "2", "--num-cards", "3", "--out", str(out)])

        assert code == 1
        assert not out.exists()

    def test_generate_when_cards_returned_then_written(self, tmp_path, monkeypatch):
        class FakeGenerator:
            def __init__(self, client):
                pass

            def generate(self, request):
                return Ok(cards=(Card("Q", "A"),) * request.num_cards)

        monkeypatch.setattr(cli, "CardGenerator", FakeGenerator)
        out = tmp_path / "cards.json"

        code = cli.main(["generate", "--topic", "Math", "--grade", "2", "--num-cards", "2", "--out", str(out)])

        assert code == 0
        assert json.loads(out.read_text(encoding="utf-8")) == [{"front": "Q", "back": "A"}] * 2

    def test_generate_when_count_too_large_then_exit_1(self, tmp_path):
        code = cli.main(["generate", "--topic", "Math", "--grade", "2", "--num-cards", "500", "--out", str(tmp_path / "c.json")])
        assert code == 1


def test_parser_when_no_command_then_exits():
    with pytest.raises(SystemExit):
        cli.main([])
