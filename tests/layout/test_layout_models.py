"""
Unit tests for layout models.
"""

import pytest

from flashcard_toolkit.layout import Card, Rectangle


class TestCard:
    """Tests for Card dataclass."""

    def test_from_dict_when_complete_then_copies_text(self):
        card = Card.from_dict({"front": "2 + 2", "back": "4"})
        assert card == Card(front="2 + 2", back="4")

    def test_from_dict_when_keys_missing_or_none_then_empty_strings(self):
        assert Card.from_dict({}) == Card(front="", back="")
        assert Card.from_dict({"front": None, "back": None}) == Card(front="", back="")

    def test_from_dict_when_non_string_then_converted(self):
        assert Card.from_dict({"front": 7, "back": 3.5}) == Card(front="7", back="3.5")

    def test_to_dict_when_called_then_front_back_keys(self):
        assert Card("Q", "A").to_dict() == {"front": "Q", "back": "A"}

    def test_card_when_frozen_then_cannot_mutate(self):
        card = Card("Q", "A")
        with pytest.raises(AttributeError):
            card.front = "X"


class TestRectangle:
    """Tests for Rectangle geometry helpers."""

    def test_edges_when_computed_then_correct(self):
        rect = Rectangle(x=10, y=20, width=100, height=50)

        assert rect.right == 110
        assert rect.bottom == 70
        assert rect.center == (60, 45)

    def test_intersects_when_overlapping_then_true(self):
        a = Rectangle(0, 0, 10, 10)
        b = Rectangle(5, 5, 10, 10)
        assert a.intersects(b)
        assert b.intersects(a)

    def test_intersects_when_only_touching_edges_then_false(self):
        a = Rectangle(0, 0, 10, 10)
        b = Rectangle(10, 0, 10, 10)
        assert not a.intersects(b)
