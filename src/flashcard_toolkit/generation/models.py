"""
Module: generation.models

Purpose:
    Request and tagged-result types for card generation.

Key Classes:
    - GenerationRequest: Validated topic/grade/count request
    - Ok: Cards parsed from the service response
    - Fallback: Placeholder cards with the reason the real ones were unusable
    - GenerationError: Configuration or upstream failure
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from flashcard_toolkit.layout.models import Card

MAX_CARDS = 50


class GenerationError(Exception):
    """
    Card generation could not reach a usable upstream response.

    Attributes:
        status: HTTP status to report to clients
        details: Upstream response body, if any
    """

    def __init__(self, message: str, status: int = 500, details: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.details = details


@dataclass(frozen=True)
class GenerationRequest:
    """
    Request for a batch of flashcards (immutable).

    Attributes:
        topic: Subject of the cards, e.g. "Multiplication"
        grade: School grade the cards target
        num_cards: Number of cards wanted (1..MAX_CARDS)
    """

    topic: str
    grade: str
    num_cards: int

    def __post_init__(self) -> None:
        """Validate request on construction."""
        if not self.topic or not self.topic.strip():
            raise ValueError("topic is required")
        if not str(self.grade).strip():
            raise ValueError("grade is required")
        if not 1 <= self.num_cards <= MAX_CARDS:
            raise ValueError(f"num_cards must be between 1 and {MAX_CARDS}: {self.num_cards}")


@dataclass(frozen=True)
class Ok:
    """Cards parsed and validated from the service response."""
    cards: tuple[Card, ...]

    @property
    def is_fallback(self) -> bool:
        return False


@dataclass(frozen=True)
class Fallback:
    """Placeholder cards used because the response could not be used."""
    cards: tuple[Card, ...]
    reason: str

    @property
    def is_fallback(self) -> bool:
        return True


GenerationResult = Union[Ok, Fallback]
