"""
Module: cards_io

Purpose:
    Read and write card lists as JSON.

    Accepted input shapes:
    - ``[{"front": "...", "back": "..."}, ...]``
    - ``{"flashcards": [...]}`` (as returned by /api/generate)

Key Functions:
    - load_cards(): Read cards from a JSON file
    - cards_from_payload(): Cards from already-decoded JSON
    - dump_cards(): Write cards as a JSON array
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List

from flashcard_toolkit.layout.models import Card

logger = logging.getLogger(__name__)


class CardsFileError(Exception):
    """Card file is missing, unreadable, or has the wrong shape."""
    pass


def cards_from_payload(payload: Any) -> List[Card]:
    """
    Convert decoded JSON to cards.

    Entries that are not objects are rejected; missing ``front``/``back``
    become empty strings.

    Raises:
        CardsFileError: If the payload is not a card list
    """
    if isinstance(payload, dict) and "flashcards" in payload:
        payload = payload["flashcards"]
    if not isinstance(payload, list):
        raise CardsFileError(f"Expected a list of cards, got {type(payload).__name__}")

    cards = []
    for i, item in enumerate(payload):
        if not isinstance(item, dict):
            raise CardsFileError(f"Card {i} is not an object: {item!r}")
        cards.append(Card.from_dict(item))
    return cards


def load_cards(path: Path) -> List[Card]:
    """
    Load cards from a JSON file.

    Raises:
        CardsFileError: If the file cannot be read or parsed
    """
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise CardsFileError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise CardsFileError(f"Invalid JSON in {path}: {e}") from e

    cards = cards_from_payload(payload)
    logger.info(f"Loaded {len(cards)} cards from {path}")
    return cards


def dump_cards(cards: Iterable[Card], path: Path) -> None:
    """Write cards as a JSON array."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data = [card.to_dict() for card in cards]
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info(f"Wrote {len(data)} cards to {path}")
