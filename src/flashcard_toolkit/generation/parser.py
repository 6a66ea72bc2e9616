"""
Module: generation.parser

Purpose:
    Turn raw model output into cards. Runs as a small pipeline:
    strip markdown fence -> extract JSON array -> parse -> validate shape,
    falling back to placeholder cards at the first failing stage.

Key Functions:
    - parse_cards(): Full pipeline, returns Ok or Fallback, never raises
    - strip_code_fence(): Remove a surrounding ``` / ```json fence
    - extract_json_array(): Outermost [...] span in the text
    - placeholder_cards(): Numbered stand-in cards for a topic
    - sample_cards(): Generic cards used when the service is unreachable

Used By:
    - generation.service
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, List, Optional

from flashcard_toolkit.layout.models import Card

from .models import Fallback, GenerationResult, Ok

logger = logging.getLogger(__name__)

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\s*```$")
_JSON_ARRAY = re.compile(r"\[[\s\S]*\]")

SAMPLE_CARD_COUNT = 5


class CardShapeError(ValueError):
    """Parsed JSON is not a list of cards."""
    pass


def strip_code_fence(text: str) -> str:
    """Remove a leading ```/```json fence and the closing fence, if present."""
    if not text.startswith("```"):
        return text
    return _FENCE_CLOSE.sub("", _FENCE_OPEN.sub("", text, count=1))


def extract_json_array(text: str) -> str:
    """Return the span from the first ``[`` to the last ``]``, or the text unchanged."""
    match = _JSON_ARRAY.search(text)
    return match.group(0) if match else text


def validate_cards(data: Any, limit: int) -> List[Card]:
    """
    Keep entries whose ``front`` and ``back`` are both strings, up to ``limit``.

    Raises:
        CardShapeError: If ``data`` is not a list
    """
    if not isinstance(data, list):
        raise CardShapeError(f"Expected a JSON array, got {type(data).__name__}")
    cards = [
        Card(front=item["front"], back=item["back"])
        for item in data
        if isinstance(item, dict)
        and isinstance(item.get("front"), str)
        and isinstance(item.get("back"), str)
    ]
    return cards[:limit]


def parse_cards(text: str, limit: int, topic: str) -> GenerationResult:
    """
    Parse model output into at most ``limit`` cards.

    Args:
        text: Raw text from the model
        limit: Maximum number of cards to keep (the requested count)
        topic: Topic used to label placeholder cards

    Returns:
        Ok with the parsed cards, or Fallback with ``limit`` placeholders
    """
    json_str = extract_json_array(strip_code_fence(text.strip()))

    try:
        data = json.loads(json_str)
        cards = validate_cards(data, limit)
    except (json.JSONDecodeError, CardShapeError) as e:
        logger.warning(f"Could not parse cards from model output: {e}")
        logger.debug(f"Unparsed output: {json_str[:500]!r}")
        return Fallback(cards=tuple(placeholder_cards(topic, limit)), reason=str(e))

    logger.info(f"Parsed {len(cards)} cards (requested {limit})")
    return Ok(cards=tuple(cards))


def placeholder_cards(topic: str, count: int) -> List[Card]:
    """Numbered placeholder cards: ``"<topic> Flashcard #1"`` / ``"Answer for ..."``."""
    return [
        Card(
            front=f"{topic} Flashcard #{i}",
            back=f"Answer for {topic} Flashcard #{i}",
        )
        for i in range(1, count + 1)
    ]


def sample_cards(count: Optional[int] = None) -> List[Card]:
    """Generic sample cards, five by default."""
    n = SAMPLE_CARD_COUNT if count is None else count
    return [Card(front="Sample Question", back="Sample Answer") for _ in range(n)]
