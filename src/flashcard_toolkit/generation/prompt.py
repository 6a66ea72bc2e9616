"""Prompt template for flashcard generation."""

from __future__ import annotations

PROMPT_TEMPLATE = """You are a helpful teacher. Generate exactly {num_cards} flashcards for grade {grade} on "{topic}".
Each flashcard must have:
- "front": a clear question or term
- "back": a concise, accurate answer
Respond ONLY with a valid JSON array (no markdown, no text).
Example: [{{"front": "What is 2 + 2?", "back": "4"}}]"""


def build_prompt(topic: str, grade: str, num_cards: int) -> str:
    """Fill the prompt template for one request."""
    return PROMPT_TEMPLATE.format(topic=topic, grade=grade, num_cards=num_cards)
