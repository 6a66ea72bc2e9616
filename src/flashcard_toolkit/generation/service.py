"""
Module: generation.service

Purpose:
    Orchestrate one generation request: prompt -> Gemini -> parse.

Key Classes:
    - CardGenerator: Runs the request pipeline

Used By:
    - web.app: /api/generate
    - cli: generate command
"""

from __future__ import annotations

import logging

import requests

from .client import GeminiClient
from .models import Fallback, GenerationRequest, GenerationResult
from .parser import parse_cards, sample_cards
from .prompt import build_prompt

logger = logging.getLogger(__name__)


class CardGenerator:
    """
    Generate cards for a request.

    Transport failures degrade to sample cards. ``GenerationError`` from
    the client (missing key, upstream status, empty reply) propagates so
    callers can report it.
    """

    def __init__(self, client: GeminiClient):
        self.client = client

    def generate(self, request: GenerationRequest) -> GenerationResult:
        logger.info(
            f"Generating {request.num_cards} cards for grade {request.grade} on {request.topic!r}"
        )
        prompt = build_prompt(request.topic, request.grade, request.num_cards)

        try:
            text = self.client.generate_text(prompt)
        except requests.RequestException as e:
            logger.warning(f"Generation request failed, using sample cards: {e}")
            return Fallback(cards=tuple(sample_cards()), reason=f"Server error: {e}")

        result = parse_cards(text, request.num_cards, request.topic)
        if result.is_fallback:
            logger.warning(f"Using placeholder cards for {request.topic!r}")
        return result
