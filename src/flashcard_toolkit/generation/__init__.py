"""
Module: generation

Purpose:
    Obtain card content from the Gemini text-generation service.
    Parsing degrades to placeholder cards instead of failing the request.

Key Classes:
    - GenerationRequest: Topic/grade/count
    - GeminiClient: HTTP client
    - CardGenerator: Request pipeline
    - Ok / Fallback: Tagged results

Dependencies:
    - requests: HTTP
"""

from .models import GenerationRequest, GenerationError, GenerationResult, Ok, Fallback, MAX_CARDS
from .client import GeminiClient
from .parser import parse_cards, placeholder_cards, sample_cards
from .prompt import build_prompt
from .service import CardGenerator

__all__ = [
    "GenerationRequest",
    "GenerationError",
    "GenerationResult",
    "Ok",
    "Fallback",
    "MAX_CARDS",
    "GeminiClient",
    "CardGenerator",
    "parse_cards",
    "placeholder_cards",
    "sample_cards",
    "build_prompt",
]
