"""
Module: generation.client

Purpose:
    Minimal client for the Gemini ``generateContent`` REST endpoint.

Key Classes:
    - GeminiClient: Sends a prompt, returns the first candidate's text

Dependencies:
    - requests: HTTP

Used By:
    - generation.service
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from .models import GenerationError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"
DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_TIMEOUT = 60

SAFETY_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)


class GeminiClient:
    """
    Gemini text generation over plain HTTP.

    Attributes:
        api_key: API key; an empty key fails every call with status 500
        model: Model name, e.g. "gemini-2.5-flash"
        temperature: Sampling temperature
        max_output_tokens: Output token cap

    Example:
        >>> client = GeminiClient(api_key=os.environ["GEMINI_API_KEY"])
        >>> text = client.generate_text("Say hi")
    """

    def __init__(
        self,
        api_key: Optional[str],
        *,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        temperature: float = 0.5,
        max_output_tokens: int = 2048,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/v1/models/{self.model}:generateContent"

    def build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.temperature,
                "maxOutputTokens": self.max_output_tokens,
            },
            "safetySettings": [
                {"category": category, "threshold": "BLOCK_NONE"}
                for category in SAFETY_CATEGORIES
            ],
        }

    def generate_text(self, prompt: str) -> str:
        """
        Send ``prompt`` and return the first candidate's text, stripped.

        Raises:
            GenerationError: Missing API key (500), non-2xx response (upstream
                status), or a response with no candidate text (500)
            requests.RequestException: Transport failure
        """
        if not self.api_key:
            raise GenerationError("Missing GEMINI_API_KEY in environment", status=500)

        response = self.session.post(
            self.endpoint,
            params={"key": self.api_key},
            json=self.build_payload(prompt),
            timeout=self.timeout,
        )

        if not response.ok:
            logger.error(f"Gemini API error {response.status_code}: {response.text[:500]}")
            raise GenerationError(
                "Gemini API error",
                status=response.status_code,
                details=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise GenerationError("Invalid JSON from Gemini", status=502) from e

        text = _first_candidate_text(data)
        if not text:
            raise GenerationError("Empty response from Gemini", status=500)
        return text


def _first_candidate_text(data: Any) -> str:
    """``data.candidates[0].content.parts[0].text`` or "" when any step is missing."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return ""
    return text.strip() if isinstance(text, str) else ""
