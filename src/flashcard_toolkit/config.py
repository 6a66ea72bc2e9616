"""
Module: config

Purpose:
    Configuration dataclasses for deck builds and the web service.
    Immutable configuration with validation on construction.

Key Classes:
    - DeckConfig: One deck build (capacity, layout, output)
    - AppSettings: Service settings, loadable from the environment

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - controller: Deck build
    - web.app: Service wiring
    - cli: Command options
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from flashcard_toolkit.generation.client import DEFAULT_MODEL
from flashcard_toolkit.layout.config import LayoutConfig
from flashcard_toolkit.layout.grid import DEFAULT_CAPACITY

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class DeckConfig:
    """
    Configuration for building a printable deck (immutable).

    Attributes:
        output_dir: Base directory for generated files
        capacity: Cards per sheet (4, 6, 8 or 12; anything else uses 8)
        layout: Page geometry and text styling
        filename: PDF file name inside the output folder
        timestamp_subfolder: Write into a new timestamped folder under output_dir
        write_previews: Also save a PNG per page
        write_metadata: Write build_metadata.json
        show_borders: Stroke card outlines (cut lines)

    Example:
        >>> config = DeckConfig(output_dir=Path("output"), capacity=6)
    """

    output_dir: Path
    capacity: int = DEFAULT_CAPACITY
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    filename: str = "flashcards.pdf"

    # Output
    timestamp_subfolder: bool = True
    write_previews: bool = False
    write_metadata: bool = True
    show_borders: bool = True

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not self.filename.lower().endswith(".pdf"):
            raise ValueError(f"filename must end with .pdf: {self.filename!r}")
        if Path(self.filename).name != self.filename:
            raise ValueError(f"filename must not contain directories: {self.filename!r}")


@dataclass(frozen=True)
class AppSettings:
    """
    Settings for the web service (immutable).

    Attributes:
        gemini_api_key: API key for the generation service (None disables it)
        model: Gemini model name
        tokens_path: JSON file holding unlock tokens
        require_unlock: Gate /api/generate behind the unlock cookie
        secure_cookie: Mark the unlock cookie Secure (HTTPS only)
        layout: Page geometry for PDF downloads
    """

    gemini_api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    tokens_path: Path = Path("tokens.json")
    require_unlock: bool = True
    secure_cookie: bool = True
    layout: LayoutConfig = field(default_factory=LayoutConfig)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppSettings":
        """
        Load settings from environment variables.

        Reads GEMINI_API_KEY, FLASHCARD_MODEL, FLASHCARD_TOKENS_PATH,
        FLASHCARD_REQUIRE_UNLOCK and FLASHCARD_SECURE_COOKIE.
        """
        env = os.environ if environ is None else environ
        return cls(
            gemini_api_key=env.get("GEMINI_API_KEY") or None,
            model=env.get("FLASHCARD_MODEL") or DEFAULT_MODEL,
            tokens_path=Path(env.get("FLASHCARD_TOKENS_PATH") or "tokens.json"),
            require_unlock=_flag(env.get("FLASHCARD_REQUIRE_UNLOCK"), default=True),
            secure_cookie=_flag(env.get("FLASHCARD_SECURE_COOKIE"), default=True),
        )


def _flag(value: Optional[str], default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUE_VALUES
