"""
Module: controller

Purpose:
    Orchestrate a printable deck build.
    Check geometry → Paginate → Render PDF → (Previews) → Metadata

Key Functions:
    - build_deck(): Main entry point for building a deck

Key Classes:
    - BuildResult: Complete build result
    - BuildError: Exception for build failures

Dependencies:
    - layout: Grid resolution and pagination
    - output: PDF rendering and previews

Used By:
    - cli: build command
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Sequence

from flashcard_toolkit import __version__

from .config import DeckConfig
from .layout import Card, Document, LayoutError, check_page_fits, paginate, resolve_grid
from .output import render_to_pdf, save_previews

logger = logging.getLogger(__name__)

NOTHING_TO_PRINT = "No flashcards to print."


class BuildError(Exception):
    """Error during build pipeline."""
    pass


@dataclass(frozen=True)
class BuildResult:
    """
    Complete build result (immutable).

    Attributes:
        pdf_path: Path to generated PDF
        output_dir: Folder holding every output of this build
        card_count: Number of cards laid out
        sheet_count: Physical sheets (each printed on both sides)
        page_count: PDF pages (2 per sheet)
        preview_paths: PNG previews, if requested
        metadata: Build metadata dictionary

    Example:
        >>> result = build_deck(cards, config)
        >>> print(f"Print {result.page_count} pages double-sided")
    """
    pdf_path: Path
    output_dir: Path
    card_count: int
    sheet_count: int
    page_count: int
    preview_paths: tuple[Path, ...]
    metadata: dict


def build_deck(cards: Sequence[Card], config: DeckConfig) -> BuildResult:
    """
    Build a duplex-printable deck from start to finish.

    Pipeline:
    1. Resolve grid and check the page can hold it
    2. Paginate cards into front/back pages
    3. Render PDF
    4. (Optional) Save PNG previews
    5. (Optional) Write metadata

    Args:
        cards: Cards in print order
        config: Build configuration

    Returns:
        BuildResult with paths and counts

    Raises:
        BuildError: If there are no cards or the page is too small for the grid
    """
    start_time = time.perf_counter()

    grid = resolve_grid(config.capacity)
    logger.info(
        f"Starting build of {len(cards)} cards, {grid.capacity} per sheet "
        f"({grid.rows}x{grid.cols})"
    )

    # 1. Geometry pre-flight
    try:
        check_page_fits(config.layout, grid)
    except LayoutError as e:
        raise BuildError(f"Invalid page layout: {e}") from e

    # 2. Paginate
    document = paginate(cards, config.capacity, config.layout)
    if document.is_empty:
        raise BuildError(NOTHING_TO_PRINT)

    # 3. Output folder
    output_dir = Path(config.output_dir)
    if config.timestamp_subfolder:
        output_dir = _generate_timestamped_subfolder(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    logger.info(f"Output directory: {output_dir}")

    # 4. Render PDF
    pdf_path = output_dir / config.filename
    render_to_pdf(document, pdf_path, config.layout, show_borders=config.show_borders)

    # 5. Previews (optional)
    preview_paths: List[Path] = []
    if config.write_previews:
        preview_paths = save_previews(document, output_dir / "previews", config.layout)

    elapsed = time.perf_counter() - start_time
    logger.info(f"Deck generation completed in {elapsed:.2f}s")

    # 6. Metadata
    metadata = _build_metadata(config, document, pdf_path)
    if config.write_metadata:
        _write_metadata(output_dir, metadata)

    return BuildResult(
        pdf_path=pdf_path,
        output_dir=output_dir,
        card_count=document.card_count,
        sheet_count=document.sheet_count,
        page_count=document.page_count,
        preview_paths=tuple(preview_paths),
        metadata=metadata,
    )


def _generate_timestamped_subfolder(base_dir: Path) -> Path:
    """
    Create a unique timestamped folder under ``base_dir``.

    Appends a counter when a build in the same second already used the name.
    """
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    candidate = base_dir / f"deck_{timestamp}"
    counter = 1
    while candidate.exists():
        counter += 1
        candidate = base_dir / f"deck_{timestamp}_{counter}"
    return candidate


def _build_metadata(
    config: DeckConfig,
    document: Document,
    pdf_path: Path,
) -> Dict[str, Any]:
    """Summarise the build for build_metadata.json."""
    layout = config.layout
    return {
        "generator_version": __version__,
        "generated_at": datetime.now().isoformat(),
        "pdf": pdf_path.name,
        "card_count": document.card_count,
        "requested_capacity": config.capacity,
        "capacity": document.capacity,
        "grid": {"rows": document.grid.rows, "cols": document.grid.cols},
        "sheet_count": document.sheet_count,
        "page_count": document.page_count,
        "duplex": "long-edge",
        "layout": {
            "page_width": layout.page_width,
            "page_height": layout.page_height,
            "margin": layout.margin,
            "gap": layout.gap,
            "font_name": layout.font_name,
            "font_size": layout.font_size,
        },
    }


def _write_metadata(output_dir: Path, metadata: Dict[str, Any]) -> None:
    """Write build metadata as pretty-printed JSON."""
    metadata_path = output_dir / "build_metadata.json"
    with open(metadata_path, "w", encoding="utf-8") as f:
        json.dump(metadata, f, indent=2)
    logger.info(f"Wrote build metadata to {metadata_path}")
