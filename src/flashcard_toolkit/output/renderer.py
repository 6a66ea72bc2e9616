"""
Module: output.renderer

Purpose:
    Render a layout Document to PDF using ReportLab.
    Each Page becomes one PDF page; each draw instruction strokes its
    card rectangle and draws its text centred and wrapped inside it.

Key Functions:
    - render_to_pdf(): Write a Document to a PDF file
    - render_to_bytes(): Render a Document to in-memory PDF bytes

Dependencies:
    - reportlab: PDF generation
    - layout.models: Document, Page, DrawInstruction

Used By:
    - controller: Deck build pipeline
    - web.app: PDF download route
"""

from __future__ import annotations

import io
import logging
from functools import lru_cache
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont
from reportlab.pdfgen import canvas

from flashcard_toolkit.layout.config import LayoutConfig
from flashcard_toolkit.layout.models import Document, DrawInstruction, Page

logger = logging.getLogger(__name__)

# Constants
LINE_SPACING = 1.2
BORDER_LINE_WIDTH = 0.75

# TrueType fallback for text the base-14 fonts cannot encode
UNICODE_FONT_FILES = ("DejaVuSans.ttf", "NotoSans-Regular.ttf", "Arial Unicode.ttf", "arialuni.ttf")
UNICODE_FONT_DIRS = (
    Path("/usr/share/fonts/truetype/dejavu"),
    Path("/usr/share/fonts/dejavu"),
    Path("/usr/share/fonts/truetype/noto"),
    Path("/Library/Fonts"),
    Path("C:/Windows/Fonts"),
)


def render_to_pdf(
    document: Document,
    output_path: Path,
    config: LayoutConfig,
    *,
    show_borders: bool = True,
) -> None:
    """
    Render a Document to a PDF file.

    Args:
        document: Document from the paginator
        output_path: Path to write PDF
        config: Layout configuration the Document was paginated with
        show_borders: Stroke each card rectangle (cut lines)

    Raises:
        IOError: If PDF cannot be written

    Example:
        >>> render_to_pdf(document, Path("output/flashcards.pdf"), LayoutConfig())
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    _render(document, str(output_path), config, show_borders)
    logger.info(f"Rendered {document.page_count} pages to {output_path}")


def render_to_bytes(
    document: Document,
    config: LayoutConfig,
    *,
    show_borders: bool = True,
) -> bytes:
    """Render a Document and return the PDF bytes."""
    buf = io.BytesIO()
    _render(document, buf, config, show_borders)
    logger.info(f"Rendered {document.page_count} pages ({buf.tell()} bytes)")
    return buf.getvalue()


def _render(
    document: Document,
    target: Union[str, BinaryIO],
    config: LayoutConfig,
    show_borders: bool,
) -> None:
    if document.is_empty:
        logger.warning("Empty layout, creating empty PDF")

    c = canvas.Canvas(target, pagesize=(config.page_width, config.page_height))
    c.setTitle("Flashcards")

    for page in document.pages:
        _render_page(c, page, config, show_borders)
        c.showPage()

    c.save()


def _render_page(
    c: canvas.Canvas,
    page: Page,
    config: LayoutConfig,
    show_borders: bool,
) -> None:
    """Render a single page to the canvas."""
    for instruction in page.instructions:
        _draw_card(c, instruction, config, show_borders)


def _draw_card(
    c: canvas.Canvas,
    instruction: DrawInstruction,
    config: LayoutConfig,
    show_borders: bool,
) -> None:
    """
    Draw one card rectangle and its text.

    Text is wrapped to the card width minus the inset on both sides and
    the block of lines is centred vertically on the card.
    """
    rect = instruction.rect
    y_pt = _transform_y(config.page_height, rect.y, rect.height)

    c.saveState()

    if show_borders:
        c.setLineWidth(BORDER_LINE_WIDTH)
        c.rect(rect.x, y_pt, rect.width, rect.height, stroke=1, fill=0)

    font_name = _font_for(instruction.text, config)
    lines = _wrap_text(instruction.text, config, rect.width, font_name)
    if lines:
        leading = config.font_size * LINE_SPACING
        block_height = leading * (len(lines) - 1) + config.font_size
        center_x = rect.x + rect.width / 2
        # Baseline of the first line, with the block centred on the card
        baseline = y_pt + rect.height / 2 + block_height / 2 - config.font_size

        c.setFont(font_name, config.font_size)
        c.setFillColorRGB(0, 0, 0)
        for line in lines:
            c.drawCentredString(center_x, baseline, line)
            baseline -= leading

    c.restoreState()


def _font_for(text: str, config: LayoutConfig) -> str:
    """
    Font that can draw ``text``.

    The configured font is used whenever the text is Latin-1. Otherwise
    a TrueType font with wider coverage is registered on first use; if
    none is installed the configured font is kept and a warning logged.
    """
    try:
        text.encode("latin-1")
        return config.font_name
    except UnicodeEncodeError:
        pass
    return _unicode_font() or config.font_name


@lru_cache(maxsize=None)
def _unicode_font() -> Optional[str]:
    """Register the first available Unicode TTF and return its font name."""
    for directory in ("",) + UNICODE_FONT_DIRS:
        for filename in UNICODE_FONT_FILES:
            path = Path(directory) / filename if directory else filename
            font_name = Path(filename).stem.replace(" ", "")
            try:
                pdfmetrics.registerFont(TTFont(font_name, str(path)))
            except (TTFError, OSError):
                continue
            logger.debug(f"Registered {font_name} from {path} for non-Latin-1 text")
            return font_name

    logger.warning("No Unicode TrueType font found; non-Latin-1 card text will not render")
    return None


def _wrap_text(
    text: str,
    config: LayoutConfig,
    card_width: float,
    font_name: Optional[str] = None,
) -> List[str]:
    """Split text into lines that fit the card; explicit newlines are kept."""
    font_name = font_name or config.font_name
    max_width = max(card_width - 2 * config.text_inset, config.font_size)
    lines: List[str] = []
    for paragraph in text.splitlines():
        wrapped = simpleSplit(paragraph, font_name, config.font_size, max_width)
        lines.extend(wrapped or [""])
    # Drop trailing blank lines so they don't shift the centring
    while lines and not lines[-1].strip():
        lines.pop()
    return lines


def _transform_y(page_height: float, y_top: float, height: float) -> float:
    """
    Convert a top-down Y coordinate to bottom-up PDF Y.

    Args:
        page_height: Page height in points
        y_top: Y position from top in points
        height: Height of element in points

    Returns:
        Y of the element's bottom edge, measured from the page bottom
    """
    return page_height - y_top - height
