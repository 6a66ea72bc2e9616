"""
Module: output.preview

Purpose:
    PNG previews of laid-out pages. Draws each card rectangle with its
    wrapped text so a deck can be checked without opening the PDF.

Key Functions:
    - render_page_preview(): Render one Page to a PIL image
    - save_previews(): Write every page of a Document to disk

Dependencies:
    - PIL: Image drawing
    - layout.models: Document, Page

Used By:
    - controller: Optional preview output
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from PIL import Image, ImageDraw, ImageFont

from flashcard_toolkit.layout.config import LayoutConfig
from flashcard_toolkit.layout.models import Document, Face, Page

logger = logging.getLogger(__name__)

# Visualization constants
BACKGROUND = (255, 255, 255)
FACE_COLORS = {
    Face.FRONT: (254, 243, 199),  # Yellow - fronts
    Face.BACK: (219, 234, 254),   # Blue - backs
}
OUTLINE_COLOR = (60, 60, 60)
TEXT_COLOR = (0, 0, 0)
BOX_LINE_WIDTH = 2
DEFAULT_SCALE = 1.5


def render_page_preview(
    page: Page,
    config: LayoutConfig,
    scale: float = DEFAULT_SCALE,
) -> Image.Image:
    """
    Render a page to an RGB image.

    Args:
        page: Page to draw
        config: Layout configuration (page size in points)
        scale: Pixels per point

    Returns:
        New RGB image of the page
    """
    size = (round(config.page_width * scale), round(config.page_height * scale))
    img = Image.new("RGB", size, BACKGROUND)
    draw = ImageDraw.Draw(img)

    try:
        font = ImageFont.truetype("DejaVuSans.ttf", round(config.font_size * scale))
    except (IOError, OSError):
        font = ImageFont.load_default()

    fill = FACE_COLORS[page.face]
    for instruction in page.instructions:
        rect = instruction.rect
        box = (
            round(rect.x * scale),
            round(rect.y * scale),
            round(rect.right * scale),
            round(rect.bottom * scale),
        )
        draw.rectangle(box, fill=fill, outline=OUTLINE_COLOR, width=BOX_LINE_WIDTH)

        max_width = (rect.width - 2 * config.text_inset) * scale
        text = "\n".join(_wrap(draw, instruction.text, font, max_width))
        if text:
            left, top, right, bottom = draw.multiline_textbbox((0, 0), text, font=font)
            origin = (
                rect.center[0] * scale - (right - left) / 2 - left,
                rect.center[1] * scale - (bottom - top) / 2 - top,
            )
            draw.multiline_text(origin, text, fill=TEXT_COLOR, font=font, align="center")

    return img


def save_previews(
    document: Document,
    output_dir: Path,
    config: LayoutConfig,
    scale: float = DEFAULT_SCALE,
) -> List[Path]:
    """
    Save one PNG per page as ``page_<NN>_<face>.png``.

    Returns:
        Paths written, in page order
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    paths = []
    for page in document.pages:
        path = output_dir / f"page_{page.index + 1:02d}_{page.face.value}.png"
        render_page_preview(page, config, scale).save(path)
        paths.append(path)
    logger.info(f"Saved {len(paths)} page previews to {output_dir}")
    return paths


def _wrap(draw: ImageDraw.ImageDraw, text: str, font, max_width: float) -> List[str]:
    """Greedy word wrap measured with the preview font."""
    lines: List[str] = []
    for paragraph in text.splitlines():
        current = ""
        for word in paragraph.split():
            candidate = f"{current} {word}" if current else word
            if current and draw.textlength(candidate, font=font) > max_width:
                lines.append(current)
                current = word
            else:
                current = candidate
        lines.append(current)
    while lines and not lines[-1]:
        lines.pop()
    return lines
