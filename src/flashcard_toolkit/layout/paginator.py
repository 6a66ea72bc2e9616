"""
Module: layout.paginator

Purpose:
    Split cards into sheets and lay each sheet out as a front page
    followed by a mirrored back page.

Key Functions:
    - paginate(): Main pagination function

Algorithm:
    1. Resolve the grid for the capacity (unsupported values use 8)
    2. Slice the cards into consecutive sheets of grid.capacity cards
    3. Front page: card fronts at row-major slots
    4. Back page: card backs at the same row, mirrored column
    5. Emit front0, back0, front1, back1, ...

    Card k lands on pages 2*(k // capacity) and 2*(k // capacity) + 1 at
    slot k % capacity. The last sheet is never padded.

Dependencies:
    - layout.grid: resolve_grid
    - layout.placement: slot/rectangle geometry and mirror law
    - layout.config: LayoutConfig

Used By:
    - controller: Deck build pipeline
    - web.app: PDF download route
"""

from __future__ import annotations

import logging
import math
from typing import Any, List, Mapping, Sequence, Union

from .config import LayoutConfig
from .grid import Grid, resolve_grid
from .models import Card, Document, DrawInstruction, Face, Page
from .placement import mirror_slot, place_card, slot_for_index

logger = logging.getLogger(__name__)

CardLike = Union[Card, Mapping[str, Any]]


def paginate(
    cards: Sequence[CardLike],
    capacity: int,
    config: LayoutConfig,
) -> Document:
    """
    Lay out cards for duplex printing (long-edge flip).

    Geometry is not validated here; run ``check_page_fits`` first. The
    result on a page too small for the grid is undefined.

    Args:
        cards: Cards in print order (Card or ``{"front", "back"}`` mappings)
        capacity: Requested cards per sheet
        config: Page geometry

    Returns:
        Document with 2 * ceil(len(cards) / capacity) pages, or an empty
        Document when there are no cards
    """
    grid = resolve_grid(capacity)
    per_sheet = grid.capacity

    if not cards:
        logger.info("No cards to paginate")
        return Document(pages=(), grid=grid, card_count=0)

    sheet_count = math.ceil(len(cards) / per_sheet)
    pages: List[Page] = []

    for sheet_index in range(sheet_count):
        start = sheet_index * per_sheet
        sheet_cards = [_as_card(c) for c in cards[start:start + per_sheet]]

        pages.append(_layout_face(sheet_cards, start, sheet_index, len(pages), Face.FRONT, grid, config))
        pages.append(_layout_face(sheet_cards, start, sheet_index, len(pages), Face.BACK, grid, config))

    logger.info(
        f"Paginated {len(cards)} cards onto {sheet_count} sheets "
        f"({len(pages)} pages, {grid.rows}x{grid.cols} grid)"
    )

    return Document(pages=tuple(pages), grid=grid, card_count=len(cards))


def _layout_face(
    sheet_cards: List[Card],
    first_card_index: int,
    sheet_index: int,
    page_index: int,
    face: Face,
    grid: Grid,
    config: LayoutConfig,
) -> Page:
    """Build one face of a sheet. Back faces use mirrored slots."""
    instructions = []
    for i, card in enumerate(sheet_cards):
        slot = slot_for_index(i, grid)
        if face is Face.BACK:
            slot = mirror_slot(slot, grid)
            text = card.back
        else:
            text = card.front

        rect = place_card(
            slot,
            grid,
            config.page_width,
            config.page_height,
            config.margin,
            config.gap,
        )
        instructions.append(DrawInstruction(
            rect=rect,
            text=text,
            card_index=first_card_index + i,
            slot=slot,
        ))

    return Page(
        index=page_index,
        sheet_index=sheet_index,
        face=face,
        instructions=tuple(instructions),
    )


def _as_card(item: CardLike) -> Card:
    """Card with both faces as strings (None becomes "")."""
    if isinstance(item, Card):
        item = item.to_dict()
    return Card.from_dict(item)
