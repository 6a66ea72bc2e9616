"""
Module: layout

Purpose:
    Duplex-print layout engine.
    Converts an ordered card list into front/back page layouts whose
    backs line up with their fronts after a long-edge flip.

Key Functions:
    - paginate(): Main entry point for layout
    - resolve_grid(): Capacity to (rows, cols)
    - place_card(): Slot rectangle
    - mirror_column(): Duplex mirror law

Key Classes:
    - LayoutConfig: Page geometry
    - Card, Document, Page: Layout models

Used By:
    - controller: Deck build pipeline
    - web.app: PDF download
"""

from .config import LayoutConfig, LayoutError, check_page_fits
from .grid import Grid, resolve_grid, SUPPORTED_CAPACITIES, DEFAULT_CAPACITY
from .models import Card, Slot, Rectangle, DrawInstruction, Face, Page, Document
from .placement import slot_for_index, mirror_column, mirror_slot, place_card
from .paginator import paginate

__all__ = [
    # Config
    "LayoutConfig",
    "LayoutError",
    "check_page_fits",
    # Grid
    "Grid",
    "resolve_grid",
    "SUPPORTED_CAPACITIES",
    "DEFAULT_CAPACITY",
    # Models
    "Card",
    "Slot",
    "Rectangle",
    "DrawInstruction",
    "Face",
    "Page",
    "Document",
    # Functions
    "slot_for_index",
    "mirror_column",
    "mirror_slot",
    "place_card",
    "paginate",
]
