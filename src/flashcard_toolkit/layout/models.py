"""
Module: layout.models

Purpose:
    Data models for duplex card layout.
    Immutable dataclasses for cards, slots, rectangles, pages and documents.

Key Classes:
    - Card: Front/back text pair
    - Slot: Row/column position on a sheet face
    - Rectangle: Positioned box in document units
    - DrawInstruction: Text to draw inside a rectangle
    - Page: One sheet face
    - Document: Complete ordered page sequence

Dependencies:
    - dataclasses (std)

Used By:
    - layout.paginator: Creates Pages and Documents
    - output.renderer: Consumes Documents
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from .grid import Grid


def _text(value: Any) -> str:
    """Card text for drawing; missing values become an empty string."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


@dataclass(frozen=True)
class Card:
    """
    One flashcard (immutable).

    Identity is positional: a card is addressed by its index in the list
    passed to the paginator.

    Attributes:
        front: Question or term
        back: Answer
    """

    front: str = ""
    back: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Card":
        """Build a card from a ``{"front", "back"}`` record, tolerating missing keys."""
        return cls(front=_text(data.get("front")), back=_text(data.get("back")))

    def to_dict(self) -> dict[str, str]:
        return {"front": self.front, "back": self.back}


@dataclass(frozen=True)
class Slot:
    """Position of one card within a sheet face."""
    row: int
    col: int


@dataclass(frozen=True)
class Rectangle:
    """
    Box in document units, top-left origin.

    Example:
        >>> Rectangle(x=10, y=20, width=100, height=50).right
        110
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def intersects(self, other: "Rectangle") -> bool:
        """True if the two rectangles share interior area (touching edges do not count)."""
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )


class Face(str, Enum):
    """Which side of the physical sheet a page prints on."""
    FRONT = "front"
    BACK = "back"


@dataclass(frozen=True)
class DrawInstruction:
    """
    Text drawn centred and wrapped inside a rectangle.

    Attributes:
        rect: Card rectangle on the page
        text: Text to draw
        card_index: Index of the card in the input list
        slot: Slot the rectangle was computed from (mirrored on back pages)
    """

    rect: Rectangle
    text: str
    card_index: int
    slot: Slot


@dataclass(frozen=True)
class Page:
    """
    Draw instructions for one face of one sheet.

    Attributes:
        index: Page number in the document (0-indexed)
        sheet_index: Sheet this page belongs to
        face: FRONT or BACK
        instructions: Draw instructions in slot order
    """

    index: int
    sheet_index: int
    face: Face
    instructions: tuple[DrawInstruction, ...]

    @property
    def card_count(self) -> int:
        return len(self.instructions)

    @property
    def is_empty(self) -> bool:
        return len(self.instructions) == 0


@dataclass(frozen=True)
class Document:
    """
    Ordered page sequence for one layout run.

    Pages alternate front/back: front0, back0, front1, back1, ...

    Attributes:
        pages: Tuple of Pages
        grid: Grid used for every sheet
        card_count: Number of input cards

    Example:
        >>> doc.page_count == 2 * doc.sheet_count
        True
    """

    pages: tuple[Page, ...]
    grid: Grid
    card_count: int

    @property
    def capacity(self) -> int:
        """Cards per sheet face."""
        return self.grid.capacity

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def sheet_count(self) -> int:
        return len(self.pages) // 2

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to print."""
        return len(self.pages) == 0

    def card_index_at(self, page_index: int, position: int) -> int:
        """
        Recover the input index of the card drawn at ``position`` on a page.

        Holds for front and back pages alike, since both draw a sheet's
        cards in the same order.

        Raises:
            IndexError: If the page or position does not exist
        """
        if not 0 <= page_index < len(self.pages):
            raise IndexError(f"page {page_index} out of range ({len(self.pages)} pages)")
        if not 0 <= position < self.pages[page_index].card_count:
            raise IndexError(f"position {position} out of range on page {page_index}")
        return (page_index // 2) * self.capacity + position
