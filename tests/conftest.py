import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import flashcard_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from flashcard_toolkit.layout import Card, LayoutConfig


# Common test fixtures
@pytest.fixture
def layout_config():
    """Default A4 landscape layout."""
    return LayoutConfig()


@pytest.fixture
def make_cards():
    """Factory for numbered cards: front-<i> / back-<i>."""
    def _create(count: int):
        return [Card(front=f"front-{i}", back=f"back-{i}") for i in range(count)]
    return _create
