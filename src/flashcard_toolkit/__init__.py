"""Top-level package for the Flashcard Toolkit.

Provides subpackages:
- flashcard_toolkit.layout – duplex-print layout engine (grid, placement, pagination)
- flashcard_toolkit.output – PDF rendering and PNG previews
- flashcard_toolkit.generation – card content from the text-generation service
- flashcard_toolkit.access – one-time unlock tokens and session cookie
- flashcard_toolkit.web – Flask API
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    # In dev mode, read directly from pyproject.toml
    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"

    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.3.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    # Fallback to importlib.metadata for installed package
    try:
        from importlib.metadata import version as pkg_version, PackageNotFoundError
        return pkg_version("flashcard-toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
