"""Entry point for running flashcard_toolkit as a module.

Usage:
    python -m flashcard_toolkit <command> [options]
"""
from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
