"""Flask API for generating, unlocking and downloading flashcards."""

from .app import create_app

__all__ = ["create_app"]
