"""
Module: output

Purpose:
    PDF rendering and previews for laid-out decks.
    Converts a layout Document to PDF using ReportLab.

Key Functions:
    - render_to_pdf(): Render a Document to a PDF file
    - render_to_bytes(): Render a Document to PDF bytes
    - save_previews(): PNG preview per page

Dependencies:
    - reportlab: PDF generation
    - PIL: Previews
    - layout.models: Document

Used By:
    - controller: Pipeline orchestration
    - web.app: PDF download
"""

from .renderer import render_to_pdf, render_to_bytes
from .preview import render_page_preview, save_previews

__all__ = [
    "render_to_pdf",
    "render_to_bytes",
    "render_page_preview",
    "save_previews",
]
