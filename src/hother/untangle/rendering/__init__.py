"""Rendering of extracted documents."""

from .html import escape_html, render_table
from .markdown import render_markdown
from .page import render_page

__all__ = [
    "escape_html",
    "render_table",
    "render_markdown",
    "render_page",
]
