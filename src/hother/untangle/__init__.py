"""
Untangle - documentation extraction for semi-literate source files

Comments beginning with ``//`` are stripped of their markers and collected
into a markdown document, which can then be rendered to an HTML page.
"""

import importlib.metadata

from .config import UntangleConfig
from .core.exceptions import SourceReadError, TemplateRenderError, UntangleError
from .core.extraction import DocumentExtractor, extract_blocks, untangle
from .core.models import BlockTermination, DocumentBlock, ExtractionState, ExtractionStatus, SignatureEntry
from .rendering import render_markdown, render_page
from .streaming import stream_blocks, untangle_file, untangle_stream

try:
    __version__ = importlib.metadata.version("hother-untangle")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.0.0+dev"

__all__ = [
    # Models
    "BlockTermination",
    "DocumentBlock",
    "ExtractionState",
    "ExtractionStatus",
    "SignatureEntry",
    # Core
    "DocumentExtractor",
    "UntangleConfig",
    "extract_blocks",
    "untangle",
    # Exceptions
    "UntangleError",
    "SourceReadError",
    "TemplateRenderError",
    # Rendering
    "render_markdown",
    "render_page",
    # Streaming
    "stream_blocks",
    "untangle_stream",
    "untangle_file",
]
