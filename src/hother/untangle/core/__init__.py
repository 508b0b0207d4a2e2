"""Comment extraction core."""

from .exceptions import SourceReadError, TemplateRenderError, UntangleError
from .extraction import DocumentExtractor, extract_blocks, untangle
from .models import BlockTermination, DocumentBlock, ExtractionState, ExtractionStatus, SignatureEntry

__all__ = [
    # Models
    "BlockTermination",
    "DocumentBlock",
    "ExtractionState",
    "ExtractionStatus",
    "SignatureEntry",
    # Extraction
    "DocumentExtractor",
    "extract_blocks",
    "untangle",
    # Exceptions
    "UntangleError",
    "SourceReadError",
    "TemplateRenderError",
]
