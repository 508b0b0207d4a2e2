"""
Custom exceptions for the untangle document extractor.

The line parser itself never raises on content; these cover the I/O and
templating collaborators around it.
"""

from pathlib import Path


class UntangleError(Exception):
    """
    Base exception for untangle errors.

    Attributes:
        message: Human-readable error message
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class SourceReadError(UntangleError):
    """Source file could not be read."""

    def __init__(
        self,
        path: str | Path,
        reason: str | None = None,
        message: str | None = None,
    ):
        self.path = Path(path)
        self.reason = reason
        default_message = f"Cannot read source file {self.path}"
        if reason:
            default_message = f"Cannot read source file {self.path}: {reason}"
        super().__init__(message or default_message)


class TemplateRenderError(UntangleError):
    """Page template could not be loaded or rendered."""

    def __init__(
        self,
        template: str | Path,
        reason: str | None = None,
        message: str | None = None,
    ):
        self.template = str(template)
        self.reason = reason
        default_message = f"Cannot render template {self.template}"
        if reason:
            default_message = f"Cannot render template {self.template}: {reason}"
        super().__init__(message or default_message)
