"""
Core models for comment extraction.

All models are immutable; transitions build new snapshots with ``model_copy``.
"""

from enum import Enum
from collections.abc import Iterable
from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ExtractionStatus(str, Enum):
    """Whether the extractor is inside a comment block."""

    IN_BLOCK = "in_block"
    OUT_OF_BLOCK = "out_of_block"


class BlockTermination(str, Enum):
    """How a comment block was closed."""

    BLANK_LINE = "blank_line"
    BOUND_FUNCTION = "bound_function"
    NAMED_FUNCTION = "named_function"
    DISCARDED = "discarded"


class SignatureEntry(BaseModel):
    """A captured type signature, rendered later as one table row."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", description="Documented name, empty for unnamed signatures")
    separator: str = Field(default="::", description="Literal separator cell")
    type_expression: str = Field(..., description="Type expression text")

    def cells(self) -> tuple[str, str, str]:
        """Row cells in rendering order."""
        return (self.name, self.separator, self.type_expression)


class DocumentBlock(BaseModel):
    """A comment block that was flushed into the document."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0, description="Position among flushed blocks")
    termination: BlockTermination = Field(..., description="Line shape that closed the block")
    heading: str | None = Field(default=None, description="Synthesized function header, if any")
    lines: tuple[str, ...] = Field(default=(), description="Lines added to the document")

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def log_context(self) -> dict[str, Any]:
        """Get context dict for structured logging."""
        return {
            "block_index": self.index,
            "termination": self.termination.value,
            "heading": self.heading,
            "line_count": len(self.lines),
        }


class Link(NamedTuple):
    """Node of a persistent append-only sequence; snapshots share their tails."""

    previous: "Link | None"
    item: Any


def link_items(items: Iterable[Any], tail: Link | None = None) -> Link | None:
    """Append ``items`` to the sequence ending at ``tail``."""
    for item in items:
        tail = Link(tail, item)
    return tail


def unlink_items(tail: Link | None) -> tuple[Any, ...]:
    """Items of the sequence ending at ``tail``, oldest first."""
    items = []
    while tail is not None:
        items.append(tail.item)
        tail = tail.previous
    items.reverse()
    return tuple(items)


class ExtractionState(BaseModel):
    """
    Snapshot of the accumulator between two source lines.

    Block lines and pending signatures are persistent linked sequences, so
    adding a line is constant time and never changes an older snapshot.
    The committed document itself lives with the caller; the snapshot only
    counts its lines.
    """

    model_config = ConfigDict(frozen=True)

    status: ExtractionStatus = Field(default=ExtractionStatus.IN_BLOCK, description="Current classifier state")
    block_tail: Any = Field(default=None, repr=False, description="Last line of the block being accumulated")
    block_size: int = Field(default=0, ge=0, description="Number of lines in the current block")
    signature_tail: Any = Field(default=None, repr=False, description="Last pending signature table row")
    signature_count: int = Field(default=0, ge=0, description="Number of pending signature rows")
    depth: int = Field(default=1, ge=1, description="Nesting level of the last header marker")
    document_lines: int = Field(default=0, ge=0, description="Number of lines committed so far")
    processed_lines: int = Field(default=0, ge=0, description="Number of source lines processed")
    flushed_blocks: int = Field(default=0, ge=0, description="Number of blocks added to the document")
    discarded_blocks: int = Field(default=0, ge=0, description="Number of blocks dropped as inline comments")

    @model_validator(mode="before")
    @classmethod
    def _link_sequences(cls, data: Any) -> Any:
        """Accept plain ``block`` and ``signatures`` sequences."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if "block" in data:
            block = tuple(data.pop("block"))
            data.update(block_tail=link_items(block), block_size=len(block))
        if "signatures" in data:
            signatures = tuple(data.pop("signatures"))
            data.update(signature_tail=link_items(signatures), signature_count=len(signatures))
        return data

    @property
    def block(self) -> tuple[str, ...]:
        """Lines of the block being accumulated."""
        return unlink_items(self.block_tail)

    @property
    def signatures(self) -> tuple[SignatureEntry, ...]:
        """Pending signature table rows."""
        return unlink_items(self.signature_tail)

    @property
    def in_block(self) -> bool:
        return self.status == ExtractionStatus.IN_BLOCK

    @property
    def has_pending_content(self) -> bool:
        """Whether the current block holds anything worth terminating."""
        return bool(self.block_size or self.signature_count)

    @property
    def current_state_description(self) -> str:
        """Get human-readable state description."""
        if not self.in_block:
            return "scanning_for_comments"
        return f"in_block_{self.block_size}_lines_{self.signature_count}_signatures"

    def with_line(self, line: str) -> "ExtractionState":
        """Snapshot with ``line`` appended to the block."""
        return self.model_copy(update={"block_tail": Link(self.block_tail, line), "block_size": self.block_size + 1})

    def with_signature(self, entry: SignatureEntry) -> "ExtractionState":
        """Snapshot with ``entry`` appended to the pending signatures."""
        update = {"signature_tail": Link(self.signature_tail, entry), "signature_count": self.signature_count + 1}
        return self.model_copy(update=update)

    def log_context(self) -> dict[str, Any]:
        """Get context dict for structured logging."""
        return {
            "state": self.current_state_description,
            "depth": self.depth,
            "processed_lines": self.processed_lines,
            "flushed_blocks": self.flushed_blocks,
            "discarded_blocks": self.discarded_blocks,
            "document_lines": self.document_lines,
        }
