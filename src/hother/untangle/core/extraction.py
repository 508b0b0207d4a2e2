"""
Core comment extraction logic.

Comments followed by an empty line (general documentation) or by a
function (method documentation) are kept. Comments followed immediately
by any other line are inline comments and are dropped.
"""

import re

from ..config import UntangleConfig
from ..utils.logging import get_logger
from .models import BlockTermination, DocumentBlock, ExtractionState, ExtractionStatus
from .patterns import BLANK_LINE_RE, BOUND_FUNCTION_RE, NAMED_FUNCTION_RE, match_comment, split_lines
from .transformer import feed_line, flush_signatures

logger = get_logger(__name__)

TERMINATION_RULES: list[tuple[re.Pattern[str], BlockTermination]] = [
    (BLANK_LINE_RE, BlockTermination.BLANK_LINE),
    (BOUND_FUNCTION_RE, BlockTermination.BOUND_FUNCTION),
    (NAMED_FUNCTION_RE, BlockTermination.NAMED_FUNCTION),
]


def start_block(state: ExtractionState, line: str, config: UntangleConfig) -> ExtractionState:
    """Open a new block whose first line is the comment body ``line``."""
    state = state.model_copy(update={"status": ExtractionStatus.IN_BLOCK, "block_tail": None, "block_size": 0})
    return feed_line(state, line, config)


def commit_block(state: ExtractionState, termination: BlockTermination, config: UntangleConfig, heading: str | None = None) -> tuple[ExtractionState, DocumentBlock]:
    """
    Flush the current block, headed by ``heading`` when given.

    The snapshot only counts committed lines; a blank separator line is
    counted before every block but the first.
    """
    state = flush_signatures(state, config)
    lines = (heading, *state.block) if heading else state.block
    separator = 1 if state.document_lines and lines else 0

    block = DocumentBlock(index=state.flushed_blocks, termination=termination, heading=heading, lines=lines)
    state = state.model_copy(
        update={
            "status": ExtractionStatus.OUT_OF_BLOCK,
            "block_tail": None,
            "block_size": 0,
            "document_lines": state.document_lines + separator + len(lines),
            "flushed_blocks": state.flushed_blocks + 1,
        }
    )
    return state, block


def discard_block(state: ExtractionState) -> ExtractionState:
    """Drop the current block and its pending signatures."""
    return state.model_copy(
        update={
            "status": ExtractionStatus.OUT_OF_BLOCK,
            "block_tail": None,
            "block_size": 0,
            "signature_tail": None,
            "signature_count": 0,
            "discarded_blocks": state.discarded_blocks + 1,
        }
    )


def terminate_block(state: ExtractionState, line: str, config: UntangleConfig) -> tuple[ExtractionState, DocumentBlock | None]:
    """
    Decide what happens to the current block given the code line after it.

    Args:
        state: Current accumulator snapshot
        line: Raw non-comment line following the block
        config: Rendering settings

    Returns:
        The new snapshot and the flushed block, if one was kept
    """
    if not state.has_pending_content:
        # Nothing accumulated yet (leading code before any comment)
        return state.model_copy(update={"status": ExtractionStatus.OUT_OF_BLOCK}), None

    for pattern, termination in TERMINATION_RULES:
        match = pattern.search(line)
        if not match:
            continue

        if termination == BlockTermination.BLANK_LINE:
            return commit_block(state, termination, config)

        heading = f"{'#' * (state.depth + 1)} {match.group('name')}{match.group('params')}"
        return commit_block(state, termination, config, heading=heading)

    return discard_block(state), None


def process_line(state: ExtractionState, line: str, config: UntangleConfig) -> tuple[ExtractionState, DocumentBlock | None]:
    """Classify one source line and advance the accumulator."""
    state = state.model_copy(update={"processed_lines": state.processed_lines + 1})

    body = match_comment(line)
    if body is not None:
        if state.in_block:
            return feed_line(state, body, config), None
        return start_block(state, body, config), None

    if state.in_block:
        return terminate_block(state, line, config)

    return state, None


def finish(state: ExtractionState, config: UntangleConfig) -> tuple[ExtractionState, DocumentBlock | None]:
    """Close a block still open at end of input."""
    if state.in_block:
        return terminate_block(state, "", config)
    return state, None


class DocumentExtractor:
    """Feeds source lines through the accumulator and collects flushed blocks."""

    def __init__(self, config: UntangleConfig | None = None, debug: bool = False):
        """
        Initialize document extractor.

        Args:
            config: Extraction settings (defaults if None)
            debug: Enable debug logging
        """
        self.config = config or UntangleConfig()
        self.debug = debug
        self.state = ExtractionState()
        self.blocks: list[DocumentBlock] = []
        self._lines: list[str] = []

    def process_line(self, line: str) -> DocumentBlock | None:
        """
        Process a single source line.

        Args:
            line: Line without its line break

        Returns:
            The block flushed by this line, None otherwise
        """
        discarded = self.state.discarded_blocks
        self.state, block = process_line(self.state, line, self.config)
        self._record(block, discarded, line)
        return block

    def finish(self) -> DocumentBlock | None:
        """Flush a trailing block at end of input."""
        discarded = self.state.discarded_blocks
        self.state, block = finish(self.state, self.config)
        self._record(block, discarded, "")

        if self.debug:
            logger.debug("Extraction finished", **self.state.log_context())
        return block

    def _record(self, block: DocumentBlock | None, discarded_before: int, line: str) -> None:
        if block:
            self.blocks.append(block)
            if self._lines:
                self._lines.append("")
            self._lines.extend(block.lines)
            if self.debug:
                logger.debug("Block flushed", **block.log_context())
        elif self.debug and self.state.discarded_blocks > discarded_before:
            logger.debug("Inline comment discarded", line_number=self.state.processed_lines, line=line[:50])

    @property
    def document(self) -> str:
        """The markdown document accumulated so far."""
        return "\n".join(self._lines)


def extract_blocks(text: str, config: UntangleConfig | None = None, debug: bool = False) -> list[DocumentBlock]:
    """Extract every documentation block of ``text`` in order."""
    extractor = DocumentExtractor(config, debug)
    for line in split_lines(text):
        extractor.process_line(line)
    extractor.finish()
    return extractor.blocks


def untangle(text: str, config: UntangleConfig | None = None, debug: bool = False) -> str:
    """
    Convert a source program to a markdown document by extracting comments.

    Args:
        text: Full source text
        config: Extraction settings (defaults if None)
        debug: Enable debug logging

    Returns:
        The markdown document, lines joined with ``\\n``
    """
    extractor = DocumentExtractor(config, debug)
    for line in split_lines(text):
        extractor.process_line(line)
    extractor.finish()
    return extractor.document
