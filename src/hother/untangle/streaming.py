"""
Async extraction over chunked text.

Chunks may split lines (and ``\\r\\n`` pairs) anywhere; the result is the
same as extracting from the concatenated text in one pass.
"""

from collections.abc import AsyncGenerator, AsyncIterable
from pathlib import Path

import anyio

from .config import UntangleConfig
from .core.exceptions import SourceReadError
from .core.extraction import DocumentExtractor
from .core.models import DocumentBlock
from .core.patterns import LINE_BREAK_RE
from .utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


class LineBuffer:
    """Reassembles complete lines from arbitrary text chunks."""

    def __init__(self) -> None:
        self._pending: list[str] = []

    def feed(self, chunk: str) -> list[str]:
        """Add a chunk and return the lines it completed."""
        held_cr = bool(self._pending) and self._pending[-1].endswith("\r")
        if not held_cr and not LINE_BREAK_RE.search(chunk):
            if chunk:
                self._pending.append(chunk)
            return []

        text = "".join(self._pending) + chunk

        # A trailing "\r" may be the first half of "\r\n"
        held = ""
        if text.endswith("\r"):
            text, held = text[:-1], "\r"

        *lines, rest = LINE_BREAK_RE.split(text)
        self._pending = [rest + held] if rest or held else []
        return lines

    def close(self) -> list[str]:
        """Return the remaining lines at end of input, including a final empty one."""
        lines = LINE_BREAK_RE.split("".join(self._pending))
        self._pending = []
        return lines


async def stream_blocks(
    chunks: AsyncIterable[str], config: UntangleConfig | None = None, debug: bool = False
) -> AsyncGenerator[DocumentBlock, None]:
    """
    Extract documentation blocks from a stream of text chunks.

    Args:
        chunks: The input stream
        config: Extraction settings (defaults if None)
        debug: Enable debug output

    Yields:
        Each block as soon as it is flushed into the document
    """
    extractor = DocumentExtractor(config, debug)
    buffer = LineBuffer()

    async for chunk in chunks:
        for line in buffer.feed(chunk):
            block = extractor.process_line(line)
            if block:
                yield block
        await anyio.sleep(0)

    for line in buffer.close():
        block = extractor.process_line(line)
        if block:
            yield block

    block = extractor.finish()
    if block:
        yield block


async def untangle_stream(chunks: AsyncIterable[str], config: UntangleConfig | None = None, debug: bool = False) -> str:
    """Build the markdown document from a stream of text chunks."""
    lines: list[str] = []
    async for block in stream_blocks(chunks, config, debug):
        if lines:
            lines.append("")
        lines.extend(block.lines)
    return "\n".join(lines)


async def read_chunks(path: str | Path, chunk_size: int = DEFAULT_CHUNK_SIZE, encoding: str = "utf-8") -> AsyncGenerator[str, None]:
    """
    Read a text file in chunks without translating line breaks.

    Raises:
        SourceReadError: If the file cannot be opened, read or decoded
    """
    try:
        async with await anyio.open_file(path, encoding=encoding, newline="") as source:
            while chunk := await source.read(chunk_size):
                yield chunk
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Failed to read source", path=str(path), error=str(e))
        raise SourceReadError(path, str(e)) from e


async def untangle_file(path: str | Path, config: UntangleConfig | None = None, debug: bool = False) -> str:
    """Build the markdown document of a source file."""
    return await untangle_stream(read_chunks(path), config, debug)
