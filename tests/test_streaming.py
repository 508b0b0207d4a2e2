"""Tests for async chunked extraction."""

from collections.abc import AsyncGenerator

import anyio
import pytest

from hother.untangle import BlockTermination, SourceReadError, stream_blocks, untangle, untangle_file, untangle_stream
from hother.untangle.streaming import LineBuffer, read_chunks

SOURCE = """#!/usr/bin/env node

/// # untangle.js #
//
// Convert a program written in a semi-literate style to HTML.

var fs = require('fs');

// main :: String -> ()
//
// + filename - String path to a javascript file.
//
// Returns nothing.
function main(filename) {
  // read the file
  var content = fs.readFileSync(filename, 'utf-8');
}\r\n\r\n// repeat :: String -> Int -> String\r
//  :: String\r
exports.repeat = function(str, times) {\r
};
"""


async def chunked(text: str, size: int) -> AsyncGenerator[str, None]:
    """Yield ``text`` in fixed-size chunks."""
    for i in range(0, len(text), size):
        yield text[i : i + size]
        await anyio.sleep(0)


class TestLineBuffer:
    """Test LineBuffer."""

    def test_lines_across_chunks(self):
        """Test reassembly of split lines."""
        buffer = LineBuffer()
        assert buffer.feed("// hel") == []
        assert buffer.feed("lo\nwor") == ["// hello"]
        assert buffer.close() == ["wor"]

    def test_crlf_split_across_chunks(self):
        """Test that a split CRLF is one line break."""
        buffer = LineBuffer()
        assert buffer.feed("a\r") == []
        assert buffer.feed("\nb") == ["a"]
        assert buffer.close() == ["b"]

    def test_lone_cr(self):
        """Test a CR followed by other text."""
        buffer = LineBuffer()
        assert buffer.feed("a\r") == []
        assert buffer.feed("b\n") == ["a", "b"]
        assert buffer.close() == [""]

    def test_close_with_pending_cr(self):
        """Test a CR at end of input."""
        buffer = LineBuffer()
        buffer.feed("a\r")
        assert buffer.close() == ["a", ""]

    def test_long_line_in_small_chunks(self):
        """Test a long line fed one character at a time."""
        buffer = LineBuffer()
        line = "// " + "x" * 50000
        assert all(buffer.feed(char) == [] for char in line)
        assert buffer.feed("\nnext") == [line]
        assert buffer.close() == ["next"]

    def test_cr_then_text_chunk(self):
        """Test a held CR resolved by a chunk without line breaks."""
        buffer = LineBuffer()
        assert buffer.feed("a") == []
        assert buffer.feed("\r") == []
        assert buffer.feed("b") == ["a"]
        assert buffer.close() == ["b"]


class TestStreamExtraction:
    """Test streaming extraction."""

    @pytest.mark.anyio
    @pytest.mark.parametrize("size", [1, 2, 3, 7, 64, 10_000])
    async def test_matches_synchronous_result(self, size):
        """Test that any chunking gives the synchronous document."""
        result = await untangle_stream(chunked(SOURCE, size))
        assert result == untangle(SOURCE)

    @pytest.mark.anyio
    async def test_blocks_yielded_in_order(self):
        """Test block events from a stream."""
        blocks = [block async for block in stream_blocks(chunked(SOURCE, 5))]

        assert [block.termination for block in blocks] == [
            BlockTermination.BLANK_LINE,
            BlockTermination.NAMED_FUNCTION,
            BlockTermination.BOUND_FUNCTION,
        ]
        assert blocks[0].lines == ("# untangle.js #", "", "Convert a program written in a semi-literate style to HTML.")
        assert blocks[1].heading == "## main(filename)"
        assert "+ `filename` String path to a javascript file." in blocks[1].lines
        assert blocks[2].heading == "## exports.repeat(str, times)"

    @pytest.mark.anyio
    async def test_empty_stream(self):
        """Test a stream with no chunks."""
        assert await untangle_stream(chunked("", 4)) == ""


class TestFileExtraction:
    """Test reading source files."""

    @pytest.mark.anyio
    async def test_untangle_file(self, tmp_path):
        """Test extraction from a file keeps CR line breaks."""
        path = tmp_path / "program.js"
        path.write_bytes(SOURCE.encode("utf-8"))
        assert await untangle_file(path) == untangle(SOURCE)

    @pytest.mark.anyio
    async def test_small_chunks(self, tmp_path):
        """Test reading with a tiny chunk size."""
        path = tmp_path / "program.js"
        path.write_bytes(SOURCE.encode("utf-8"))
        chunks = [chunk async for chunk in read_chunks(path, chunk_size=3)]
        assert "".join(chunks) == SOURCE

    @pytest.mark.anyio
    async def test_missing_file(self, tmp_path):
        """Test error for a missing source file."""
        with pytest.raises(SourceReadError) as exc_info:
            await untangle_file(tmp_path / "missing.js")
        assert exc_info.value.path == tmp_path / "missing.js"

    @pytest.mark.anyio
    async def test_undecodable_file(self, tmp_path):
        """Test error for a file that is not valid text."""
        path = tmp_path / "binary.js"
        path.write_bytes(b"// \xff\xfe\n")
        with pytest.raises(SourceReadError):
            await untangle_file(path)
