"""
Basic usage example for comment extraction.
"""

from collections.abc import AsyncGenerator

import anyio

from hother.untangle import render_markdown, stream_blocks, untangle
from hother.untangle.utils.logging import configure_logging, get_logger

# Configure logging
configure_logging(log_level="INFO")
logger = get_logger(__name__)

PROGRAM = """/// ## Aux ##

// repeat :: String -> Int -> String
//
// Concatenate `str` with itself many `times`.
//
// + str   - String value to repeat.
// + times - The number of times to repeat `str`.
//
// Returns String value.
function repeat(str, times) {
  var result = '';

  // count down
  for (var i = times; i > 0; i--)
    result += str;

  return result;
}

// escapeHtml :: String -> String
//
// Make `str` safe to add into an HTML document.
exports.escapeHtml = function(str) {
  return str;
};
"""


async def example_stream() -> AsyncGenerator[str, None]:
    """Yield the example program in small chunks."""
    chunk_size = 40
    for i in range(0, len(PROGRAM), chunk_size):
        yield PROGRAM[i : i + chunk_size]
        await anyio.sleep(0.05)  # Simulate network delay


async def main():
    """Main example function."""
    logger.info("Starting comment extraction example")

    blocks = []
    async for block in stream_blocks(example_stream()):
        blocks.append(block)
        logger.info("Extracted block", **block.log_context())

    document = untangle(PROGRAM)

    print(f"\n{'=' * 60}")
    print("Markdown:")
    print(document)
    print(f"{'-' * 60}")
    print("HTML:")
    print(render_markdown(document))
    print(f"{'=' * 60}")
    print(f"  Total blocks: {len(blocks)}")
    print(f"  Headings: {[b.heading for b in blocks if b.heading]}")


if __name__ == "__main__":
    anyio.run(main)
