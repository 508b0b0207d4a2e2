"""
Markdown to HTML conversion using ``markdown-it-py``.

The CommonMark preset passes raw HTML through, so signature tables emitted
by the extractor reach the page unchanged.
"""

import re
from functools import lru_cache

from markdown_it import MarkdownIt

# A signature table rendered on a single line
TABLE_LINE_RE = re.compile(r"^<table\b.*</table>\s*$")


@lru_cache(maxsize=1)
def _parser() -> MarkdownIt:
    return MarkdownIt("commonmark")


def separate_tables(text: str) -> str:
    """
    Put a blank line after every one-line table followed by more text.

    An HTML block only ends at a blank line, so without one the lines after
    a table would be passed through as raw HTML.
    """
    lines = text.split("\n")
    separated = []
    for current, following in zip(lines, [*lines[1:], ""]):
        separated.append(current)
        if following.strip() and TABLE_LINE_RE.match(current):
            separated.append("")
    return "\n".join(separated)


def render_markdown(text: str) -> str:
    """Convert a markdown document to an HTML fragment."""
    return _parser().render(separate_tables(text))
