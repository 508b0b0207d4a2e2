"""
Line shapes recognized by the extractor.

Every pattern is matched against a single line without its line break.
"""

import re

# Line breaks accepted when splitting source text
LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")

# "// text", "/// text", "   //text"; body keeps everything after one optional space
COMMENT_PREFIX_RE = re.compile(r"^\s*/{2,}\s?(?P<body>.*)$")

# ── Comment body shapes ──────────────────────────────────────────────────────

# "main :: String -> ()"
NAMED_SIGNATURE_RE = re.compile(r"^\s*(?P<name>[^\s:]+)\s*::(?P<type>.*)$")

# ":: String -> ()" continuing a signature table
UNNAMED_SIGNATURE_RE = re.compile(r"^\s*::\s*(?P<type>.*)$")

# "+ filename - String path to a javascript file."
PARAMETER_RE = re.compile(r"^\s*(?P<marker>[*+-])\s*(?P<name>\S+)\s+-\s+(?P<description>.*)$")

# "## Main Program ##"; the first run of '#' sets the depth
HEADER_RE = re.compile(r"#+")

# ── Block terminators ────────────────────────────────────────────────────────

BLANK_LINE_RE = re.compile(r"^\s*$")

# "foo.bar = function(x, y) {", ".method = function(a) {"
BOUND_FUNCTION_RE = re.compile(r"(?P<name>\.?[^\s=]+)\s*=\W*function\s*(?P<params>\(.*\))")

# "function baz(a) {"
NAMED_FUNCTION_RE = re.compile(r"function\s+(?P<name>[^\s(]+)\s*(?P<params>\(.*\))")


def split_lines(text: str) -> list[str]:
    """Split source text on ``\\r\\n``, ``\\r`` or ``\\n``."""
    return LINE_BREAK_RE.split(text)


def match_comment(line: str) -> str | None:
    """Return the comment body if ``line`` is a documentation comment line."""
    match = COMMENT_PREFIX_RE.match(line)
    if match:
        return match.group("body")
    return None
