"""
Per-line reshaping of comment bodies inside a block.

Rules are ordered ``(pattern, handler)`` pairs; the first pattern that
matches decides what happens to the line. Signature rules run before the
pending signature table is flushed, content rules after it.
"""

import re
from collections.abc import Callable

from ..config import UntangleConfig
from ..rendering.html import render_table
from .models import ExtractionState, SignatureEntry
from .patterns import HEADER_RE, NAMED_SIGNATURE_RE, PARAMETER_RE, UNNAMED_SIGNATURE_RE

LineHandler = Callable[[ExtractionState, re.Match[str], UntangleConfig], ExtractionState]
LineRule = tuple[re.Pattern[str], LineHandler]


def _append(state: ExtractionState, line: str) -> ExtractionState:
    return state.with_line(line)


def _add_named_signature(state: ExtractionState, match: re.Match[str], config: UntangleConfig) -> ExtractionState:
    entry = SignatureEntry(name=match.group("name"), separator=config.signature_separator, type_expression=match.group("type"))
    return state.with_signature(entry)


def _add_unnamed_signature(state: ExtractionState, match: re.Match[str], config: UntangleConfig) -> ExtractionState:
    entry = SignatureEntry(name="", separator=config.signature_separator, type_expression=match.group("type"))
    return state.with_signature(entry)


def _add_parameter(state: ExtractionState, match: re.Match[str], config: UntangleConfig) -> ExtractionState:
    return _append(state, f"{match.group('marker')} `{match.group('name')}` {match.group('description')}")


def _add_header(state: ExtractionState, match: re.Match[str], config: UntangleConfig) -> ExtractionState:
    state = state.model_copy(update={"depth": len(match.group(0))})
    return _append(state, match.string)


SIGNATURE_RULES: list[LineRule] = [
    (NAMED_SIGNATURE_RE, _add_named_signature),
    (UNNAMED_SIGNATURE_RE, _add_unnamed_signature),
]

CONTENT_RULES: list[LineRule] = [
    (PARAMETER_RE, _add_parameter),
    (HEADER_RE, _add_header),
]


def flush_signatures(state: ExtractionState, config: UntangleConfig) -> ExtractionState:
    """Render pending signatures as one table line of the block and clear them."""
    if not state.signature_count:
        return state

    table = render_table((entry.cells() for entry in state.signatures), config.table_class)
    state = state.model_copy(update={"signature_tail": None, "signature_count": 0})
    return state.with_line(table)


def feed_line(state: ExtractionState, line: str, config: UntangleConfig) -> ExtractionState:
    """
    Add one comment body to the current block.

    Args:
        state: Current accumulator snapshot
        line: Comment body without its comment markers
        config: Rendering settings

    Returns:
        The updated snapshot
    """
    for pattern, handler in SIGNATURE_RULES:
        match = pattern.match(line)
        if match:
            return handler(state, match, config)

    state = flush_signatures(state, config)

    for pattern, handler in CONTENT_RULES:
        match = pattern.search(line)
        if match:
            return handler(state, match, config)

    return _append(state, line)
