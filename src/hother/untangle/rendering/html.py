"""HTML helpers for signature tables."""

from collections.abc import Callable, Iterable, Sequence

HTML_ENTITIES = {
    "<": "&lt;",
    ">": "&gt;",
    "&": "&amp;",
    '"': "&quot;",
}

_ESCAPE_TABLE = str.maketrans(HTML_ENTITIES)


def escape_html(text: str) -> str:
    """Escape ``<``, ``>``, ``&`` and ``"`` with HTML entities."""
    return text.translate(_ESCAPE_TABLE)


def code(text: str) -> str:
    """Wrap already-escaped text in a code element."""
    return f"<code>{text}</code>"


def render_table(
    rows: Iterable[Sequence[str]],
    css_class: str,
    format_cell: Callable[[str], str] = code,
) -> str:
    """
    Format rows as a single-line HTML table.

    Args:
        rows: Table rows, each a sequence of raw cell texts
        css_class: Class attribute of the table element
        format_cell: Applied to each cell after escaping

    Returns:
        The table markup, or an empty string when there are no rows
    """
    rendered_rows = []
    for row in rows:
        cells = "".join(f"<td>{format_cell(escape_html(cell))}</td>" for cell in row)
        rendered_rows.append(f"<tr>{cells}</tr>")

    if not rendered_rows:
        return ""
    return f'<table class="{escape_html(css_class)}">{"".join(rendered_rows)}</table>'
