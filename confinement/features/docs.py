"""Plain-text documentation helpers for feature references."""

from __future__ import annotations

import re
from typing import Any, List, Mapping, Sequence

_WHITESPACE = re.compile(r"\s+")


def scrub(text: str) -> str:
    """Collapse runs of whitespace and newlines into single spaces."""
    return _WHITESPACE.sub(" ", text).strip()


def doctable(headers: Sequence[Any], rows: Mapping[str, Sequence[Any]]) -> str:
    """
    Render a padded markdown table.

    Args:
        headers: Column headers; the first one heads the row-name column.
        rows: Mapping of row name to its cells. Rows are sorted by name.

    Returns:
        The table, surrounded by blank lines.
    """
    lines: List[List[str]] = [[str(name)] + [str(cell) for cell in cells] for name, cells in rows.items()]
    widths = [len(str(h)) for h in headers]
    for line in lines:
        for i, cell in enumerate(line):
            if i >= len(widths):
                widths.append(0)
            widths[i] = max(widths[i], len(cell))

    def render(cells: Sequence[str]) -> str:
        return " | ".join(cell.ljust(width) for cell, width in zip(cells, widths)) + " |"

    out = [render([str(h) for h in headers]), render(["-" * width for width in widths])]
    out.extend(render(line) for line in sorted(lines, key=lambda line: line[0]))
    return "\n\n" + "\n".join(out) + "\n\n"
