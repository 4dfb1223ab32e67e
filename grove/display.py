"""Terminal output helpers: color detection, dimming and table rendering."""

from __future__ import annotations

import itertools
import os
import shutil
import sys
import textwrap
from typing import Iterable, Sequence

_DIM = "\x1b[2m"
_RESET = "\x1b[0m"


def should_use_color() -> bool:
    """True only when stdout is a TTY, NO_COLOR is unset and TERM is not "dumb"."""
    stream = sys.stdout
    isatty = getattr(stream, "isatty", None)
    if isatty is None or not isatty():
        return False
    if "NO_COLOR" in os.environ:
        return False
    return os.environ.get("TERM") != "dumb"


def use_color() -> bool:
    """Alias of should_use_color()."""
    return should_use_color()


def terminal_width() -> int:
    """Best-effort terminal width; falls back to 120 when detection fails."""
    return shutil.get_terminal_size(fallback=(120, 24)).columns


def dim(text: str) -> str:
    """Wrap text in the ANSI dim style when color is enabled."""
    text = str(text)
    return f"{_DIM}{text}{_RESET}" if should_use_color() else text


def _cell_lines(text: str, width: int) -> list[str]:
    lines: list[str] = []
    for part in text.splitlines() or [""]:
        lines.extend(textwrap.wrap(part, width) or [""])
    return lines


def _natural_width(text: str) -> int:
    return max((len(line) for line in text.splitlines()), default=0)


def render_table(headers: Sequence[object], rows: Iterable[Sequence[object]]) -> str:
    """Render a condensed box-drawing table that fits the terminal width."""
    header = [str(h) for h in headers]
    body = [[str(c) for c in row] for row in rows]
    ncols = max([len(header)] + [len(r) for r in body])
    if ncols == 0:
        return ""
    if header:
        header += [""] * (ncols - len(header))
    body = [r + [""] * (ncols - len(r)) for r in body]

    all_rows = ([header] if header else []) + body
    widths = [
        max([1] + [_natural_width(r[col]) for r in all_rows]) for col in range(ncols)
    ]
    available = terminal_width() - (3 * ncols + 1)
    while sum(widths) > available and max(widths) > 1:
        widest = widths.index(max(widths))
        widths[widest] -= 1

    def border(left: str, fill: str, mid: str, right: str) -> str:
        return left + mid.join(fill * (w + 2) for w in widths) + right

    def render_row(cells: list[str]) -> list[str]:
        wrapped = [_cell_lines(c, w) for c, w in zip(cells, widths)]
        out = []
        for parts in itertools.zip_longest(*wrapped, fillvalue=""):
            inner = " ┆ ".join(p.ljust(w) for p, w in zip(parts, widths))
            out.append(f"│ {inner} │")
        return out

    lines = [border("┌", "─", "┬", "┐")]
    if header:
        lines += render_row(header)
        if body:
            lines.append(border("╞", "═", "╪", "╡"))
    for row in body:
        lines += render_row(row)
    lines.append(border("└", "─", "┴", "┘"))
    return "\n".join(lines)