"""Sort host entries and render them as aligned hosts-file lines."""

from __future__ import annotations

from typing import Iterable

from collectors import HostEntry

COLUMN_PADDING = 2


def sort_entries(entries: Iterable[HostEntry]) -> list[HostEntry]:
    """Order by domain, case-insensitively. No secondary key: ties keep collection order."""
    return sorted(entries, key=lambda e: e.domain.lower())


def align_columns(text: str, padding: int = COLUMN_PADDING) -> str:
    """
    Align tab-separated cells into space-padded columns.

    Every tab-terminated cell is padded to the widest cell of its column plus
    `padding`; the trailing cell of a line is left as is. Lines keep their
    newline.
    """
    rows = [line.split("\t") for line in text.splitlines()]

    widths: list[int] = []
    for cells in rows:
        for col, cell in enumerate(cells[:-1]):
            if col == len(widths):
                widths.append(0)
            widths[col] = max(widths[col], len(cell) + padding)

    out = []
    for cells in rows:
        padded = [cell.ljust(widths[col]) for col, cell in enumerate(cells[:-1])]
        out.append("".join(padded) + cells[-1] + "\n")
    return "".join(out)


def render(entries: Iterable[HostEntry]) -> str:
    """Sorted, aligned `ADDRESS  DOMAIN  # SERVICE` lines, one per entry."""
    raw = "".join(f"{entry}\n" for entry in sort_entries(entries))
    return align_columns(raw)
