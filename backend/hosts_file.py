"""
Hosts File Merger: keep one managed block inside an existing hosts file.

The block is bounded by two literal marker lines. Merging replaces the span
from the start marker to the end marker (inclusive) and leaves every other
byte alone; without a span the block is appended.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

SECTION_START = "# generated using k8s-ingress-hosts start #"
SECTION_END = "# generated using k8s-ingress-hosts end #"


class HostsFileError(Exception):
    """Reading or writing the hosts file failed."""

    def __init__(self, action: str, path: Path, cause: OSError):
        super().__init__(f"could not {action} {path}: {cause}")
        self.action = action
        self.path = path
        self.cause = cause


def build_block(body: str) -> str:
    """Markers around the rendered entries. body is zero or more newline-terminated lines."""
    if body and not body.endswith("\n"):
        body += "\n"
    return f"{SECTION_START}\n{body}{SECTION_END}\n"


def find_block(lines: list[str]) -> tuple[int, int] | None:
    """
    Locate the managed span in a list of lines (line endings kept).

    Returns (first, last) line indexes, inclusive: the last end marker and the
    nearest start marker before it. None if no such pair exists. An orphan
    start marker stays outside the span.
    """
    end = None
    for idx in range(len(lines) - 1, -1, -1):
        if lines[idx].rstrip("\r\n") == SECTION_END:
            end = idx
            break
    if end is None:
        return None

    for idx in range(end - 1, -1, -1):
        if lines[idx].rstrip("\r\n") == SECTION_START:
            return idx, end
    return None


def merge(existing: str, body: str) -> str:
    """Return existing content with the managed block replaced or appended."""
    block = build_block(body)
    lines = existing.splitlines(keepends=True)

    span = find_block(lines)
    if span is None:
        # start marker must begin its own line or the next scan won't find it
        if existing and not existing.endswith("\n"):
            existing += "\n"
        return existing + block

    first, last = span
    return "".join(lines[:first]) + block + "".join(lines[last + 1:])


def apply_hosts_block(path: str | Path, body: str) -> str:
    """
    Read the hosts file, merge the block in and write it back once.

    A read failure raises before anything is written; unchanged content is not
    written at all. Returns the new content.
    """
    path = Path(path)
    # newline="" keeps \r\n and friends outside the block untouched
    try:
        with open(path, encoding="utf-8", newline="") as f:
            existing = f.read()
    except OSError as e:
        raise HostsFileError("read", path, e) from e

    updated = merge(existing, body)
    if updated == existing:
        logger.info("%s already up to date", path)
        return updated

    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(updated)
    except OSError as e:
        raise HostsFileError("write", path, e) from e

    logger.info("Wrote managed block to %s", path)
    return updated
