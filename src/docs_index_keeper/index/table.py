"""Markdown index table parsing and deterministic row insertion."""

from __future__ import annotations

import re
from collections.abc import Sequence
from enum import Enum
from typing import Final

from docs_index_keeper.config import DEFAULT_SENTINEL
from docs_index_keeper.index.models import IndexRow

DEFAULT_HEADER = "| Doc | Purpose |"

LINK_CELL_PATTERN: Final[re.Pattern[str]] = re.compile(r"^\|\s*\[([^\]]+)\]\(([^)]+)\)\s*\|")


class LineKind(Enum):
    """Classification of one line relative to the index table."""

    LINK_ROW = "link_row"
    TABLE_LINE = "table_line"
    PIPE_CONTINUATION = "pipe_continuation"
    OTHER = "other"


def classify_line(line: str) -> LineKind:
    """Classify a line for the table state machine."""
    if line.startswith("|") and "|" in line[1:]:
        if LINK_CELL_PATTERN.match(line):
            return LineKind.LINK_ROW
        return LineKind.TABLE_LINE
    if line.strip().startswith("|"):
        return LineKind.PIPE_CONTINUATION
    return LineKind.OTHER


def parse_link_cell(line: str) -> IndexRow | None:
    """Extract ``(title, path)`` from a row whose first cell is a Markdown link."""
    match = LINK_CELL_PATTERN.match(line)
    if match is None:
        return None
    return IndexRow(title=match.group(1), path=match.group(2))


def parse_table(text: str) -> list[IndexRow]:
    """Return link rows of the first contiguous table block in document order."""
    rows: list[IndexRow] = []
    in_table = False
    for line in text.split("\n"):
        kind = classify_line(line)
        if not in_table:
            if kind in (LineKind.LINK_ROW, LineKind.TABLE_LINE):
                in_table = True
            else:
                continue
        if kind is LineKind.OTHER:
            break
        if kind is LineKind.LINK_ROW:
            row = parse_link_cell(line)
            if row is not None:
                rows.append(row)
    return rows


def render_row(row: IndexRow) -> str:
    """Render one row as a literal table line."""
    return f"| [{row.title}]({row.path}) | {row.display_purpose} |"


def insertion_offset(text: str, sentinel: str = DEFAULT_SENTINEL) -> int:
    """Character offset where new rows go.

    Before the sentinel row when present; otherwise at the blank line that
    ends the table following the header; otherwise at the end of the text.
    """
    sentinel_at = text.find(sentinel) if sentinel else -1
    if sentinel_at != -1:
        return sentinel_at
    header_at = text.find(DEFAULT_HEADER)
    if header_at != -1:
        blank_at = text.find("\n\n", header_at)
        if blank_at != -1:
            return blank_at + 1
    return len(text)


def insert_rows(text: str, rows: Sequence[IndexRow], sentinel: str = DEFAULT_SENTINEL) -> str:
    """Splice rendered rows into ``text``; surrounding text is kept byte-for-byte."""
    if not rows:
        return text
    block = "\n".join(render_row(row) for row in rows) + "\n"
    offset = insertion_offset(text, sentinel)
    before = text[:offset]
    if offset == len(text) and before and not before.endswith("\n"):
        block = "\n" + block
    return before + block + text[offset:]
