"""Title helpers derived from document paths and headings."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Final

HEADING_PATTERN: Final[re.Pattern[str]] = re.compile(r"^#+\s+(\S.*)$")


def first_heading(path: Path) -> str | None:
    """Return the text of the first Markdown heading line, or None."""
    if not path.is_file():
        return None
    with path.open("r", encoding="utf-8", errors="replace") as handle:
        for line in handle:
            match = HEADING_PATTERN.match(line.rstrip("\r\n"))
            if match:
                return match.group(1).strip()
    return None


def title_from_path(relative_path: str) -> str:
    """Link text for a docs-relative path: the path without its ``.md`` suffix."""
    return relative_path.removesuffix(".md")


def humanize(title: str) -> str:
    """Fallback purpose text: separators replaced with spaces."""
    return title.replace("-", " ").replace("_", " ")
