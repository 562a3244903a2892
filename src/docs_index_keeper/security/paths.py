"""Path resolution helpers for repository-scoped access."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Final

WINDOWS_ABSOLUTE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[a-zA-Z]:[\\/]")


class PathBlockedError(Exception):
    """Raised when a requested path lies outside the repository."""

    def __init__(self, reason: str, hint: str) -> None:
        super().__init__(reason)
        self.reason = reason
        self.hint = hint


def resolve_repo_path(repo_root: Path, candidate: str) -> Path:
    """Resolve a user-supplied path against the repo root, refusing escapes."""
    root = repo_root.resolve()
    normalized = candidate.replace("\\", "/")

    if not normalized.strip():
        raise PathBlockedError(
            reason="Path is empty.",
            hint="Provide a repository-relative path such as 'docs/guide.md'.",
        )

    if normalized.startswith("/") or WINDOWS_ABSOLUTE_PATTERN.match(normalized):
        resolved = Path(normalized).resolve(strict=False)
    else:
        parts = [part for part in normalized.split("/") if part not in ("", ".")]
        resolved = (root / Path(*parts)).resolve(strict=False)

    if not resolved.is_relative_to(root):
        raise PathBlockedError(
            reason="Path resolves outside the repository root.",
            hint="Use a path located under the repository root.",
        )
    return resolved
