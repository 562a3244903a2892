"""Narrow staged candidates to the documentation set."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from docs_index_keeper.config import KeeperConfig

WARN_PREFIX = "[docs-index-keeper]"


def normalize_path(path: str) -> str:
    """Normalize separators and a leading ``./`` for exact path comparison."""
    normalized = path.strip().replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized


def is_excluded(relative_path: str, exclude: Iterable[str]) -> bool:
    """Return True when a docs-relative path equals or string-prefix-matches an entry.

    Matching is a raw string prefix, not segment-aware: ``"arch"`` also
    excludes ``"archive/x.md"``.
    """
    return any(relative_path == entry or relative_path.startswith(entry) for entry in exclude)


def docs_relative(path: str, docs_dir: str) -> str | None:
    """Strip ``docs_dir/`` from a repository path, or None when outside it."""
    prefix = f"{docs_dir}/"
    if not path.startswith(prefix):
        return None
    return path[len(prefix) :]


def filter_docs(candidates: Iterable[str], config: KeeperConfig) -> list[str]:
    """Map staged repository paths to docs-relative paths eligible for indexing."""
    docs: list[str] = []
    for candidate in candidates:
        relative = docs_relative(normalize_path(candidate), config.docs_dir)
        if relative is None:
            continue
        if is_excluded(relative, config.exclude):
            continue
        docs.append(relative)
    return docs


def root_markdown_paths(staged: Iterable[str], config: KeeperConfig) -> list[str]:
    """Staged paths at repo root or under .github/ that are not explicitly allowed."""
    allowed = set(config.allowed_root_md)
    flagged: list[str] = []
    for path in staged:
        if "/" in path and not path.startswith(".github/"):
            continue
        basename = path.rsplit("/", 1)[-1]
        if basename in allowed:
            continue
        flagged.append(path)
    return flagged


def warn_root_md(
    staged: Iterable[str], config: KeeperConfig, stream: TextIO | None = None
) -> list[str]:
    """Write a hint for misplaced Markdown files; returns the flagged paths."""
    if not config.warn_root_md:
        return []
    flagged = root_markdown_paths(staged, config)
    if flagged:
        out = stream if stream is not None else sys.stderr
        out.write(
            f"{WARN_PREFIX} New/changed .md in root or .github: {', '.join(flagged)}\n"
            f"Consider moving to {config.docs_dir}/ and they will be added to the index.\n"
        )
    return flagged
