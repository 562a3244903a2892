"""Index synchronization: row diff, update, check and single-path add."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from docs_index_keeper.config import KeeperConfig
from docs_index_keeper.git import get_staged_md_files
from docs_index_keeper.index.discovery import (
    docs_relative,
    filter_docs,
    is_excluded,
    normalize_path,
    warn_root_md,
)
from docs_index_keeper.index.headings import first_heading, humanize, title_from_path
from docs_index_keeper.index.models import AddRejectedError, AddResult, IndexRow, UpdateResult
from docs_index_keeper.index.table import insert_rows, parse_table
from docs_index_keeper.security import resolve_repo_path


def indexed_paths(text: str) -> set[str]:
    """Normalized paths already present in the index table."""
    return {normalize_path(row.path) for row in parse_table(text)}


def build_row(relative_path: str, source: Path) -> IndexRow:
    """Synthesize a row for one docs-relative path from its source file."""
    title = title_from_path(relative_path)
    purpose = first_heading(source) or humanize(title)
    return IndexRow(title=title, path=relative_path, purpose=purpose)


def compute_new_rows(
    repo_root: Path,
    docs: Iterable[str],
    existing: Iterable[str],
    config: KeeperConfig,
) -> list[IndexRow]:
    """Rows for docs not yet indexed, in candidate order, each path at most once."""
    seen = set(existing)
    docs_root = repo_root / config.docs_dir
    rows: list[IndexRow] = []
    for relative in docs:
        if relative in seen:
            continue
        rows.append(build_row(relative, docs_root / relative))
        seen.add(relative)
    return rows


def update(
    repo_root: Path,
    config: KeeperConfig,
    staged_override: str | None = None,
    warn_stream: TextIO | None = None,
) -> UpdateResult:
    """Insert rows for staged docs missing from the index and persist it."""
    staged = get_staged_md_files(repo_root, staged_override)
    if not staged:
        return UpdateResult(updated=False)

    warn_root_md(staged, config, stream=warn_stream)

    docs = filter_docs(staged, config)
    if not docs:
        return UpdateResult(updated=False)

    index_path = repo_root / config.index_file
    if not index_path.is_file():
        return UpdateResult(updated=False)

    text = index_path.read_text(encoding="utf-8", errors="replace")
    new_rows = compute_new_rows(repo_root, docs, indexed_paths(text), config)
    if not new_rows:
        return UpdateResult(updated=False)

    index_path.write_text(insert_rows(text, new_rows, config.sentinel), encoding="utf-8")
    return UpdateResult(updated=True, added=tuple(new_rows))


def check(repo_root: Path, config: KeeperConfig, staged_override: str | None = None) -> bool:
    """Return True when every staged doc is already indexed."""
    staged = get_staged_md_files(repo_root, staged_override)
    docs = filter_docs(staged, config)
    index_path = repo_root / config.index_file
    if not docs or not index_path.is_file():
        return True

    present = indexed_paths(index_path.read_text(encoding="utf-8", errors="replace"))
    for relative in docs:
        if relative not in present:
            return False
    return True


def add_path(repo_root: Path, config: KeeperConfig, path: str) -> AddResult:
    """Add one file to the index without consulting the staging area."""
    index_path = repo_root / config.index_file
    if not index_path.is_file():
        raise AddRejectedError(
            code="INDEX_NOT_FOUND",
            message=f"Index file not found: {config.index_file}",
        )

    normalized = normalize_path(path)
    source = resolve_repo_path(repo_root, normalized)
    if Path(normalized).is_absolute():
        normalized = source.relative_to(repo_root.resolve()).as_posix()
    relative = docs_relative(normalized, config.docs_dir)
    if relative is None:
        relative = normalized
    if is_excluded(relative, config.exclude):
        raise AddRejectedError(code="PATH_EXCLUDED", message=f"Path is excluded: {path}")

    if not source.is_file():
        raise AddRejectedError(code="FILE_NOT_FOUND", message=f"File not found: {path}")

    text = index_path.read_text(encoding="utf-8", errors="replace")
    if relative in indexed_paths(text):
        return AddResult(added=False, path=relative)

    row = build_row(relative, source)
    index_path.write_text(insert_rows(text, [row], config.sentinel), encoding="utf-8")
    return AddResult(added=True, path=relative, row=row)
