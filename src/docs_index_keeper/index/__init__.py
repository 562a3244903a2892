"""Index table parsing, diffing and synchronization."""

from .discovery import filter_docs, is_excluded, normalize_path, root_markdown_paths, warn_root_md
from .engine import add_path, build_row, check, compute_new_rows, indexed_paths, update
from .headings import first_heading, humanize, title_from_path
from .models import AddRejectedError, AddResult, IndexRow, UpdateResult
from .table import DEFAULT_HEADER, insert_rows, insertion_offset, parse_table, render_row

__all__ = [
    "AddRejectedError",
    "AddResult",
    "DEFAULT_HEADER",
    "IndexRow",
    "UpdateResult",
    "add_path",
    "build_row",
    "check",
    "compute_new_rows",
    "filter_docs",
    "first_heading",
    "humanize",
    "indexed_paths",
    "insert_rows",
    "insertion_offset",
    "is_excluded",
    "normalize_path",
    "parse_table",
    "render_row",
    "root_markdown_paths",
    "title_from_path",
    "update",
    "warn_root_md",
]
