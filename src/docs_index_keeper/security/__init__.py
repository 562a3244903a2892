"""Repository path safety primitives."""

from .paths import PathBlockedError, resolve_repo_path

__all__ = ["PathBlockedError", "resolve_repo_path"]
