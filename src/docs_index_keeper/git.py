"""Staged Markdown file discovery backed by git."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

STAGED_ENV_VAR = "DOCS_INDEX_KEEPER_STAGED"


class GitCommandError(RuntimeError):
    """Raised when a git invocation fails or git is unavailable."""


def run_git(repo_root: Path, args: list[str]) -> str:
    """Run git in ``repo_root`` and return its stdout."""
    try:
        completed = subprocess.run(
            ["git", *args],
            cwd=repo_root,
            check=False,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError as exc:
        raise GitCommandError("git executable not found") from exc
    if completed.returncode != 0:
        raise GitCommandError(completed.stderr.strip() or "git command failed")
    return completed.stdout


def list_staged_paths(repo_root: Path) -> str:
    """Return git's newline-separated list of paths staged for the next commit."""
    return run_git(repo_root, ["diff", "--cached", "--name-only"])


def markdown_paths(raw: str) -> list[str]:
    """Split a newline-separated listing into trimmed ``.md`` paths, keeping order."""
    paths: list[str] = []
    for line in raw.split("\n"):
        candidate = line.strip().replace("\\", "/")
        if candidate.endswith(".md"):
            paths.append(candidate)
    return paths


def get_staged_md_files(repo_root: Path, staged_override: str | None = None) -> list[str]:
    """Resolve staged Markdown files.

    An explicit ``staged_override`` is the literal source of truth, even when
    empty. Otherwise a non-empty ``DOCS_INDEX_KEEPER_STAGED`` is used, and only
    then is git asked for the staging area.
    """
    if staged_override is not None:
        return markdown_paths(staged_override)
    env_override = os.environ.get(STAGED_ENV_VAR, "")
    if env_override:
        return markdown_paths(env_override)
    return markdown_paths(list_staged_paths(repo_root))
