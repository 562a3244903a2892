"""Pre-commit hook installation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from docs_index_keeper.config import KeeperConfig

HOOK_MODE = 0o755


@dataclass(slots=True, frozen=True)
class HookInstallResult:
    """Where the hook was written, if anywhere."""

    installed: bool
    target: str | None
    message: str


def render_hook_body(config: KeeperConfig) -> str:
    """Shell snippet that syncs the index when Markdown files are staged."""
    lines = [
        f"# When .md under {config.docs_dir}/ are staged, add them to {config.index_file}",
        "staged_md=$(git diff --cached --name-only | grep '\\.md$' || true)",
        'if [ -n "$staged_md" ]; then',
        "  docs-index-keeper update",
        f"  git add {config.index_file} 2>/dev/null || true",
        "fi",
    ]
    return "\n".join(lines)


def install_hook(repo_root: Path, config: KeeperConfig) -> HookInstallResult:
    """Write a husky hook when .husky/ exists, else a plain git hook."""
    body = render_hook_body(config)
    husky_dir = repo_root / ".husky"
    if husky_dir.is_dir():
        target = husky_dir / "pre-commit"
        target.write_text(body + "\n", encoding="utf-8")
        return HookInstallResult(
            installed=True, target=".husky/pre-commit", message="Updated .husky/pre-commit"
        )

    if (repo_root / ".git").is_dir():
        hooks_dir = repo_root / ".git" / "hooks"
        hooks_dir.mkdir(parents=True, exist_ok=True)
        target = hooks_dir / "pre-commit"
        target.write_text(f"#!/bin/sh\n{body}\n", encoding="utf-8")
        target.chmod(HOOK_MODE)
        return HookInstallResult(
            installed=True, target=".git/hooks/pre-commit", message="Added .git/hooks/pre-commit"
        )

    return HookInstallResult(
        installed=False,
        target=None,
        message='Not a git repo. Run "git init" first, or install husky and re-run init.',
    )
