"""Command-line entrypoint: init, update, check and add."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from docs_index_keeper.config import CliOverrides, KeeperConfig, load_effective_config
from docs_index_keeper.git import STAGED_ENV_VAR, GitCommandError
from docs_index_keeper.hooks import install_hook
from docs_index_keeper.index import AddRejectedError, add_path, check, update
from docs_index_keeper.logging import AuditEvent, JsonlAuditLogger, utc_timestamp
from docs_index_keeper.security import PathBlockedError

PREFIX = "[docs-index-keeper]"

EPILOG = f"""\
Config: pyproject.toml [tool.docs-index-keeper], package.json "docsIndexKeeper"
or .docs-index-keeper.json

Examples:
  docs-index-keeper init
  {STAGED_ENV_VAR}="docs/foo.md" docs-index-keeper check
"""


@dataclass(slots=True)
class CommandOutcome:
    """Exit status plus audit details for one command."""

    exit_code: int
    changed: bool = False
    error_code: str | None = None
    metadata: dict[str, object] = field(default_factory=dict)


CommandHandler = Callable[[Path, KeeperConfig, argparse.Namespace], CommandOutcome]


def build_arg_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per operation."""
    parser = argparse.ArgumentParser(
        prog="docs-index-keeper",
        description="Keep the docs index in sync when new .md files are added.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--repo-root", required=False, default=".")
    parser.add_argument("--index-file", required=False, default=None)
    parser.add_argument("--docs-dir", required=False, default=None)
    parser.add_argument("--audit-log", required=False, default=None)
    subparsers = parser.add_subparsers(dest="command", metavar="command")
    subparsers.add_parser("init", help="Add pre-commit hook (husky or plain git)")
    subparsers.add_parser("update", help="Update index from staged .md files (for pre-commit)")
    subparsers.add_parser("check", help="Dry run; exit 1 if index would change (for CI)")
    add_parser = subparsers.add_parser("add", help="Add a single file to the index")
    add_parser.add_argument("path")
    return parser


def _run_init(repo_root: Path, config: KeeperConfig, args: argparse.Namespace) -> CommandOutcome:
    result = install_hook(repo_root, config)
    print(f"{PREFIX} {result.message}")
    if not result.installed:
        print("  For husky: npm i -D husky && npx husky init")
    return CommandOutcome(
        exit_code=0, changed=result.installed, metadata={"target": result.target}
    )


def _run_update(repo_root: Path, config: KeeperConfig, args: argparse.Namespace) -> CommandOutcome:
    result = update(repo_root, config)
    paths = [row.path for row in result.added]
    if result.updated:
        print(f"{PREFIX} Added to {config.index_file}: {', '.join(paths)}")
    return CommandOutcome(exit_code=0, changed=result.updated, metadata={"added": paths})


def _run_check(repo_root: Path, config: KeeperConfig, args: argparse.Namespace) -> CommandOutcome:
    if check(repo_root, config):
        return CommandOutcome(exit_code=0)
    print(
        f'{PREFIX} Index is out of date. Stage new docs and run "docs-index-keeper update", '
        f"or add them manually to {config.index_file}",
        file=sys.stderr,
    )
    return CommandOutcome(exit_code=1, error_code="INDEX_OUT_OF_DATE")


def _run_add(repo_root: Path, config: KeeperConfig, args: argparse.Namespace) -> CommandOutcome:
    try:
        result = add_path(repo_root, config, args.path)
    except AddRejectedError as exc:
        print(f"{PREFIX} {exc.message}", file=sys.stderr)
        return CommandOutcome(exit_code=1, error_code=exc.code, metadata={"path": args.path})
    except PathBlockedError as exc:
        print(f"{PREFIX} {exc.reason} {exc.hint}", file=sys.stderr)
        return CommandOutcome(exit_code=1, error_code="PATH_BLOCKED", metadata={"path": args.path})
    if not result.added:
        print(f"{PREFIX} Already in index: {result.path}")
        return CommandOutcome(exit_code=0, metadata={"path": result.path})
    print(f"{PREFIX} Added to {config.index_file}: {result.path}")
    return CommandOutcome(exit_code=0, changed=True, metadata={"path": result.path})


COMMANDS: dict[str, CommandHandler] = {
    "init": _run_init,
    "update": _run_update,
    "check": _run_check,
    "add": _run_add,
}


def _audit_logger(repo_root: Path, config: KeeperConfig) -> JsonlAuditLogger | None:
    if not config.audit_log:
        return None
    path = Path(config.audit_log)
    if not path.is_absolute():
        path = repo_root / path
    return JsonlAuditLogger(path=path)


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for the docs-index-keeper command."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 0

    repo_root = Path(args.repo_root).resolve()
    overrides = CliOverrides(
        index_file=args.index_file,
        docs_dir=args.docs_dir,
        audit_log=args.audit_log,
    )
    try:
        config = load_effective_config(repo_root, overrides)
    except ValueError as exc:
        print(f"{PREFIX} {exc}", file=sys.stderr)
        return 1

    try:
        outcome = COMMANDS[args.command](repo_root, config, args)
    except GitCommandError as exc:
        print(f"{PREFIX} {exc}", file=sys.stderr)
        outcome = CommandOutcome(exit_code=1, error_code="GIT_ERROR")
    except OSError as exc:
        print(f"{PREFIX} {exc}", file=sys.stderr)
        outcome = CommandOutcome(exit_code=1, error_code="IO_ERROR")

    audit_logger = _audit_logger(repo_root, config)
    if audit_logger is not None:
        audit_logger.append(
            AuditEvent(
                timestamp=utc_timestamp(),
                command=args.command,
                ok=outcome.exit_code == 0,
                changed=outcome.changed,
                error_code=outcome.error_code,
                metadata=outcome.metadata,
            )
        )
    return outcome.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
