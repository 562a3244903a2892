"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path

DEFAULT_INDEX_FILE = "docs/README.md"
DEFAULT_DOCS_DIR = "docs"
DEFAULT_EXCLUDE = ("README.md", "archive/")
DEFAULT_ALLOWED_ROOT_MD = (
    "README.md",
    "AGENTS.md",
    "CONTRIBUTING.md",
    "RENDER_DEPLOY.md",
    "ENV_CHECKLIST.md",
    "MIGRATION.md",
)
DEFAULT_SENTINEL = "| [archive/]"

RC_FILE_NAMES = (".docs-index-keeper.json", ".docsindexkeeperrc.json")
PACKAGE_JSON_KEY = "docsIndexKeeper"
PYPROJECT_TOOL_KEY = "docs-index-keeper"

_FIELD_NAMES = {
    "indexFile": "index_file",
    "index_file": "index_file",
    "docsDir": "docs_dir",
    "docs_dir": "docs_dir",
    "exclude": "exclude",
    "allowedRootMd": "allowed_root_md",
    "allowed_root_md": "allowed_root_md",
    "warnRootMd": "warn_root_md",
    "warn_root_md": "warn_root_md",
    "sentinel": "sentinel",
    "auditLog": "audit_log",
    "audit_log": "audit_log",
}


@dataclass(slots=True, frozen=True)
class KeeperConfig:
    """Fully merged settings for one invocation."""

    index_file: str = DEFAULT_INDEX_FILE
    docs_dir: str = DEFAULT_DOCS_DIR
    exclude: tuple[str, ...] = DEFAULT_EXCLUDE
    allowed_root_md: tuple[str, ...] = DEFAULT_ALLOWED_ROOT_MD
    warn_root_md: bool = True
    sentinel: str = DEFAULT_SENTINEL
    audit_log: str | None = None


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Optional command-line overrides applied at highest precedence."""

    index_file: str | None = None
    docs_dir: str | None = None
    audit_log: str | None = None


def default_config() -> KeeperConfig:
    """Build the built-in default config."""
    return KeeperConfig()


def load_rc_payload(repo_root: Path) -> dict[str, object]:
    """Load the first existing rc file; malformed JSON yields an empty payload."""
    for name in RC_FILE_NAMES:
        rc_path = repo_root / name
        if not rc_path.is_file():
            continue
        payload = _read_json(rc_path)
        if isinstance(payload, dict):
            return payload
        return {}
    return {}


def load_package_json_payload(repo_root: Path) -> dict[str, object]:
    """Load the ``docsIndexKeeper`` object from package.json, if any."""
    package_path = repo_root / "package.json"
    if not package_path.is_file():
        return {}
    payload = _read_json(package_path)
    if not isinstance(payload, dict):
        return {}
    section = payload.get(PACKAGE_JSON_KEY)
    if not isinstance(section, dict):
        return {}
    return section


def load_pyproject_payload(repo_root: Path) -> dict[str, object]:
    """Load the ``[tool.docs-index-keeper]`` table from pyproject.toml, if any."""
    pyproject_path = repo_root / "pyproject.toml"
    if not pyproject_path.is_file():
        return {}
    try:
        with pyproject_path.open("rb") as handle:
            payload = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError):
        return {}
    tool = payload.get("tool")
    if not isinstance(tool, dict):
        return {}
    section = tool.get(PYPROJECT_TOOL_KEY)
    if not isinstance(section, dict):
        return {}
    return section


def _read_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return None


def _tuple_of_strings(value: object, field: str) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise ValueError(f"Config field '{field}' must be a list of strings.")
    output: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"Config field '{field}' must contain only strings.")
        output.append(item)
    return tuple(output)


def _non_empty_string(value: object, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Config field '{field}' must be a non-empty string.")
    return value


def merge_config(base: KeeperConfig, payload: dict[str, object]) -> KeeperConfig:
    """Overlay one config source on top of ``base``; unknown keys are ignored."""
    changes: dict[str, object] = {}
    for key, value in payload.items():
        field = _FIELD_NAMES.get(key)
        if field is None:
            continue
        if field in {"index_file", "docs_dir", "sentinel"}:
            changes[field] = _non_empty_string(value, key)
        elif field in {"exclude", "allowed_root_md"}:
            changes[field] = _tuple_of_strings(value, key)
        elif field == "warn_root_md":
            if not isinstance(value, bool):
                raise ValueError(f"Config field '{key}' must be a boolean.")
            changes[field] = value
        elif field == "audit_log":
            if value is not None and not isinstance(value, str):
                raise ValueError(f"Config field '{key}' must be a string or null.")
            changes[field] = value or None
    if "docs_dir" in changes:
        changes["docs_dir"] = str(changes["docs_dir"]).rstrip("/")
    return replace(base, **changes)


def apply_cli_overrides(config: KeeperConfig, overrides: CliOverrides) -> KeeperConfig:
    """Apply command-line overrides at highest precedence."""
    return replace(
        config,
        index_file=overrides.index_file or config.index_file,
        docs_dir=(overrides.docs_dir.rstrip("/") if overrides.docs_dir else config.docs_dir),
        audit_log=overrides.audit_log or config.audit_log,
    )


def load_effective_config(repo_root: Path, overrides: CliOverrides | None = None) -> KeeperConfig:
    """Load config using merge order defaults -> rc -> package.json -> pyproject -> overrides."""
    resolved_root = repo_root.resolve()
    config = default_config()
    config = merge_config(config, load_rc_payload(resolved_root))
    config = merge_config(config, load_package_json_payload(resolved_root))
    config = merge_config(config, load_pyproject_payload(resolved_root))
    return apply_cli_overrides(config, overrides or CliOverrides())
