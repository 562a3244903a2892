from __future__ import annotations

import json
from pathlib import Path

from docs_index_keeper.config import (
    DEFAULT_ALLOWED_ROOT_MD,
    CliOverrides,
    KeeperConfig,
    load_effective_config,
)


def test_defaults_when_no_config_exists(tmp_path: Path) -> None:
    config = load_effective_config(tmp_path)

    assert config == KeeperConfig()
    assert config.index_file == "docs/README.md"
    assert config.docs_dir == "docs"
    assert "README.md" in config.exclude
    assert "archive/" in config.exclude
    assert config.allowed_root_md == DEFAULT_ALLOWED_ROOT_MD
    assert config.warn_root_md is True
    assert config.sentinel == "| [archive/]"
    assert config.audit_log is None


def test_package_json_section_merges_over_defaults(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text(
        json.dumps({"docsIndexKeeper": {"indexFile": "docs/INDEX.md", "docsDir": "doc"}}),
        encoding="utf-8",
    )
    config = load_effective_config(tmp_path)

    assert config.index_file == "docs/INDEX.md"
    assert config.docs_dir == "doc"
    assert "README.md" in config.exclude


def test_rc_file_merges_when_no_manifest_section(tmp_path: Path) -> None:
    (tmp_path / ".docs-index-keeper.json").write_text(
        json.dumps({"indexFile": "custom/readme.md", "warnRootMd": False}),
        encoding="utf-8",
    )
    config = load_effective_config(tmp_path)

    assert config.index_file == "custom/readme.md"
    assert config.warn_root_md is False


def test_alternate_rc_file_name_is_read(tmp_path: Path) -> None:
    (tmp_path / ".docsindexkeeperrc.json").write_text(
        json.dumps({"exclude": ["drafts/"]}), encoding="utf-8"
    )
    assert load_effective_config(tmp_path).exclude == ("drafts/",)


def test_manifest_takes_precedence_over_rc_file(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text(
        json.dumps({"docsIndexKeeper": {"docsDir": "from-pkg"}}), encoding="utf-8"
    )
    (tmp_path / ".docs-index-keeper.json").write_text(
        json.dumps({"docsDir": "from-rc", "warnRootMd": False}), encoding="utf-8"
    )
    config = load_effective_config(tmp_path)

    assert config.docs_dir == "from-pkg"
    assert config.warn_root_md is False


def test_pyproject_table_takes_precedence_over_package_json(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text(
        json.dumps({"docsIndexKeeper": {"docsDir": "from-pkg", "sentinel": "| [old]"}}),
        encoding="utf-8",
    )
    (tmp_path / "pyproject.toml").write_text(
        "\n".join(
            [
                "[tool.docs-index-keeper]",
                'docs_dir = "from-pyproject"',
                'allowed_root_md = ["README.md"]',
            ]
        ),
        encoding="utf-8",
    )
    config = load_effective_config(tmp_path)

    assert config.docs_dir == "from-pyproject"
    assert config.allowed_root_md == ("README.md",)
    assert config.sentinel == "| [old]"


def test_cli_overrides_have_highest_precedence(tmp_path: Path) -> None:
    (tmp_path / ".docs-index-keeper.json").write_text(
        json.dumps({"indexFile": "from-rc.md", "docsDir": "from-rc"}), encoding="utf-8"
    )
    config = load_effective_config(
        tmp_path,
        CliOverrides(index_file="handbook/INDEX.md", docs_dir="handbook/", audit_log="audit.jsonl"),
    )

    assert config.index_file == "handbook/INDEX.md"
    assert config.docs_dir == "handbook"
    assert config.audit_log == "audit.jsonl"


def test_unknown_keys_are_ignored(tmp_path: Path) -> None:
    (tmp_path / ".docs-index-keeper.json").write_text(
        json.dumps({"somethingElse": 1, "docsDir": "documentation"}), encoding="utf-8"
    )
    assert load_effective_config(tmp_path).docs_dir == "documentation"
