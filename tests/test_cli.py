"""CLI behaviour tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from docnav.cli import _build_parser, main
from docnav.logging import configure_logging
from tests._fixtures.docs_builder import DocsTreeBuilder


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "build"])
    assert args.verbose is True
    assert args.command == "build"
    assert args.path == "."


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["structure", "--verbose", "site"])
    assert args.verbose is True
    assert args.command == "structure"
    assert args.path == "site"


def test_cli_build_prints_statistics(docs: DocsTreeBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    docs.write({"guides/setup.md": "body\n", "guides/usage.md": "body\n"})

    main(["build", str(docs.project)])

    out = capsys.readouterr().out
    assert "Generated 1 manifest(s)" in out
    assert "Total categories: 1" in out
    assert "Total pages: 2" in out
    flat = json.loads((docs.project / "public" / "docs-flat.json").read_text(encoding="utf-8"))
    assert [entry["slug"] for entry in flat] == ["guides/setup", "guides/usage"]


def test_cli_meta_then_structure(docs: DocsTreeBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    docs.write({"guides/setup.md": "body\n"})

    main(["meta", str(docs.project)])
    assert (docs.root / "guides" / "_meta.json").exists()
    assert not (docs.project / "public" / "docs-structure.json").exists()

    main(["structure", str(docs.project)])
    assert (docs.project / "public" / "docs-structure.json").exists()
    assert "Total pages: 1" in capsys.readouterr().out


def test_cli_exits_non_zero_for_missing_docs_root(tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["build", str(tmp_path)])

    assert excinfo.value.code == 1
    assert "Documentation directory not found" in capsys.readouterr().err


def test_cli_log_file_receives_build_log(docs: DocsTreeBuilder, tmp_path) -> None:
    docs.write({"guides/setup.md": "body\n", "guides/broken.md": "---\ntitle: [oops\n---\n"})
    log_file = tmp_path / "build.log"

    try:
        main(["build", str(docs.project), "--log-file", str(log_file)])
    finally:
        configure_logging()

    contents = log_file.read_text(encoding="utf-8")
    assert "Navigation structure written to" in contents
    assert "WARNING docnav.diagnostics: Could not parse frontmatter" in contents


def test_cli_log_file_option_position() -> None:
    parser = _build_parser()
    assert parser.parse_args(["--log-file", "a.log", "meta"]).log_file == Path("a.log")
    assert parser.parse_args(["meta", "--log-file", "b.log"]).log_file == Path("b.log")
    assert parser.parse_args(["meta"]).log_file is None


def test_cli_exits_non_zero_for_unreadable_config(tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / ".docnav.yml").write_bytes(b"docs_dir: \xff\n")

    with pytest.raises(SystemExit) as excinfo:
        main(["build", str(tmp_path)])

    assert excinfo.value.code == 1
    assert "Failed to read" in capsys.readouterr().err
