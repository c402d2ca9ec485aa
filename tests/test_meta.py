"""Tests for docnav.meta manifest synthesis."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from docnav.diagnostics import CATEGORY_MISMATCH, SLUG_COLLISION, Diagnostics
from docnav.meta import MetaSynthesizer
from docnav.scanner import DocsRootNotFoundError
from tests._fixtures.docs_builder import DocsTreeBuilder


def test_pages_are_sorted_by_position(docs: DocsTreeBuilder) -> None:
    docs.write(
        {
            "guides/a.md": "---\nposition: 2\n---\n",
            "guides/b.md": "---\nposition: 1\n---\n",
        }
    )

    MetaSynthesizer(docs.config()).run()

    manifest = docs.read_manifest("guides")
    assert [item["slug"] for item in manifest["items"]] == ["b", "a"]
    assert [item["order"] for item in manifest["items"]] == [1, 2]


def test_missing_header_falls_back_to_filename_title(docs: DocsTreeBuilder) -> None:
    docs.write({"guides/getting-started.md": "# Getting started\n"})

    MetaSynthesizer(docs.config()).run()

    [item] = docs.read_manifest("guides")["items"]
    assert item == {"title": "Getting Started", "slug": "getting-started", "order": 999, "type": "page"}


def test_index_document_supplies_directory_metadata(docs: DocsTreeBuilder) -> None:
    docs.write(
        {
            "guides/index.md": """
                ---
                title: Guides
                icon: Map
                description: Task-oriented walkthroughs
                position: 3
                collapsed: true
                ---
                """,
            "guides/setup.md": "---\ntitle: Setup\norder: 5\nicon: Wrench\n---\n",
        }
    )

    MetaSynthesizer(docs.config()).run()

    manifest = docs.read_manifest("guides")
    assert manifest["title"] == "Guides"
    assert manifest["icon"] == "Map"
    assert manifest["description"] == "Task-oriented walkthroughs"
    assert manifest["order"] == 3
    assert manifest["collapsed"] is True
    assert manifest["items"] == [
        {"title": "Guides", "slug": "index", "order": 3, "type": "page", "icon": "Map"},
        {"title": "Setup", "slug": "setup", "order": 5, "type": "page", "icon": "Wrench"},
    ]


def test_directory_defaults_without_index(docs: DocsTreeBuilder) -> None:
    docs.write({"api-reference/client.md": "body\n", "misc-notes/one.md": "body\n"})

    MetaSynthesizer(docs.config()).run()

    api = docs.read_manifest("api-reference")
    assert api["title"] == "Api Reference"
    assert api["icon"] == "Code"
    assert api["order"] == 1
    assert api["description"] == "Documentation for api-reference"
    assert api["collapsed"] is False
    assert docs.read_manifest("misc-notes")["icon"] == "BookOpen"


def test_subdirectories_become_category_entries(docs: DocsTreeBuilder) -> None:
    docs.write(
        {
            "core/overview.md": "---\nposition: 0\n---\n",
            "core/later.md": "plain\n",
            "core/guides/intro.md": "plain\n",
            "core/runtime/index.md": "---\ntitle: Runtime Internals\nicon: Cpu\nposition: 4\n---\n",
            "core/runtime/gc.md": "plain\n",
        }
    )

    written = MetaSynthesizer(docs.config()).run()

    assert {path.parent.name for path in written} == {"core", "guides", "runtime"}
    items = docs.read_manifest("core")["items"]
    assert [(item["slug"], item["type"], item["order"]) for item in items] == [
        ("overview", "page", 0),
        ("guides", "category", 1),
        ("runtime", "category", 4),
        ("later", "page", 999),
    ]
    guides = next(item for item in items if item["slug"] == "guides")
    assert guides["title"] == "Guides"
    assert guides["icon"] == "Map"
    runtime = next(item for item in items if item["slug"] == "runtime")
    assert runtime["title"] == "Runtime Internals"
    assert runtime["icon"] == "Cpu"


def test_every_manifest_is_ordered_and_titled(docs: DocsTreeBuilder) -> None:
    docs.write(
        {
            "a/x.md": "---\norder: 7\n---\n",
            "a/y.md": "---\nposition: 2.5\n---\n",
            "a/z.md": "---\ntitle: ''\n---\n",
            "a/b/deep.md": "---\nposition: -1\n---\n",
            "a/b/c/deeper.md": "",
        }
    )

    written = MetaSynthesizer(docs.config()).run()

    assert len(written) == 3
    for path in written:
        items = json.loads(path.read_text(encoding="utf-8"))["items"]
        orders = [item["order"] for item in items]
        assert orders == sorted(orders)
        assert all(item["title"] for item in items)


def test_empty_and_reserved_directories_are_skipped(docs: DocsTreeBuilder) -> None:
    docs.mkdir("empty")
    docs.write(
        {
            "guides/setup.md": "body\n",
            "guides/_drafts/wip.md": "body\n",
            "guides/.hidden/secret.md": "body\n",
            "_templates/page.md": "body\n",
        }
    )

    written = MetaSynthesizer(docs.config()).run()

    assert [path.parent.name for path in written] == ["guides"]
    assert not (docs.root / "empty" / "_meta.json").exists()
    assert not (docs.root / "_templates" / "_meta.json").exists()
    assert [item["slug"] for item in docs.read_manifest("guides")["items"]] == ["setup"]


def test_category_mismatch_and_slug_collision_are_warned(docs: DocsTreeBuilder) -> None:
    docs.write(
        {
            "guides/setup.md": "---\ncategory: tutorials\n---\n",
            "guides/advanced.md": "body\n",
            "guides/advanced/tips.md": "body\n",
        }
    )
    diagnostics = Diagnostics()

    MetaSynthesizer(docs.config(), diagnostics).run()

    slugs = [(item["slug"], item["type"]) for item in docs.read_manifest("guides")["items"]]
    assert slugs == [("advanced", "category"), ("setup", "page")]
    assert len(diagnostics.of_kind(CATEGORY_MISMATCH)) == 1
    assert len(diagnostics.of_kind(SLUG_COLLISION)) == 1


def test_parallel_run_matches_sequential(docs: DocsTreeBuilder) -> None:
    docs.write(
        {
            "one/a.md": "---\nposition: 2\n---\n",
            "one/sub/b.md": "body\n",
            "two/c.md": "body\n",
            "three/d/e.md": "body\n",
        }
    )

    sequential = MetaSynthesizer(docs.config()).run()
    first = {path: path.read_text(encoding="utf-8") for path in sequential}
    parallel = MetaSynthesizer(docs.config(max_workers=4)).run()

    assert sorted(parallel) == sorted(sequential)
    assert {path: path.read_text(encoding="utf-8") for path in parallel} == first


def test_custom_default_icons_apply(docs: DocsTreeBuilder) -> None:
    docs.write({"tutorials/first.md": "body\n"})
    config = docs.config()
    config.default_icons["tutorials"] = "GraduationCap"

    MetaSynthesizer(config).run()

    assert docs.read_manifest("tutorials")["icon"] == "GraduationCap"


def test_missing_docs_root_is_fatal(tmp_path: Path) -> None:
    docs = DocsTreeBuilder(tmp_path)
    config = docs.config(docs_dir="nowhere")

    with pytest.raises(DocsRootNotFoundError) as excinfo:
        MetaSynthesizer(config).run()

    assert "nowhere" in str(excinfo.value)


def test_warnings_land_on_the_supplied_collector(docs: DocsTreeBuilder) -> None:
    docs.write({"guides/a.md": "---\ntitle: [unclosed\n---\n"})
    diagnostics = Diagnostics()

    synthesizer = MetaSynthesizer(docs.config(), diagnostics)
    synthesizer.run()

    assert synthesizer.diagnostics is diagnostics
    assert len(diagnostics) == 1


def test_directory_without_documents_is_not_a_category(docs: DocsTreeBuilder) -> None:
    docs.write({"guides/setup.md": "body\n"})
    docs.mkdir("guides/empty")
    docs.mkdir("guides/nested/deeper")

    written = MetaSynthesizer(docs.config()).run()

    assert [path.parent.name for path in written] == ["guides"]
    assert [item["slug"] for item in docs.read_manifest("guides")["items"]] == ["setup"]


def test_stale_manifest_is_removed_when_directory_empties(docs: DocsTreeBuilder) -> None:
    docs.write({"guides/setup.md": "body\n", "guides/old/x.md": "body\n"})
    config = docs.config()
    MetaSynthesizer(config).run()
    assert (docs.root / "guides" / "old" / "_meta.json").exists()

    (docs.root / "guides" / "old" / "x.md").unlink()
    MetaSynthesizer(config).run()

    assert not (docs.root / "guides" / "old" / "_meta.json").exists()
    assert [item["slug"] for item in docs.read_manifest("guides")["items"]] == ["setup"]
