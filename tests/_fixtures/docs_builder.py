"""Helper utilities for constructing temporary documentation trees in tests."""

from __future__ import annotations

import json
import textwrap
from pathlib import Path
from typing import Any, Mapping

from docnav.config import DocNavConfig


class DocsTreeBuilder:
    """Utility for writing Markdown documents into a throwaway docs root."""

    def __init__(self, tmp_path: Path) -> None:
        self.project = tmp_path / "project"
        self.root = self.project / "public" / "docs"
        self.root.mkdir(parents=True)

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries below the docs root."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def mkdir(self, relative: str) -> Path:
        path = self.root / relative
        path.mkdir(parents=True, exist_ok=True)
        return path

    def write_manifest(self, relative: str, payload: Mapping[str, Any]) -> Path:
        """Write a hand-made `_meta.json` into ``relative``."""
        directory = self.mkdir(relative)
        path = directory / "_meta.json"
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        return path

    def read_manifest(self, relative: str) -> dict[str, Any]:
        return json.loads((self.root / relative / "_meta.json").read_text(encoding="utf-8"))

    def config(self, **overrides: Any) -> DocNavConfig:
        """Return a config whose docs root is this builder's root."""
        return DocNavConfig(root=self.project, **overrides)


__all__ = ["DocsTreeBuilder"]
