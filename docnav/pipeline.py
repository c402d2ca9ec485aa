"""Pipeline orchestration for the meta and structure build phases."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List

from .config import DocNavConfig, load_config
from .diagnostics import Diagnostics
from .flatten import compute_stats, flatten_navigation
from .logging import get_logger
from .meta import MetaSynthesizer
from .models import DocStats, FlatPageEntry, NavigationStructure
from .navigation import NavigationBuilder
from .scanner import require_docs_root


@dataclass
class StructureOutcome:
    """Artifacts produced by the navigation phase."""

    structure: NavigationStructure
    flat: List[FlatPageEntry]
    stats: DocStats
    structure_path: Path
    flat_path: Path


@dataclass
class BuildResult:
    """Everything a full build produced, including its warnings."""

    manifests: List[Path]
    outcome: StructureOutcome
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


class BuildPipeline:
    """Runs manifest synthesis, then tree assembly, then artifact output.

    A single ``Diagnostics`` collector lives for the duration of one call to
    ``run`` (or to either half) and is flushed to the log once at the end.
    """

    def __init__(self, config: DocNavConfig) -> None:
        self.config = config
        self.logger = get_logger("pipeline")

    @classmethod
    def from_path(cls, path: str | Path) -> "BuildPipeline":
        project_root = Path(path).expanduser().resolve()
        return cls(load_config(project_root))

    def run(self) -> BuildResult:
        """Full build: every manifest is written before the tree is read."""
        diagnostics = Diagnostics()
        try:
            manifests = self._synthesize(diagnostics)
            outcome = self._assemble(diagnostics)
        finally:
            diagnostics.flush()
        return BuildResult(manifests=manifests, outcome=outcome, diagnostics=diagnostics)

    def generate_meta(self) -> tuple[List[Path], Diagnostics]:
        diagnostics = Diagnostics()
        try:
            manifests = self._synthesize(diagnostics)
        finally:
            diagnostics.flush()
        return manifests, diagnostics

    def generate_structure(self) -> tuple[StructureOutcome, Diagnostics]:
        diagnostics = Diagnostics()
        try:
            outcome = self._assemble(diagnostics)
        finally:
            diagnostics.flush()
        return outcome, diagnostics

    # ------------------------------------------------------------------
    # Internal helpers

    def _synthesize(self, diagnostics: Diagnostics) -> List[Path]:
        docs_root = require_docs_root(self.config.docs_root)
        self.logger.info("Scanning documentation structure in %s", docs_root)
        return MetaSynthesizer(self.config, diagnostics).run(docs_root)

    def _assemble(self, diagnostics: Diagnostics) -> StructureOutcome:
        docs_root = require_docs_root(self.config.docs_root)
        structure = NavigationBuilder(self.config, diagnostics).build(docs_root)
        flat = flatten_navigation(structure.navigation)
        stats = compute_stats(structure, flat)

        self.logger.info("Total categories: %d", stats.total_categories)
        self.logger.info("Total pages: %d", stats.total_pages)
        self.logger.info("Deepest nesting: %d levels", stats.deepest_level)

        structure_path = _write_json(self.config.structure_path, structure.to_dict())
        self.logger.info("Navigation structure written to %s", structure_path)
        flat_path = _write_json(self.config.flat_path, [entry.to_dict() for entry in flat])
        self.logger.info("Flat page list written to %s", flat_path)

        return StructureOutcome(
            structure=structure,
            flat=flat,
            stats=stats,
            structure_path=structure_path,
            flat_path=flat_path,
        )


def _write_json(path: Path, payload: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    return path


__all__ = ["BuildPipeline", "BuildResult", "StructureOutcome"]
