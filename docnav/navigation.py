"""Assemble per-directory manifests into one navigation tree."""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Callable, Iterator, List, Optional

from .config import DocNavConfig
from .diagnostics import (
    CYCLIC_CATEGORY,
    DANGLING_CATEGORY,
    DANGLING_PAGE,
    MALFORMED_MANIFEST,
    MISSING_MANIFEST,
    Diagnostics,
)
from .logging import get_logger
from .models import (
    CATEGORY,
    INDEX_SLUG,
    DirectoryManifest,
    IndexPage,
    ManifestEntry,
    NavigationNode,
    NavigationStructure,
    Number,
    PageNode,
)
from .scanner import DOCUMENT_SUFFIX, has_documents, list_subdirectories, require_docs_root

STRUCTURE_VERSION = "1.0.0"


class NodeState(enum.Enum):
    PENDING = "pending"
    RESOLVING = "resolving"
    RESOLVED = "resolved"


@dataclass
class _Frame:
    """A directory being resolved on the explicit work stack."""

    directory: Path
    node: NavigationNode
    entries: Iterator[ManifestEntry]
    parent: Optional["_Frame"] = None
    state: NodeState = NodeState.PENDING


def _utc_timestamp() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class NavigationBuilder:
    """Reads ``_meta.json`` manifests top-down and resolves them into a tree.

    Broken references never abort the build: a missing manifest prunes its
    subtree, and a category or page entry pointing at nothing on disk is
    skipped. Each case is recorded on the diagnostics collector.
    """

    def __init__(
        self,
        config: DocNavConfig,
        diagnostics: Diagnostics | None = None,
        *,
        clock: Callable[[], str] = _utc_timestamp,
    ) -> None:
        self.config = config
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.logger = get_logger("navigation")
        self._clock = clock

    def build(self, docs_root: Path | None = None) -> NavigationStructure:
        """Return the navigation structure for every top-level category."""
        root = require_docs_root(docs_root or self.config.docs_root)
        self.logger.info("Building documentation navigation structure...")

        navigation: List[NavigationNode] = []
        for directory in list_subdirectories(root, self.config):
            if not has_documents(directory, self.config):
                self.logger.debug("Empty directory, skipping %s", directory)
                continue
            node = self.resolve(directory, directory.name)
            if node is not None:
                navigation.append(node)
        navigation.sort(key=lambda node: node.order)

        self.logger.info("Found %d top-level categories", len(navigation))
        return NavigationStructure(
            navigation=navigation,
            last_generated=self._clock(),
            version=STRUCTURE_VERSION,
        )

    def resolve(self, directory: Path, slug: str) -> Optional[NavigationNode]:
        """Resolve ``directory`` and everything below it into a node."""
        root_frame = self._open(directory, slug)
        if root_frame is None:
            return None

        stack: List[_Frame] = [root_frame]
        while stack:
            frame = stack[-1]
            if frame.state is NodeState.PENDING:
                frame.state = NodeState.RESOLVING
                self.logger.debug("Resolving %s", frame.node.slug)
            child_frame = self._advance(frame)
            if child_frame is not None:
                stack.append(child_frame)
                continue

            frame.node.children.sort(key=lambda child: child.order)
            frame.state = NodeState.RESOLVED
            stack.pop()
            if frame.parent is not None:
                frame.parent.node.children.append(frame.node)
        return root_frame.node

    def read_manifest(self, directory: Path) -> Optional[DirectoryManifest]:
        meta_path = directory / self.config.meta_filename
        try:
            payload = json.loads(meta_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            self.diagnostics.warn(
                MISSING_MANIFEST,
                f"No {self.config.meta_filename} found; skipping directory",
                path=directory,
            )
            return None
        except (OSError, ValueError) as exc:
            self.diagnostics.warn(
                MALFORMED_MANIFEST,
                f"Could not read {self.config.meta_filename}: {exc}",
                path=directory,
            )
            return None
        if not isinstance(payload, dict):
            self.diagnostics.warn(
                MALFORMED_MANIFEST,
                f"{self.config.meta_filename} must contain an object",
                path=directory,
            )
            return None
        return DirectoryManifest.from_dict(payload, fallback_title=directory.name)

    # ------------------------------------------------------------------
    # Internal helpers

    def _open(
        self,
        directory: Path,
        slug: str,
        *,
        parent: Optional[_Frame] = None,
        order_override: Optional[Number] = None,
    ) -> Optional[_Frame]:
        manifest = self.read_manifest(directory)
        if manifest is None:
            return None
        node = NavigationNode(
            title=manifest.title,
            slug=slug,
            icon=manifest.icon,
            description=manifest.description,
            order=manifest.order if order_override is None else order_override,
            collapsed=manifest.collapsed,
        )
        return _Frame(directory=directory, node=node, entries=iter(manifest.items), parent=parent)

    def _advance(self, frame: _Frame) -> Optional[_Frame]:
        """Consume entries until one opens a subdirectory frame."""
        for entry in frame.entries:
            if not _is_single_segment(entry.slug):
                self._warn_dangling(entry, frame)
                continue
            if entry.type == CATEGORY:
                subdirectory = frame.directory / entry.slug
                if not subdirectory.is_dir():
                    self._warn_dangling(entry, frame)
                    continue
                if _loops_back(frame, subdirectory):
                    self.diagnostics.warn(
                        CYCLIC_CATEGORY,
                        f"Category '{entry.slug}' in {frame.node.slug} points back at a directory still being resolved",
                        path=subdirectory,
                    )
                    continue
                child = self._open(
                    subdirectory,
                    f"{frame.node.slug}/{entry.slug}",
                    parent=frame,
                    order_override=entry.order,
                )
                if child is not None:
                    return child
                continue
            if entry.slug == INDEX_SLUG:
                frame.node.index_page = IndexPage(
                    title=entry.title or frame.node.title,
                    path=self._url(frame.node.slug),
                    icon=entry.icon,
                )
                continue
            if not (frame.directory / f"{entry.slug}{DOCUMENT_SUFFIX}").is_file():
                self._warn_dangling(entry, frame)
                continue
            frame.node.children.append(
                PageNode(
                    title=entry.title or entry.slug,
                    slug=entry.slug,
                    path=self._url(f"{frame.node.slug}/{entry.slug}"),
                    order=entry.order,
                    icon=entry.icon,
                )
            )
        return None

    def _warn_dangling(self, entry: ManifestEntry, frame: _Frame) -> None:
        if entry.type == CATEGORY:
            self.diagnostics.warn(
                DANGLING_CATEGORY,
                f"Category directory not found: '{entry.slug}' in {frame.node.slug}",
                path=frame.directory / entry.slug,
            )
        else:
            self.diagnostics.warn(
                DANGLING_PAGE,
                f"Markdown file not found: '{entry.slug}{DOCUMENT_SUFFIX}' in {frame.node.slug}",
                path=frame.directory / f"{entry.slug}{DOCUMENT_SUFFIX}",
            )

    def _url(self, item_path: str) -> str:
        return f"{self.config.url_prefix}/{item_path}"


def _loops_back(frame: _Frame, directory: Path) -> bool:
    target = directory.resolve()
    current: Optional[_Frame] = frame
    while current is not None:
        if current.state is NodeState.RESOLVING and current.directory.resolve() == target:
            return True
        current = current.parent
    return False


def _is_single_segment(slug: str) -> bool:
    return slug not in {".", ".."} and "/" not in slug and "\\" not in slug


__all__ = ["NavigationBuilder", "NodeState", "STRUCTURE_VERSION"]
