"""Per-directory manifest (``_meta.json``) synthesis."""

from __future__ import annotations

import json
from collections import deque
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Deque, Dict, Iterable, List, Optional, Set, Tuple

from .config import DocNavConfig
from .diagnostics import CATEGORY_MISMATCH, SLUG_COLLISION, Diagnostics
from .frontmatter import extract_frontmatter
from .logging import get_logger
from .models import CATEGORY, INDEX_SLUG, PAGE, DirectoryManifest, DocumentMeta, ManifestEntry
from .scanner import (
    DOCUMENT_SUFFIX,
    INDEX_DOCUMENT,
    has_documents,
    humanize,
    list_documents,
    list_subdirectories,
    require_docs_root,
)

PAGE_DEFAULT_ORDER = 999
CATEGORY_DEFAULT_ORDER = 1
FALLBACK_CATEGORY_ICON = "BookOpen"


class MetaSynthesizer:
    """Writes one ordered manifest per non-empty directory below the docs root."""

    def __init__(self, config: DocNavConfig, diagnostics: Diagnostics | None = None) -> None:
        self.config = config
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.logger = get_logger("meta")

    def run(self, docs_root: Path | None = None) -> List[Path]:
        """Synthesize manifests for every category below ``docs_root``.

        Directories are drained from a breadth-first work queue. All
        directories of one level are independent, so they are processed on a
        thread pool when ``max_workers`` allows it. The method returns only
        after every manifest has been written.
        """
        root = require_docs_root(docs_root or self.config.docs_root)
        categories = list_subdirectories(root, self.config)
        self.logger.info(
            "Found %d top-level categories: %s",
            len(categories),
            ", ".join(path.name for path in categories) or "(none)",
        )

        written: List[Path] = []
        seen: Set[Path] = set()
        pending: Deque[Path] = deque(categories)
        while pending:
            level: List[Path] = []
            for directory in pending:
                resolved = directory.resolve()
                if resolved in seen:
                    self.logger.debug("Already processed %s, skipping", directory)
                    continue
                seen.add(resolved)
                level.append(directory)
            pending.clear()
            for manifest_path, subdirectories in self._process_level(level):
                if manifest_path is not None:
                    written.append(manifest_path)
                pending.extend(subdirectories)

        self.logger.info("Generated %d manifest(s)", len(written))
        return written

    def synthesize(self, directory: Path) -> Optional[DirectoryManifest]:
        """Build the manifest for ``directory``; None when it has no content."""
        documents = list_documents(directory)
        subdirectories = [
            path for path in list_subdirectories(directory, self.config) if has_documents(path, self.config)
        ]
        if not documents and not subdirectories:
            self.logger.debug("Empty directory, skipping %s", directory)
            return None

        metadata: Dict[str, DocumentMeta] = {
            path.name: extract_frontmatter(path, self.diagnostics) for path in documents
        }
        directory_meta = metadata.get(INDEX_DOCUMENT, DocumentMeta())
        subdirectory_names = {path.name for path in subdirectories}

        items: List[ManifestEntry] = []
        for path in documents:
            meta = metadata[path.name]
            slug = path.name[: -len(DOCUMENT_SUFFIX)]
            if slug in subdirectory_names:
                self.diagnostics.warn(
                    SLUG_COLLISION,
                    f"Page '{slug}' shares its slug with a subdirectory; keeping the category",
                    path=path,
                )
                continue
            if meta.category and slug != INDEX_SLUG and meta.category != directory.name:
                self.diagnostics.warn(
                    CATEGORY_MISMATCH,
                    f"Frontmatter category '{meta.category}' does not match directory '{directory.name}'",
                    path=path,
                )
            entry = self._page_entry(slug, path.name, meta)
            items.append(entry)
            self.logger.debug("Added page: %s (order: %s)", entry.title, entry.order)

        for subdirectory in subdirectories:
            entry = self._category_entry(subdirectory)
            items.append(entry)
            self.logger.debug("Added category: %s (order: %s)", entry.title, entry.order)

        items.sort(key=lambda item: item.order)

        name = directory.name
        return DirectoryManifest(
            title=directory_meta.title or humanize(name),
            order=directory_meta.resolved_order(CATEGORY_DEFAULT_ORDER),
            icon=directory_meta.icon or self.config.default_icons.get(name) or FALLBACK_CATEGORY_ICON,
            description=directory_meta.description or f"Documentation for {name}",
            collapsed=bool(directory_meta.collapsed),
            items=items,
        )

    def write_manifest(self, directory: Path, manifest: DirectoryManifest) -> Path:
        meta_path = directory / self.config.meta_filename
        meta_path.write_text(json.dumps(manifest.to_dict(), indent=2) + "\n", encoding="utf-8")
        self.logger.debug("Generated %s", meta_path)
        return meta_path

    # ------------------------------------------------------------------
    # Internal helpers

    def _process_level(self, level: List[Path]) -> Iterable[Tuple[Optional[Path], List[Path]]]:
        if self.config.max_workers > 1 and len(level) > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                return list(executor.map(self._process_directory, level))
        return [self._process_directory(directory) for directory in level]

    def _process_directory(self, directory: Path) -> Tuple[Optional[Path], List[Path]]:
        self.logger.info("Processing directory: %s", directory.name)
        manifest = self.synthesize(directory)
        subdirectories = list_subdirectories(directory, self.config)
        if manifest is None:
            self._remove_stale_manifest(directory)
            return None, subdirectories
        return self.write_manifest(directory, manifest), subdirectories

    def _remove_stale_manifest(self, directory: Path) -> None:
        meta_path = directory / self.config.meta_filename
        if meta_path.is_file():
            meta_path.unlink()
            self.logger.info("Removed stale %s", meta_path)

    def _page_entry(self, slug: str, filename: str, meta: DocumentMeta) -> ManifestEntry:
        return ManifestEntry(
            title=meta.title or humanize(filename),
            slug=slug,
            order=meta.resolved_order(PAGE_DEFAULT_ORDER),
            type=PAGE,
            icon=meta.icon,
        )

    def _category_entry(self, subdirectory: Path) -> ManifestEntry:
        index_path = subdirectory / INDEX_DOCUMENT
        meta = extract_frontmatter(index_path, self.diagnostics) if index_path.is_file() else DocumentMeta()
        name = subdirectory.name
        return ManifestEntry(
            title=meta.title or humanize(name),
            slug=name,
            order=meta.resolved_order(CATEGORY_DEFAULT_ORDER),
            type=CATEGORY,
            icon=meta.icon or self.config.default_icons.get(name),
        )


__all__ = [
    "CATEGORY_DEFAULT_ORDER",
    "FALLBACK_CATEGORY_ICON",
    "MetaSynthesizer",
    "PAGE_DEFAULT_ORDER",
]
