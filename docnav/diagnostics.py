"""Build-scoped collector for non-fatal warnings."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Iterator, List, Optional, Set

from .logging import get_logger

MALFORMED_FRONTMATTER = "malformed-frontmatter"
UNREADABLE_DOCUMENT = "unreadable-document"
INVALID_FIELD = "invalid-field"
CATEGORY_MISMATCH = "category-mismatch"
CYCLIC_CATEGORY = "cyclic-category"
SLUG_COLLISION = "slug-collision"
MISSING_MANIFEST = "missing-manifest"
MALFORMED_MANIFEST = "malformed-manifest"
DANGLING_CATEGORY = "dangling-category"
DANGLING_PAGE = "dangling-page"


@dataclass(frozen=True)
class Diagnostic:
    """A single recoverable problem found while building navigation."""

    kind: str
    message: str
    path: Optional[str] = None

    def format(self) -> str:
        if self.path:
            return f"{self.message} ({self.path})"
        return self.message


class Diagnostics:
    """Collects warnings for one build and reports them once at the end.

    Every phase appends to the same collector and repeated identical warnings
    are recorded once; ``flush`` logs everything that was recorded and is a
    no-op on the second call.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or get_logger("diagnostics")
        self._items: List[Diagnostic] = []
        self._seen: Set[Diagnostic] = set()
        self._lock = threading.Lock()
        self._flushed = False

    def warn(self, kind: str, message: str, *, path: object | None = None) -> Diagnostic:
        diagnostic = Diagnostic(kind=kind, message=message, path=str(path) if path is not None else None)
        with self._lock:
            if diagnostic in self._seen:
                return diagnostic
            self._seen.add(diagnostic)
            self._items.append(diagnostic)
        self._logger.debug("Recorded %s: %s", kind, diagnostic.format())
        return diagnostic

    def of_kind(self, kind: str) -> List[Diagnostic]:
        with self._lock:
            return [item for item in self._items if item.kind == kind]

    def flush(self) -> int:
        """Log every collected warning; return how many were reported."""
        with self._lock:
            if self._flushed:
                return 0
            self._flushed = True
            items = list(self._items)
        for item in items:
            self._logger.warning("%s", item.format())
        if items:
            self._logger.warning("Build finished with %d warning(s)", len(items))
        return len(items)

    @property
    def flushed(self) -> bool:
        return self._flushed

    def __iter__(self) -> Iterator[Diagnostic]:
        with self._lock:
            return iter(list(self._items))

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


__all__ = [
    "CATEGORY_MISMATCH",
    "CYCLIC_CATEGORY",
    "DANGLING_CATEGORY",
    "DANGLING_PAGE",
    "Diagnostic",
    "Diagnostics",
    "INVALID_FIELD",
    "MALFORMED_FRONTMATTER",
    "MALFORMED_MANIFEST",
    "MISSING_MANIFEST",
    "SLUG_COLLISION",
    "UNREADABLE_DOCUMENT",
]
