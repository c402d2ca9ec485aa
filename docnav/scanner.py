"""Directory listing helpers shared by the manifest and navigation phases."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Set

from .config import DocNavConfig

DOCUMENT_SUFFIX = ".md"
INDEX_DOCUMENT = "index" + DOCUMENT_SUFFIX

_WORD_START = re.compile(r"\b\w")


class DocsRootNotFoundError(FileNotFoundError):
    """Raised when the documentation root directory does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Documentation directory not found: {path}")
        self.path = path


def require_docs_root(path: Path) -> Path:
    """Return ``path`` resolved, or raise when it is not a directory."""
    if not path.is_dir():
        raise DocsRootNotFoundError(path)
    return path.resolve()


def list_documents(directory: Path) -> List[Path]:
    """Markdown files directly inside ``directory``, sorted by name."""
    try:
        entries = list(directory.iterdir())
    except OSError:
        return []
    return sorted(
        (entry for entry in entries if entry.is_file() and entry.name.endswith(DOCUMENT_SUFFIX)),
        key=lambda entry: entry.name,
    )


def list_subdirectories(directory: Path, config: DocNavConfig) -> List[Path]:
    """Navigable subdirectories of ``directory``, sorted by name."""
    try:
        entries = list(directory.iterdir())
    except OSError:
        return []
    return sorted(
        (entry for entry in entries if entry.is_dir() and not config.is_excluded_dir(entry.name)),
        key=lambda entry: entry.name,
    )


def has_documents(directory: Path, config: DocNavConfig) -> bool:
    """True when a document exists anywhere below ``directory`` in a navigable path."""
    seen: Set[Path] = set()
    pending: List[Path] = [directory]
    while pending:
        current = pending.pop()
        resolved = current.resolve()
        if resolved in seen:
            continue
        seen.add(resolved)
        if list_documents(current):
            return True
        pending.extend(list_subdirectories(current, config))
    return False


def humanize(name: str) -> str:
    """Turn ``getting-started.md`` or ``getting-started`` into ``Getting Started``."""
    if name.endswith(DOCUMENT_SUFFIX):
        name = name[: -len(DOCUMENT_SUFFIX)]
    spaced = name.replace("-", " ")
    return _WORD_START.sub(lambda match: match.group(0).upper(), spaced)


__all__ = [
    "DOCUMENT_SUFFIX",
    "DocsRootNotFoundError",
    "INDEX_DOCUMENT",
    "has_documents",
    "humanize",
    "list_documents",
    "list_subdirectories",
    "require_docs_root",
]
