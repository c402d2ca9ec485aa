"""YAML frontmatter extraction for Markdown documents."""

from __future__ import annotations

import datetime as _dt
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .diagnostics import INVALID_FIELD, MALFORMED_FRONTMATTER, UNREADABLE_DOCUMENT, Diagnostics
from .logging import get_logger
from .models import DocumentMeta, Number

_FRONTMATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)^---[ \t]*$", re.DOTALL | re.MULTILINE)
_OPENING_RE = re.compile(r"\A---[ \t]*\r?\n")

_STRING_FIELDS = ("title", "description", "category", "icon")
_KNOWN_KEYS = {
    "title",
    "description",
    "category",
    "position",
    "order",
    "icon",
    "lastUpdated",
    "tags",
    "related",
    "collapsed",
}

logger = get_logger("frontmatter")


def split_frontmatter(text: str) -> Optional[str]:
    """Return the raw header block, or None when the document has none."""
    match = _FRONTMATTER_RE.match(text.lstrip("\ufeff"))
    if not match:
        return None
    return match.group(1)


def extract_frontmatter(path: Path, diagnostics: Diagnostics | None = None) -> DocumentMeta:
    """Read ``path`` and return its metadata; problems degrade to empty metadata."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        _warn(diagnostics, UNREADABLE_DOCUMENT, f"Could not read frontmatter: {exc}", path)
        return DocumentMeta()

    header = split_frontmatter(text)
    if header is None:
        if _OPENING_RE.match(text.lstrip("\ufeff")):
            _warn(diagnostics, MALFORMED_FRONTMATTER, "Unterminated frontmatter: missing closing ---", path)
        return DocumentMeta()

    try:
        data = yaml.safe_load(header)
    except yaml.YAMLError as exc:
        problem = getattr(exc, "problem", None) or "invalid YAML"
        _warn(diagnostics, MALFORMED_FRONTMATTER, f"Could not parse frontmatter: {problem}", path)
        return DocumentMeta()

    if data is None:
        return DocumentMeta()
    if not isinstance(data, dict):
        _warn(diagnostics, MALFORMED_FRONTMATTER, "Frontmatter is not a key-value mapping", path)
        return DocumentMeta()

    return build_document_meta(data, path=path, diagnostics=diagnostics)


def build_document_meta(
    data: Dict[str, Any],
    *,
    path: Path | None = None,
    diagnostics: Diagnostics | None = None,
) -> DocumentMeta:
    """Coerce a raw mapping into the fixed ``DocumentMeta`` schema."""
    meta = DocumentMeta()
    for key in _STRING_FIELDS:
        value = _as_text(data.get(key))
        if value is None and data.get(key) is not None:
            _warn(diagnostics, INVALID_FIELD, f"Ignoring non-scalar '{key}' value", path)
        setattr(meta, key, value or None)

    for key in ("position", "order"):
        raw = data.get(key)
        if raw is None:
            continue
        number = _as_number(raw)
        if number is None:
            _warn(diagnostics, INVALID_FIELD, f"Ignoring non-numeric '{key}' value {raw!r}", path)
        setattr(meta, key, number)

    last_updated = data.get("lastUpdated")
    if isinstance(last_updated, (_dt.date, _dt.datetime)):
        meta.last_updated = last_updated.isoformat()
    else:
        meta.last_updated = _as_text(last_updated)

    meta.tags = _as_str_list(data.get("tags"))
    meta.related = _as_str_list(data.get("related"))

    collapsed = data.get("collapsed")
    if collapsed is not None:
        meta.collapsed = _as_bool(collapsed)
        if meta.collapsed is None:
            _warn(diagnostics, INVALID_FIELD, f"Ignoring non-boolean 'collapsed' value {collapsed!r}", path)

    meta.extra = {str(key): value for key, value in data.items() if key not in _KNOWN_KEYS}
    return meta


def _warn(diagnostics: Diagnostics | None, kind: str, message: str, path: Path | None) -> None:
    if diagnostics is not None:
        diagnostics.warn(kind, message, path=path)
    else:
        logger.warning("%s (%s)", message, path)


def _as_text(value: Any) -> Optional[str]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (str, int, float)):
        return str(value).strip()
    return None


def _as_number(value: Any) -> Optional[Number]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        cleaned = value.strip()
        try:
            return int(cleaned)
        except ValueError:
            pass
        try:
            return float(cleaned)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if isinstance(item, (str, int, float)) and not isinstance(item, bool)]
    return []


__all__ = ["build_document_meta", "extract_frontmatter", "split_frontmatter"]
