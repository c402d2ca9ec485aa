"""Core data models shared across docnav components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

Number = Union[int, float]

PAGE = "page"
CATEGORY = "category"
INDEX_SLUG = "index"


@dataclass
class DocumentMeta:
    """Frontmatter header of a single document with documented defaults."""

    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    position: Optional[Number] = None
    order: Optional[Number] = None
    icon: Optional[str] = None
    last_updated: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    related: List[str] = field(default_factory=list)
    collapsed: Optional[bool] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def resolved_order(self, default: Number) -> Number:
        """Prefer ``position`` over the legacy ``order`` key, then ``default``."""
        if self.position is not None:
            return self.position
        if self.order is not None:
            return self.order
        return default

    def is_empty(self) -> bool:
        return self == DocumentMeta()


@dataclass
class ManifestEntry:
    """One line item of a directory manifest."""

    title: str
    slug: str
    order: Number
    type: str
    icon: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "title": self.title,
            "slug": self.slug,
            "order": self.order,
            "type": self.type,
        }
        if self.icon:
            data["icon"] = self.icon
        return data

    @classmethod
    def from_dict(cls, payload: object) -> Optional["ManifestEntry"]:
        if not isinstance(payload, dict):
            return None
        slug = payload.get("slug")
        entry_type = payload.get("type")
        if not isinstance(slug, str) or not slug:
            return None
        if entry_type not in (PAGE, CATEGORY):
            return None
        title = payload.get("title")
        icon = payload.get("icon")
        return cls(
            title=title if isinstance(title, str) and title else slug,
            slug=slug,
            order=_as_number(payload.get("order"), 999),
            type=entry_type,
            icon=icon if isinstance(icon, str) and icon else None,
        )


@dataclass
class DirectoryManifest:
    """Persisted ``_meta.json`` summary of one directory."""

    title: str
    order: Number
    icon: str
    description: str
    collapsed: bool = False
    items: List[ManifestEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "order": self.order,
            "icon": self.icon,
            "description": self.description,
            "collapsed": self.collapsed,
            "items": [item.to_dict() for item in self.items],
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any], *, fallback_title: str) -> "DirectoryManifest":
        """Read a manifest back from JSON, filling the tree-builder defaults."""
        title = payload.get("title")
        icon = payload.get("icon")
        description = payload.get("description")
        collapsed = payload.get("collapsed")
        items: List[ManifestEntry] = []
        raw_items = payload.get("items")
        if isinstance(raw_items, list):
            for raw in raw_items:
                entry = ManifestEntry.from_dict(raw)
                if entry is not None:
                    items.append(entry)
        return cls(
            title=title if isinstance(title, str) and title else fallback_title,
            order=_as_number(payload.get("order"), 999),
            icon=icon if isinstance(icon, str) and icon else "FileText",
            description=description if isinstance(description, str) else "",
            collapsed=collapsed if isinstance(collapsed, bool) else False,
            items=items,
        )


@dataclass
class IndexPage:
    """Landing document attached to a navigation node instead of a child."""

    title: str
    path: str
    slug: str = INDEX_SLUG
    icon: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"title": self.title, "slug": self.slug, "path": self.path}
        if self.icon:
            data["icon"] = self.icon
        return data


@dataclass
class PageNode:
    """Leaf document in the navigation tree."""

    title: str
    slug: str
    path: str
    order: Number
    icon: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "title": self.title,
            "slug": self.slug,
            "path": self.path,
            "type": PAGE,
            "order": self.order,
        }
        if self.icon:
            data["icon"] = self.icon
        return data


@dataclass
class NavigationNode:
    """Directory node in the navigation tree."""

    title: str
    slug: str
    icon: str
    description: str
    order: Number
    collapsed: bool = False
    children: List[Union["NavigationNode", PageNode]] = field(default_factory=list)
    index_page: Optional[IndexPage] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "title": self.title,
            "slug": self.slug,
            "icon": self.icon,
            "description": self.description,
            "order": self.order,
            "collapsed": self.collapsed,
            "children": [child.to_dict() for child in self.children],
        }
        if self.index_page is not None:
            data["indexPage"] = self.index_page.to_dict()
        return data


@dataclass
class NavigationStructure:
    """Top-level navigation artifact handed to the rendering layer."""

    navigation: List[NavigationNode]
    last_generated: str
    version: str = "1.0.0"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "navigation": [node.to_dict() for node in self.navigation],
            "lastGenerated": self.last_generated,
            "version": self.version,
        }


@dataclass
class FlatPageEntry:
    """Search/sitemap record for one navigable page."""

    title: str
    path: str
    slug: str
    category: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "path": self.path,
            "slug": self.slug,
            "category": self.category,
        }


@dataclass
class DocStats:
    """Diagnostic counts derived from the flattened navigation."""

    total_categories: int = 0
    total_pages: int = 0
    pages_per_category: Dict[str, int] = field(default_factory=dict)
    deepest_level: int = 0


def _as_number(value: Any, default: Number) -> Number:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return value
    return default


__all__ = [
    "CATEGORY",
    "DirectoryManifest",
    "DocStats",
    "DocumentMeta",
    "FlatPageEntry",
    "INDEX_SLUG",
    "IndexPage",
    "ManifestEntry",
    "NavigationNode",
    "NavigationStructure",
    "Number",
    "PAGE",
    "PageNode",
]
