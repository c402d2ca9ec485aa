"""Flatten the navigation tree for search/sitemap use and derive stats."""

from __future__ import annotations

from typing import List, Sequence, Tuple, Union

from .models import DocStats, FlatPageEntry, NavigationNode, NavigationStructure, PageNode

ROOT_CATEGORY = "root"


def flatten_navigation(nodes: Sequence[Union[NavigationNode, PageNode]]) -> List[FlatPageEntry]:
    """Depth-first list of every page node; attached index pages are skipped."""
    result: List[FlatPageEntry] = []
    stack: List[Tuple[Union[NavigationNode, PageNode], Tuple[str, ...]]] = [
        (node, ()) for node in reversed(nodes)
    ]
    while stack:
        node, ancestry = stack.pop()
        segment = node.slug.rsplit("/", 1)[-1]
        if isinstance(node, PageNode):
            result.append(
                FlatPageEntry(
                    title=node.title,
                    path=node.path,
                    slug="/".join(ancestry + (segment,)),
                    category="/".join(ancestry),
                )
            )
            continue
        current = ancestry + (segment,)
        stack.extend((child, current) for child in reversed(node.children))
    return result


def compute_stats(
    structure: NavigationStructure, flat: Sequence[FlatPageEntry] | None = None
) -> DocStats:
    """Count categories and pages; reuses ``flat`` when already computed."""
    pages = list(flat) if flat is not None else flatten_navigation(structure.navigation)
    stats = DocStats(total_categories=len(structure.navigation), total_pages=len(pages))
    for page in pages:
        category = page.category or ROOT_CATEGORY
        stats.pages_per_category[category] = stats.pages_per_category.get(category, 0) + 1
        level = len(page.slug.split("/"))
        if level > stats.deepest_level:
            stats.deepest_level = level
    return stats


__all__ = ["ROOT_CATEGORY", "compute_stats", "flatten_navigation"]
