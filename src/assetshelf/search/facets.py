"""Catalog facets — categories, tags, dashboard counts and sort orders."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass

from assetshelf.db.models import Asset

SORT_ORDERS: tuple[str, ...] = ("newest", "oldest", "name", "size", "category")


@dataclass
class CatalogStats:
    total: int = 0
    layouts: int = 0
    images: int = 0
    modules: int = 0
    categories: int = 0
    tags: int = 0


def get_categories(assets: Iterable[Asset]) -> list[str]:
    """Distinct categories in first-seen order."""
    return list(dict.fromkeys(a.category for a in assets if a.category))


def get_all_tags(assets: Iterable[Asset]) -> list[str]:
    """Distinct tags in first-seen order."""
    return list(dict.fromkeys(tag for a in assets for tag in a.tags))


def tag_counts(assets: Iterable[Asset]) -> Counter[str]:
    return Counter(tag for a in assets for tag in a.tags)


def catalog_stats(assets: Iterable[Asset]) -> CatalogStats:
    items = list(assets)
    return CatalogStats(
        total=len(items),
        layouts=sum(1 for a in items if a.category == "layout"),
        images=sum(1 for a in items if a.type == "image"),
        # "module" sub-assets plus JSON entries classified as module-<name>.
        modules=sum(
            1 for a in items if a.category == "module" or a.category.startswith("module-")
        ),
        categories=len(get_categories(items)),
        tags=len(get_all_tags(items)),
    )


def sort_assets(assets: Iterable[Asset], order: str = "newest") -> list[Asset]:
    """Return a sorted copy of *assets*.

    Orders: ``newest``/``oldest`` by upload date, ``name`` (case-insensitive),
    ``size`` (largest first), ``category``. Sorting is stable.

    Raises:
        ValueError: For an unknown *order*.
    """
    items = list(assets)
    if order == "newest":
        return sorted(items, key=lambda a: a.upload_date, reverse=True)
    if order == "oldest":
        return sorted(items, key=lambda a: a.upload_date)
    if order == "name":
        return sorted(items, key=lambda a: a.name.casefold())
    if order == "size":
        return sorted(items, key=lambda a: a.size_bytes, reverse=True)
    if order == "category":
        return sorted(items, key=lambda a: a.category)
    raise ValueError(f"Unknown sort order {order!r}; expected one of {', '.join(SORT_ORDERS)}")
