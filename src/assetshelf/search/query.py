"""Catalog query engine: category filter ∩ tag filter ∩ fuzzy text rank.

Fuzzy matching uses rapidfuzz's Levenshtein-based scorers on normalised text
(lower-cased, punctuation folded to spaces). When a field value is at least
as long as the term, the best-aligned substring of the value is scored
(``partial_ratio``); shorter values are compared whole (``ratio``) so a short
tag cannot match a long term by being contained in it.

Similarity is reported in [0, 1]. An asset's score is its best field score.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from rapidfuzz import fuzz
from rapidfuzz.utils import default_process

from assetshelf.db.models import Asset

ALL_CATEGORIES = "all"
DEFAULT_THRESHOLD = 0.7
SEARCH_FIELDS: tuple[str, ...] = (
    "name",
    "description",
    "tags",
    "category",
    "metadata.title",
    "metadata.description",
)


@dataclass
class ScoredAsset:
    """An asset with its fuzzy similarity to the search term (1.0 = exact)."""

    asset: Asset
    score: float


def _field_values(asset: Asset, field: str) -> list[str]:
    if field.startswith("metadata."):
        value = asset.metadata.get(field.partition(".")[2])
    else:
        value = getattr(asset, field, None)
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [v for v in value if isinstance(v, str)]
    return []


def similarity(term: str, text: str, threshold: float = 0.0) -> float:
    """Fuzzy similarity of *term* against *text*; 0.0 when below *threshold*."""
    needle = default_process(term)
    haystack = default_process(text)
    if not needle or not haystack:
        return 0.0
    scorer = fuzz.partial_ratio if len(haystack) >= len(needle) else fuzz.ratio
    return scorer(needle, haystack, score_cutoff=threshold * 100) / 100.0


def score_asset(
    asset: Asset,
    term: str,
    fields: Sequence[str] = SEARCH_FIELDS,
    threshold: float = 0.0,
) -> float:
    best = 0.0
    for field in fields:
        for value in _field_values(asset, field):
            best = max(best, similarity(term, value, threshold))
            if best >= 1.0:
                return best
    return best


def filter_assets(
    assets: Iterable[Asset],
    category: str = ALL_CATEGORIES,
    tags: str | Iterable[str] = (),
) -> list[Asset]:
    """Exact category match, then AND over *tags*. ``"all"`` disables the category filter.

    A single tag may be given as a plain string.
    """
    required = [tags] if isinstance(tags, str) else list(tags)
    result = list(assets)
    if category != ALL_CATEGORIES:
        result = [a for a in result if a.category == category]
    if required:
        result = [a for a in result if all(t in a.tags for t in required)]
    return result


def rank_assets(
    assets: Iterable[Asset],
    term: str,
    threshold: float = DEFAULT_THRESHOLD,
    fields: Sequence[str] = SEARCH_FIELDS,
) -> list[ScoredAsset]:
    """Assets scoring at least *threshold*, best first; ties keep input order."""
    scored = [ScoredAsset(a, score_asset(a, term, fields, threshold)) for a in assets]
    kept = [s for s in scored if s.score > 0.0 and s.score >= threshold]
    # list.sort is stable, so equal scores stay in catalog order.
    kept.sort(key=lambda s: s.score, reverse=True)
    return kept


def search_assets(
    assets: Iterable[Asset],
    term: str = "",
    category: str = ALL_CATEGORIES,
    tags: str | Iterable[str] = (),
    *,
    threshold: float = DEFAULT_THRESHOLD,
    fields: Sequence[str] = SEARCH_FIELDS,
) -> list[Asset]:
    """Filter then (for a non-blank *term*) fuzzy-rank a catalog.

    The input is never mutated; a new list is always returned. With a blank
    term the filtered assets come back in their original order.
    """
    filtered = filter_assets(assets, category, tags)
    if not term or not term.strip():
        return filtered
    return [s.asset for s in rank_assets(filtered, term.strip(), threshold, fields)]
