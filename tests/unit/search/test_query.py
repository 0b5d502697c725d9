"""Tests for the catalog query engine."""

from __future__ import annotations

import pytest

from assetshelf.db.models import Asset
from assetshelf.search.query import (
    filter_assets,
    rank_assets,
    score_asset,
    search_assets,
    similarity,
)


def _asset(name: str, category: str = "other-cat", tags=(), **kw) -> Asset:
    return Asset(
        name=name,
        original_name=name,
        path=name,
        source_archive="pack.zip",
        category=category,
        tags=list(tags),
        **kw,
    )


@pytest.fixture
def catalog() -> list[Asset]:
    return [
        _asset("Pricing Table", "section", ["pricing", "dark"]),
        _asset("Hero Banner", "hero-image", ["hero"]),
        _asset("Footer", "section", ["dark"]),
        _asset("Prices", "layout"),
    ]


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


def test_empty_query_is_identity(catalog) -> None:
    result = search_assets(catalog)
    assert result == catalog
    assert result is not catalog


def test_blank_term_keeps_order(catalog) -> None:
    assert search_assets(catalog, "   ") == catalog


def test_category_filter_exact(catalog) -> None:
    assert [a.name for a in filter_assets(catalog, "section")] == ["Pricing Table", "Footer"]


def test_category_all_disables_filter(catalog) -> None:
    assert filter_assets(catalog, "all") == catalog


def test_tags_are_anded(catalog) -> None:
    assert [a.name for a in filter_assets(catalog, tags=["dark"])] == ["Pricing Table", "Footer"]
    assert [a.name for a in filter_assets(catalog, tags=["dark", "pricing"])] == ["Pricing Table"]


def test_single_tag_string_is_not_split(catalog) -> None:
    assert [a.name for a in search_assets(catalog, "", "all", "hero")] == ["Hero Banner"]


def test_unknown_category_yields_nothing(catalog) -> None:
    assert search_assets(catalog, category="nope") == []


# ---------------------------------------------------------------------------
# Fuzzy ranking
# ---------------------------------------------------------------------------


def test_similarity_exact_and_substring() -> None:
    assert similarity("hero", "Hero") == 1.0
    assert similarity("hero", "Hero Banner") == 1.0


def test_similarity_blank_is_zero() -> None:
    assert similarity("", "Hero") == 0.0
    assert similarity("hero", "   ") == 0.0


def test_similarity_below_threshold_is_zero() -> None:
    assert similarity("pricing", "footer", threshold=0.7) == 0.0


def test_similarity_tolerates_typo() -> None:
    assert similarity("pricng", "Pricing Table") >= 0.7


def test_score_asset_uses_tags_and_metadata() -> None:
    asset = _asset("Untitled", tags=["testimonial"], metadata={"title": "Quotes"})
    assert score_asset(asset, "testimonial") == 1.0
    assert score_asset(asset, "quotes") == 1.0


def test_rank_orders_by_score(catalog) -> None:
    ranked = rank_assets(catalog, "pricing", threshold=0.55)
    assert [s.asset.name for s in ranked] == ["Pricing Table", "Prices"]
    assert ranked[0].score == 1.0
    assert 0.55 <= ranked[1].score < 1.0


def test_threshold_excludes_weak_matches(catalog) -> None:
    names = [a.name for a in search_assets(catalog, "pricing", threshold=0.7)]
    assert names == ["Pricing Table"]


def test_ties_keep_catalog_order() -> None:
    assets = [_asset("Hero", tags=["a"]), _asset("Hero", tags=["b"])]
    ranked = rank_assets(assets, "hero")
    assert [s.asset.tags for s in ranked] == [["a"], ["b"]]


def test_search_combines_filters_and_term(catalog) -> None:
    result = search_assets(catalog, "dark", category="section", tags=["pricing"])
    assert [a.name for a in result] == ["Pricing Table"]


def test_search_does_not_mutate_input(catalog) -> None:
    before = list(catalog)
    search_assets(catalog, "hero", category="hero-image")
    assert catalog == before
