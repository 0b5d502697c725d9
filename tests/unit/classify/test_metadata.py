"""Tests for design metadata extraction."""

from __future__ import annotations

from assetshelf.classify.metadata import (
    analyze_modules,
    analyze_settings,
    extract_animations,
    extract_colors,
    extract_custom_css,
    extract_document_metadata,
    extract_fonts,
    extract_item_metadata,
    extract_section_metadata,
    serialize,
)

_SHORTCODES = (
    "[et_pb_section][et_pb_row][et_pb_text]hi[/et_pb_text][/et_pb_row][/et_pb_section]"
)


def test_serialize_is_compact() -> None:
    assert serialize({"a": [1, 2], "b": "é"}) == '{"a":[1,2],"b":"é"}'


# ---------------------------------------------------------------------------
# Individual extractors
# ---------------------------------------------------------------------------


def test_extract_colors_hex_and_rgb() -> None:
    doc = {"bg": "#ffffff", "text": "rgba(0, 0, 0, 0.5)", "x": "#FFF", "again": "#ffffff"}
    assert extract_colors(doc) == ["#ffffff", "#FFF", "rgba(0, 0, 0, 0.5)"]


def test_extract_colors_none() -> None:
    assert extract_colors({"title": "plain"}) == []


def test_extract_fonts_key_variants() -> None:
    doc = {
        "font_family": "Roboto",
        "nested": {"fontFamily": "Open Sans"},
        "font-family": "Roboto",
    }
    assert extract_fonts(doc) == ["Roboto", "Open Sans"]


def test_extract_fonts_ignores_non_strings() -> None:
    assert extract_fonts({"font_family": 12, "other": {"font_family": ""}}) == []


def test_extract_custom_css_keys_and_style_blocks() -> None:
    doc = {
        "custom_css_main": ".a{color:red}",
        "html": "<style>.b{margin:0}</style><p>x</p>",
        "custom_css_empty": "   ",
    }
    assert extract_custom_css(doc) == [".a{color:red}", ".b{margin:0}"]


def test_extract_animations_excludes_off_and_none() -> None:
    doc = {"animation": "off", "animation_style": "none", "entrance_animation": "zoom"}
    assert extract_animations(doc) == ["zoom"]


def test_analyze_modules_counts_markers() -> None:
    stats = analyze_modules({"content": _SHORTCODES})
    assert stats.count == 6
    assert stats.unique == ["et_pb_section", "et_pb_row", "et_pb_text"]
    assert stats.distribution == {"et_pb_section": 2, "et_pb_row": 2, "et_pb_text": 2}


def test_module_stats_empty_metadata() -> None:
    assert analyze_modules({"a": 1}).to_metadata() == {}


def test_analyze_settings_flags() -> None:
    assert analyze_settings({"responsive": True, "custom_css": ".x{}", "animations": 0}) == {
        "responsive": True,
        "has_custom_css": True,
    }
    assert analyze_settings("nope") == {}


# ---------------------------------------------------------------------------
# Combined extractors
# ---------------------------------------------------------------------------


def test_document_metadata_animation_and_modules() -> None:
    doc = {"animation_type": "fadeIn", "content": _SHORTCODES}
    metadata = extract_document_metadata(doc)
    assert metadata["animations"] == ["fadeIn"]
    assert len(metadata["unique_modules"]) == 3
    assert metadata["has_content"] is True
    assert metadata["content_length"] == len(serialize(_SHORTCODES))


def test_document_metadata_keys_only_when_non_empty() -> None:
    metadata = extract_document_metadata({"title": "Plain"})
    assert metadata == {}


def test_document_metadata_version_and_settings() -> None:
    metadata = extract_document_metadata(
        {"version": "4.2", "content": [], "settings": {"responsive": True}}
    )
    assert metadata["version"] == "4.2"
    assert metadata["settings"] == {"responsive": True}
    assert "has_content" not in metadata


def test_document_metadata_non_object() -> None:
    assert extract_document_metadata(["#abcdef"]) == {"colors": ["#abcdef"]}


def test_section_metadata() -> None:
    metadata = extract_section_metadata({"type": "et_pb_text", "color": "#123"})
    assert metadata["colors"] == ["#123"]
    assert metadata["module_count"] == 1
    assert "version" not in metadata


def test_item_metadata_title_and_description() -> None:
    metadata = extract_item_metadata(
        {"title": " Pricing ", "description": "Three plans", "version": "1"}
    )
    assert metadata["title"] == "Pricing"
    assert metadata["description"] == "Three plans"
    assert metadata["version"] == "1"
