"""Classification engine — one category and a tag set per extracted item.

Categories come from an ordered cascade: content signatures (when content is
available) are tried before filename keywords, and the first signature that
yields a label wins. Tags are the union of every matching tag rule.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from assetshelf.classify import rules
from assetshelf.classify.metadata import serialize
from assetshelf.classify.rules import all_matches, first_match


@dataclass(frozen=True)
class Classification:
    category: str
    tags: tuple[str, ...] = ()


def _union(*groups: list[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(tag for group in groups for tag in group))


# ---------------------------------------------------------------------------
# Extension lookups
# ---------------------------------------------------------------------------


def asset_type(extension: str) -> str:
    """Asset type for *extension* ("other" when unknown)."""
    return rules.EXTENSION_TYPES.get(extension.lower(), "other")


def is_image(extension: str) -> bool:
    return extension.lower() in rules.IMAGE_EXTENSIONS


def categorize_by_extension(extension: str) -> str:
    return rules.EXTENSION_CATEGORIES.get(extension.lower(), rules.UNKNOWN_CATEGORY)


def filename_tags(filename: str) -> list[str]:
    return all_matches(rules.FILENAME_TAG_RULES, filename.lower())


# ---------------------------------------------------------------------------
# JSON documents
# ---------------------------------------------------------------------------


def _layout_signature(text: str) -> str | None:
    if rules.SECTION_MARKER in text and rules.ROW_MARKER in text and rules.COLUMN_MARKER in text:
        return "layout"
    return None


def _section_signature(text: str) -> str | None:
    return "section" if rules.SECTION_MARKER in text else None


def _row_signature(text: str) -> str | None:
    return "row" if rules.ROW_MARKER in text else None


def _module_signature(text: str) -> str | None:
    unique = list(dict.fromkeys(rules.MODULE_MARKER_RE.findall(text)))
    if len(unique) == 1:
        return f"module-{unique[0][len(rules.MODULE_PREFIX):]}"
    if len(unique) > 1:
        return "multi-module"
    return None


# Evaluated in order over the lower-cased serialized document.
DOCUMENT_SIGNATURES: tuple[Callable[[str], str | None], ...] = (
    _layout_signature,
    _section_signature,
    _row_signature,
    _module_signature,
)


def categorize_document(json_content: Any, filename: str) -> str:
    text = serialize(json_content).lower()
    for signature in DOCUMENT_SIGNATURES:
        category = signature(text)
        if category:
            return category
    return (
        first_match(rules.JSON_FILENAME_CATEGORY_RULES, filename.lower())
        or rules.DEFAULT_JSON_CATEGORY
    )


def document_tags(json_content: Any, filename: str) -> tuple[str, ...]:
    text = serialize(json_content).lower()
    return _union(filename_tags(filename), all_matches(rules.DOCUMENT_TAG_RULES, text))


def classify_document(filename: str, json_content: Any) -> Classification:
    """Classify a parsed JSON entry (or a whole layout export)."""
    return Classification(
        category=categorize_document(json_content, filename),
        tags=document_tags(json_content, filename),
    )


def classify_item(item: Any) -> Classification:
    """Classify one item of a collection export by its content alone."""
    text = serialize(item).lower()
    return Classification(
        category=first_match(rules.ITEM_CATEGORY_RULES, text) or rules.DEFAULT_JSON_CATEGORY,
        tags=tuple(all_matches(rules.ITEM_TAG_RULES, text)),
    )


def section_tags(section_content: Any) -> tuple[str, ...]:
    return tuple(all_matches(rules.SECTION_TAG_RULES, serialize(section_content).lower()))


# ---------------------------------------------------------------------------
# Images, text and binary entries
# ---------------------------------------------------------------------------


def classify_image(filename: str) -> Classification:
    """Images are classified from the filename only."""
    name = filename.lower()
    return Classification(
        category=first_match(rules.IMAGE_CATEGORY_RULES, name) or rules.DEFAULT_IMAGE_CATEGORY,
        tags=_union(filename_tags(filename), all_matches(rules.IMAGE_TAG_RULES, name)),
    )


def classify_text(filename: str, extension: str, text: str) -> Classification:
    lowered = text.lower()
    ext = extension.lower()
    if ext in rules.TEXT_CATEGORY_RULES:
        content_rules, default = rules.TEXT_CATEGORY_RULES[ext]
        category = first_match(content_rules, lowered) or default
    else:
        category = categorize_by_extension(ext)
    content_tags = all_matches(rules.TEXT_TAG_RULES, lowered) if text else []
    return Classification(category=category, tags=_union(filename_tags(filename), content_tags))


def classify_binary(filename: str, extension: str) -> Classification:
    return Classification(
        category=categorize_by_extension(extension),
        tags=tuple(filename_tags(filename)),
    )


def classify_fallback(filename: str, extension: str) -> Classification:
    """Deterministic filename/extension-only result for entries that failed to process."""
    ext = extension.lower()
    if ext == "json":
        category = rules.UNKNOWN_JSON_CATEGORY
    elif is_image(ext):
        category = rules.DEFAULT_IMAGE_CATEGORY
    else:
        category = categorize_by_extension(ext)
    return Classification(category=category, tags=tuple(filename_tags(filename)))


def classify(
    filename: str,
    extension: str,
    text: str | None = None,
    json_content: Any = None,
) -> Classification:
    """Classify an entry from whatever content is available.

    Parsed JSON takes precedence, then image extensions, then text; with no
    content at all the entry is classified by extension.
    """
    if json_content is not None:
        return classify_document(filename, json_content)
    if is_image(extension):
        return classify_image(filename)
    if text is not None:
        return classify_text(filename, extension, text)
    return classify_binary(filename, extension)
