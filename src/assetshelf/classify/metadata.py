"""Design metadata extraction from page-builder JSON documents.

Colors and module markers are scanned in the compact serialized text, so they
are found anywhere in the document (keys, values, embedded shortcodes).
Fonts, custom CSS and animations are read from keyed values while walking the
parsed tree. Every extractor returns an empty collection when nothing is
found; none of them raise on unusual shapes.
"""

from __future__ import annotations

import json
import re
import warnings
from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning

from assetshelf.classify.rules import MODULE_MARKER_RE

# Style blocks are often short fragments that bs4 mistakes for file names.
warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

_HEX_COLOR_RE = re.compile(r"#(?:[a-fA-F0-9]{6}|[a-fA-F0-9]{3})")
_RGB_COLOR_RE = re.compile(
    r"rgba?\(\s*\d+\s*,\s*\d+\s*,\s*\d+\s*(?:,\s*[\d.]+)?\s*\)"
)
_FONT_KEY_RE = re.compile(r"^font[_-]?family$", re.IGNORECASE)
_ANIMATION_KEY_RE = re.compile(r"^(?:animation|entrance_animation)")
_ANIMATION_SENTINELS = frozenset(["off", "none"])


def serialize(value: Any) -> str:
    """Compact JSON text (no whitespace between tokens), as used for scanning."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def iter_keyed_values(value: Any) -> Iterator[tuple[str, Any]]:
    """Yield every ``(key, value)`` pair of every dict nested in *value*."""
    stack = [value]
    while stack:
        node = stack.pop()
        if isinstance(node, dict):
            items = list(node.items())
            for key, child in items:
                yield str(key), child
            stack.extend(child for _, child in reversed(items))
        elif isinstance(node, list):
            stack.extend(reversed(node))


def _iter_strings(value: Any) -> Iterator[str]:
    stack = [value]
    while stack:
        node = stack.pop()
        if isinstance(node, str):
            yield node
        elif isinstance(node, dict):
            stack.extend(reversed(list(node.values())))
        elif isinstance(node, list):
            stack.extend(reversed(node))


# ---------------------------------------------------------------------------
# Individual extractors
# ---------------------------------------------------------------------------


def extract_colors(value: Any) -> list[str]:
    """Hex (``#abc`` / ``#aabbcc``) and ``rgb()``/``rgba()`` colors, first-seen order."""
    text = serialize(value)
    colors = [m.group(0) for m in _HEX_COLOR_RE.finditer(text)]
    colors.extend(m.group(0) for m in _RGB_COLOR_RE.finditer(text))
    return list(dict.fromkeys(colors))


def extract_fonts(value: Any) -> list[str]:
    """Values of ``font_family`` / ``font-family`` / ``fontFamily`` keys."""
    fonts = [
        v
        for k, v in iter_keyed_values(value)
        if _FONT_KEY_RE.match(k) and isinstance(v, str) and v
    ]
    return list(dict.fromkeys(fonts))


def extract_custom_css(value: Any) -> list[str]:
    """Custom CSS fragments: ``custom_css*`` values and inline ``<style>`` blocks."""
    css: list[str] = []
    for key, v in iter_keyed_values(value):
        if key.startswith("custom_css") and isinstance(v, str) and v.strip():
            css.append(v)
    for text in _iter_strings(value):
        if "<style" not in text.lower():
            continue
        soup = BeautifulSoup(text, "html.parser")
        for tag in soup.find_all("style"):
            block = (tag.string or "").strip()
            if block:
                css.append(block)
    return list(dict.fromkeys(css))


def extract_animations(value: Any) -> list[str]:
    """Animation names from ``animation*`` keys, excluding "off" and "none"."""
    names = [
        v
        for k, v in iter_keyed_values(value)
        if _ANIMATION_KEY_RE.match(k)
        and isinstance(v, str)
        and v.strip()
        and v not in _ANIMATION_SENTINELS
    ]
    return list(dict.fromkeys(names))


@dataclass
class ModuleStats:
    """Occurrences of ``et_pb_*`` markers in a document."""

    count: int = 0
    unique: list[str] = field(default_factory=list)
    distribution: dict[str, int] = field(default_factory=dict)

    def to_metadata(self) -> dict[str, Any]:
        if not self.count:
            return {}
        return {
            "module_count": self.count,
            "unique_modules": list(self.unique),
            "module_distribution": dict(self.distribution),
        }


def analyze_modules(value: Any) -> ModuleStats:
    markers = MODULE_MARKER_RE.findall(serialize(value))
    counts = Counter(markers)
    return ModuleStats(
        count=len(markers),
        unique=list(dict.fromkeys(markers)),
        distribution=dict(counts),
    )


def analyze_settings(settings: Any) -> dict[str, bool]:
    """Feature flags of an export's ``settings`` object."""
    if not isinstance(settings, dict):
        return {}
    analysis: dict[str, bool] = {}
    if settings.get("responsive"):
        analysis["responsive"] = True
    if settings.get("custom_css"):
        analysis["has_custom_css"] = True
    if settings.get("animations"):
        analysis["has_animations"] = True
    return analysis


# ---------------------------------------------------------------------------
# Combined extractors
# ---------------------------------------------------------------------------


def _put(metadata: dict[str, Any], key: str, value: Any) -> None:
    if value:
        metadata[key] = value


def extract_document_metadata(value: Any) -> dict[str, Any]:
    """Full metadata for an archive JSON entry or a whole layout export."""
    metadata: dict[str, Any] = {}
    if isinstance(value, dict):
        _put(metadata, "version", value.get("version"))
        if value.get("content"):
            metadata["has_content"] = True
            metadata["content_length"] = len(serialize(value["content"]))
    metadata.update(analyze_modules(value).to_metadata())
    _put(metadata, "colors", extract_colors(value))
    _put(metadata, "fonts", extract_fonts(value))
    _put(metadata, "custom_css", extract_custom_css(value))
    _put(metadata, "animations", extract_animations(value))
    if isinstance(value, dict):
        _put(metadata, "settings", analyze_settings(value.get("settings")))
    return metadata


def extract_section_metadata(value: Any) -> dict[str, Any]:
    """Colors, fonts and module statistics of one section's content."""
    metadata: dict[str, Any] = {}
    _put(metadata, "colors", extract_colors(value))
    _put(metadata, "fonts", extract_fonts(value))
    metadata.update(analyze_modules(value).to_metadata())
    return metadata


def extract_item_metadata(value: Any) -> dict[str, Any]:
    """Colors, fonts, version and module statistics of a collection item."""
    metadata = extract_section_metadata(value)
    if isinstance(value, dict):
        _put(metadata, "version", value.get("version"))
        for key in ("title", "description"):
            if isinstance(value.get(key), str):
                _put(metadata, key, value[key].strip())
    return metadata
