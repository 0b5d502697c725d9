"""Structured content decomposer — one catalog entry per unit of an export.

Supported top-level shapes:
- **Array** ``[{...}, {...}]``: each object becomes an *item* asset.
- **Page-builder export** (object with ``content``, ``layouts`` or
  ``sections``): one asset per section found in ``content``; when there is no
  section, one asset per module; always one full-layout asset for the whole
  document.
- **Collection** (object with an ``items`` or ``assets`` array): each element
  becomes an item asset.
- **Any other object**: a single item asset.

Section and module nodes are found by walking the parsed ``content`` tree in
document order. The walk does not descend into a matched node, so a section
nested inside another section is part of its parent's asset only. String
``content`` counts only when it holds a JSON object or array; HTML, plain text
and shortcodes are module bodies, not fragments.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable
from typing import Any

from assetshelf.classify.engine import asset_type, classify_item, document_tags, section_tags
from assetshelf.classify.metadata import (
    extract_document_metadata,
    extract_item_metadata,
    extract_section_metadata,
    serialize,
)
from assetshelf.classify.rules import MODULE_PREFIX, SECTION_NODE_TYPES
from assetshelf.db.models import Asset
from assetshelf.ingest.base import warn_asset
from assetshelf.ingest.copyable import build_copyable
from assetshelf.ingest.json_entry import parse_json

_EXPORT_KEYS = ("content", "layouts", "sections")
_COLLECTION_KEYS = ("items", "assets")
_MODULE_NAME_RE = re.compile(r"\w+")
# An object, or an array that is not a shortcode like "[et_pb_text]".
_FRAGMENT_RE = re.compile(r"\s*(?:\{|\[(?!\s*/?[A-Za-z_]))")

_MISSING = object()


def _find_nodes(value: Any, is_match: Callable[[dict], bool]) -> list[dict]:
    """Pre-order walk returning matching dicts without descending into them."""
    found: list[dict] = []
    stack = [value]
    while stack:
        node = stack.pop()
        if isinstance(node, dict):
            if is_match(node):
                found.append(node)
                continue
            stack.extend(reversed(list(node.values())))
        elif isinstance(node, list):
            stack.extend(reversed(node))
    return found


def _is_fragment(content: Any) -> bool:
    return isinstance(content, str) and _FRAGMENT_RE.match(content) is not None


def _is_section(node: dict) -> bool:
    content = node.get("content")
    return node.get("type") in SECTION_NODE_TYPES and (
        isinstance(content, list) or _is_fragment(content)
    )


def _module_name(node: dict) -> str | None:
    node_type = node.get("type")
    content = node.get("content")
    if not isinstance(node_type, str) or not (isinstance(content, dict) or _is_fragment(content)):
        return None
    name = node_type.removeprefix(MODULE_PREFIX)
    return name if _MODULE_NAME_RE.fullmatch(name) else None


class DocumentDecomposer:
    """Turn one parsed JSON document into an ordered list of Assets.

    Args:
        archive_name: Display name of the archive the document came from.
        document_name: Archive-relative path of the document; used as the
            ``path`` of every produced asset and as the stem of synthetic
            ``original_name`` values.
    """

    def __init__(self, archive_name: str, document_name: str) -> None:
        self.archive_name = archive_name
        self.document_name = document_name

    def decompose(self, data: Any) -> list[Asset]:
        if isinstance(data, list):
            return self._decompose_items(data)
        if not isinstance(data, dict):
            return []
        if any(data.get(key) for key in _EXPORT_KEYS):
            return self._decompose_export(data)
        items = next((data[k] for k in _COLLECTION_KEYS if data.get(k)), None)
        if isinstance(items, list):
            return self._decompose_items(items)
        return [self._item_asset(data, 0)]

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    def _decompose_items(self, items: list) -> list[Asset]:
        assets: list[Asset] = []
        for index, item in enumerate(items):
            if not isinstance(item, dict):
                warn_asset(
                    f"{self.archive_name}: {self.document_name}: "
                    f"item {index} is not an object — skipped"
                )
                continue
            assets.append(self._item_asset(item, index))
        return assets

    def _item_asset(self, item: dict, index: int) -> Asset:
        classification = classify_item(item)
        name = item.get("name") or item.get("title") or f"Asset {index + 1}"
        description = item.get("description")
        return self._sub_asset(
            name=str(name),
            original_name=f"{self.document_name}_item_{index}",
            value=item,
            category=classification.category,
            tags=list(classification.tags),
            metadata=extract_item_metadata(item),
            description=description if isinstance(description, str) else "",
        )

    # ------------------------------------------------------------------
    # Page-builder exports
    # ------------------------------------------------------------------

    def _decompose_export(self, data: dict) -> list[Asset]:
        assets: list[Asset] = []
        content = self._content_tree(data.get("content"))
        if content is not None:
            assets.extend(self._section_assets(content))
            if not assets:
                assets.extend(self._module_assets(content))
        assets.append(self._layout_asset(data))
        return assets

    @staticmethod
    def _content_tree(content: Any) -> Any:
        """``content`` as a JSON tree; shortcode strings have none."""
        if isinstance(content, str):
            try:
                return parse_json(content)
            except ValueError:
                return None
        return content

    def _parse_fragment(self, fragment: Any, label: str) -> Any:
        if not isinstance(fragment, str):
            return fragment
        try:
            return parse_json(fragment)
        except ValueError as exc:
            warn_asset(
                f"{self.archive_name}: {self.document_name}: "
                f"could not parse {label} content ({exc}) — skipped"
            )
            return _MISSING

    def _section_assets(self, content: Any) -> list[Asset]:
        assets: list[Asset] = []
        for node in _find_nodes(content, _is_section):
            section = self._parse_fragment(node["content"], f"section {len(assets) + 1}")
            if section is _MISSING:
                continue
            index = len(assets)
            assets.append(
                self._sub_asset(
                    name=f"Section {index + 1}",
                    original_name=f"{self.document_name}_section_{index}",
                    value=section,
                    category="section",
                    tags=list(section_tags(section)),
                    metadata=extract_section_metadata(section),
                )
            )
        return assets

    def _module_assets(self, content: Any) -> list[Asset]:
        assets: list[Asset] = []
        for node in _find_nodes(content, lambda n: _module_name(n) is not None):
            name = _module_name(node)
            module = self._parse_fragment(node["content"], f"{name} module")
            if module is _MISSING:
                continue
            index = len(assets)
            assets.append(
                self._sub_asset(
                    name=f"{name} Module {index + 1}",
                    original_name=f"{self.document_name}_module_{index}",
                    value=module,
                    category="module",
                    tags=[name, "module"],
                    metadata={"module_type": name, **extract_section_metadata(module)},
                )
            )
        return assets

    def _layout_asset(self, data: dict) -> Asset:
        description = data.get("description")
        return self._sub_asset(
            name=str(data.get("title") or "Full Layout"),
            original_name=self.document_name,
            value=data,
            category="layout",
            tags=list(document_tags(data, self.document_name)),
            metadata=extract_document_metadata(data),
            description=description if isinstance(description, str) else "",
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _sub_asset(
        self,
        *,
        name: str,
        original_name: str,
        value: Any,
        category: str,
        tags: list[str],
        metadata: dict[str, Any],
        description: str = "",
    ) -> Asset:
        return Asset(
            name=name,
            original_name=original_name,
            path=self.document_name,
            source_archive=self.archive_name,
            type=asset_type("json"),
            category=category,
            tags=tags,
            extension="json",
            size_bytes=len(serialize(value)),
            content=json.dumps(value, ensure_ascii=False, indent=2),
            json_content=value,
            copyable=build_copyable(value),
            metadata=metadata,
            description=description,
        )


def decompose(data: Any, archive_name: str, document_name: str) -> list[Asset]:
    """Decompose a parsed top-level JSON value into Assets (see module docs)."""
    return DocumentDecomposer(archive_name, document_name).decompose(data)
