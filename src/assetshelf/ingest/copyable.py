"""Copy-ready renditions of JSON-bearing assets."""

from __future__ import annotations

import json
from typing import Any

from assetshelf.classify.metadata import serialize
from assetshelf.db.models import CopyableContent

DEFAULT_IMPORT_VERSION = "4.0"


def import_format(value: Any) -> Any:
    """Reduced shape accepted by the page builder's importer.

    Exports carrying ``content`` are reduced to version/content/settings;
    anything else is returned unchanged.
    """
    if isinstance(value, dict) and "content" in value:
        return {
            "version": value.get("version") or DEFAULT_IMPORT_VERSION,
            "content": value["content"],
            "settings": value.get("settings") or {},
        }
    return value


def build_copyable(value: Any) -> CopyableContent:
    return CopyableContent(
        raw=json.dumps(value, ensure_ascii=False, indent=2),
        minified=serialize(value),
        import_format=import_format(value),
    )
