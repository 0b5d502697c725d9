"""JSON entry processor — parsed document, metadata and copyable renditions."""

from __future__ import annotations

import json
from typing import Any

from assetshelf.classify.engine import classify_document
from assetshelf.classify.metadata import extract_document_metadata
from assetshelf.db.models import Asset
from assetshelf.ingest.base import ArchiveEntry, BaseEntryProcessor
from assetshelf.ingest.copyable import build_copyable


def parse_json(text: str) -> Any:
    """``json.loads`` that reports over-deep nesting as ``ValueError``."""
    try:
        return json.loads(text)
    except RecursionError:
        raise ValueError("JSON nesting too deep") from None


def decode_json(data: bytes) -> tuple[str, Any]:
    """Decode UTF-8 (BOM tolerated) and parse.

    Raises:
        ValueError: on undecodable, invalid or too deeply nested input.
    """
    text = data.decode("utf-8-sig")
    return text, parse_json(text)


class JsonEntryProcessor(BaseEntryProcessor):
    """Classify a ``.json`` entry that is not the archive's primary document.

    Unparseable entries fall back to ``unknown-json`` with filename tags.
    A document that is just ``null`` keeps its text but has no JSON content.
    """

    def process(self, entry: ArchiveEntry, data: bytes) -> Asset:
        try:
            text, value = decode_json(data)
        except ValueError as exc:
            return self.fallback(entry, f"invalid JSON ({exc})")

        if value is None:
            return self._make_asset(entry, classify_document(entry.name, None), content=text)
        return self._make_asset(
            entry,
            classify_document(entry.name, value),
            content=text,
            json_content=value,
            copyable=build_copyable(value),
            metadata=extract_document_metadata(value),
        )
