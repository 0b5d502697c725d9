"""Generic entry processor — text when decodable, opaque binary otherwise."""

from __future__ import annotations

from assetshelf.classify.engine import classify_binary, classify_text
from assetshelf.db.models import Asset
from assetshelf.ingest.base import ArchiveEntry, BaseEntryProcessor

DEFAULT_MAX_TEXT_BYTES = 5 * 1024 * 1024


class TextEntryProcessor(BaseEntryProcessor):
    """Stylesheets, scripts, markup, fonts, documents and everything else.

    Entries are decoded as strict UTF-8. Data containing NUL bytes, data that
    fails to decode, and entries larger than ``max_text_bytes`` are treated as
    opaque binary and classified by extension alone.
    """

    def __init__(self, archive_name: str, max_text_bytes: int = DEFAULT_MAX_TEXT_BYTES) -> None:
        super().__init__(archive_name)
        if max_text_bytes < 0:
            raise ValueError("max_text_bytes must be >= 0")
        self.max_text_bytes = max_text_bytes

    def process(self, entry: ArchiveEntry, data: bytes) -> Asset:
        text = self._decode(data)
        if text is None:
            return self._make_asset(entry, classify_binary(entry.name, entry.extension))
        return self._make_asset(
            entry,
            classify_text(entry.name, entry.extension, text),
            content=text,
        )

    def _decode(self, data: bytes) -> str | None:
        if len(data) > self.max_text_bytes or b"\x00" in data:
            return None
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError:
            return None
