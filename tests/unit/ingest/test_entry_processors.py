"""Tests for the per-entry processors."""

from __future__ import annotations

import json

import pytest

from assetshelf.ingest.base import ArchiveEntry, AssetWarning
from assetshelf.ingest.image import ImageEntryProcessor
from assetshelf.ingest.json_entry import JsonEntryProcessor, decode_json
from assetshelf.ingest.text import TextEntryProcessor


def _entry(path: str, size: int = 10) -> ArchiveEntry:
    return ArchiveEntry(path=path, size=size)


# ---------------------------------------------------------------------------
# ArchiveEntry
# ---------------------------------------------------------------------------


def test_archive_entry_name_and_extension() -> None:
    entry = _entry("images/Hero.PNG")
    assert entry.name == "Hero.PNG"
    assert entry.extension == "png"


def test_archive_entry_without_extension() -> None:
    assert _entry("LICENSE").extension == ""


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------


def test_decode_json_tolerates_bom() -> None:
    text, value = decode_json(b"\xef\xbb\xbf{\"a\": 1}")
    assert value == {"a": 1}
    assert text == '{"a": 1}'


def test_json_processor_builds_copyable_and_metadata() -> None:
    doc = {"type": "et_pb_blurb", "font_family": "Lato"}
    asset = JsonEntryProcessor("pack.zip").process(
        _entry("blurb.json"), json.dumps(doc).encode()
    )
    assert asset.category == "module-blurb"
    assert asset.json_content == doc
    assert asset.content == json.dumps(doc)
    assert asset.metadata["fonts"] == ["Lato"]
    assert asset.copyable.minified == '{"type":"et_pb_blurb","font_family":"Lato"}'


def test_json_processor_invalid_falls_back() -> None:
    with pytest.warns(AssetWarning, match="pack.zip: bad.json: invalid JSON"):
        asset = JsonEntryProcessor("pack.zip").process(_entry("bad.json"), b"{")
    assert asset.category == "unknown-json"
    assert asset.copyable is None
    assert asset.type == "code"


def test_json_processor_deep_nesting_falls_back() -> None:
    deep = b"[" * 100_000 + b"]" * 100_000
    with pytest.warns(AssetWarning, match="nesting too deep"):
        asset = JsonEntryProcessor("pack.zip").process(_entry("deep.json"), deep)
    assert asset.category == "unknown-json"
    assert asset.json_content is None


def test_json_processor_null_document_has_no_copyable() -> None:
    asset = JsonEntryProcessor("pack.zip").process(_entry("empty.json"), b"null")
    assert asset.content == "null"
    assert asset.json_content is None
    assert asset.has_json is False
    assert asset.copyable is None
    assert asset.metadata == {}


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------


def test_image_processor_preview_handle() -> None:
    asset = ImageEntryProcessor("pack.zip").process(_entry("team-photo.webp"), b"RIFF")
    assert asset.type == "image"
    assert asset.category == "team-image"
    assert "about" in asset.tags
    assert asset.preview.data == b"RIFF"
    asset.preview.release()
    assert asset.preview.released


# ---------------------------------------------------------------------------
# Text / binary
# ---------------------------------------------------------------------------


def test_text_processor_decodes_utf8() -> None:
    asset = TextEntryProcessor("pack.zip").process(
        _entry("anim.css"), "@keyframes spin {}".encode()
    )
    assert asset.content == "@keyframes spin {}"
    assert asset.category == "animation-css"


def test_text_processor_invalid_utf8_is_binary() -> None:
    asset = TextEntryProcessor("pack.zip").process(_entry("notes.txt"), b"\xff\xfe\xfa")
    assert asset.content is None
    assert asset.category == "text-file"


def test_text_processor_size_limit() -> None:
    processor = TextEntryProcessor("pack.zip", max_text_bytes=4)
    asset = processor.process(_entry("big.js"), b"console.log(1)")
    assert asset.content is None
    assert asset.category == "unknown"


def test_text_processor_rejects_negative_limit() -> None:
    with pytest.raises(ValueError):
        TextEntryProcessor("pack.zip", max_text_bytes=-1)


def test_fallback_keeps_provenance() -> None:
    with pytest.warns(AssetWarning):
        asset = TextEntryProcessor("pack.zip").fallback(_entry("dir/footer.css", 99), "boom")
    assert asset.path == "dir/footer.css"
    assert asset.source_archive == "pack.zip"
    assert asset.size_bytes == 99
    assert asset.tags == ["footer"]
