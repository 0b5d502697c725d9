"""Domain models for the assetshelf catalog."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

# image | document | code | font | archive | design | other
ASSET_TYPES: frozenset[str] = frozenset(
    ["image", "document", "code", "font", "archive", "design", "other"]
)


def new_asset_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class PreviewHandle:
    """Binary image data referenced by an Asset.

    The handle owns the bytes. Callers that create view objects from it
    (thumbnails, temp files) are responsible for releasing them; ``release()``
    drops the bytes themselves.
    """

    data: bytes
    media_type: str = "application/octet-stream"

    @property
    def released(self) -> bool:
        return not self.data

    def release(self) -> None:
        self.data = b""


@dataclass
class CopyableContent:
    """Copy-ready renditions of a JSON-bearing asset."""

    raw: str
    minified: str
    import_format: Any

    def to_dict(self) -> dict[str, Any]:
        return {
            "raw": self.raw,
            "minified": self.minified,
            "import_format": self.import_format,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CopyableContent:
        return cls(
            raw=data.get("raw", ""),
            minified=data.get("minified", ""),
            import_format=data.get("import_format"),
        )


@dataclass
class Asset:
    """One catalog entry extracted from (or derived inside) an archive.

    Attributes:
        name: Display name.
        original_name: Name as found in the archive; synthetic for sub-assets
            (``<doc>_section_<i>`` etc.).
        path: Archive-relative path of the entry the asset came from.
        source_archive: Display name of the originating archive.
        type: One of ``ASSET_TYPES``, derived from the extension only.
        category: Single classification label.
        tags: Unique descriptive labels.
        extension: Lower-cased extension without the dot ("" if none).
        size_bytes: Uncompressed size, or length of the serialized content.
        content: Raw text, when the entry was read as text.
        json_content: Parsed JSON value, only when the entry parsed as JSON.
        preview: Image bytes for recognised image extensions.
        copyable: Copy-ready renditions of ``json_content``.
        metadata: Extracted design attributes; keys only present when non-empty.
        description: Free text description (from JSON items that carry one).
    """

    name: str
    original_name: str
    path: str
    source_archive: str
    type: str = "other"
    category: str = "unknown"
    tags: list[str] = field(default_factory=list)
    extension: str = ""
    size_bytes: int = 0
    content: str | None = None
    json_content: Any = None
    preview: PreviewHandle | None = None
    copyable: CopyableContent | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    description: str = ""
    id: str = field(default_factory=new_asset_id)
    upload_date: str = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if self.type not in ASSET_TYPES:
            raise ValueError(f"Unknown asset type: {self.type!r}")
        if self.size_bytes < 0:
            raise ValueError("size_bytes must be >= 0")
        self.tags = list(dict.fromkeys(self.tags))

    @property
    def has_json(self) -> bool:
        return self.json_content is not None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-compatible dict. Preview bytes are not included."""
        return {
            "id": self.id,
            "name": self.name,
            "original_name": self.original_name,
            "path": self.path,
            "source_archive": self.source_archive,
            "type": self.type,
            "category": self.category,
            "tags": list(self.tags),
            "extension": self.extension,
            "size_bytes": self.size_bytes,
            "upload_date": self.upload_date,
            "content": self.content,
            "json_content": self.json_content,
            "copyable": self.copyable.to_dict() if self.copyable else None,
            "metadata": self.metadata,
            "description": self.description,
            "preview_media_type": self.preview.media_type if self.preview else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], preview: bytes | None = None) -> Asset:
        copyable = data.get("copyable")
        media_type = data.get("preview_media_type")
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            original_name=data.get("original_name", ""),
            path=data.get("path", ""),
            source_archive=data.get("source_archive", ""),
            type=data.get("type", "other"),
            category=data.get("category", "unknown"),
            tags=list(data.get("tags") or []),
            extension=data.get("extension", ""),
            size_bytes=int(data.get("size_bytes", 0)),
            upload_date=data.get("upload_date") or utc_now(),
            content=data.get("content"),
            json_content=data.get("json_content"),
            copyable=CopyableContent.from_dict(copyable) if copyable else None,
            metadata=dict(data.get("metadata") or {}),
            description=data.get("description", ""),
            preview=(
                PreviewHandle(data=preview, media_type=media_type or "application/octet-stream")
                if preview is not None
                else None
            ),
        )
