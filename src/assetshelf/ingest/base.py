"""Base entry processor interface for archive entries."""

from __future__ import annotations

import warnings
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import PurePosixPath

from assetshelf.classify.engine import Classification, asset_type, classify_fallback
from assetshelf.db.models import Asset


class AssetWarning(UserWarning):
    """A single entry or fragment could not be processed; a fallback was used."""


def warn_asset(message: str) -> None:
    warnings.warn(message, AssetWarning, stacklevel=3)


@dataclass(frozen=True)
class ArchiveEntry:
    """One file entry of an archive, addressed by its archive-relative path."""

    path: str
    size: int = 0

    @property
    def name(self) -> str:
        return PurePosixPath(self.path).name

    @property
    def extension(self) -> str:
        return PurePosixPath(self.path).suffix.lstrip(".").lower()


class BaseEntryProcessor(ABC):
    """Abstract base for per-entry processors.

    Subclasses implement ``process()`` and use ``_make_asset()`` to build the
    Asset so that identity, type and provenance fields are filled uniformly.
    A processor never raises for bad entry content: it returns
    ``fallback()`` instead, which also emits an ``AssetWarning``.
    """

    def __init__(self, archive_name: str) -> None:
        self.archive_name = archive_name

    @abstractmethod
    def process(self, entry: ArchiveEntry, data: bytes) -> Asset:
        """Build the Asset for *entry* from its raw *data*.

        Args:
            entry: Archive entry being processed.
            data: Uncompressed entry bytes.

        Returns:
            Exactly one Asset.
        """

    def fallback(self, entry: ArchiveEntry, reason: str) -> Asset:
        """Asset classified from filename and extension only, plus a warning."""
        warn_asset(f"{self.archive_name}: {entry.path}: {reason}")
        return self._make_asset(entry, classify_fallback(entry.name, entry.extension))

    def _make_asset(
        self,
        entry: ArchiveEntry,
        classification: Classification,
        **fields: object,
    ) -> Asset:
        return Asset(
            name=entry.name,
            original_name=entry.name,
            path=entry.path,
            source_archive=self.archive_name,
            type=asset_type(entry.extension),
            category=classification.category,
            tags=list(classification.tags),
            extension=entry.extension,
            size_bytes=entry.size,
            **fields,
        )
