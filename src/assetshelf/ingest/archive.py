"""Archive extractor — ZIP bundle in, ordered list of catalog Assets out.

Entry dispatch:
  first .json entry             → DocumentDecomposer (primary document)
  other .json entries           → JsonEntryProcessor
  .jpg .png .gif .svg .webp …   → ImageEntryProcessor
  everything else               → TextEntryProcessor (text or opaque binary)

Skipped: directories, hidden files (base name starting with "."), and
anything under a ``__MACOSX/`` resource-fork folder.

An archive that cannot be opened raises ``ArchiveOpenError`` and nothing is
returned. Problems with a single entry never propagate: the entry still
yields an Asset (filename/extension classification) and an ``AssetWarning``
is emitted.
"""

from __future__ import annotations

import io
import zipfile
import zlib
from pathlib import PurePosixPath

from assetshelf.classify.engine import is_image
from assetshelf.db.models import Asset
from assetshelf.ingest.base import ArchiveEntry, BaseEntryProcessor
from assetshelf.ingest.decomposer import decompose
from assetshelf.ingest.image import ImageEntryProcessor
from assetshelf.ingest.json_entry import JsonEntryProcessor, decode_json
from assetshelf.ingest.text import DEFAULT_MAX_TEXT_BYTES, TextEntryProcessor

_SYSTEM_FOLDERS = frozenset(["__MACOSX"])
_HIDDEN_PREFIX = "."

# zipfile surfaces per-member damage through several exception types.
_READ_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    NotImplementedError,
    RuntimeError,
    EOFError,
    OSError,
)


class ArchiveOpenError(ValueError):
    """Raised when an archive cannot be opened or its entries listed."""


def is_skipped(info: zipfile.ZipInfo) -> bool:
    """True for directories, hidden files and OS metadata folders."""
    if info.is_dir():
        return True
    parts = PurePosixPath(info.filename).parts
    if not parts:
        return True
    if parts[-1].startswith(_HIDDEN_PREFIX):
        return True
    return any(part in _SYSTEM_FOLDERS for part in parts[:-1])


class ArchiveExtractor:
    """Stateless archive-to-assets service; construct one per call site.

    Args:
        max_text_bytes: Larger non-JSON, non-image entries are not decoded.
        decompose_primary: Route the first JSON entry through the
            decomposer. When False every JSON entry is processed alone.
    """

    def __init__(
        self,
        max_text_bytes: int = DEFAULT_MAX_TEXT_BYTES,
        decompose_primary: bool = True,
    ) -> None:
        self.max_text_bytes = max_text_bytes
        self.decompose_primary = decompose_primary

    def ingest(self, data: bytes, archive_name: str) -> list[Asset]:
        """Extract and classify every entry of the archive in *data*.

        Args:
            data: Raw archive bytes.
            archive_name: Display name recorded on every Asset.

        Returns:
            Assets in archive enumeration order; the primary document's
            sub-assets take that entry's place.

        Raises:
            ArchiveOpenError: If the archive is corrupt or unreadable.
        """
        try:
            zf = zipfile.ZipFile(io.BytesIO(data))
            infos = zf.infolist()
        except (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError, EOFError, OSError) as exc:
            raise ArchiveOpenError(f"Cannot open archive '{archive_name}': {exc}") from exc

        members = [
            (info, ArchiveEntry(path=info.filename, size=info.file_size))
            for info in infos
            if not is_skipped(info)
        ]
        primary = None
        if self.decompose_primary:
            primary = next((info for info, e in members if e.extension == "json"), None)

        processors = self._processors(archive_name)
        assets: list[Asset] = []
        with zf:
            for info, entry in members:
                if info is primary:
                    assets.extend(self._process_primary(zf, info, entry, archive_name))
                else:
                    processor = processors[self._kind(entry)]
                    assets.append(self._process_entry(zf, info, entry, processor))
        return assets

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _processors(self, archive_name: str) -> dict[str, BaseEntryProcessor]:
        return {
            "json": JsonEntryProcessor(archive_name),
            "image": ImageEntryProcessor(archive_name),
            "text": TextEntryProcessor(archive_name, max_text_bytes=self.max_text_bytes),
        }

    @staticmethod
    def _kind(entry: ArchiveEntry) -> str:
        if entry.extension == "json":
            return "json"
        if is_image(entry.extension):
            return "image"
        return "text"

    @staticmethod
    def _process_entry(
        zf: zipfile.ZipFile,
        info: zipfile.ZipInfo,
        entry: ArchiveEntry,
        processor: BaseEntryProcessor,
    ) -> Asset:
        try:
            data = zf.read(info)
        except _READ_ERRORS as exc:
            return processor.fallback(entry, f"unreadable entry ({exc})")
        return processor.process(entry, data)

    @staticmethod
    def _process_primary(
        zf: zipfile.ZipFile,
        info: zipfile.ZipInfo,
        entry: ArchiveEntry,
        archive_name: str,
    ) -> list[Asset]:
        processor = JsonEntryProcessor(archive_name)
        try:
            data = zf.read(info)
        except _READ_ERRORS as exc:
            return [processor.fallback(entry, f"unreadable entry ({exc})")]
        try:
            _, value = decode_json(data)
        except ValueError as exc:
            return [processor.fallback(entry, f"invalid JSON ({exc})")]

        assets = decompose(value, archive_name, entry.path)
        if not assets:
            # Nothing to decompose (scalar or empty collection): keep the
            # document itself in the catalog.
            return [processor.process(entry, data)]
        return assets


def ingest(
    data: bytes,
    archive_name: str,
    *,
    max_text_bytes: int = DEFAULT_MAX_TEXT_BYTES,
    decompose_primary: bool = True,
) -> list[Asset]:
    """Extract *data* with a fresh ``ArchiveExtractor`` (see its ``ingest``)."""
    extractor = ArchiveExtractor(
        max_text_bytes=max_text_bytes, decompose_primary=decompose_primary
    )
    return extractor.ingest(data, archive_name)
