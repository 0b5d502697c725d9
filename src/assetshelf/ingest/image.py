"""Image entry processor — binary capture with a preview handle."""

from __future__ import annotations

import mimetypes

from assetshelf.classify.engine import classify_image
from assetshelf.db.models import Asset, PreviewHandle
from assetshelf.ingest.base import ArchiveEntry, BaseEntryProcessor


class ImageEntryProcessor(BaseEntryProcessor):
    def process(self, entry: ArchiveEntry, data: bytes) -> Asset:
        media_type = mimetypes.guess_type(entry.name)[0] or "application/octet-stream"
        return self._make_asset(
            entry,
            classify_image(entry.name),
            preview=PreviewHandle(data=data, media_type=media_type),
        )
