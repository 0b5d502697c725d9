"""assetshelf ingest pipeline — archive extraction, entry processors, decomposition."""

from assetshelf.ingest.archive import ArchiveExtractor, ArchiveOpenError, ingest
from assetshelf.ingest.base import ArchiveEntry, AssetWarning, BaseEntryProcessor
from assetshelf.ingest.copyable import build_copyable
from assetshelf.ingest.decomposer import DocumentDecomposer, decompose
from assetshelf.ingest.image import ImageEntryProcessor
from assetshelf.ingest.json_entry import JsonEntryProcessor
from assetshelf.ingest.text import TextEntryProcessor

__all__ = [
    "ArchiveEntry",
    "ArchiveExtractor",
    "ArchiveOpenError",
    "AssetWarning",
    "BaseEntryProcessor",
    "DocumentDecomposer",
    "ImageEntryProcessor",
    "JsonEntryProcessor",
    "TextEntryProcessor",
    "build_copyable",
    "decompose",
    "ingest",
]
