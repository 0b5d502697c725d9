"""assetshelf catalog database layer."""

from assetshelf.db.connection import Database
from assetshelf.db.migrations import MIGRATIONS, run_migrations
from assetshelf.db.repository import CatalogRepository
from assetshelf.db.schema import initialize

__all__ = [
    "CatalogRepository",
    "Database",
    "initialize",
    "run_migrations",
    "MIGRATIONS",
]
