"""
In-memory catalog of characters, moves, aliases and macros.
"""
from .table import CatalogTable
from .snapshot import CatalogSnapshot
from .store import CatalogStore

__all__ = [
    "CatalogTable",
    "CatalogSnapshot",
    "CatalogStore",
]
