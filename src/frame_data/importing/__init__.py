"""
Loading source sheets into the catalog.
"""
from .rows_provider import RowsProvider, InMemoryRowsProvider, CsvDirectoryRowsProvider
from .data_importer import DataImporter, MOVE_COLUMNS

__all__ = [
    "RowsProvider",
    "InMemoryRowsProvider",
    "CsvDirectoryRowsProvider",
    "DataImporter",
    "MOVE_COLUMNS",
]
