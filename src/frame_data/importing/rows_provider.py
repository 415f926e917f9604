"""
Tabular sources the importer reads from.

A rows provider exposes named sheets, each an ordered list of rows with
named-field access. The transport behind it is up to the implementation.
"""
import csv
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)

Row = Mapping[str, Optional[str]]


class RowsProvider(ABC):
    """Source of sheet rows for the data importer."""

    @abstractmethod
    def has_sheet(self, sheet_name: str) -> bool:
        """Return True if the source contains the named sheet."""
        pass

    @abstractmethod
    def get_rows(self, sheet_name: str) -> List[Row]:
        """
        Return the rows of one sheet in source order.
        
        :param sheet_name: Sheet (table) name
        :return: Rows keyed by column header
        :raises KeyError: If the sheet does not exist
        """
        pass


class InMemoryRowsProvider(RowsProvider):
    """Rows held in a plain dict of sheet name -> rows. Used by tests and tooling."""

    def __init__(self, sheets: Dict[str, Sequence[Row]]):
        self._sheets = {name: [dict(row) for row in rows] for name, rows in sheets.items()}

    def has_sheet(self, sheet_name: str) -> bool:
        return sheet_name in self._sheets

    def get_rows(self, sheet_name: str) -> List[Row]:
        return [dict(row) for row in self._sheets[sheet_name]]


class CsvDirectoryRowsProvider(RowsProvider):
    """
    Reads one `<sheet name>.csv` file per sheet from a directory.

    Files are expected to be UTF-8 with a header row, as exported from a
    spreadsheet. Multi-line cells (alias lists) must be quoted.
    """

    def __init__(self, data_dir: str, encoding: str = "utf-8"):
        self.data_dir = Path(data_dir)
        self.encoding = encoding

    def _sheet_path(self, sheet_name: str) -> Path:
        return self.data_dir / f"{sheet_name}.csv"

    def has_sheet(self, sheet_name: str) -> bool:
        return self._sheet_path(sheet_name).is_file()

    def get_rows(self, sheet_name: str) -> List[Row]:
        path = self._sheet_path(sheet_name)
        if not path.is_file():
            raise KeyError(sheet_name)

        with open(path, newline="", encoding=self.encoding) as f:
            reader = csv.DictReader(f)
            rows = [row for row in reader]

        logger.debug(f"Read {len(rows)} row(s) from {path.name}")
        return rows
