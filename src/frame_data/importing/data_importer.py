"""
Data importer: turns source sheets into a published catalog.

Sheets are read in a fixed order (characters, macros, then one move sheet
per character) and validated as they are read. Any problem aborts the whole
import and the previously published catalog stays live.
"""
import logging
import re
from time import time
from typing import Dict, List, Optional

from ..catalog import CatalogSnapshot, CatalogStore
from ..exceptions import CatalogValidationError, ConstraintViolationError
from ..models import Character, Macro, Move, RegexAlias, SimpleAlias
from ..resolution.query_normalizer import QueryNormalizer
from ..schemas import ImportSummary
from .rows_provider import Row, RowsProvider

logger = logging.getLogger(__name__)

# Spreadsheet column -> Move attribute
MOVE_COLUMNS: Dict[str, str] = {
    "Guard": "guard",
    "Damage": "damage",
    "Properties": "properties",
    "Meter": "meter",
    "On Hit": "on_hit",
    "On Block": "on_block",
    "Startup": "startup",
    "Active": "active",
    "Recovery": "recovery",
    "Hitstun": "hitstun",
    "Blockstun": "blockstun",
    "Hitstop": "hitstop",
    "On Pushblock": "on_pushblock",
    "Footer": "footer",
    "Thumbnail URL": "thumbnail_url",
    "Footer URL": "footer_url",
}

PATTERN_DELIMITER = "/"


def normalize_key(value: Optional[str]) -> str:
    """Trim and upper-case a key cell; None becomes the empty string."""
    if value is None:
        return ""
    return value.strip().upper()


def split_alias_tokens(cell: Optional[str]) -> List[str]:
    """Split a newline-delimited alias cell into trimmed, non-blank tokens."""
    if not cell:
        return []
    return [token.strip() for token in cell.split("\n") if token.strip()]


def is_pattern_token(token: str) -> bool:
    return (
        len(token) > 1
        and token.startswith(PATTERN_DELIMITER)
        and token.endswith(PATTERN_DELIMITER)
    )


def _cell(row: Row, column: str) -> str:
    value = row.get(column)
    return value.strip() if value else ""


def _sheet_row(index: int) -> int:
    # Header occupies row 1 of the sheet
    return index + 2


class DataImporter:
    """
    Validates source rows and publishes them to a CatalogStore.

    Character names and simple aliases are keyed by the same normalizer the
    resolver applies to queries; move names keep their sheet spelling.

    Usage:
        importer = DataImporter(store)
        summary = importer.import_catalog(CsvDirectoryRowsProvider("data"))
    """

    def __init__(
        self,
        store: CatalogStore,
        characters_sheet: str = "Characters",
        macros_sheet: str = "Macros",
        macro_prefix: str = "MACRO_",
        normalizer: Optional[QueryNormalizer] = None,
    ):
        self._store = store
        self._normalizer = normalizer or QueryNormalizer()
        self.characters_sheet = characters_sheet
        self.macros_sheet = macros_sheet
        self.macro_prefix = macro_prefix

    def import_catalog(self, provider: RowsProvider) -> ImportSummary:
        """
        Replace the catalog with the contents of provider.

        :param provider: Source of sheet rows
        :return: ImportSummary describing the published catalog
        :raises CatalogValidationError: If any row is invalid; the catalog
            is left exactly as it was
        """
        start_time = time()
        logger.info("Begin data import...")

        try:
            with self._store.transaction() as staging:
                move_sheets = self._import_characters(provider, staging)
                self._import_macros(provider, staging)
                self._import_moves_and_aliases(provider, staging, move_sheets)
        except CatalogValidationError as e:
            logger.warning(f"Data import failed, catalog left unchanged: {e}")
            raise

        counts = staging.counts()
        summary = ImportSummary(
            generation=staging.generation,
            characters=counts["characters"],
            macros=counts["macros"],
            moves=counts["moves"],
            simple_aliases=counts["simple_aliases"],
            regex_aliases=counts["regex_aliases"],
            duration_ms=int((time() - start_time) * 1000),
        )
        logger.info(f"Data import completed in {summary.duration_ms}ms.")
        return summary

    # ----------------------------
    # Sheets
    # ----------------------------
    def _read_sheet(self, provider: RowsProvider, sheet_name: str) -> List[Row]:
        if not provider.has_sheet(sheet_name):
            raise CatalogValidationError("Missing sheet", sheet=sheet_name)
        return provider.get_rows(sheet_name)

    def _import_characters(self, provider: RowsProvider, staging: CatalogSnapshot) -> Dict[str, str]:
        """Stage characters; returns character key -> move sheet name."""
        logger.info("  Creating character data...")
        sheet = self.characters_sheet
        move_sheets: Dict[str, str] = {}

        for index, row in enumerate(self._read_sheet(provider, sheet)):
            sheet_name = normalize_key(row.get("Name"))
            name = self._normalizer.normalize(sheet_name)
            if not name:
                raise CatalogValidationError(
                    "Found a blank or undefined character name", sheet, _sheet_row(index)
                )
            if staging.get_character(name) is not None:
                raise CatalogValidationError(
                    f"Duplicate character detected: {name}", sheet, _sheet_row(index)
                )

            staging.add_character(Character(
                name=name,
                pretty_name=_cell(row, "Pretty Name") or sheet_name.title(),
                colour=_cell(row, "Colour"),
            ))
            move_sheets[name] = sheet_name

        logger.info(f"  Done ({len(staging.characters)} characters).")
        return move_sheets

    def _import_macros(self, provider: RowsProvider, staging: CatalogSnapshot) -> None:
        logger.info("  Creating macro data...")
        sheet = self.macros_sheet

        for index, row in enumerate(self._read_sheet(provider, sheet)):
            key = normalize_key(row.get("Key"))
            if not key:
                raise CatalogValidationError(
                    "Found a blank or undefined macro name", sheet, _sheet_row(index)
                )
            if staging.get_macro(key) is not None:
                raise CatalogValidationError(
                    f"Duplicate macro detected: {key}", sheet, _sheet_row(index)
                )

            values = [normalize_key(v) for v in (row.get("Value") or "").split("\n")]
            staging.add_macro(Macro(key=key, value="\n".join(v for v in values if v)))

        logger.info(f"  Done ({len(staging.macros)} macros).")

    def _import_moves_and_aliases(
        self,
        provider: RowsProvider,
        staging: CatalogSnapshot,
        move_sheets: Dict[str, str],
    ) -> None:
        logger.info("  Creating move and alias data...")

        for character in staging.characters:
            sheet = move_sheets[character.name]
            rows = self._read_sheet(provider, sheet)
            logger.info(f"    Creating move and alias data for character {character.name}...")

            for index, row in enumerate(rows):
                self._import_move_row(staging, character.name, row, sheet, _sheet_row(index))

        logger.info(f"  Done ({len(staging.moves)} moves).")

    # ----------------------------
    # Rows
    # ----------------------------
    def _import_move_row(
        self,
        staging: CatalogSnapshot,
        character: str,
        row: Row,
        sheet: str,
        row_number: int,
    ) -> None:
        move_name = normalize_key(row.get("Move Name"))
        if not move_name:
            raise CatalogValidationError(
                f"Found a blank or undefined move name for character {character}",
                sheet, row_number,
            )
        if staging.get_move(character, move_name) is not None:
            raise CatalogValidationError(
                f"Duplicate move detected: {character}'s {move_name}", sheet, row_number
            )

        attributes = {
            attr: _cell(row, column)
            for column, attr in MOVE_COLUMNS.items()
            if _cell(row, column)
        }
        self._insert(staging.add_move, Move(character=character, move_name=move_name, **attributes),
                     sheet, row_number)

        # Every move is reachable by its own name through the Simple lookup.
        self._add_simple_alias(staging, character, move_name, move_name, sheet, row_number)

        for token in split_alias_tokens(row.get("Aliases")):
            if is_pattern_token(token):
                self._add_regex_alias(staging, character, token[1:-1].strip(), move_name, sheet, row_number)
                continue

            alias = normalize_key(token)
            if alias.startswith(self.macro_prefix):
                macro = staging.get_macro(alias)
                if macro is None:
                    raise CatalogValidationError(f"Found undefined macro: {alias}", sheet, row_number)
                for value in macro.expand():
                    self._add_simple_alias(staging, character, value, move_name, sheet, row_number)
            else:
                self._add_simple_alias(staging, character, alias, move_name, sheet, row_number)

    def _add_simple_alias(
        self,
        staging: CatalogSnapshot,
        character: str,
        alias: str,
        move_name: str,
        sheet: str,
        row_number: int,
    ) -> None:
        alias_key = self._normalizer.normalize(alias)
        if not alias_key:
            raise CatalogValidationError(
                f"Alias {alias!r} for {character}'s {move_name} is empty after normalization",
                sheet, row_number,
            )
        if staging.get_simple_alias(character, alias_key) is not None:
            raise CatalogValidationError(
                f"Duplicate move alias detected: {character}'s {alias_key} ({move_name})",
                sheet, row_number,
            )
        self._insert(staging.add_simple_alias,
                     SimpleAlias(character=character, alias=alias_key, move_name=move_name),
                     sheet, row_number)

    def _add_regex_alias(
        self,
        staging: CatalogSnapshot,
        character: str,
        pattern: str,
        move_name: str,
        sheet: str,
        row_number: int,
    ) -> None:
        if not pattern:
            raise CatalogValidationError(
                f"Found a blank regex alias for {character}'s {move_name}", sheet, row_number
            )
        # Overlapping patterns cannot be detected, only exact duplicates.
        if (character, pattern) in staging.regex_aliases:
            raise CatalogValidationError(
                f"Duplicate regex alias detected: {character}'s {pattern} ({move_name})",
                sheet, row_number,
            )
        try:
            re.compile(pattern)
        except re.error as e:
            raise CatalogValidationError(
                f"Invalid regex alias /{pattern}/ for {character}'s {move_name}: {e}",
                sheet, row_number,
            )

        self._insert(staging.add_regex_alias,
                     RegexAlias(character=character, pattern=pattern, move_name=move_name),
                     sheet, row_number)

    @staticmethod
    def _insert(add, record, sheet: str, row_number: int) -> None:
        try:
            add(record)
        except ConstraintViolationError as e:
            raise CatalogValidationError(str(e), sheet, row_number) from e
