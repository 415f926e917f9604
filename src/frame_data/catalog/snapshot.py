"""
A complete, self-consistent view of the catalog.

A snapshot is built in full by the importer and frozen before it is
published, so readers only ever see finished snapshots.
"""
from typing import Dict, List, Optional

from ..exceptions import ConstraintViolationError
from ..models import Character, Macro, Move, RegexAlias, SimpleAlias
from .table import CatalogTable


class CatalogSnapshot:
    """The five catalog tables plus the generation they were published as."""

    def __init__(self, generation: int = 0):
        self.generation = generation
        self.characters: CatalogTable[Character] = CatalogTable("characters", ("name",))
        self.macros: CatalogTable[Macro] = CatalogTable("macros", ("key",))
        self.moves: CatalogTable[Move] = CatalogTable("moves", ("character", "move_name"))
        self.simple_aliases: CatalogTable[SimpleAlias] = CatalogTable(
            "simple_aliases", ("character", "alias")
        )
        self.regex_aliases: CatalogTable[RegexAlias] = CatalogTable(
            "regex_aliases", ("character", "pattern")
        )
        self._frozen = False

    # ----------------------------
    # Writes (staging only)
    # ----------------------------
    def add_character(self, character: Character) -> Character:
        return self.characters.insert(character)

    def add_macro(self, macro: Macro) -> Macro:
        return self.macros.insert(macro)

    def add_move(self, move: Move) -> Move:
        if self.characters.get(move.character) is None:
            raise ConstraintViolationError(
                f"Move '{move.move_name}' references unknown character '{move.character}'"
            )
        return self.moves.insert(move)

    def add_simple_alias(self, alias: SimpleAlias) -> SimpleAlias:
        self._check_move_exists(alias.character, alias.move_name)
        return self.simple_aliases.insert(alias)

    def add_regex_alias(self, alias: RegexAlias) -> RegexAlias:
        self._check_move_exists(alias.character, alias.move_name)
        return self.regex_aliases.insert(alias)

    def _check_move_exists(self, character: str, move_name: str) -> None:
        if self.moves.get(character, move_name) is None:
            raise ConstraintViolationError(
                f"Alias references unknown move '{move_name}' for character '{character}'"
            )

    def freeze(self) -> None:
        for table in self._tables():
            table.freeze()
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ----------------------------
    # Reads
    # ----------------------------
    def get_character(self, name: str) -> Optional[Character]:
        return self.characters.get(name)

    def get_macro(self, key: str) -> Optional[Macro]:
        return self.macros.get(key)

    def get_move(self, character: str, move_name: str) -> Optional[Move]:
        return self.moves.get(character, move_name)

    def get_simple_alias(self, character: str, alias: str) -> Optional[SimpleAlias]:
        return self.simple_aliases.get(character, alias)

    def simple_aliases_for(self, character: str) -> List[SimpleAlias]:
        return self.simple_aliases.scan(character=character)

    def regex_aliases_for(self, character: str) -> List[RegexAlias]:
        """Pattern aliases for one character, in the order they were imported."""
        return self.regex_aliases.scan(character=character)

    def counts(self) -> Dict[str, int]:
        return {table.name: len(table) for table in self._tables()}

    def content(self) -> Dict[str, list]:
        """Every row of every table, for content comparison between snapshots."""
        return {table.name: table.rows() for table in self._tables()}

    def _tables(self):
        return (
            self.characters,
            self.macros,
            self.moves,
            self.simple_aliases,
            self.regex_aliases,
        )
