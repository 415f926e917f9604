from dataclasses import dataclass
from typing import Optional

from .models import Character, Move
from .resolution.semantic_resolver import ResolutionResult


@dataclass
class ImportSummary:
    generation: int
    characters: int
    macros: int
    moves: int
    simple_aliases: int
    regex_aliases: int
    duration_ms: Optional[int] = None


@dataclass
class MoveLookupResponse:
    character: Character
    result: ResolutionResult
    move: Optional[Move] = None

    @property
    def found(self) -> bool:
        return self.move is not None

    @property
    def is_guess(self) -> bool:
        """True when the move was only found by fuzzy matching."""
        return self.found and self.result.is_fuzzy()
