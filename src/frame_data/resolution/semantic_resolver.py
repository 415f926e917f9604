"""
Core abstractions for move resolution.

Defines the result type and the matcher protocol shared by every strategy.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..catalog import CatalogSnapshot


class MatchStrategy(str, Enum):
    SIMPLE = "simple"
    REGEX = "regex"
    FUZZY = "fuzzy"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class ResolutionResult:
    """
    Immutable result of move resolution.
    
    Attributes:
        canonical_value: The canonical move name, or None when nothing matched
        confidence: Confidence score between 0.0 and 1.0
        strategy_used: The strategy that produced the match (or NOT_FOUND)
        original_query: The query as the caller supplied it
        normalized_query: The query after normalization
        trace: One-line description of how the result was reached
        matched_alias: Alias or pattern that fired, if any
    """
    canonical_value: Optional[str]
    confidence: float
    strategy_used: MatchStrategy
    original_query: str
    normalized_query: str = ""
    trace: str = ""
    matched_alias: Optional[str] = None
    
    def __post_init__(self):
        """Validate confidence score."""
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence must be between 0.0 and 1.0, got {self.confidence}")
    
    @property
    def found(self) -> bool:
        return self.canonical_value is not None
    
    def is_fuzzy(self) -> bool:
        return self.strategy_used == MatchStrategy.FUZZY
    
    @classmethod
    def miss(cls, strategy: MatchStrategy, query: str, trace: str = "") -> "ResolutionResult":
        return cls(
            canonical_value=None,
            confidence=0.0,
            strategy_used=strategy,
            original_query=query,
            normalized_query=query,
            trace=trace,
        )
    
    @classmethod
    def not_found(cls, query: str, trace: str) -> "ResolutionResult":
        return cls.miss(MatchStrategy.NOT_FOUND, query, trace)


class MoveMatcher(ABC):
    """
    Protocol for one alias-matching strategy.
    
    A matcher looks a normalized query up against one character's aliases
    in a catalog snapshot and reports either a match or a miss.
    """
    
    strategy: MatchStrategy
    
    @abstractmethod
    def resolve(
        self,
        query: str,
        character: str,
        snapshot: CatalogSnapshot,
    ) -> ResolutionResult:
        """
        Resolve a normalized query for one character.
        
        :param query: Normalized query
        :param character: Normalized character name
        :param snapshot: Catalog snapshot to read from
        :return: ResolutionResult; canonical_value is None on a miss
        """
        pass
