"""
Pattern alias strategy: first regular expression that matches wins.
"""
import re
from functools import lru_cache
from typing import Pattern

from ..catalog import CatalogSnapshot
from .semantic_resolver import MatchStrategy, MoveMatcher, ResolutionResult


@lru_cache(maxsize=2048)
def _compile(pattern: str) -> Pattern:
    return re.compile(pattern)


class RegexAliasMatcher(MoveMatcher):
    """
    Tests the query against each of the character's pattern aliases.
    
    Patterns are searched (unanchored) in import order and the first match
    wins. Patterns may overlap; import order is the tie-break.
    """
    
    strategy = MatchStrategy.REGEX
    
    def resolve(
        self,
        query: str,
        character: str,
        snapshot: CatalogSnapshot,
    ) -> ResolutionResult:
        for regex_alias in snapshot.regex_aliases_for(character):
            if _compile(regex_alias.pattern).search(query):
                return ResolutionResult(
                    canonical_value=regex_alias.move_name,
                    confidence=1.0,
                    strategy_used=self.strategy,
                    original_query=query,
                    normalized_query=query,
                    trace=(
                        f"Regex alias match for {query} -> {regex_alias.move_name} "
                        f"via /{regex_alias.pattern}/."
                    ),
                    matched_alias=regex_alias.pattern,
                )
        
        return ResolutionResult.miss(self.strategy, query)
