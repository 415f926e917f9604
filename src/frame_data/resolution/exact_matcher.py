"""
Simple alias strategy: exact lookup of the normalized query.
"""
from ..catalog import CatalogSnapshot
from .semantic_resolver import MatchStrategy, MoveMatcher, ResolutionResult


class SimpleAliasMatcher(MoveMatcher):
    """
    Exact match against the character's simple aliases.
    
    Deterministic: alias keys are unique per character, so at most one row
    can match. Every move is an alias of itself, so canonical names resolve
    here too.
    """
    
    strategy = MatchStrategy.SIMPLE
    
    def resolve(
        self,
        query: str,
        character: str,
        snapshot: CatalogSnapshot,
    ) -> ResolutionResult:
        alias = snapshot.get_simple_alias(character, query)
        if alias is None:
            return ResolutionResult.miss(self.strategy, query)
        
        return ResolutionResult(
            canonical_value=alias.move_name,
            confidence=1.0,
            strategy_used=self.strategy,
            original_query=query,
            normalized_query=query,
            trace=f"Simple alias match for {query} -> {alias.move_name}.",
            matched_alias=alias.alias,
        )
