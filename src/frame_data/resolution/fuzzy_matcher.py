"""
Fuzzy alias strategy using the per-character approximate index.

Handles typos and near-misses ("BEATT EXTEND" -> "BEAT EXTEND").
"""
from ..catalog import CatalogSnapshot
from .approximate_index import ApproximateIndexCache
from .semantic_resolver import MatchStrategy, MoveMatcher, ResolutionResult


class FuzzyAliasMatcher(MoveMatcher):
    """
    Best-effort similarity match over the character's simple aliases.
    
    Takes the top-ranked alias from the approximate index and answers with
    the move that alias belongs to.
    """
    
    strategy = MatchStrategy.FUZZY
    
    def __init__(self, index_cache: ApproximateIndexCache):
        self._index_cache = index_cache
    
    def resolve(
        self,
        query: str,
        character: str,
        snapshot: CatalogSnapshot,
    ) -> ResolutionResult:
        index = self._index_cache.get_index(character, snapshot)
        hits = index.search(query, limit=1)
        if not hits:
            return ResolutionResult.miss(self.strategy, query)
        
        best = hits[0]
        return ResolutionResult(
            canonical_value=best.move_name,
            confidence=best.score,
            strategy_used=self.strategy,
            original_query=query,
            normalized_query=query,
            trace=f"Fuzzy alias match for {query} -> {best.alias} -> {best.move_name}.",
            matched_alias=best.alias,
        )
