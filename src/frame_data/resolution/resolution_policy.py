"""
Resolution policy for matcher escalation.

Implements the cascade: simple alias -> regex alias -> fuzzy alias.
"""
import logging
from typing import List

from ..catalog import CatalogSnapshot
from .semantic_resolver import MoveMatcher, ResolutionResult

logger = logging.getLogger(__name__)


class ResolutionPolicy:
    """
    Tries matchers in order; the first one that finds a move wins.
    
    Later matchers are never consulted once an earlier one has matched,
    even if a later one would report a higher confidence.
    """
    
    def __init__(self, matchers: List[MoveMatcher]):
        """
        :param matchers: Matchers to try in order (e.g. [Simple, Regex, Fuzzy])
        """
        if not matchers:
            raise ValueError("At least one matcher must be provided")
        
        self._matchers = list(matchers)
    
    @property
    def strategies(self):
        return [m.strategy for m in self._matchers]
    
    def resolve(
        self,
        query: str,
        character: str,
        snapshot: CatalogSnapshot,
    ) -> ResolutionResult:
        """
        Resolve a normalized query by trying matchers in order.
        
        :param query: Normalized query
        :param character: Normalized character name
        :param snapshot: Catalog snapshot to read from
        :return: First matching result, or a NOT_FOUND result
        """
        for matcher in self._matchers:
            result = matcher.resolve(query, character, snapshot)
            if result.found:
                return result
            logger.debug(f"No {matcher.strategy.value} alias match for {query}.")
        
        return ResolutionResult.not_found(query, f"No match via any strategy for {query}.")
