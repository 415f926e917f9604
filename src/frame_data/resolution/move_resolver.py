"""
Move resolver: normalizes a query and runs the matcher cascade for one character.
"""
import logging
from dataclasses import replace
from typing import Optional

from ..catalog import CatalogSnapshot, CatalogStore
from ..exceptions import CatalogIntegrityError
from .query_normalizer import QueryNormalizer
from .resolution_policy import ResolutionPolicy
from .semantic_resolver import ResolutionResult

logger = logging.getLogger(__name__)


class MoveResolver:
    """
    Resolves (character, raw query) to a canonical move name.
    
    Usage:
        resolver = create_move_resolver(store)
        result = resolver.resolve("Filia", "  5lp ")
        if result.found:
            move = store.snapshot().get_move("FILIA", result.canonical_value)
    
    The whole resolution reads one catalog snapshot, so a concurrent import
    cannot produce a mixed view. A miss is returned as a NOT_FOUND result;
    only a broken catalog raises.
    """
    
    def __init__(
        self,
        store: CatalogStore,
        policy: ResolutionPolicy,
        normalizer: Optional[QueryNormalizer] = None,
    ):
        self._store = store
        self._policy = policy
        self._normalizer = normalizer or QueryNormalizer()
    
    @property
    def normalizer(self) -> QueryNormalizer:
        return self._normalizer
    
    def resolve(
        self,
        character: str,
        raw_query: str,
        snapshot: Optional[CatalogSnapshot] = None,
    ) -> ResolutionResult:
        """
        Resolve a move query for a character.
        
        :param character: Character name (any case)
        :param raw_query: Query as typed by the user
        :param snapshot: Snapshot to read; defaults to the live catalog
        :return: ResolutionResult with canonical move name and trace
        :raises CatalogIntegrityError: If an alias points at a move that is missing
        """
        if snapshot is None:
            snapshot = self._store.snapshot()
        character_key = self._normalizer.normalize(character)
        query = self._normalizer.normalize(raw_query)
        
        if not query:
            result = ResolutionResult.not_found(query, "Empty query after normalization.")
        elif snapshot.get_character(character_key) is None:
            result = ResolutionResult.not_found(query, f"Unknown character {character_key}.")
        else:
            result = self._policy.resolve(query, character_key, snapshot)
        
        if result.found and snapshot.get_move(character_key, result.canonical_value) is None:
            raise CatalogIntegrityError(
                f"{result.strategy_used.value} alias {result.matched_alias} for {character_key} "
                f"points at missing move {result.canonical_value}"
            )
        
        logger.info(f"{character_key} - {query}: {result.trace}")
        return replace(result, original_query=raw_query)
