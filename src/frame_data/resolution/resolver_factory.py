"""
Factory for creating move resolvers.

Wires the matcher cascade from configuration.
"""
from typing import Optional
from .approximate_index import ApproximateIndexCache
from .exact_matcher import SimpleAliasMatcher
from .fuzzy_matcher import FuzzyAliasMatcher
from .move_resolver import MoveResolver
from .query_normalizer import QueryNormalizer
from .regex_matcher import RegexAliasMatcher
from .resolution_policy import ResolutionPolicy
from ..catalog import CatalogStore
from ..config import FrameDataConfig


def create_index_cache(
    store: CatalogStore,
    config: Optional[FrameDataConfig] = None,
) -> ApproximateIndexCache:
    config = config or FrameDataConfig()
    return ApproximateIndexCache(
        store,
        threshold=config.fuzzy_threshold,
        scorer=config.fuzzy_scorer,
    )


def create_move_resolver(
    store: CatalogStore,
    config: Optional[FrameDataConfig] = None,
    index_cache: Optional[ApproximateIndexCache] = None,
) -> MoveResolver:
    """
    Factory function to create a MoveResolver.
    
    The fuzzy strategy is left out when fuzzy matching is disabled in config.
    
    :param store: Catalog store the resolver reads from
    :param config: FrameDataConfig instance (defaults used if None)
    :param index_cache: Optional pre-built approximate index cache
    :return: MoveResolver
    """
    config = config or FrameDataConfig()
    
    matchers = [SimpleAliasMatcher(), RegexAliasMatcher()]
    if config.enable_fuzzy_matching:
        if index_cache is None:
            index_cache = create_index_cache(store, config)
        matchers.append(FuzzyAliasMatcher(index_cache))
    
    return MoveResolver(
        store=store,
        policy=ResolutionPolicy(matchers),
        normalizer=QueryNormalizer(max_length=config.max_query_length),
    )
