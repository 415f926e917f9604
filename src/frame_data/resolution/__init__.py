"""
Move resolution layer.

Converts loosely formatted move queries into canonical move names.

Key components:
- MoveMatcher: Protocol for matching strategies
- ResolutionResult: Immutable result with strategy and trace
- Matchers: Simple alias, regex alias and fuzzy alias strategies
- ApproximateIndexCache: Lazily built per-character fuzzy indexes
- ResolutionPolicy: Ordered cascade over the matchers
"""
from .semantic_resolver import MatchStrategy, MoveMatcher, ResolutionResult
from .query_normalizer import QueryNormalizer
from .exact_matcher import SimpleAliasMatcher
from .regex_matcher import RegexAliasMatcher
from .approximate_index import ApproximateIndex, ApproximateIndexCache, IndexHit
from .fuzzy_matcher import FuzzyAliasMatcher
from .resolution_policy import ResolutionPolicy
from .move_resolver import MoveResolver
from .resolver_factory import create_index_cache, create_move_resolver

__all__ = [
    "MatchStrategy",
    "MoveMatcher",
    "ResolutionResult",
    "QueryNormalizer",
    "SimpleAliasMatcher",
    "RegexAliasMatcher",
    "ApproximateIndex",
    "ApproximateIndexCache",
    "IndexHit",
    "FuzzyAliasMatcher",
    "ResolutionPolicy",
    "MoveResolver",
    "create_index_cache",
    "create_move_resolver",
]
