"""
Approximate (fuzzy) search over one character's simple aliases.

Indexes are built lazily per character and cached. Each cached index is
tagged with the catalog generation it was built from, and the whole cache
is cleared whenever the catalog is replaced.
"""
import logging
import threading
import unicodedata
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from rapidfuzz import fuzz, process

from ..catalog import CatalogSnapshot, CatalogStore
from ..models import SimpleAlias

logger = logging.getLogger(__name__)

SCORERS = {
    "ratio": fuzz.ratio,
    "partial_ratio": fuzz.partial_ratio,
    "token_sort_ratio": fuzz.token_sort_ratio,
    "token_set_ratio": fuzz.token_set_ratio,
    "WRatio": fuzz.WRatio,
}


def fold_for_matching(text: str) -> str:
    """Case- and diacritic-insensitive form of text ("Café" -> "cafe")."""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return stripped.casefold().strip()


@dataclass(frozen=True)
class IndexHit:
    alias: str
    move_name: str
    score: float


class ApproximateIndex:
    """
    Similarity search over the alias field of a set of simple aliases.
    
    Uses rapidfuzz's process.extract; results are ranked by score, and ties
    keep rapidfuzz's natural order (alias import order).
    """
    
    def __init__(
        self,
        aliases: Sequence[SimpleAlias],
        threshold: float = 0.6,
        scorer: str = "WRatio",
        generation: int = 0,
    ):
        """
        :param aliases: Simple aliases to index (one character's)
        :param threshold: Minimum similarity (0.0-1.0) for a hit
        :param scorer: rapidfuzz scorer name (see SCORERS)
        :param generation: Catalog generation the aliases were read from
        """
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"Threshold must be between 0.0 and 1.0, got {threshold}")
        if scorer not in SCORERS:
            raise ValueError(
                f"Unknown scorer '{scorer}'. "
                f"Must be one of: {list(SCORERS.keys())}"
            )
        
        self._aliases = list(aliases)
        self._choices = [a.alias for a in self._aliases]
        self.threshold = threshold
        self.scorer = scorer
        self.generation = generation
    
    def search(self, query: str, limit: Optional[int] = 1) -> List[IndexHit]:
        """
        Return the best-scoring aliases for query.
        
        :param query: Query text
        :param limit: Maximum number of hits (None for all above threshold)
        :return: Hits ordered best first
        """
        if not query or not self._choices:
            return []
        
        results = process.extract(
            query,
            self._choices,
            scorer=SCORERS[self.scorer],
            processor=fold_for_matching,
            limit=limit,
            score_cutoff=self.threshold * 100,
        )
        
        hits = []
        for _, score, position in results:
            alias = self._aliases[position]
            hits.append(IndexHit(
                alias=alias.alias,
                move_name=alias.move_name,
                score=min(score / 100.0, 1.0),
            ))
        return hits
    
    def __len__(self) -> int:
        return len(self._choices)


class ApproximateIndexCache:
    """
    Per-character cache of ApproximateIndex objects.
    
    Registers invalidate_all() as a replace hook on the store, so the cache
    is emptied inside the same locked step that publishes a new catalog.
    """
    
    def __init__(
        self,
        store: CatalogStore,
        threshold: float = 0.6,
        scorer: str = "WRatio",
    ):
        self._store = store
        self.threshold = threshold
        self.scorer = scorer
        self._lock = threading.Lock()
        self._indexes: Dict[str, ApproximateIndex] = {}
        store.add_replace_hook(self.invalidate_all)
    
    def get_index(
        self,
        character: str,
        snapshot: Optional[CatalogSnapshot] = None,
    ) -> ApproximateIndex:
        """
        Get (building if needed) the index for one character.
        
        :param character: Normalized character name
        :param snapshot: Snapshot the caller is reading; defaults to the live one
        :return: Index built from that snapshot's aliases
        """
        if snapshot is None:
            snapshot = self._store.snapshot()
        
        with self._lock:
            cached = self._indexes.get(character)
        if cached is not None and cached.generation == snapshot.generation:
            return cached
        
        index = ApproximateIndex(
            snapshot.simple_aliases_for(character),
            threshold=self.threshold,
            scorer=self.scorer,
            generation=snapshot.generation,
        )
        
        # Only cache an index built from the catalog that is still live
        with self._store.lock:
            if self._store.generation == snapshot.generation:
                with self._lock:
                    self._indexes[character] = index
                logger.debug(f"Built fuzzy index for {character} ({len(index)} aliases)")
        
        return index
    
    def invalidate_all(self) -> None:
        with self._lock:
            dropped = len(self._indexes)
            self._indexes.clear()
        logger.info(f"Cleared fuzzy index cache ({dropped} character index(es)).")
    
    def __len__(self) -> int:
        with self._lock:
            return len(self._indexes)
