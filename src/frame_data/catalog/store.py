"""
Catalog Store: the live catalog and its atomic replace.

Readers take the current snapshot with snapshot(); writers build a new
snapshot inside transaction() which is published in one step on success.
"""
import logging
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, List

from .snapshot import CatalogSnapshot

logger = logging.getLogger(__name__)

ReplaceHook = Callable[[], None]


class CatalogStore:
    """
    Holds the published catalog snapshot.

    Replacing the catalog swaps one reference under a lock, and every
    registered replace hook (e.g. index invalidation) runs under that same
    lock, so no reader can pair a new catalog with stale derived state.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._write_lock = threading.Lock()
        self._snapshot = CatalogSnapshot(generation=0)
        self._snapshot.freeze()
        self._replace_hooks: List[ReplaceHook] = []

    def snapshot(self) -> CatalogSnapshot:
        """Return the currently published (read-only) snapshot."""
        with self._lock:
            return self._snapshot

    @property
    def generation(self) -> int:
        return self.snapshot().generation

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def add_replace_hook(self, hook: ReplaceHook) -> None:
        self._replace_hooks.append(hook)

    @contextmanager
    def transaction(self) -> Iterator[CatalogSnapshot]:
        """
        Build a replacement catalog.

        Yields an empty staging snapshot. If the block exits cleanly the
        staging snapshot replaces the live one; if it raises, the live
        catalog is left untouched and the exception propagates.
        Only one transaction runs at a time.
        """
        with self._write_lock:
            staging = CatalogSnapshot()
            yield staging
            self._publish(staging)

    def _publish(self, staging: CatalogSnapshot) -> None:
        with self._lock:
            previous = self._snapshot
            staging.generation = previous.generation + 1
            staging.freeze()
            self._snapshot = staging
            try:
                for hook in self._replace_hooks:
                    hook()
            except Exception:
                self._snapshot = previous
                logger.error(f"Replace hook failed, catalog rolled back to generation {previous.generation}")
                raise

        logger.info(f"Catalog published as generation {staging.generation}: {staging.counts()}")

    def clear(self) -> None:
        """Replace the catalog with an empty one."""
        with self.transaction():
            pass
