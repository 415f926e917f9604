import logging
import threading
from typing import List, Optional

from .catalog import CatalogStore
from .config import FrameDataConfig
from .exceptions import ConfigurationError, ServiceNotInitializedError, UnknownCharacterError
from .importing import CsvDirectoryRowsProvider, DataImporter, RowsProvider
from .models import Character
from .resolution import IndexHit, create_index_cache, create_move_resolver
from .schemas import ImportSummary, MoveLookupResponse

logger = logging.getLogger(__name__)


class FrameDataService:
    """
    Facade over the frame data subsystem.
    The ONLY entry point for presentation layers (chat commands, CLI, etc.).
    """

    def __init__(
        self,
        config: FrameDataConfig,
        provider: Optional[RowsProvider] = None,
        store: Optional[CatalogStore] = None,
    ):
        """
        Composition root.
        The store, index cache, resolver and importer are created and wired here.
        """
        self.config = config
        self._provider = provider
        self._store = store or CatalogStore()
        self._index_cache = create_index_cache(self._store, config)
        self._resolver = create_move_resolver(self._store, config, self._index_cache)
        self._importer = DataImporter(
            self._store,
            characters_sheet=config.characters_sheet,
            macros_sheet=config.macros_sheet,
            macro_prefix=config.macro_prefix,
            normalizer=self._resolver.normalizer,
        )
        self._load_lock = threading.Lock()
        self._last_import: Optional[ImportSummary] = None

        if self.config.load_on_start:
            self.load_data()

    # ----------------------------
    # Data loading
    # ----------------------------
    def load_data(self, provider: Optional[RowsProvider] = None) -> ImportSummary:
        """
        Import the catalog from provider (or the configured source).
        On failure the previously loaded catalog remains in service.
        """
        provider = provider or self._default_provider()

        with self._load_lock:
            summary = self._importer.import_catalog(provider)
            self._last_import = summary

        logger.info(
            f"Loaded {summary.characters} characters, {summary.moves} moves, "
            f"{summary.simple_aliases} simple and {summary.regex_aliases} regex aliases."
        )
        return summary

    def reload(self) -> ImportSummary:
        """Maintainer-triggered refresh from the configured source."""
        return self.load_data()

    def _default_provider(self) -> RowsProvider:
        if self._provider is not None:
            return self._provider
        if self.config.data_dir:
            self._provider = CsvDirectoryRowsProvider(self.config.data_dir)
            return self._provider
        raise ConfigurationError("No rows provider given and FRAME_DATA_DIR is not set.")

    @property
    def is_loaded(self) -> bool:
        return self._last_import is not None or self._store.generation > 0

    @property
    def last_import(self) -> Optional[ImportSummary]:
        return self._last_import

    # ----------------------------
    # Queries
    # ----------------------------
    def list_characters(self) -> List[Character]:
        return list(self._store.snapshot().characters)

    def lookup(self, character: str, query: str) -> MoveLookupResponse:
        """
        Resolve a move query and fetch the move record.

        :raises InvalidQueryError: If query is empty after normalization
        :raises UnknownCharacterError: If character is not in the catalog
        :raises CatalogIntegrityError: If the catalog is inconsistent
        """
        snapshot = self._store.snapshot()
        character_record = self._require_character(character, snapshot)
        self._resolver.normalizer.validate(query, "Move name")

        result = self._resolver.resolve(character_record.name, query, snapshot)
        move = None
        if result.found:
            move = snapshot.get_move(character_record.name, result.canonical_value)

        return MoveLookupResponse(character=character_record, result=result, move=move)

    def suggest(self, character: str, query: str, limit: int = 5) -> List[IndexHit]:
        """Ranked fuzzy candidates for a query, e.g. to offer after a miss."""
        snapshot = self._store.snapshot()
        character_record = self._require_character(character, snapshot)
        normalized = self._resolver.normalizer.validate(query, "Move name")

        index = self._index_cache.get_index(character_record.name, snapshot)
        return index.search(normalized, limit=limit)

    def _require_character(self, character: str, snapshot) -> Character:
        if not self.is_loaded:
            raise ServiceNotInitializedError("Frame data has not been loaded.")

        key = self._resolver.normalizer.normalize(character or "")
        character_record = snapshot.get_character(key)
        if character_record is None:
            raise UnknownCharacterError(f"Couldn't find the character \"{character}\".")
        return character_record
