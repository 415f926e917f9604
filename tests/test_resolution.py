"""
Tests for the move resolution cascade.
"""
from unittest.mock import Mock

import pytest

from frame_data.exceptions import CatalogIntegrityError, InvalidQueryError
from frame_data.importing import InMemoryRowsProvider
from frame_data.resolution import (
    MatchStrategy,
    MoveResolver,
    QueryNormalizer,
    RegexAliasMatcher,
    ResolutionPolicy,
    ResolutionResult,
    SimpleAliasMatcher,
)

from conftest import make_sheets


class TestQueryNormalizer:
    """Tests for QueryNormalizer."""

    def test_collapses_whitespace_and_upper_cases(self):
        """Test that whitespace runs collapse and letters are upper-cased."""
        normalizer = QueryNormalizer()

        assert normalizer.normalize("beat   extend") == "BEAT EXTEND"
        assert normalizer.normalize("  Beat\tExtend ") == "BEAT EXTEND"

    def test_keeps_move_notation_punctuation(self):
        """Test that notation characters survive normalization."""
        normalizer = QueryNormalizer()

        assert normalizer.normalize("[4]6+k~lk") == "[4]6+K~LK"
        assert normalizer.normalize("lock 'n' load") == "LOCK 'N' LOAD"
        assert normalizer.normalize("merry-go-rilla, 5.lp") == "MERRY-GO-RILLA, 5.LP"

    def test_strips_other_characters(self):
        """Test that characters outside the whitelist are removed."""
        normalizer = QueryNormalizer()

        assert normalizer.normalize("<b>5lp</b>!?") == "B5LPB"
        assert normalizer.normalize("beat extend!!") == "BEAT EXTEND"

    def test_truncates_to_max_length(self):
        """Test that long queries are cut to the configured length."""
        assert len(QueryNormalizer().normalize("A" * 250)) == 100
        assert QueryNormalizer(max_length=4).normalize("hairball") == "HAIR"

    def test_validate_rejects_empty_result(self):
        """Test that validate raises when nothing is left."""
        normalizer = QueryNormalizer()

        with pytest.raises(InvalidQueryError):
            normalizer.validate("!!!")
        with pytest.raises(InvalidQueryError):
            normalizer.validate("   ")
        assert normalizer.validate("5lp") == "5LP"


class TestSimpleStrategy:
    """Tests for exact alias resolution."""

    def test_every_move_resolves_to_itself(self, loaded_store, resolver):
        """Test that each move name resolves to that move via Simple."""
        for move in loaded_store.snapshot().moves:
            result = resolver.resolve(move.character, move.move_name)

            assert result.strategy_used == MatchStrategy.SIMPLE
            assert result.canonical_value == move.move_name
            assert result.confidence == 1.0

    def test_punctuated_and_spaced_move_names_resolve_to_themselves(self, store, importer, resolver):
        """Test that names with stripped characters or doubled spaces still match exactly."""
        sheets = make_sheets()
        sheets["FILIA"] = [
            {"Move Name": "J.HP (AIR)", "Aliases": ""},
            {"Move Name": "STAND  LP", "Aliases": "MACRO_5LP"},
            {"Move Name": "AIR GRAB!", "Aliases": ""},
            {"Move Name": "UPDO", "Aliases": ""},
        ]
        importer.import_catalog(InMemoryRowsProvider(sheets))

        not_simple = []
        for move in store.snapshot().moves:
            result = resolver.resolve(move.character, move.move_name)
            if result.strategy_used != MatchStrategy.SIMPLE or result.canonical_value != move.move_name:
                not_simple.append(move.move_name)

        assert not_simple == []
        assert resolver.resolve("FILIA", "j.hp air").canonical_value == "J.HP (AIR)"

    def test_punctuated_character_name_resolves(self, store, importer, resolver):
        """Test that a character is found by the name shown in the sheet."""
        sheets = make_sheets()
        sheets["Characters"].append({"Name": "Ms. Fortune!", "Pretty Name": "", "Colour": ""})
        sheets["MS. FORTUNE!"] = [{"Move Name": "CAT SCRATCH", "Aliases": ""}]
        importer.import_catalog(InMemoryRowsProvider(sheets))

        result = resolver.resolve("Ms. Fortune!", "cat scratch")

        assert result.strategy_used == MatchStrategy.SIMPLE
        assert result.canonical_value == "CAT SCRATCH"

    def test_every_alias_resolves_and_is_idempotent(self, loaded_store, resolver):
        """Test that every stored alias resolves the same way twice."""
        for alias in loaded_store.snapshot().simple_aliases:
            first = resolver.resolve(alias.character, alias.alias)
            second = resolver.resolve(alias.character, alias.alias)

            assert first.strategy_used == MatchStrategy.SIMPLE
            assert first.canonical_value == alias.move_name
            assert first == second

    def test_normalized_queries_share_a_lookup_key(self, loaded_store, resolver):
        """Test that queries equal after normalization hit the same alias."""
        for query in ["beat   extend", "BEAT EXTEND", "Beat Extend!"]:
            result = resolver.resolve("Big Band", query)

            assert result.strategy_used == MatchStrategy.SIMPLE
            assert result.canonical_value == "BEAT EXTEND"

    def test_unspaced_query_still_finds_the_move(self, loaded_store, resolver):
        """Test that a query missing its space still finds the move."""
        result = resolver.resolve("Big Band", "beatextend")

        assert result.found
        assert result.canonical_value == "BEAT EXTEND"

    def test_macro_values_resolve(self, loaded_store, resolver):
        """Test that expanded macro values resolve to their move."""
        assert resolver.resolve("filia", "5lp").canonical_value == "STAND LP"
        assert resolver.resolve("filia", "s.lp").canonical_value == "STAND LP"

    def test_trace_names_alias_and_move(self, loaded_store, resolver):
        """Test the Simple trace line and recorded query forms."""
        result = resolver.resolve("FILIA", "jab")

        assert result.trace == "Simple alias match for JAB -> STAND LP."
        assert result.matched_alias == "JAB"
        assert result.original_query == "jab"
        assert result.normalized_query == "JAB"


class TestRegexStrategy:
    """Tests for pattern alias resolution."""

    def test_pattern_match_when_no_simple_alias(self, loaded_store, resolver):
        """Test that a pattern fires when no simple alias matches."""
        result = resolver.resolve("FILIA", "hhairball ex")

        assert result.strategy_used == MatchStrategy.REGEX
        assert result.canonical_value == "H HAIRBALL"
        assert result.trace == "Regex alias match for HHAIRBALL EX -> H HAIRBALL via /H\\s*HAIR/."

    def test_first_matching_pattern_wins(self, loaded_store, resolver):
        """Test that overlapping patterns resolve in import order."""
        # Both /H\s*HAIR/ and /HAIR/ match; H HAIRBALL was imported first
        result = resolver.resolve("FILIA", "h hair")

        assert result.strategy_used == MatchStrategy.REGEX
        assert result.canonical_value == "H HAIRBALL"

    def test_later_pattern_used_when_earlier_does_not_match(self, loaded_store, resolver):
        """Test that later patterns are tried after earlier misses."""
        result = resolver.resolve("FILIA", "l hair thing")

        assert result.strategy_used == MatchStrategy.REGEX
        assert result.canonical_value == "L HAIRBALL"

    def test_simple_alias_beats_pattern(self, loaded_store, resolver):
        """Test that Simple runs before Regex."""
        result = resolver.resolve("FILIA", "hairball")

        assert result.strategy_used == MatchStrategy.SIMPLE
        assert result.canonical_value == "H HAIRBALL"

    def test_patterns_are_per_character(self, loaded_store, resolver):
        """Test that only the requested character's patterns are tried."""
        result = resolver.resolve("BIG BAND", "super train")

        assert result.strategy_used == MatchStrategy.REGEX
        assert result.canonical_value == "A TRAIN"


class TestFuzzyStrategy:
    """Tests for approximate alias resolution."""

    def test_near_miss_resolves_fuzzily(self, loaded_store, resolver):
        """Test that a typo falls through to the fuzzy strategy."""
        result = resolver.resolve("BIG BAND", "beatt extend")

        assert result.strategy_used == MatchStrategy.FUZZY
        assert result.canonical_value is not None
        assert result.is_fuzzy()
        assert 0.0 < result.confidence <= 1.0
        assert result.trace.startswith("Fuzzy alias match for BEATT EXTEND -> ")

    def test_no_match_returns_not_found(self, loaded_store, resolver):
        """Test that an unrelated query yields NOT_FOUND rather than raising."""
        result = resolver.resolve("FILIA", "qqqq zzzz")

        assert result.strategy_used == MatchStrategy.NOT_FOUND
        assert result.canonical_value is None
        assert result.confidence == 0.0
        assert result.trace == "No match via any strategy for QQQQ ZZZZ."

    def test_removed_alias_is_not_served_from_stale_index(
        self, loaded_store, resolver, importer, index_cache
    ):
        """Test that a re-import drops cached fuzzy indexes."""
        # Prime the fuzzy index with the alias that is about to disappear
        primed = resolver.resolve("FILIA", "qwertz")
        assert primed.strategy_used == MatchStrategy.FUZZY
        assert primed.canonical_value == "STAND LP"
        assert len(index_cache) == 1

        sheets = make_sheets()
        sheets["FILIA"] = [{"Move Name": "STAND LP", "Aliases": "MACRO_5LP"}]
        importer.import_catalog(InMemoryRowsProvider(sheets))

        assert len(index_cache) == 0
        assert resolver.resolve("FILIA", "qwerty").strategy_used == MatchStrategy.NOT_FOUND
        assert resolver.resolve("FILIA", "qwertz").strategy_used == MatchStrategy.NOT_FOUND


class TestMoveResolver:
    """Tests for MoveResolver edge cases."""

    def test_unknown_character_never_matches(self, loaded_store, resolver):
        """Test that an unknown character yields NOT_FOUND."""
        result = resolver.resolve("PEACOCK", "STAND LP")

        assert result.strategy_used == MatchStrategy.NOT_FOUND
        assert result.canonical_value is None
        assert "Unknown character" in result.trace

    def test_empty_catalog_returns_not_found(self, store, resolver):
        """Test that resolving against an empty catalog yields NOT_FOUND."""
        result = resolver.resolve("FILIA", "5LP")

        assert result.strategy_used == MatchStrategy.NOT_FOUND

    def test_empty_query_returns_not_found(self, loaded_store, resolver):
        """Test that a query with nothing left after normalization yields NOT_FOUND."""
        result = resolver.resolve("FILIA", "???")

        assert result.strategy_used == MatchStrategy.NOT_FOUND

    def test_alias_pointing_at_missing_move_raises(self, loaded_store):
        """Test that a match on a missing move raises CatalogIntegrityError."""
        broken_matcher = Mock()
        broken_matcher.strategy = MatchStrategy.SIMPLE
        broken_matcher.resolve.return_value = ResolutionResult(
            canonical_value="GHOST MOVE",
            confidence=1.0,
            strategy_used=MatchStrategy.SIMPLE,
            original_query="GHOST",
            normalized_query="GHOST",
            trace="Simple alias match for GHOST -> GHOST MOVE.",
            matched_alias="GHOST",
        )
        resolver = MoveResolver(loaded_store, ResolutionPolicy([broken_matcher]))

        with pytest.raises(CatalogIntegrityError):
            resolver.resolve("FILIA", "ghost")


class TestResolutionPolicy:
    """Tests for ResolutionPolicy."""

    def test_requires_matchers(self):
        """Test that an empty matcher list is rejected."""
        with pytest.raises(ValueError):
            ResolutionPolicy([])

    def test_stops_at_first_match(self, loaded_store):
        """Test that later strategies are skipped once one matches."""
        later = Mock()
        later.strategy = MatchStrategy.FUZZY
        policy = ResolutionPolicy([SimpleAliasMatcher(), RegexAliasMatcher(), later])

        result = policy.resolve("5LP", "FILIA", loaded_store.snapshot())

        assert result.strategy_used == MatchStrategy.SIMPLE
        later.resolve.assert_not_called()

    def test_strategy_order(self, resolver):
        """Test that the factory builds Simple, Regex, Fuzzy in order."""
        assert resolver._policy.strategies == [
            MatchStrategy.SIMPLE,
            MatchStrategy.REGEX,
            MatchStrategy.FUZZY,
        ]
