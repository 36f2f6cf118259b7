"""
Integration tests for the search pipeline.

Indexes rows through the repository into a real SQLite FTS5 table and
searches them end to end.
"""

import pytest

from polysearch.core.config_loader import get_config
from polysearch.database.repository import FulltextRowRepository
from polysearch.search.engine import FulltextSearch
from polysearch.search.models import PaginatedResults, SearchMode
from polysearch.search.registry import TypeRegistry


ROWS = [
    ("Note", 1, "solar panel installation guide", 1),
    ("Note", 2, "wind turbine maintenance", 1),
    ("Task", 3, "install solar panels on the roof", 2),
    ("Task", 4, "panel discussion notes", 2),
]


@pytest.fixture
def populated_db(indexed_db):
    repo = FulltextRowRepository()
    for owner_type, owner_id, value, parent_id in ROWS:
        repo.upsert(owner_type, owner_id, value, parent_id=parent_id)
    yield repo


@pytest.fixture
def stores(record_store_factory):
    return {
        "Note": record_store_factory(ids=[1, 2]),
        "Task": record_store_factory(ids=[3, 4]),
    }


@pytest.fixture
def engine(populated_db, stores):
    registry = TypeRegistry()
    registry.register("Note", stores["Note"].find_all_by_id)
    registry.register("Task", stores["Task"].find_all_by_id, per_page=2)
    return FulltextSearch(registry=registry, config=get_config())


def ids_of(pairs):
    return {owner_id for _, owner_id in pairs}


class TestSimpleSearch:
    """End-to-end simple (prefix) search."""

    def test_prefix_match(self, engine):
        """Test that tokens match as prefixes."""
        results = engine.search("pan", active_record=False)

        assert ids_of(results) == {1, 3, 4}

    def test_any_term_matches(self, engine):
        """Test that any one term is enough."""
        results = engine.search("turbine roof", active_record=False)

        assert ids_of(results) == {2, 3}

    def test_no_match(self, engine):
        """Test a query matching nothing."""
        assert engine.search("geothermal", active_record=False) == []

    def test_punctuation_is_literal(self, engine):
        """Test that quote and operator characters are read as plain text."""
        results = engine.search('solar" OR "xyz', active_record=False)

        assert ids_of(results) == {1, 3}

    def test_relevancy_descending(self, engine):
        """Test raw hits come back best first."""
        hits = engine.search_rows("solar panel")

        scores = [h.relevancy for h in hits]
        assert scores == sorted(scores, reverse=True)


class TestModes:
    """End-to-end phrase and advanced search."""

    def test_phrase(self, engine):
        """Test phrase search needs the words adjacent and exact."""
        engine.use_phrase_search()

        assert engine.search("solar panel", active_record=False) == [("Note", 1)]

    def test_advanced_or(self, engine):
        """Test advanced search ranks all-terms matches first."""
        engine.use_advanced_search()

        results = engine.search("solar panel", active_record=False)

        assert results[0] == ("Note", 1)
        assert ids_of(results) == {1, 3, 4}

    def test_advanced_and(self, engine):
        """Test AND search requires every term, as prefixes."""
        engine.use_advanced_search()
        engine.use_and_search()

        results = engine.search("solar panel", active_record=False)

        assert ids_of(results) == {1, 3}

    def test_advanced_ignores_phrase(self, engine):
        """Test phrase search has no effect under advanced search."""
        engine.use_phrase_search()
        engine.use_advanced_search()

        results = engine.search("solar panel", active_record=False)

        assert ids_of(results) == {1, 3, 4}


class TestFilters:
    """End-to-end type and parent filters."""

    def test_only(self, engine):
        """Test restricting to one type."""
        results = engine.search("pan", only="task", active_record=False)

        assert results and all(t == "Task" for t, _ in results)
        assert ids_of(results) == {3, 4}

    def test_only_with_invalid_names(self, engine):
        """Test an entirely invalid type filter restricts nothing."""
        results = engine.search("pan", only=["x;y"], active_record=False)

        assert ids_of(results) == {1, 3, 4}

    def test_parent_scalar(self, engine):
        """Test scoping to one parent."""
        results = engine.search("pan", parent_id="1", active_record=False)

        assert results == [("Note", 1)]

    def test_parent_list(self, engine):
        """Test scoping to several parents."""
        results = engine.search("pan wind", parent_id=[1], active_record=False)

        assert ids_of(results) == {1, 2}

    def test_parent_empty_list(self, engine):
        """Test an empty parent list matches nothing."""
        assert engine.search("pan", parent_id=[], active_record=False) == []


class TestPaginationAndMaterialization:
    """End-to-end pagination and record loading."""

    def test_pagination(self, engine):
        """Test pages and totals over real rows."""
        first = engine.search("pan", page=1, search_class="Task", active_record=False)
        second = engine.search("pan", page=2, search_class="Task", active_record=False)

        assert isinstance(first, PaginatedResults)
        assert first.total_entries == 3
        assert first.total_pages == 2
        assert len(first) == 2
        assert len(second) == 1
        assert ids_of(first) | ids_of(second) == {1, 3, 4}

    def test_limit_and_offset(self, engine):
        """Test slicing with limit and offset."""
        everything = engine.search("pan", active_record=False)
        sliced = engine.search("pan", limit=1, offset=1, active_record=False)

        assert sliced == everything[1:2]

    def test_records_follow_hit_order(self, engine, stores):
        """Test loaded records come back in relevance order."""
        pairs = engine.search("solar panel", active_record=False)
        records = engine.search("solar panel")

        assert [r.id for r in records] == [owner_id for _, owner_id in pairs]
        assert stores["Note"].calls == [[1]]
        assert stores["Task"].calls == [[3, 4]] or stores["Task"].calls == [[4, 3]]

    def test_deleted_record_is_skipped(self, engine, stores):
        """Test an indexed row whose record is gone leaves no gap."""
        del stores["Task"].records[3]

        records = engine.search("solar")

        assert [r.id for r in records] == [1]

    def test_reindexed_value_is_searchable(self, engine, populated_db):
        """Test updates through the repository reach the index."""
        populated_db.upsert("Note", 2, "geothermal heat pump", parent_id=1)

        assert engine.search("geothermal", active_record=False) == [("Note", 2)]
        assert ("Note", 2) not in engine.search("wind", active_record=False)


MODES = [
    SearchMode(),
    SearchMode(phrase=True),
    SearchMode(advanced=True),
    SearchMode(advanced=True, and_search=True),
    SearchMode(advanced=True, match_some_wildcard=True),
]


class TestDegenerateQueries:
    """End-to-end queries with no searchable words."""

    @pytest.mark.parametrize("mode", MODES)
    @pytest.mark.parametrize("query", ["", "   ", "- + *"])
    def test_matches_nothing(self, populated_db, mode, query):
        """Test that blank and operator-only queries run and find nothing."""
        engine = FulltextSearch(mode=mode, config=get_config())

        assert engine.search(query, active_record=False) == []

    @pytest.mark.parametrize("mode", MODES)
    def test_paginated_blank_query(self, populated_db, mode):
        """Test that a blank query counts zero matches."""
        engine = FulltextSearch(mode=mode, config=get_config())

        results = engine.search("", page=1, active_record=False)

        assert results.total_entries == 0
        assert list(results) == []
