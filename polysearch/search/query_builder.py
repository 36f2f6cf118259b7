"""
Query builder for ranked full-text search over the shared table.

Translates raw query text, the search mode and the type/parent filters
into a parameterized query: a condition clause, a relevance expression
and a fixed ordering. User input only ever reaches the statement through
bindings.
"""

import re
from typing import Any, List, Optional, Tuple

from ..core import get_logger
from ..utils import to_int
from .dialects import Dialect, SQLiteFTS5Dialect
from .models import BuiltQuery, SearchMode

logger = get_logger(__name__)

_TYPE_NAME = re.compile(r"^\w+$")
_BOOLEAN_OPERATORS = re.compile(r"[*+\-]")

MATCH_ALL_EXACT_WEIGHT = 5
MATCH_SOME_WILDCARD_WEIGHT = 0.5


def sanitize_type_names(names: Optional[List[Any]]) -> List[str]:
    """
    Keep only word-character type names, without duplicates.

    Entries that fail the check are dropped, not rejected; the drop is
    logged at WARNING so a silently narrowed filter can be traced.
    """
    if not names:
        return []

    kept = []
    dropped = []
    for name in names:
        name = str(name)
        if not _TYPE_NAME.match(name):
            dropped.append(name)
        elif name not in kept:
            kept.append(name)

    if dropped:
        logger.warning(f"Ignoring invalid type names in filter: {dropped}")

    return kept


def split_words(query: str) -> List[str]:
    """Strip boolean operators from the query and split it into words."""
    return _BOOLEAN_OPERATORS.sub("", query or "").split()


def _format_weight(weight: float) -> str:
    return f"{weight:g}"


class QueryBuilder:
    """
    Builds ranked full-text queries for one search mode and dialect.

    The mode is fixed at construction; build another builder for a
    different mode.
    """

    def __init__(
        self,
        mode: SearchMode = None,
        dialect: Dialect = None,
        table_name: str = "fulltext_rows",
        fts_table_name: str = None
    ):
        """
        Initialize the builder.

        Args:
            mode: Search mode flags. Defaults to simple search.
            dialect: Full-text dialect. Defaults to SQLite FTS5.
            table_name: Searchable table name.
            fts_table_name: FTS shadow table, defaults to ``<table>_fts``.
        """
        self.mode = mode or SearchMode()
        self.dialect = dialect or SQLiteFTS5Dialect()
        self.table = table_name
        self.fts_table = fts_table_name or f"{table_name}_fts"

    def build(
        self,
        query: str,
        only: Optional[List[Any]] = None,
        parent_id: Any = None
    ) -> BuiltQuery:
        """
        Build the ranked query.

        Args:
            query: Raw user query text.
            only: Type names to restrict to. Empty means all types.
            parent_id: Scalar id or list of ids to scope by.

        Returns:
            BuiltQuery with clauses and bindings.
        """
        query = query or ""
        filter_sql, filter_params = self.filter_clause(only, parent_id)
        match_sql = self.dialect.match_condition(self.table, self.fts_table)

        if self.mode.advanced:
            search_query, terms = self.advanced_terms(query)
            score_sql = " + ".join(
                f"({self.dialect.relevance(self.table, self.fts_table)} * {_format_weight(weight)})"
                for _, weight in terms
            )
            score_params = [expr for expr, _ in terms]
        else:
            search_query = self.transform(query)
            score_sql = self.dialect.relevance(self.table, self.fts_table)
            score_params = [search_query]

        return BuiltQuery(
            dialect=self.dialect,
            from_clause=self.dialect.from_clause(self.table),
            select_columns=f"{self.dialect.column('owner_type')}, {self.dialect.column('owner_id')}",
            score_expression=score_sql,
            score_params=score_params,
            condition_clause=match_sql + filter_sql,
            condition_params=[search_query] + filter_params,
            order_clause=f"relevancy DESC, {self.dialect.column('value')} ASC",
            query_strings=[search_query] + [p for p in score_params if p != search_query]
        )

    def filter_clause(self, only: Optional[List[Any]], parent_id: Any) -> Tuple[str, List[Any]]:
        """
        Render the type and parent restrictions.

        A scalar parent id is coerced to int, so non-numeric input
        scopes to parent 0 rather than failing.
        """
        sql = ""
        params: List[Any] = []

        types = sanitize_type_names(only)
        if types:
            sql += f" AND {self.dialect.column('owner_type')} IN ({self.dialect.placeholders(len(types))})"
            params.extend(types)

        if parent_id is not None:
            column = self.dialect.column("parent_id")
            if isinstance(parent_id, (list, tuple, set, frozenset)):
                parent_ids = list(parent_id)
                if parent_ids:
                    sql += f" AND {column} IN ({self.dialect.placeholders(len(parent_ids))})"
                    params.extend(parent_ids)
                else:
                    # An empty IN () is a syntax error; no parents means no rows.
                    sql += " AND 1 = 0"
            else:
                sql += f" AND {column} = {self.dialect.placeholder}"
                params.append(to_int(parent_id))

        return sql, params

    def transform(self, query: str) -> str:
        """Rewrite query text for simple or phrase mode."""
        if self.mode.uses_phrase:
            return self.dialect.phrase(query)
        return self.dialect.wildcard_terms(query)

    def advanced_terms(self, query: str) -> Tuple[str, List[Tuple[str, float]]]:
        """
        Build the filtering query and the weighted score terms.

        Returns:
            (search_query, [(match_expression, weight), ...])
        """
        words = split_words(query)
        count = len(words)

        terms = [(self.dialect.all_exact(words), MATCH_ALL_EXACT_WEIGHT)]

        if self.mode.uses_and:
            search_query = self.dialect.all_wildcard(words)
            terms.append((search_query, 2 if count > 3 else 1))
        else:
            search_query = self.dialect.some_exact(words)
            terms.append((search_query, 2.5 if count <= 3 else 1))

        if self.mode.match_some_wildcard:
            terms.append((self.dialect.some_wildcard(words), MATCH_SOME_WILDCARD_WEIGHT))

        return search_query, terms
