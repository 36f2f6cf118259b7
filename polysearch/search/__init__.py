"""
Search module: ranked full-text search across heterogeneous record types.

Provides the query builder, dialects, type registry, pagination strategy,
result assembler and the public search entry points.
"""

from .models import SearchMode, SearchOptions, SearchHit, BuiltQuery, Page, PaginatedResults
from .dialects import Dialect, SQLiteFTS5Dialect, MySQLBooleanDialect, get_dialect
from .query_builder import QueryBuilder, sanitize_type_names, split_words
from .registry import TypeRegistry, RegisteredType
from .pagination import Paginator, CountingPaginator
from .assembler import ResultAssembler
from .engine import (
    FulltextSearch,
    get_search,
    search,
    use_advanced_search,
    use_and_search,
    use_phrase_search
)

__all__ = [
    "SearchMode",
    "SearchOptions",
    "SearchHit",
    "BuiltQuery",
    "Page",
    "PaginatedResults",
    "Dialect",
    "SQLiteFTS5Dialect",
    "MySQLBooleanDialect",
    "get_dialect",
    "QueryBuilder",
    "sanitize_type_names",
    "split_words",
    "TypeRegistry",
    "RegisteredType",
    "Paginator",
    "CountingPaginator",
    "ResultAssembler",
    "FulltextSearch",
    "get_search",
    "search",
    "use_advanced_search",
    "use_and_search",
    "use_phrase_search"
]
