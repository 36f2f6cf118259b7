"""
Full-text search over the shared searchable table.

Ties option normalization, query building, execution (plain or
paginated) and result assembly into the public ``search`` call.
"""

import time
from typing import Any, Callable, List, Optional, Tuple

from ..core import get_config, get_logger
from ..database import get_read_connection
from .assembler import ResultAssembler
from .dialects import Dialect, get_dialect
from .models import UNSET, Page, SearchHit, SearchMode, SearchOptions
from .pagination import CountingPaginator, Paginator, fetch_hits
from .query_builder import QueryBuilder
from .registry import TypeRegistry

logger = get_logger(__name__)


class FulltextSearch:
    """
    Ranked full-text search across every registered record type.

    The search mode belongs to the instance: two instances can search
    with different modes side by side. Mode toggles are one-way and
    idempotent.
    """

    def __init__(
        self,
        registry: TypeRegistry = None,
        mode: SearchMode = None,
        dialect: Dialect = None,
        paginator: Paginator = None,
        table_name: str = None,
        connection_factory: Callable = None,
        config=None
    ):
        """
        Initialize the search engine.

        Args:
            registry: Lookups used to materialize hits.
            mode: Initial search mode. Defaults to the configured mode.
            dialect: Full-text dialect. Defaults to the configured dialect.
            paginator: Strategy for page-based searches.
            table_name: Searchable table. Defaults to the configured table.
            connection_factory: Callable returning a context manager that
                yields a DB-API connection. Defaults to a read-only SQLite connection.
            config: Config instance. Defaults to the global config.
        """
        self.config = config or get_config()

        self.registry = registry if registry is not None else TypeRegistry()
        self.mode = mode or SearchMode.from_config(self.config.search.mode)
        self.dialect = dialect or get_dialect(self.config.database.dialect)
        self.table_name = table_name or self.config.database.table_name
        self.default_limit = self.config.search.default_limit
        self.default_per_page = self.config.search.per_page
        self.paginator = paginator or CountingPaginator(self.default_per_page)
        self.connection_factory = connection_factory or get_read_connection
        self.assembler = ResultAssembler(self.registry)

    @property
    def builder(self) -> QueryBuilder:
        return QueryBuilder(mode=self.mode, dialect=self.dialect, table_name=self.table_name)

    def use_advanced_search(self) -> None:
        """Score with weighted exact/partial match expressions."""
        self.mode = self.mode.with_advanced()

    def use_and_search(self) -> None:
        """Require every term. Only takes effect with advanced search."""
        self.mode = self.mode.with_and_search()

    def use_phrase_search(self) -> None:
        """Match the query as one phrase. Ignored under advanced search."""
        self.mode = self.mode.with_phrase()

    def search(
        self,
        query: str,
        limit: Any = UNSET,
        offset: Any = UNSET,
        page: Optional[int] = None,
        active_record: bool = True,
        only: Any = None,
        parent_id: Any = None,
        search_class: Any = None
    ) -> List[Any]:
        """
        Search the index.

        Args:
            query: Free text to search for.
            limit: Maximum hits (default 10). 0 or None means no limit,
                a negative value means the default.
            offset: Hits to skip (default 0). Negative means 0.
            page: 1-based page number. Replaces limit/offset entirely.
            active_record: Return loaded records instead of (type, id) pairs.
            only: Type or list of types to restrict to.
            parent_id: Parent id, or list of parent ids, to scope to.
            search_class: Registered type whose page size drives pagination.

        Returns:
            Records or (type, id) pairs in relevance order; a
            PaginatedResults when page is given.
        """
        options = SearchOptions.normalize(
            limit=limit,
            offset=offset,
            page=page,
            active_record=active_record,
            only=only,
            parent_id=parent_id,
            search_class=search_class,
            default_limit=self.default_limit
        )

        start_time = time.time()
        hits, page_info = self._run(query, options)
        results = self.assembler.assemble(hits, options.active_record, page_info)

        execution_time = (time.time() - start_time) * 1000
        logger.debug(f"Search {query!r}: {len(results)} results in {execution_time:.1f}ms")

        return results

    def search_rows(self, query: str, **options) -> List[SearchHit]:
        """Run a search and return the raw hits, without assembly."""
        options = SearchOptions.normalize(default_limit=self.default_limit, **options)
        hits, _ = self._run(query, options)
        return hits

    def _run(self, query: str, options: SearchOptions) -> Tuple[List[SearchHit], Optional[Page]]:
        built = self.builder.build(query, options.only, options.parent_id)
        logger.debug(f"Query strings for {query!r}: {built.query_strings}")

        try:
            with self.connection_factory() as conn:
                cursor = conn.cursor()
                try:
                    if options.paginated:
                        page = self.paginator.paginate(
                            cursor, built, options.page, self._per_page(options)
                        )
                        return page.hits, page

                    sql, params = built.limited(options.limit, options.offset)
                    return fetch_hits(cursor, sql, params), None
                finally:
                    cursor.close()
        except Exception as e:
            logger.error(f"Search failed for {query!r}: {e}")
            raise

    def _per_page(self, options: SearchOptions) -> Optional[int]:
        """Page size of the search_class type, or None for the paginator's default."""
        if options.search_class is not None:
            per_page = self.registry.per_page_for(options.search_class)
            if per_page:
                return per_page
        return None


_default_search: Optional[FulltextSearch] = None


def get_search() -> FulltextSearch:
    """Get the process-wide FulltextSearch instance."""
    global _default_search
    if _default_search is None:
        _default_search = FulltextSearch()
    return _default_search


def search(query: str, **options) -> List[Any]:
    """Search with the process-wide instance. See FulltextSearch.search."""
    return get_search().search(query, **options)


def use_advanced_search() -> None:
    get_search().use_advanced_search()


def use_and_search() -> None:
    get_search().use_and_search()


def use_phrase_search() -> None:
    get_search().use_phrase_search()
