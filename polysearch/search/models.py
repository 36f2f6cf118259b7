"""
Data models for search functionality.

Defines the search mode flags, per-call options, the built query handed
from the query builder to execution, and the paginated result wrappers.
"""

from dataclasses import dataclass, field, replace
from typing import Any, List, Optional, Tuple

from ..utils import camelize

DEFAULT_LIMIT = 10

# Marks an option the caller did not pass, as opposed to an explicit None.
UNSET = object()


@dataclass(frozen=True)
class SearchMode:
    """
    Flags selecting how query text is rewritten and scored.

    Attributes:
        advanced: Weighted combination of several match expressions.
        and_search: Require every term. Only honoured when advanced is set.
        phrase: Match the whole query as one phrase. Ignored when advanced is set.
        match_some_wildcard: Add a low-weight "any term, prefix match" score
            term in advanced mode. Off unless explicitly enabled.
    """
    advanced: bool = False
    and_search: bool = False
    phrase: bool = False
    match_some_wildcard: bool = False

    @classmethod
    def from_config(cls, mode_config) -> "SearchMode":
        return cls(
            advanced=bool(mode_config.advanced),
            and_search=bool(mode_config.and_search),
            phrase=bool(mode_config.phrase),
            match_some_wildcard=bool(mode_config.match_some_wildcard)
        )

    def with_advanced(self) -> "SearchMode":
        return replace(self, advanced=True)

    def with_and_search(self) -> "SearchMode":
        return replace(self, and_search=True)

    def with_phrase(self) -> "SearchMode":
        return replace(self, phrase=True)

    @property
    def uses_phrase(self) -> bool:
        return self.phrase and not self.advanced

    @property
    def uses_and(self) -> bool:
        return self.and_search and self.advanced


@dataclass
class SearchOptions:
    """
    Normalized per-call search options.

    Exactly one pagination strategy is active: ``page`` when set,
    otherwise ``limit``/``offset``.
    """
    limit: Optional[int] = DEFAULT_LIMIT
    offset: int = 0
    page: Optional[int] = None
    active_record: bool = True
    only: Optional[List[str]] = None
    parent_id: Any = None
    search_class: Any = None

    @property
    def paginated(self) -> bool:
        return self.page is not None

    @classmethod
    def normalize(
        cls,
        limit: Any = UNSET,
        offset: Any = UNSET,
        page: Optional[int] = None,
        active_record: bool = True,
        only: Any = None,
        parent_id: Any = None,
        search_class: Any = None,
        default_limit: int = DEFAULT_LIMIT
    ) -> "SearchOptions":
        """
        Build options from raw caller input, coercing bad values.

        With no ``page``: a negative offset becomes 0; a negative limit
        becomes ``default_limit``; a limit of 0 (or an explicit None) means
        no limit. With a ``page`` limit and offset are left untouched and
        unused.

        ``only`` may be a single type or a list of types (names or
        classes); it becomes a deduplicated list of CamelCase names.
        """
        if page is None:
            limit = default_limit if limit is UNSET else limit
            offset = 0 if offset is UNSET or offset is None else int(offset)
            if offset < 0:
                offset = 0
            if limit is not None:
                limit = int(limit)
                if limit < 0:
                    limit = default_limit
                if limit == 0:
                    limit = None
        else:
            limit = None if limit is UNSET else limit
            offset = 0 if offset is UNSET else offset

        return cls(
            limit=limit,
            offset=offset,
            page=page,
            active_record=active_record,
            only=cls._normalize_only(only),
            parent_id=parent_id,
            search_class=search_class
        )

    @staticmethod
    def _normalize_only(only: Any) -> Optional[List[str]]:
        if only is None:
            return None
        if not isinstance(only, (list, tuple, set, frozenset)):
            only = [only]

        names = []
        for entry in only:
            if entry is None:
                continue
            name = camelize(entry)
            if name not in names:
                names.append(name)
        return names


@dataclass
class SearchHit:
    """A single matched row of the searchable table."""
    owner_type: str
    owner_id: int
    relevancy: float = 0.0

    def as_pair(self) -> Tuple[str, int]:
        return (self.owner_type, self.owner_id)


@dataclass
class BuiltQuery:
    """
    A ranked full-text query ready for execution.

    Every value lives in the parameter lists; the clauses only contain
    column names, placeholders and numeric weights.

    Attributes:
        dialect: Dialect the clauses were rendered for.
        from_clause: Table reference.
        select_columns: Type and id columns of the hit.
        score_expression: Relevance expression, aliased as ``relevancy``.
        score_params: Bindings for the score expression.
        condition_clause: WHERE body (match condition plus filters).
        condition_params: Bindings for the condition clause.
        order_clause: ORDER BY body.
        query_strings: Transformed query strings, for logging.
    """
    dialect: Any
    from_clause: str
    select_columns: str
    score_expression: str
    score_params: List[Any]
    condition_clause: str
    condition_params: List[Any]
    order_clause: str
    query_strings: List[str] = field(default_factory=list)

    @property
    def params(self) -> List[Any]:
        """Bindings of select_sql() in placeholder order."""
        return list(self.score_params) + list(self.condition_params)

    def select_sql(self) -> str:
        return (
            f"SELECT {self.select_columns}, {self.score_expression} AS relevancy"
            f" FROM {self.from_clause}"
            f" WHERE {self.condition_clause}"
            f" ORDER BY {self.order_clause}"
        )

    def limited(self, limit: Optional[int], offset: int = 0) -> Tuple[str, List[Any]]:
        """Render the select with a LIMIT/OFFSET clause and its bindings."""
        clause, clause_params = self.dialect.limit_clause(limit, offset)
        return self.select_sql() + clause, self.params + clause_params

    def count_sql(self) -> Tuple[str, List[Any]]:
        """Render a COUNT(*) over the same condition and its bindings."""
        sql = f"SELECT COUNT(*) FROM {self.from_clause} WHERE {self.condition_clause}"
        return sql, list(self.condition_params)


@dataclass
class Page:
    """One page of hits plus the total the pagination was computed from."""
    hits: List[SearchHit]
    current_page: int
    per_page: int
    total_entries: int


class PaginatedResults(list):
    """
    List of search results carrying pagination metadata.

    Holds either materialized records or (type, id) pairs.
    """

    def __init__(self, current_page: int, per_page: int, total_entries: int, items=()):
        super().__init__(items)
        self.current_page = current_page
        self.per_page = per_page
        self.total_entries = total_entries

    @property
    def total_pages(self) -> int:
        if self.per_page <= 0:
            return 1
        return max((self.total_entries + self.per_page - 1) // self.per_page, 1)

    @property
    def offset(self) -> int:
        return (self.current_page - 1) * self.per_page

    def __repr__(self) -> str:
        return (
            f"PaginatedResults(page={self.current_page}, per_page={self.per_page}, "
            f"total_entries={self.total_entries}, items={list.__repr__(self)})"
        )
