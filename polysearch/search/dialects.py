"""
Full-text dialects.

A dialect renders the database-specific fragments of a ranked search:
the match condition, the relevance term, column references, the
LIMIT/OFFSET clause, and the query-text syntax for wildcard, phrase and
required/optional terms. Every fragment takes its query string through
a placeholder.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Tuple

from ..core import ConfigurationError


class Dialect(ABC):
    """Base class for full-text dialects."""

    name: str = ""
    placeholder: str = "?"

    def placeholders(self, count: int) -> str:
        """Comma-separated placeholders for an IN list."""
        return ", ".join([self.placeholder] * count)

    @abstractmethod
    def from_clause(self, table: str) -> str:
        ...

    @abstractmethod
    def column(self, name: str) -> str:
        ...

    @abstractmethod
    def match_condition(self, table: str, fts_table: str) -> str:
        """Boolean condition true for rows matching one bound query string."""

    @abstractmethod
    def relevance(self, table: str, fts_table: str) -> str:
        """Numeric relevance of the row for one bound query string, higher is better."""

    @abstractmethod
    def limit_clause(self, limit: Optional[int], offset: int) -> Tuple[str, List[Any]]:
        ...

    @abstractmethod
    def wildcard_terms(self, query: str) -> str:
        """Match any token, each as a prefix."""

    @abstractmethod
    def phrase(self, query: str) -> str:
        ...

    @abstractmethod
    def all_exact(self, words: List[str]) -> str:
        ...

    @abstractmethod
    def all_wildcard(self, words: List[str]) -> str:
        ...

    @abstractmethod
    def some_exact(self, words: List[str]) -> str:
        ...

    @abstractmethod
    def some_wildcard(self, words: List[str]) -> str:
        ...


class SQLiteFTS5Dialect(Dialect):
    """
    SQLite with an external-content FTS5 table.

    Tokens are emitted as FTS5 strings so user punctuation can never be
    read as query syntax. Relevance is the negated ``bm25()`` rank,
    looked up per row through a correlated subquery so several match
    expressions can be scored against the same row.
    """

    name = "sqlite"
    EMPTY_QUERY = '""'
    placeholder = "?"

    def from_clause(self, table: str) -> str:
        return f"{table} AS r"

    def column(self, name: str) -> str:
        return f"r.{name}"

    def match_condition(self, table: str, fts_table: str) -> str:
        return f"r.id IN (SELECT rowid FROM {fts_table} WHERE {fts_table} MATCH ?)"

    def relevance(self, table: str, fts_table: str) -> str:
        return (
            f"COALESCE((SELECT -bm25({fts_table}) FROM {fts_table}"
            f" WHERE {fts_table} MATCH ? AND rowid = r.id), 0)"
        )

    def limit_clause(self, limit: Optional[int], offset: int) -> Tuple[str, List[Any]]:
        if limit is None:
            if not offset:
                return "", []
            return " LIMIT -1 OFFSET ?", [offset]
        return " LIMIT ? OFFSET ?", [limit, offset]

    @staticmethod
    def quote(term: str) -> str:
        return '"' + term.replace('"', '""') + '"'

    def join(self, terms: List[str], operator: str, suffix: str = "") -> str:
        """
        Join quoted terms with an FTS5 operator.

        FTS5 rejects an empty MATCH string, so no terms renders as the
        empty string literal, which parses and matches nothing.
        """
        if not terms:
            return self.EMPTY_QUERY
        return f" {operator} ".join(self.quote(term) + suffix for term in terms)

    def wildcard_terms(self, query: str) -> str:
        return self.join(query.split(), "OR", "*")

    def phrase(self, query: str) -> str:
        return self.quote(query)

    def all_exact(self, words: List[str]) -> str:
        return self.join(words, "AND")

    def all_wildcard(self, words: List[str]) -> str:
        return self.join(words, "AND", "*")

    def some_exact(self, words: List[str]) -> str:
        return self.join(words, "OR")

    def some_wildcard(self, words: List[str]) -> str:
        return self.join(words, "OR", "*")


class MySQLBooleanDialect(Dialect):
    """
    MySQL/MariaDB ``MATCH ... AGAINST`` in boolean mode.

    Requires a FULLTEXT index on the value column. Statements use the
    ``%s`` paramstyle of the common MySQL drivers.
    """

    name = "mysql"
    placeholder = "%s"

    # Largest LIMIT MySQL accepts, the documented way to write an open-ended OFFSET.
    MAX_LIMIT = 18446744073709551615

    def from_clause(self, table: str) -> str:
        return f"`{table}`"

    def column(self, name: str) -> str:
        return f"`{name}`"

    def match_condition(self, table: str, fts_table: str) -> str:
        return "MATCH(`value`) AGAINST(%s IN BOOLEAN MODE)"

    def relevance(self, table: str, fts_table: str) -> str:
        return "MATCH(`value`) AGAINST(%s IN BOOLEAN MODE)"

    def limit_clause(self, limit: Optional[int], offset: int) -> Tuple[str, List[Any]]:
        if limit is None:
            if not offset:
                return "", []
            return f" LIMIT {self.MAX_LIMIT} OFFSET %s", [offset]
        return " LIMIT %s OFFSET %s", [limit, offset]

    def wildcard_terms(self, query: str) -> str:
        return " ".join(token + "*" for token in query.split())

    def phrase(self, query: str) -> str:
        return f'"{query}"'

    def all_exact(self, words: List[str]) -> str:
        return " ".join(f"+{w}" for w in words)

    def all_wildcard(self, words: List[str]) -> str:
        return " ".join(f"+{w}*" for w in words)

    def some_exact(self, words: List[str]) -> str:
        return " ".join(words)

    def some_wildcard(self, words: List[str]) -> str:
        return " ".join(f"{w}*" for w in words)


_DIALECTS = {
    SQLiteFTS5Dialect.name: SQLiteFTS5Dialect,
    MySQLBooleanDialect.name: MySQLBooleanDialect,
}


def get_dialect(name: str) -> Dialect:
    """
    Resolve a dialect by name.

    Raises:
        ConfigurationError: If the name is not a known dialect.
    """
    try:
        return _DIALECTS[name.lower()]()
    except KeyError:
        raise ConfigurationError(
            f"Unsupported dialect: {name!r}",
            {"supported": sorted(_DIALECTS)}
        )
