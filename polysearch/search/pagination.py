"""
Pagination strategies for search execution.

A paginator turns a built query plus a page number and page size into
one page of hits and the total number of matching rows.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from ..core import get_logger
from ..utils import to_int
from .models import BuiltQuery, Page, SearchHit

logger = get_logger(__name__)


def fetch_hits(cursor, sql: str, params: List[Any]) -> List[SearchHit]:
    """Execute a select of (owner_type, owner_id, relevancy) rows."""
    cursor.execute(sql, params)
    return [
        SearchHit(owner_type=row[0], owner_id=row[1], relevancy=row[2])
        for row in cursor.fetchall()
    ]


class Paginator(ABC):
    """Strategy returning one page of hits plus the total match count."""

    @abstractmethod
    def paginate(self, cursor, query: BuiltQuery, page: int, per_page: Optional[int]) -> Page:
        ...


class CountingPaginator(Paginator):
    """
    Paginates with a COUNT(*) over the match condition followed by a
    LIMIT/OFFSET slice of the ranked query.
    """

    def __init__(self, default_per_page: int = 30):
        self.default_per_page = default_per_page

    def paginate(self, cursor, query: BuiltQuery, page: int, per_page: Optional[int]) -> Page:
        page = max(to_int(page), 1)
        per_page = to_int(per_page) if per_page is not None else 0
        if per_page < 1:
            per_page = self.default_per_page

        count_sql, count_params = query.count_sql()
        cursor.execute(count_sql, count_params)
        total = cursor.fetchone()[0]

        sql, params = query.limited(per_page, (page - 1) * per_page)
        hits = fetch_hits(cursor, sql, params)

        logger.debug(f"Page {page} ({per_page} per page): {len(hits)} of {total} hits")

        return Page(hits=hits, current_page=page, per_page=per_page, total_entries=total)
