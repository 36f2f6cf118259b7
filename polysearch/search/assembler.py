"""
Result assembler for full-text search hits.

Turns the flat, relevance-ordered hit list into either (type, id) pairs
or loaded records, issuing one bulk lookup per distinct type while
keeping the global relevance order across types.
"""

from collections import OrderedDict, deque
from typing import Any, Dict, List, Optional

from ..core import get_logger
from .models import Page, PaginatedResults, SearchHit
from .registry import TypeRegistry

logger = get_logger(__name__)


class ResultAssembler:
    """Maps search hits back to typed records."""

    def __init__(self, registry: TypeRegistry = None):
        self.registry = registry if registry is not None else TypeRegistry()

    def assemble(
        self,
        hits: List[SearchHit],
        active_record: bool = True,
        page: Optional[Page] = None
    ) -> List[Any]:
        """
        Build the caller-facing result list.

        Args:
            hits: Hits in relevance order.
            active_record: Load records instead of returning (type, id) pairs.
            page: Pagination metadata to wrap the output with, if any.

        Returns:
            A list, or a PaginatedResults when page is given.
        """
        if active_record:
            items = self.materialize(hits)
        else:
            items = [hit.as_pair() for hit in hits]

        if page is None:
            return items

        return PaginatedResults(
            current_page=page.current_page,
            per_page=page.per_page,
            total_entries=page.total_entries,
            items=items
        )

    def materialize(self, hits: List[SearchHit]) -> List[Any]:
        """
        Load the records behind the hits, in hit order.

        Records the lookup does not return (deleted after indexing) are
        left out; nothing stands in for them.
        """
        requested: Dict[str, List[Any]] = OrderedDict()
        for hit in hits:
            requested.setdefault(hit.owner_type, []).append(hit.owner_id)

        buckets = {}
        for type_name, ids in requested.items():
            entry = self.registry.resolve(type_name)
            records = entry.find_all_by_id(ids)

            position = {}
            for index, owner_id in enumerate(ids):
                position.setdefault(owner_id, index)
            records.sort(key=lambda record: position.get(entry.id_of(record), len(ids)))

            buckets[type_name] = (entry, deque(records))

        results = []
        for hit in hits:
            entry, bucket = buckets[hit.owner_type]
            if bucket and entry.id_of(bucket[0]) == hit.owner_id:
                results.append(bucket.popleft())

        missing = len(hits) - len(results)
        if missing:
            logger.debug(f"{missing} hit(s) had no matching record and were dropped")

        return results
