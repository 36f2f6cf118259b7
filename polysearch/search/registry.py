"""
Registry of searchable types.

Maps canonical type names to the bulk lookup used to materialize hits
of that type, and optionally to the page size used when that type is
named as the page-size source of a paginated search.
"""

from dataclasses import dataclass
from operator import attrgetter
from typing import Any, Callable, Dict, List, Optional

from ..core import get_logger, UnknownTypeError
from ..utils import camelize

logger = get_logger(__name__)

Finder = Callable[[List[Any]], List[Any]]


@dataclass
class RegisteredType:
    """A searchable type and how to load its records."""
    name: str
    finder: Finder
    per_page: Optional[int] = None
    id_attr: str = "id"

    def find_all_by_id(self, ids: List[Any]) -> List[Any]:
        """Load records by id. The order of the returned list is not relied on."""
        return list(self.finder(ids))

    def id_of(self, record: Any) -> Any:
        return attrgetter(self.id_attr)(record)


class TypeRegistry:
    """
    Explicit mapping from type name to record lookup.

    Populate it at startup, before searching:

        registry = TypeRegistry()
        registry.register(Article)                          # uses Article.find_all_by_id
        registry.register("comment", comments.find_many, per_page=50)
    """

    def __init__(self):
        self._types: Dict[str, RegisteredType] = {}

    def register(
        self,
        type_or_name: Any,
        finder: Finder = None,
        per_page: int = None,
        id_attr: str = "id"
    ) -> RegisteredType:
        """
        Register a searchable type.

        Args:
            type_or_name: Class or type name. Names are camelized.
            finder: Callable taking a list of ids and returning records.
                Defaults to the class's ``find_all_by_id``.
            per_page: Page size when this type drives pagination.
                Defaults to the class's ``per_page`` attribute, if any.
            id_attr: Attribute holding a record's id.

        Returns:
            The registered entry.

        Raises:
            ValueError: If no finder is given and the class has none.
        """
        name = camelize(type_or_name)

        if finder is None:
            finder = getattr(type_or_name, "find_all_by_id", None)
            if not callable(finder):
                raise ValueError(f"No finder given for type {name} and it has no find_all_by_id")

        if per_page is None and isinstance(type_or_name, type):
            per_page = getattr(type_or_name, "per_page", None)

        entry = RegisteredType(name=name, finder=finder, per_page=per_page, id_attr=id_attr)
        if name in self._types:
            logger.debug(f"Replacing registration for type {name}")
        self._types[name] = entry
        return entry

    def unregister(self, type_or_name: Any) -> None:
        self._types.pop(camelize(type_or_name), None)

    def resolve(self, type_or_name: Any) -> RegisteredType:
        """
        Look up a registered type.

        Raises:
            UnknownTypeError: If the type was never registered.
        """
        name = camelize(type_or_name)
        try:
            return self._types[name]
        except KeyError:
            raise UnknownTypeError(
                f"No lookup registered for type {name}",
                type_name=name,
                details={"registered": sorted(self._types)}
            )

    def per_page_for(self, type_or_name: Any) -> Optional[int]:
        """Configured page size of a registered type, or None."""
        name = camelize(type_or_name)
        entry = self._types.get(name)
        if entry is None:
            logger.warning(f"Page size source {name} is not registered, using default page size")
            return None
        return entry.per_page

    def __contains__(self, type_or_name: Any) -> bool:
        return camelize(type_or_name) in self._types

    def __len__(self) -> int:
        return len(self._types)

    @property
    def names(self) -> List[str]:
        return sorted(self._types)
