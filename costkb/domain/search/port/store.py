from abc import abstractmethod
from typing import Protocol

from costkb.domain.resource.model.aggregate import Resource
from costkb.domain.search.model.value import FacetCount, FacetField, SearchFilters
from costkb.domain.shared.port import Port


class SearchStore(Port, Protocol):
    """Read side of the resource store used by the ranking engine.

    Every method only ever sees PUBLISHED resources.
    """

    @abstractmethod
    async def find_text_matches(
        self, terms: list[str], filters: SearchFilters
    ) -> list[Resource]:
        """Published resources matching any term in title, description, tags or themes."""
        ...

    @abstractmethod
    async def find_semantic_candidates(self, filters: SearchFilters) -> list[Resource]:
        """Published resources matching ``filters`` that carry an embedding."""
        ...

    @abstractmethod
    async def count_published(self, filters: SearchFilters) -> int: ...

    @abstractmethod
    async def facet_counts(self, field: FacetField) -> list[FacetCount]:
        """Value counts over all published resources, largest first."""
        ...

    @abstractmethod
    async def ensure_text_index(self) -> None: ...
