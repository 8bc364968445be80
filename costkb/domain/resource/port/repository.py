from __future__ import annotations

from abc import abstractmethod
from datetime import datetime
from typing import List, Protocol

from costkb.domain.resource.model.aggregate import Resource
from costkb.domain.resource.model.lifecycle import StatusUpdate
from costkb.domain.resource.model.value import ContentStatus, ResourceId
from costkb.domain.shared.port import Port


class ResourceRepository(Port, Protocol):
    @abstractmethod
    async def get(self, resource_id: ResourceId) -> Resource | None: ...

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Resource | None: ...

    @abstractmethod
    async def find_conflict(
        self, *, url: str, slug: str, exclude: ResourceId | None = None
    ) -> Resource | None:
        """Return a resource other than ``exclude`` sharing ``url`` or ``slug``."""
        ...

    @abstractmethod
    async def save(self, resource: Resource) -> None:
        """Insert a new resource, or write the editable fields of an existing one.

        Lifecycle fields, the status history and click counters of an existing
        resource are never written here.
        """
        ...

    @abstractmethod
    async def append_transition(
        self, resource_id: ResourceId, status_update: StatusUpdate
    ) -> None:
        """Append one history entry and set the lifecycle fields it implies."""
        ...

    @abstractmethod
    async def increment_clicks(self, resource_id: ResourceId, at: datetime) -> int | None:
        """Atomically add one click; returns the new count or None if missing."""
        ...

    @abstractmethod
    async def list(
        self,
        *,
        status: ContentStatus | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> List[Resource]: ...

    @abstractmethod
    async def count(self, status: ContentStatus | None = None) -> int: ...
