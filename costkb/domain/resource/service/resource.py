import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from costkb.domain.resource.model import lifecycle
from costkb.domain.resource.model.aggregate import Resource
from costkb.domain.resource.model.draft import ResourceDraft
from costkb.domain.resource.model.value import (
    ContentStatus,
    ResourceId,
    ResourceSource,
    StatusChange,
)
from costkb.domain.resource.port.repository import ResourceRepository
from costkb.domain.shared.error import ConflictError, NotFoundError
from costkb.domain.shared.model.value import UserId
from costkb.domain.shared.service import Service

logger = logging.getLogger(__name__)

CREATED_REASON = "Resource created"
DELETED_REASON = "Deleted by admin"


@dataclass
class ResourceStats:
    total: int
    published: int
    pending: int
    archived: int


class ResourceService(Service):
    """Resource lifecycle and editing.

    Every status change is routed through the lifecycle gate; this service
    only loads the resource, applies the gate's update and saves it.
    """

    resource_repo: ResourceRepository

    async def create(self, draft: ResourceDraft, actor: UserId) -> Resource:
        """Create a resource in its initial lifecycle state.

        Manually authored resources start in PENDING_REVIEW with an initial
        history entry; discovered ones start in DISCOVERED.
        """
        await self._ensure_unique(url=draft.url, slug=draft.slug)

        now = datetime.now(UTC)
        data = draft.model_dump()
        data["publication_date"] = draft.publication_date or now
        data["last_verified"] = draft.last_verified or now

        if draft.source == ResourceSource.DISCOVERED:
            status = ContentStatus.DISCOVERED
            history: list[StatusChange] = []
        else:
            status = ContentStatus.PENDING_REVIEW
            history = [
                StatusChange(
                    status=status, changed_at=now, changed_by=actor, reason=CREATED_REASON
                )
            ]

        resource = Resource(
            **data,
            id=ResourceId(uuid4().hex),
            status=status,
            status_history=history,
            created_at=now,
            created_by=actor,
            updated_at=now,
            updated_by=actor,
        )
        await self.resource_repo.save(resource)
        logger.info("Created resource %s (%s) in %s", resource.id, resource.slug, status)
        return resource

    async def get(self, resource_id: ResourceId | str) -> Resource:
        """Look a resource up by id, falling back to its slug."""
        resource = await self.resource_repo.get(ResourceId(resource_id))
        if resource is None:
            resource = await self.resource_repo.get_by_slug(str(resource_id))
        if resource is None:
            raise NotFoundError(f"Resource not found: {resource_id}")
        return resource

    async def update(
        self, resource_id: ResourceId, changes: dict[str, Any], actor: UserId
    ) -> Resource:
        resource = await self.get(resource_id)
        if "url" in changes or "slug" in changes:
            await self._ensure_unique(
                url=changes.get("url", resource.url),
                slug=changes.get("slug", resource.slug),
                exclude=resource.id,
            )
        resource.edit(changes, actor)
        await self.resource_repo.save(resource)
        return resource

    async def transition(
        self,
        resource_id: ResourceId,
        target: ContentStatus,
        actor: UserId,
        reason: str | None = None,
    ) -> Resource:
        """Move a resource to ``target`` if the lifecycle gate allows it.

        Only the new history entry and the lifecycle fields are written, so
        clicks recorded meanwhile survive and a racing transition's entry is
        kept alongside this one.

        Raises:
            NotFoundError: If the resource does not exist.
            InvalidTransitionError: If the gate rejects the transition. The
                stored resource is left untouched.
        """
        resource = await self.get(resource_id)
        previous = resource.status
        update = lifecycle.prepare_transition(previous, target, actor, reason)
        resource.apply_status_update(update)
        await self.resource_repo.append_transition(resource.id, update)
        logger.info("Resource %s: %s -> %s by %s", resource.id, previous, target, actor)
        return resource

    async def archive(
        self, resource_id: ResourceId, actor: UserId, reason: str | None = None
    ) -> Resource:
        """Soft-delete: resources are never removed, only archived."""
        return await self.transition(
            resource_id, ContentStatus.ARCHIVED, actor, reason or DELETED_REASON
        )

    async def allowed_transitions(self, resource_id: ResourceId) -> list[ContentStatus]:
        resource = await self.get(resource_id)
        return sorted(lifecycle.next_statuses(resource.status))

    async def record_click(self, resource_id: ResourceId) -> int:
        resource = await self.get(resource_id)
        clicks = await self.resource_repo.increment_clicks(resource.id, datetime.now(UTC))
        if clicks is None:
            raise NotFoundError(f"Resource not found: {resource_id}")
        return clicks

    async def list_resources(
        self,
        status: ContentStatus | None = None,
        *,
        limit: int | None = None,
        offset: int | None = None,
    ) -> tuple[list[Resource], int]:
        items = await self.resource_repo.list(status=status, limit=limit, offset=offset)
        total = await self.resource_repo.count(status)
        return items, total

    async def stats(self) -> ResourceStats:
        return ResourceStats(
            total=await self.resource_repo.count(),
            published=await self.resource_repo.count(ContentStatus.PUBLISHED),
            pending=await self.resource_repo.count(ContentStatus.PENDING_REVIEW),
            archived=await self.resource_repo.count(ContentStatus.ARCHIVED),
        )

    async def _ensure_unique(
        self, *, url: str, slug: str, exclude: ResourceId | None = None
    ) -> None:
        existing = await self.resource_repo.find_conflict(url=url, slug=slug, exclude=exclude)
        if existing is None:
            return
        field = "url" if existing.url == url else "slug"
        raise ConflictError(f"A resource with this {field} already exists: {existing.id}")
