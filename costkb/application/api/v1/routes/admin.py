"""Admin routes for moderating and editing resources."""

from typing import Annotated, Any

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Body, Header, Query
from pydantic import BaseModel

from costkb.domain.resource.command.archive import (
    ArchiveResource,
    ArchiveResourceHandler,
    ResourceArchived,
)
from costkb.domain.resource.command.create import (
    CreateResource,
    CreateResourceHandler,
    ResourceCreated,
)
from costkb.domain.resource.command.transition import (
    ResourceTransitioned,
    TransitionResource,
    TransitionResourceHandler,
)
from costkb.domain.resource.command.update import (
    ResourceUpdated,
    UpdateResource,
    UpdateResourceHandler,
)
from costkb.domain.resource.model.draft import ResourceDraft
from costkb.domain.resource.model.value import ContentStatus, ResourceId
from costkb.domain.resource.query.get_resource import (
    GetResource,
    GetResourceHandler,
    ResourceDetail,
)
from costkb.domain.resource.query.list_resources import (
    GetResourceStats,
    GetResourceStatsHandler,
    ListResources,
    ListResourcesHandler,
    ResourceList,
    ResourceStatsResult,
)
from costkb.domain.shared.model.value import UserId

router = APIRouter(prefix="/admin/resources", tags=["Admin"], route_class=DishkaRoute)

# Authentication happens upstream; the gateway forwards the acting user.
ActorId = Annotated[str, Header(alias="X-Actor-Id")]


class StatusChangeRequest(BaseModel):
    status: ContentStatus
    reason: str | None = None


@router.get("", response_model=ResourceList)
async def list_resources(
    handler: FromDishka[ListResourcesHandler],
    status: ContentStatus | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
) -> ResourceList:
    return await handler.run(ListResources(status=status, page=page, limit=limit))


@router.get("/stats", response_model=ResourceStatsResult)
async def resource_stats(
    handler: FromDishka[GetResourceStatsHandler],
) -> ResourceStatsResult:
    return await handler.run(GetResourceStats())


@router.post("", response_model=ResourceCreated, status_code=201)
async def create_resource(
    body: ResourceDraft,
    actor_id: ActorId,
    handler: FromDishka[CreateResourceHandler],
) -> ResourceCreated:
    return await handler.run(CreateResource(draft=body, actor_id=UserId(actor_id)))


@router.get("/{resource_id}", response_model=ResourceDetail)
async def get_resource(
    resource_id: str,
    handler: FromDishka[GetResourceHandler],
) -> ResourceDetail:
    """Any resource regardless of status, with its allowed next statuses."""
    return await handler.run(GetResource(resource_id=resource_id, public_only=False))


@router.patch("/{resource_id}", response_model=ResourceUpdated)
async def update_resource(
    resource_id: str,
    actor_id: ActorId,
    handler: FromDishka[UpdateResourceHandler],
    changes: dict[str, Any] = Body(...),
) -> ResourceUpdated:
    return await handler.run(
        UpdateResource(
            resource_id=ResourceId(resource_id),
            changes=changes,
            actor_id=UserId(actor_id),
        )
    )


@router.post("/{resource_id}/status", response_model=ResourceTransitioned)
async def change_status(
    resource_id: str,
    body: StatusChangeRequest,
    actor_id: ActorId,
    handler: FromDishka[TransitionResourceHandler],
) -> ResourceTransitioned:
    return await handler.run(
        TransitionResource(
            resource_id=ResourceId(resource_id),
            status=body.status,
            actor_id=UserId(actor_id),
            reason=body.reason,
        )
    )


@router.delete("/{resource_id}", response_model=ResourceArchived)
async def archive_resource(
    resource_id: str,
    actor_id: ActorId,
    handler: FromDishka[ArchiveResourceHandler],
    reason: str | None = None,
) -> ResourceArchived:
    """Resources are never removed; deleting archives them."""
    return await handler.run(
        ArchiveResource(
            resource_id=ResourceId(resource_id),
            actor_id=UserId(actor_id),
            reason=reason,
        )
    )
