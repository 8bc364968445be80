"""Public resource REST routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from costkb.domain.resource.command.record_click import (
    ClickRecorded,
    RecordClick,
    RecordClickHandler,
)
from costkb.domain.resource.model.aggregate import Resource
from costkb.domain.resource.model.value import ResourceId
from costkb.domain.resource.query.get_resource import GetResource, GetResourceHandler

router = APIRouter(prefix="/resources", tags=["Resources"], route_class=DishkaRoute)


@router.get("/{resource_id}", response_model=Resource)
async def get_resource(
    resource_id: str,
    handler: FromDishka[GetResourceHandler],
) -> Resource:
    """Fetch a published resource by id or slug."""
    result = await handler.run(GetResource(resource_id=resource_id))
    return result.resource


@router.post("/{resource_id}/click", response_model=ClickRecorded)
async def record_click(
    resource_id: str,
    handler: FromDishka[RecordClickHandler],
) -> ClickRecorded:
    return await handler.run(RecordClick(resource_id=ResourceId(resource_id)))
