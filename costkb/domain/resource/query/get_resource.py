from costkb.domain.resource.model.aggregate import Resource
from costkb.domain.resource.model.value import ContentStatus
from costkb.domain.resource.service.resource import ResourceService
from costkb.domain.shared.error import NotFoundError
from costkb.domain.resource.model import lifecycle
from costkb.domain.shared.query import Query, QueryHandler, Result


class GetResource(Query):
    resource_id: str
    public_only: bool = True


class ResourceDetail(Result):
    resource: Resource
    allowed_transitions: list[ContentStatus]


class GetResourceHandler(QueryHandler[GetResource, ResourceDetail]):
    resource_service: ResourceService

    async def run(self, cmd: GetResource) -> ResourceDetail:
        resource = await self.resource_service.get(cmd.resource_id)
        # Unpublished resources are invisible to public readers.
        if cmd.public_only and not lifecycle.is_public(resource.status):
            raise NotFoundError(f"Resource not found: {cmd.resource_id}")
        return ResourceDetail(
            resource=resource,
            allowed_transitions=sorted(lifecycle.next_statuses(resource.status)),
        )
