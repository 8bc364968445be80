from costkb.domain.resource.model.aggregate import Resource
from costkb.domain.resource.model.value import ContentStatus
from costkb.domain.resource.service.resource import ResourceService
from costkb.domain.shared.query import Query, QueryHandler, Result


class ListResources(Query):
    status: ContentStatus | None = None
    page: int = 1
    limit: int = 20


class ResourceList(Result):
    items: list[Resource]
    page: int
    limit: int
    total: int
    total_pages: int


class ListResourcesHandler(QueryHandler[ListResources, ResourceList]):
    resource_service: ResourceService

    async def run(self, cmd: ListResources) -> ResourceList:
        page = max(1, cmd.page)
        limit = min(100, max(1, cmd.limit))
        items, total = await self.resource_service.list_resources(
            cmd.status, limit=limit, offset=(page - 1) * limit
        )
        return ResourceList(
            items=items,
            page=page,
            limit=limit,
            total=total,
            total_pages=-(-total // limit),
        )


class GetResourceStats(Query):
    pass


class ResourceStatsResult(Result):
    total: int
    published: int
    pending: int
    archived: int


class GetResourceStatsHandler(QueryHandler[GetResourceStats, ResourceStatsResult]):
    resource_service: ResourceService

    async def run(self, cmd: GetResourceStats) -> ResourceStatsResult:
        stats = await self.resource_service.stats()
        return ResourceStatsResult(
            total=stats.total,
            published=stats.published,
            pending=stats.pending,
            archived=stats.archived,
        )
