from costkb.domain.resource.model.aggregate import Resource
from costkb.domain.resource.model.value import ResourceId
from costkb.domain.resource.service.resource import ResourceService
from costkb.domain.shared.command import Command, CommandHandler, Result
from costkb.domain.shared.model.value import UserId


class ArchiveResource(Command):
    resource_id: ResourceId
    actor_id: UserId
    reason: str | None = None


class ResourceArchived(Result):
    resource: Resource


class ArchiveResourceHandler(CommandHandler[ArchiveResource, ResourceArchived]):
    resource_service: ResourceService

    async def run(self, cmd: ArchiveResource) -> ResourceArchived:
        resource = await self.resource_service.archive(cmd.resource_id, cmd.actor_id, cmd.reason)
        return ResourceArchived(resource=resource)
