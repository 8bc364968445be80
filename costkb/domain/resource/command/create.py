from costkb.domain.resource.model.aggregate import Resource
from costkb.domain.resource.model.draft import ResourceDraft
from costkb.domain.resource.service.resource import ResourceService
from costkb.domain.shared.command import Command, CommandHandler, Result
from costkb.domain.shared.model.value import UserId


class CreateResource(Command):
    draft: ResourceDraft
    actor_id: UserId


class ResourceCreated(Result):
    resource: Resource


class CreateResourceHandler(CommandHandler[CreateResource, ResourceCreated]):
    resource_service: ResourceService

    async def run(self, cmd: CreateResource) -> ResourceCreated:
        resource = await self.resource_service.create(cmd.draft, cmd.actor_id)
        return ResourceCreated(resource=resource)
