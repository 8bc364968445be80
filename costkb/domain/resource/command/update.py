from typing import Any

from costkb.domain.resource.model.aggregate import Resource
from costkb.domain.resource.model.value import ResourceId
from costkb.domain.resource.service.resource import ResourceService
from costkb.domain.shared.command import Command, CommandHandler, Result
from costkb.domain.shared.model.value import UserId


class UpdateResource(Command):
    resource_id: ResourceId
    changes: dict[str, Any]
    actor_id: UserId


class ResourceUpdated(Result):
    resource: Resource


class UpdateResourceHandler(CommandHandler[UpdateResource, ResourceUpdated]):
    resource_service: ResourceService

    async def run(self, cmd: UpdateResource) -> ResourceUpdated:
        resource = await self.resource_service.update(cmd.resource_id, cmd.changes, cmd.actor_id)
        return ResourceUpdated(resource=resource)
