import logfire

from costkb.domain.resource.model import lifecycle
from costkb.domain.resource.model.aggregate import Resource
from costkb.domain.resource.model.value import ContentStatus, ResourceId
from costkb.domain.resource.service.resource import ResourceService
from costkb.domain.shared.command import Command, CommandHandler, Result
from costkb.domain.shared.model.value import UserId


class TransitionResource(Command):
    resource_id: ResourceId
    status: ContentStatus
    actor_id: UserId
    reason: str | None = None


class ResourceTransitioned(Result):
    resource: Resource
    allowed_next: list[ContentStatus]


class TransitionResourceHandler(CommandHandler[TransitionResource, ResourceTransitioned]):
    resource_service: ResourceService

    async def run(self, cmd: TransitionResource) -> ResourceTransitioned:
        resource = await self.resource_service.transition(
            cmd.resource_id, cmd.status, cmd.actor_id, cmd.reason
        )
        logfire.info(
            "Resource status changed",
            resource_id=str(resource.id),
            status=str(resource.status),
        )
        return ResourceTransitioned(
            resource=resource,
            allowed_next=sorted(lifecycle.next_statuses(resource.status)),
        )
