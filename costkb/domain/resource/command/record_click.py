from costkb.domain.resource.model.value import ResourceId
from costkb.domain.resource.service.resource import ResourceService
from costkb.domain.shared.command import Command, CommandHandler, Result


class RecordClick(Command):
    resource_id: ResourceId


class ClickRecorded(Result):
    clicks: int


class RecordClickHandler(CommandHandler[RecordClick, ClickRecorded]):
    resource_service: ResourceService

    async def run(self, cmd: RecordClick) -> ClickRecorded:
        clicks = await self.resource_service.record_click(cmd.resource_id)
        return ClickRecorded(clicks=clicks)
