from dishka import provide

from costkb.domain.resource.command.archive import ArchiveResourceHandler
from costkb.domain.resource.command.create import CreateResourceHandler
from costkb.domain.resource.command.record_click import RecordClickHandler
from costkb.domain.resource.command.transition import TransitionResourceHandler
from costkb.domain.resource.command.update import UpdateResourceHandler
from costkb.domain.resource.query.get_resource import GetResourceHandler
from costkb.domain.resource.query.list_resources import (
    GetResourceStatsHandler,
    ListResourcesHandler,
)
from costkb.domain.resource.service.resource import ResourceService
from costkb.util.di.base import Provider
from costkb.util.di.scope import Scope


class ResourceProvider(Provider):
    service = provide(ResourceService, scope=Scope.UOW)

    # Command Handlers
    create_handler = provide(CreateResourceHandler, scope=Scope.UOW)
    update_handler = provide(UpdateResourceHandler, scope=Scope.UOW)
    transition_handler = provide(TransitionResourceHandler, scope=Scope.UOW)
    archive_handler = provide(ArchiveResourceHandler, scope=Scope.UOW)
    record_click_handler = provide(RecordClickHandler, scope=Scope.UOW)

    # Query Handlers
    get_resource_handler = provide(GetResourceHandler, scope=Scope.UOW)
    list_resources_handler = provide(ListResourcesHandler, scope=Scope.UOW)
    stats_handler = provide(GetResourceStatsHandler, scope=Scope.UOW)
