"""Writes that interleave with other sessions between load and save."""

from collections.abc import Awaitable, Callable
from datetime import UTC, datetime

import pytest

from costkb.domain.resource.model.value import ContentStatus, ResourceId
from costkb.domain.resource.service.resource import ResourceService
from costkb.domain.shared.model.value import UserId
from costkb.infrastructure.persistence.repository.resource import SqlResourceRepository

MODERATOR = UserId("moderator-1")
EDITOR = UserId("editor-1")


class _InterleavingRepository(SqlResourceRepository):
    """Runs ``after_load`` once, right after the first resource is loaded."""

    def __init__(self, session, after_load: Callable[[], Awaitable[None]]) -> None:
        super().__init__(session)
        self._after_load: Callable[[], Awaitable[None]] | None = after_load

    async def get(self, resource_id: ResourceId):
        resource = await super().get(resource_id)
        if self._after_load is not None:
            hook, self._after_load = self._after_load, None
            await hook()
        return resource


async def _reload(session_factory, resource_id):
    async with session_factory() as session:
        return await SqlResourceRepository(session).get(resource_id)


class TestInterleavedWrites:
    @pytest.mark.asyncio
    async def test_click_during_transition_is_kept(
        self, session_factory, save_resources, make_resource
    ):
        resource = make_resource(status=ContentStatus.PUBLISHED, clicks=5)
        await save_resources(resource)

        async def click():
            async with session_factory() as other:
                await SqlResourceRepository(other).increment_clicks(
                    resource.id, datetime(2025, 6, 1, tzinfo=UTC)
                )
                await other.commit()

        async with session_factory() as session:
            service = ResourceService(resource_repo=_InterleavingRepository(session, click))
            await service.transition(resource.id, ContentStatus.ARCHIVED, MODERATOR)
            await session.commit()

        loaded = await _reload(session_factory, resource.id)
        assert loaded.clicks == 6
        assert loaded.last_clicked_at == datetime(2025, 6, 1, tzinfo=UTC)
        assert loaded.status == ContentStatus.ARCHIVED

    @pytest.mark.asyncio
    async def test_racing_transitions_both_recorded(
        self, session_factory, save_resources, make_resource
    ):
        resource = make_resource(status=ContentStatus.APPROVED)
        await save_resources(resource)

        async def publish():
            async with session_factory() as other:
                service = ResourceService(resource_repo=SqlResourceRepository(other))
                await service.transition(resource.id, ContentStatus.PUBLISHED, MODERATOR)
                await other.commit()

        async with session_factory() as session:
            service = ResourceService(resource_repo=_InterleavingRepository(session, publish))
            await service.transition(
                resource.id, ContentStatus.PENDING_REVIEW, UserId("moderator-2"), "Needs work"
            )
            await session.commit()

        loaded = await _reload(session_factory, resource.id)
        assert [c.status for c in loaded.status_history] == [
            ContentStatus.PUBLISHED,
            ContentStatus.PENDING_REVIEW,
        ]
        assert loaded.status == ContentStatus.PENDING_REVIEW

    @pytest.mark.asyncio
    async def test_edit_does_not_undo_transition(
        self, session_factory, save_resources, make_resource
    ):
        resource = make_resource(status=ContentStatus.PUBLISHED, clicks=3)
        await save_resources(resource)

        async def archive_and_click():
            async with session_factory() as other:
                repo = SqlResourceRepository(other)
                await ResourceService(resource_repo=repo).archive(resource.id, MODERATOR)
                await repo.increment_clicks(resource.id, datetime(2025, 6, 1, tzinfo=UTC))
                await other.commit()

        async with session_factory() as session:
            service = ResourceService(
                resource_repo=_InterleavingRepository(session, archive_and_click)
            )
            await service.update(resource.id, {"title": "Renamed"}, EDITOR)
            await session.commit()

        loaded = await _reload(session_factory, resource.id)
        assert loaded.title == "Renamed"
        assert loaded.updated_by == EDITOR
        assert loaded.status == ContentStatus.ARCHIVED
        assert loaded.archived_at is not None
        assert [c.status for c in loaded.status_history] == [ContentStatus.ARCHIVED]
        assert loaded.clicks == 4


class TestAppendTransition:
    @pytest.mark.asyncio
    async def test_history_is_append_only(self, session_factory, save_resources, make_resource):
        resource = make_resource(status=ContentStatus.PUBLISHED)
        await save_resources(resource)

        for target in (ContentStatus.ARCHIVED, ContentStatus.PUBLISHED):
            async with session_factory() as session:
                service = ResourceService(resource_repo=SqlResourceRepository(session))
                await service.transition(resource.id, target, MODERATOR)
                await session.commit()

        loaded = await _reload(session_factory, resource.id)
        assert [c.status for c in loaded.status_history] == [
            ContentStatus.ARCHIVED,
            ContentStatus.PUBLISHED,
        ]
        assert loaded.archived_at is None
        assert loaded.archived_reason is None
        assert loaded.published_at is not None
