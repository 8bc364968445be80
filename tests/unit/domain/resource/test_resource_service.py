"""Unit tests for ResourceService."""

from unittest.mock import AsyncMock

import pytest

from costkb.domain.resource.model.draft import ResourceDraft
from costkb.domain.resource.model.value import ContentStatus, ResourceSource
from costkb.domain.resource.service.resource import (
    CREATED_REASON,
    DELETED_REASON,
    ResourceService,
)
from costkb.domain.shared.error import (
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from costkb.domain.shared.model.value import UserId

ACTOR = UserId("admin-1")


def _make_draft(**overrides) -> ResourceDraft:
    data = {
        "slug": "oc4ids-guide",
        "url": "https://example.org/oc4ids-guide",
        "title": "OC4IDS implementation guide",
        "description": "How to publish infrastructure data.",
    }
    data.update(overrides)
    return ResourceDraft(**data)


def _make_repo(resource=None) -> AsyncMock:
    repo = AsyncMock()
    repo.get.return_value = resource
    repo.get_by_slug.return_value = None
    repo.find_conflict.return_value = None
    return repo


class TestCreate:
    @pytest.mark.asyncio
    async def test_manual_resource_awaits_review(self):
        repo = _make_repo()
        service = ResourceService(resource_repo=repo)

        resource = await service.create(_make_draft(), ACTOR)

        assert resource.status == ContentStatus.PENDING_REVIEW
        assert len(resource.status_history) == 1
        assert resource.status_history[0].reason == CREATED_REASON
        assert resource.status_history[0].changed_by == ACTOR
        assert resource.clicks == 0
        repo.save.assert_awaited_once_with(resource)

    @pytest.mark.asyncio
    async def test_discovered_resource_starts_discovered(self):
        service = ResourceService(resource_repo=_make_repo())

        resource = await service.create(_make_draft(source=ResourceSource.DISCOVERED), ACTOR)

        assert resource.status == ContentStatus.DISCOVERED
        assert resource.status_history == []

    @pytest.mark.asyncio
    async def test_duplicate_url_conflicts(self, make_resource):
        existing = make_resource(url="https://example.org/oc4ids-guide")
        repo = _make_repo()
        repo.find_conflict.return_value = existing
        service = ResourceService(resource_repo=repo)

        with pytest.raises(ConflictError, match="url"):
            await service.create(_make_draft(), ACTOR)
        repo.save.assert_not_called()


class TestTransition:
    @pytest.mark.asyncio
    async def test_valid_transition_appends_once(self, make_resource):
        resource = make_resource(status=ContentStatus.PENDING_REVIEW)
        repo = _make_repo(resource)
        service = ResourceService(resource_repo=repo)

        result = await service.transition(resource.id, ContentStatus.APPROVED, ACTOR, "Looks good")

        assert result.status == ContentStatus.APPROVED
        assert result.status_history[-1].reason == "Looks good"
        assert len(result.status_history) == 1
        repo.append_transition.assert_awaited_once()
        resource_id, update = repo.append_transition.await_args.args
        assert resource_id == resource.id
        assert update.change == result.status_history[-1]
        repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_transition_does_not_save(self, make_resource):
        resource = make_resource(status=ContentStatus.DISCOVERED)
        repo = _make_repo(resource)
        service = ResourceService(resource_repo=repo)

        with pytest.raises(InvalidTransitionError):
            await service.transition(resource.id, ContentStatus.PUBLISHED, ACTOR)

        repo.append_transition.assert_not_called()
        assert resource.status == ContentStatus.DISCOVERED
        assert resource.status_history == []

    @pytest.mark.asyncio
    async def test_missing_resource(self):
        service = ResourceService(resource_repo=_make_repo(None))
        with pytest.raises(NotFoundError):
            await service.transition("nope", ContentStatus.APPROVED, ACTOR)

    @pytest.mark.asyncio
    async def test_falls_back_to_slug(self, make_resource):
        resource = make_resource(status=ContentStatus.APPROVED, slug="my-slug")
        repo = _make_repo(None)
        repo.get_by_slug.return_value = resource
        service = ResourceService(resource_repo=repo)

        result = await service.transition("my-slug", ContentStatus.PUBLISHED, ACTOR)

        assert result.status == ContentStatus.PUBLISHED
        repo.get_by_slug.assert_awaited_once_with("my-slug")


class TestArchive:
    @pytest.mark.asyncio
    async def test_archive_uses_admin_reason(self, make_resource):
        resource = make_resource(status=ContentStatus.PUBLISHED)
        service = ResourceService(resource_repo=_make_repo(resource))

        result = await service.archive(resource.id, ACTOR)

        assert result.status == ContentStatus.ARCHIVED
        assert result.archived_reason == DELETED_REASON
        assert result.archived_at is not None

    @pytest.mark.asyncio
    async def test_cannot_archive_unpublished(self, make_resource):
        resource = make_resource(status=ContentStatus.PENDING_REVIEW)
        service = ResourceService(resource_repo=_make_repo(resource))

        with pytest.raises(InvalidTransitionError):
            await service.archive(resource.id, ACTOR)


class TestUpdate:
    @pytest.mark.asyncio
    async def test_status_edit_rejected(self, make_resource):
        resource = make_resource()
        repo = _make_repo(resource)
        service = ResourceService(resource_repo=repo)

        with pytest.raises(ValidationError):
            await service.update(resource.id, {"status": "archived"}, ACTOR)
        repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_slug_change_checks_uniqueness(self, make_resource):
        resource = make_resource()
        repo = _make_repo(resource)
        repo.find_conflict.return_value = make_resource(slug="taken")
        service = ResourceService(resource_repo=repo)

        with pytest.raises(ConflictError, match="slug"):
            await service.update(resource.id, {"slug": "taken"}, ACTOR)
        repo.find_conflict.assert_awaited_once_with(
            url=resource.url, slug="taken", exclude=resource.id
        )


class TestReads:
    @pytest.mark.asyncio
    async def test_record_click_returns_new_count(self, make_resource):
        resource = make_resource(clicks=2)
        repo = _make_repo(resource)
        repo.increment_clicks.return_value = 3
        service = ResourceService(resource_repo=repo)

        assert await service.record_click(resource.id) == 3

    @pytest.mark.asyncio
    async def test_allowed_transitions(self, make_resource):
        resource = make_resource(status=ContentStatus.APPROVED)
        service = ResourceService(resource_repo=_make_repo(resource))

        allowed = await service.allowed_transitions(resource.id)

        assert allowed == [ContentStatus.PENDING_REVIEW, ContentStatus.PUBLISHED]

    @pytest.mark.asyncio
    async def test_stats(self):
        repo = _make_repo()
        counts = {
            None: 10,
            ContentStatus.PUBLISHED: 6,
            ContentStatus.PENDING_REVIEW: 3,
            ContentStatus.ARCHIVED: 1,
        }
        repo.count.side_effect = lambda status=None: counts[status]
        service = ResourceService(resource_repo=repo)

        stats = await service.stats()

        assert (stats.total, stats.published, stats.pending, stats.archived) == (10, 6, 3, 1)
