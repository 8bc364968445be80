from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Any, List

from sqlalchemy import delete, func, insert, or_, select, update
from sqlalchemy.engine import RowMapping
from sqlalchemy.ext.asyncio import AsyncSession

from costkb.domain.resource.model.aggregate import PROTECTED_FIELDS, Resource
from costkb.domain.resource.model.lifecycle import StatusUpdate
from costkb.domain.resource.model.value import ContentStatus, ResourceId, StatusChange
from costkb.domain.resource.port.repository import ResourceRepository
from costkb.infrastructure.persistence.mappers.resource import (
    resource_to_dict,
    resource_to_terms,
    row_to_resource,
    row_to_status_change,
    status_change_to_dict,
)
from costkb.infrastructure.persistence.tables import (
    resource_status_history_table,
    resource_terms_table,
    resources_table,
)

# Columns an edit may write; lifecycle and counters have their own statements
_NOT_EDITABLE = PROTECTED_FIELDS - {"updated_at", "updated_by"}


async def load_status_history(
    session: AsyncSession, resource_ids: Iterable[str]
) -> dict[str, list[StatusChange]]:
    """History entries per resource, oldest first."""
    ids = list(resource_ids)
    if not ids:
        return {}
    history_table = resource_status_history_table
    stmt = (
        select(history_table)
        .where(history_table.c.resource_id.in_(ids))
        .order_by(history_table.c.resource_id, history_table.c.id)
    )
    result = await session.execute(stmt)
    history: dict[str, list[StatusChange]] = {}
    for row in result.mappings().all():
        history.setdefault(row["resource_id"], []).append(row_to_status_change(dict(row)))
    return history


async def rows_to_resources(session: AsyncSession, rows: Sequence[RowMapping]) -> list[Resource]:
    history = await load_status_history(session, (r["id"] for r in rows))
    return [row_to_resource(dict(r), history.get(r["id"])) for r in rows]


class SqlResourceRepository(ResourceRepository):
    """SQLAlchemy implementation of ResourceRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _one(self, stmt: Any) -> Resource | None:
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if row is None:
            return None
        return (await rows_to_resources(self.session, [row]))[0]

    async def get(self, resource_id: ResourceId) -> Resource | None:
        return await self._one(
            select(resources_table).where(resources_table.c.id == str(resource_id))
        )

    async def get_by_slug(self, slug: str) -> Resource | None:
        return await self._one(select(resources_table).where(resources_table.c.slug == slug))

    async def find_conflict(
        self, *, url: str, slug: str, exclude: ResourceId | None = None
    ) -> Resource | None:
        stmt = select(resources_table).where(
            or_(resources_table.c.url == url, resources_table.c.slug == slug)
        )
        if exclude is not None:
            stmt = stmt.where(resources_table.c.id != str(exclude))
        return await self._one(stmt.limit(1))

    async def save(self, resource: Resource) -> None:
        values = resource_to_dict(resource)

        stmt = select(resources_table.c.id).where(resources_table.c.id == resource.id)
        exists = (await self.session.execute(stmt)).first() is not None

        if exists:
            editable = {k: v for k, v in values.items() if k not in _NOT_EDITABLE}
            await self.session.execute(
                update(resources_table)
                .where(resources_table.c.id == resource.id)
                .values(**editable)
            )
        else:
            await self.session.execute(insert(resources_table).values(**values))
            if resource.status_history:
                await self.session.execute(
                    insert(resource_status_history_table),
                    [status_change_to_dict(resource.id, c) for c in resource.status_history],
                )

        # Terms are derived data; rewrite them wholesale
        await self.session.execute(
            delete(resource_terms_table).where(resource_terms_table.c.resource_id == resource.id)
        )
        terms = resource_to_terms(resource)
        if terms:
            await self.session.execute(insert(resource_terms_table), terms)
        await self.session.flush()

    async def append_transition(
        self, resource_id: ResourceId, status_update: StatusUpdate
    ) -> None:
        await self.session.execute(
            insert(resource_status_history_table).values(
                **status_change_to_dict(resource_id, status_update.change)
            )
        )
        fields = status_update.fields()
        fields["status"] = str(fields["status"])
        await self.session.execute(
            update(resources_table)
            .where(resources_table.c.id == str(resource_id))
            .values(**fields)
        )
        await self.session.flush()

    async def increment_clicks(self, resource_id: ResourceId, at: datetime) -> int | None:
        stmt = (
            update(resources_table)
            .where(resources_table.c.id == str(resource_id))
            .values(clicks=resources_table.c.clicks + 1, last_clicked_at=at)
            .returning(resources_table.c.clicks)
        )
        result = await self.session.execute(stmt)
        clicks = result.scalar_one_or_none()
        await self.session.flush()
        return clicks

    async def list(
        self,
        *,
        status: ContentStatus | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> List[Resource]:
        stmt = select(resources_table).order_by(resources_table.c.created_at.desc())
        if status is not None:
            stmt = stmt.where(resources_table.c.status == str(status))
        if offset is not None:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        return await rows_to_resources(self.session, result.mappings().all())

    async def count(self, status: ContentStatus | None = None) -> int:
        stmt = select(func.count()).select_from(resources_table)
        if status is not None:
            stmt = stmt.where(resources_table.c.status == str(status))
        result = await self.session.execute(stmt)
        return result.scalar_one()
