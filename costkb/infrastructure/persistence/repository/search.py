import logging
from typing import Any

from sqlalchemy import ColumnElement, and_, exists, func, or_, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from costkb.domain.resource.model.aggregate import Resource
from costkb.domain.resource.model.value import ContentStatus
from costkb.domain.search.model.value import FacetCount, FacetField, SearchFilters
from costkb.domain.search.port.store import SearchStore
from costkb.domain.shared.error import StorageUnavailableError
from costkb.infrastructure.persistence.mappers.resource import as_utc
from costkb.infrastructure.persistence.repository.resource import rows_to_resources
from costkb.infrastructure.persistence.tables import resource_terms_table, resources_table

logger = logging.getLogger(__name__)

TEXT_INDEX_NAME = "idx_resources_search_text_trgm"

# Trigram GIN index serving the LIKE matches on search_text
_POSTGRES_TEXT_INDEX = (
    "CREATE EXTENSION IF NOT EXISTS pg_trgm",
    f"CREATE INDEX IF NOT EXISTS {TEXT_INDEX_NAME} ON resources "
    "USING GIN (search_text gin_trgm_ops)",
)

_SCALAR_FACETS = {
    FacetField.RESOURCE_TYPE: resources_table.c.resource_type,
    FacetField.LANGUAGE: resources_table.c.language,
}

_TERM_FACETS = {
    FacetField.THEMES: "themes",
    FacetField.COUNTRY_PROGRAMS: "country_programs",
}


def _published() -> ColumnElement[bool]:
    return resources_table.c.status == str(ContentStatus.PUBLISHED)


def _has_term(field: str | tuple[str, ...], condition: ColumnElement[bool]) -> ColumnElement[bool]:
    fields = (field,) if isinstance(field, str) else field
    return exists().where(
        resource_terms_table.c.resource_id == resources_table.c.id,
        resource_terms_table.c.field.in_(fields),
        condition,
    )


def filter_clauses(filters: SearchFilters) -> list[ColumnElement[bool]]:
    """Published resources narrowed by ``filters``.

    AND across fields; list fields match when any value matches.
    """
    clauses = [_published()]
    if filters.resource_types:
        clauses.append(resources_table.c.resource_type.in_([str(t) for t in filters.resource_types]))
    if filters.themes:
        clauses.append(_has_term("themes", resource_terms_table.c.value.in_(filters.themes)))
    if filters.country_programs:
        clauses.append(
            _has_term("country_programs", resource_terms_table.c.value.in_(filters.country_programs))
        )
    if filters.audience:
        clauses.append(_has_term("audience", resource_terms_table.c.value.in_(filters.audience)))
    if filters.language:
        clauses.append(resources_table.c.language == str(filters.language))
    if filters.date_range:
        if filters.date_range.from_:
            clauses.append(resources_table.c.publication_date >= as_utc(filters.date_range.from_))
        if filters.date_range.to:
            clauses.append(resources_table.c.publication_date <= as_utc(filters.date_range.to))
    return clauses


def term_match(term: str) -> ColumnElement[bool]:
    """Substring match of a lowercased term on title, description, tags or themes."""
    return resources_table.c.search_text.contains(term, autoescape=True)


class SqlSearchStore(SearchStore):
    """Read-only search queries over published resources.

    Each call opens its own session so the hybrid strategy's concurrent
    branches never share one.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory
        self._text_index_ready = False

    async def _fetch(self, *clauses: ColumnElement[bool]) -> list[Resource]:
        stmt = select(resources_table).where(and_(*clauses))
        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                return await rows_to_resources(session, result.mappings().all())
        except SQLAlchemyError as e:
            raise StorageUnavailableError(f"Search query failed: {e}") from e

    async def find_text_matches(self, terms: list[str], filters: SearchFilters) -> list[Resource]:
        if not terms:
            return []
        return await self._fetch(*filter_clauses(filters), or_(*(term_match(t) for t in terms)))

    async def find_semantic_candidates(self, filters: SearchFilters) -> list[Resource]:
        return await self._fetch(*filter_clauses(filters), resources_table.c.embedding.is_not(None))

    async def count_published(self, filters: SearchFilters) -> int:
        stmt = select(func.count()).select_from(resources_table).where(and_(*filter_clauses(filters)))
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return result.scalar_one()

    async def facet_counts(self, field: FacetField) -> list[FacetCount]:
        count = func.count().label("count")
        stmt: Any
        if field in _SCALAR_FACETS:
            value = _SCALAR_FACETS[field]
            stmt = (
                select(value.label("value"), count)
                .where(_published(), value.is_not(None))
                .group_by(value)
            )
        else:
            value = resource_terms_table.c.value
            stmt = (
                select(value.label("value"), count)
                .select_from(
                    resource_terms_table.join(
                        resources_table,
                        resources_table.c.id == resource_terms_table.c.resource_id,
                    )
                )
                .where(_published(), resource_terms_table.c.field == _TERM_FACETS[field])
                .group_by(value)
            )
        stmt = stmt.order_by(count.desc(), value)

        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [FacetCount(value=r.value, count=r.count) for r in result.all()]

    async def ensure_text_index(self) -> None:
        """Create the keyword index once; failures are only logged.

        PostgreSQL gets a trigram index on ``search_text``. SQLite has no
        index type for infix LIKE, so there the call only marks itself done.
        """
        if self._text_index_ready:
            return
        try:
            async with self.session_factory() as session:
                if session.bind.dialect.name == "postgresql":
                    for statement in _POSTGRES_TEXT_INDEX:
                        await session.execute(text(statement))
                    await session.commit()
                    logger.info("Ensured text index %s", TEXT_INDEX_NAME)
            self._text_index_ready = True
        except SQLAlchemyError as e:
            logger.warning("Text index creation failed: %s", e)
