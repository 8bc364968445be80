from datetime import UTC, datetime
from typing import Any

from pydantic import Field
from pydantic import ValidationError as PydanticValidationError

from costkb.domain.resource.model.lifecycle import StatusUpdate
from costkb.domain.resource.model.value import (
    AccessLevel,
    ContentStatus,
    DescriptionSource,
    LanguageCode,
    ResourceId,
    ResourceSource,
    ResourceType,
    StatusChange,
    TranslationLink,
)
from costkb.domain.shared.error import InvalidStateError, ValidationError
from costkb.domain.shared.model.aggregate import Aggregate
from costkb.domain.shared.model.value import UserId

# Fields owned by the lifecycle gate; plain edits may not touch them.
LIFECYCLE_FIELDS = frozenset(
    {
        "status",
        "status_history",
        "published_at",
        "archived_at",
        "archived_reason",
    }
)

# Fields that are never edited directly.
PROTECTED_FIELDS = LIFECYCLE_FIELDS | {
    "id",
    "clicks",
    "last_clicked_at",
    "created_at",
    "created_by",
    "updated_at",
    "updated_by",
    "source",
}


class Resource(Aggregate):
    id: ResourceId
    slug: str = Field(min_length=1, max_length=200)
    url: str
    title: str = Field(min_length=1, max_length=500)
    description: str = Field(min_length=1, max_length=5000)
    description_locked: bool = False
    description_source: DescriptionSource = DescriptionSource.MANUAL
    tags: list[str] = []
    resource_type: ResourceType | None = None

    country_programs: list[str] = []
    themes: list[str] = []
    oc4ids_alignment: list[str] = []
    workstreams: list[str] = []
    audience: list[str] = []
    category: str | None = None  # legacy topic name

    access_level: AccessLevel = AccessLevel.PUBLIC
    language: LanguageCode = LanguageCode.EN
    is_translation: bool = False
    canonical_id: ResourceId | None = None
    translations: list[TranslationLink] = []

    publication_date: datetime
    last_verified: datetime
    valid_until: datetime | None = None

    status: ContentStatus = ContentStatus.DISCOVERED
    status_history: list[StatusChange] = []
    published_at: datetime | None = None
    archived_at: datetime | None = None
    archived_reason: str | None = None

    clicks: int = Field(default=0, ge=0)
    last_clicked_at: datetime | None = None
    ai_citations: int = Field(default=0, ge=0)
    embedding: list[float] | None = None
    summary: str | None = Field(default=None, max_length=1000)

    source: ResourceSource = ResourceSource.MANUAL
    created_at: datetime
    created_by: UserId
    updated_at: datetime
    updated_by: UserId

    @property
    def has_embedding(self) -> bool:
        return self.embedding is not None

    def apply_status_update(self, update: StatusUpdate) -> None:
        """Apply a gate-prepared transition, appending to the history."""
        if update.change.status != update.status:
            raise InvalidStateError("Status update and history entry disagree")
        self.status = update.status
        self.status_history = [*self.status_history, update.change]
        for name, value in update.fields().items():
            if name != "status":
                setattr(self, name, value)

    def edit(self, changes: dict[str, Any], actor: UserId) -> None:
        """Apply plain field edits; lifecycle fields go through the gate."""
        forbidden = sorted(set(changes) & PROTECTED_FIELDS)
        if forbidden:
            if set(forbidden) & LIFECYCLE_FIELDS:
                raise ValidationError(
                    "Use the status transition operation to change lifecycle fields",
                    field=forbidden[0],
                )
            raise ValidationError(f"Field '{forbidden[0]}' cannot be edited", field=forbidden[0])

        unknown = sorted(set(changes) - set(type(self).model_fields))
        if unknown:
            raise ValidationError(f"Unknown field '{unknown[0]}'", field=unknown[0])

        try:
            candidate = self.model_validate({**self.model_dump(), **changes})
        except PydanticValidationError as e:
            first = e.errors()[0]
            field = str(first["loc"][0]) if first["loc"] else None
            raise ValidationError(f"Invalid value for '{field}': {first['msg']}", field=field) from e

        for name in changes:
            setattr(self, name, getattr(candidate, name))
        self.updated_at = datetime.now(UTC)
        self.updated_by = actor

    def record_click(self, at: datetime | None = None) -> None:
        self.clicks += 1
        self.last_clicked_at = at or datetime.now(UTC)
