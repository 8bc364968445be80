from datetime import datetime

from pydantic import Field

from costkb.domain.resource.model.value import (
    AccessLevel,
    DescriptionSource,
    LanguageCode,
    ResourceId,
    ResourceSource,
    ResourceType,
    TranslationLink,
)
from costkb.domain.shared.model.value import ValueObject


class ResourceDraft(ValueObject):
    """Author- or crawler-supplied fields for a new resource."""

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
    category: str | None = None
    access_level: AccessLevel = AccessLevel.PUBLIC
    language: LanguageCode = LanguageCode.EN
    is_translation: bool = False
    canonical_id: ResourceId | None = None
    translations: list[TranslationLink] = []
    publication_date: datetime | None = None
    last_verified: datetime | None = None
    valid_until: datetime | None = None
    summary: str | None = Field(default=None, max_length=1000)
    embedding: list[float] | None = None
    source: ResourceSource = ResourceSource.MANUAL
