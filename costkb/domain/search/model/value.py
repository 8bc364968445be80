from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from costkb.domain.resource.model.aggregate import Resource
from costkb.domain.resource.model.value import LanguageCode, ResourceType
from costkb.domain.shared.error import ValidationError
from costkb.domain.shared.model.value import ValueObject


class SortOrder(StrEnum):
    RELEVANCE = "relevance"
    DATE = "date"
    POPULARITY = "popularity"


class FacetField(StrEnum):
    """Classification fields facets are computed over."""

    RESOURCE_TYPE = "resource_type"
    THEMES = "themes"
    COUNTRY_PROGRAMS = "country_programs"
    LANGUAGE = "language"


class DateRange(ValueObject):
    from_: datetime | None = Field(default=None, alias="from")
    to: datetime | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="after")
    def _ordered(self) -> "DateRange":
        if self.from_ and self.to and self.from_ > self.to:
            raise ValueError("date_range.from must not be after date_range.to")
        return self


class SearchFilters(ValueObject):
    """Structured filters: AND across fields, any-of within list fields."""

    resource_types: list[ResourceType] = []
    themes: list[str] = []
    country_programs: list[str] = []
    language: LanguageCode | None = None
    audience: list[str] = []
    date_range: DateRange | None = None

    @classmethod
    def from_raw(cls, raw: dict[str, Any] | None) -> "SearchFilters":
        """Build filters from caller input, raising a domain ValidationError."""
        if not raw:
            return cls()
        try:
            return cls.model_validate(raw)
        except PydanticValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(p) for p in first["loc"]) or None
            raise ValidationError(f"Invalid filter '{field}': {first['msg']}", field=field) from e


class HybridWeights(ValueObject):
    keyword: float = 0.6
    semantic: float = 0.4


class Highlights(ValueObject):
    title: list[str] = []
    description: list[str] = []


class SearchHit(BaseModel):
    resource: Resource
    score: float
    highlights: Highlights | None = None


class FacetCount(ValueObject):
    value: str
    count: int


class Facets(ValueObject):
    resource_types: list[FacetCount] = []
    themes: list[FacetCount] = []
    country_programs: list[FacetCount] = []
    languages: list[FacetCount] = []


class SearchPage(BaseModel):
    results: list[SearchHit]
    total: int
    facets: Facets
    page: int
    total_pages: int


class TextWeights(ValueObject):
    """Per-field weights of the keyword relevance score."""

    title: int = 10
    description: int = 5
    tags: int = 3
    themes: int = 2
