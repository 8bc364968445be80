from datetime import datetime
from enum import StrEnum
from typing import NewType

from costkb.domain.shared.model.value import UserId, ValueObject

ResourceId = NewType("ResourceId", str)


# =============================================================================
# CoST taxonomy vocabularies
# =============================================================================

COUNTRY_PROGRAMS: tuple[str, ...] = (
    # Africa
    "ethiopia", "malawi", "mozambique", "seychelles", "uganda", "zambia",
    # Americas
    "colombia", "costa_rica", "ecuador", "el_salvador", "guatemala", "honduras",
    "panama", "mexico",
    # Asia-Pacific
    "afghanistan", "indonesia", "thailand", "timor_leste", "vietnam",
    # Europe
    "ukraine",
    "global",
)  # fmt: skip

THEMES: tuple[str, ...] = (
    "climate", "gender", "local_government", "beneficial_ownership",
    "social_safeguards", "environmental", "procurement", "project_monitoring",
    "data_standards", "msg_governance", "digital_tools", "impact_measurement",
)  # fmt: skip

OC4IDS_SECTIONS: tuple[str, ...] = (
    "project_identification", "project_preparation", "project_completion",
    "contracting_process", "implementation", "project_scope",
    "project_parties", "cost_schedule", "documents", "full_schema",
)  # fmt: skip

WORKSTREAMS: tuple[str, ...] = (
    "disclosure", "assurance", "social_accountability", "reforms", "capacity_building",
)  # fmt: skip

AUDIENCE_LEVELS: tuple[str, ...] = (
    "technical", "policy", "msg", "civil_society", "academic", "general",
)  # fmt: skip


class ContentStatus(StrEnum):
    DISCOVERED = "discovered"
    PENDING_REVIEW = "pending_review"
    APPROVED = "approved"
    PUBLISHED = "published"
    ARCHIVED = "archived"
    REJECTED = "rejected"


class ResourceType(StrEnum):
    GUIDANCE = "guidance"
    CASE_STUDY = "case_study"
    ASSURANCE_REPORT = "assurance_report"
    TOOL = "tool"
    TEMPLATE = "template"
    RESEARCH = "research"
    NEWS = "news"
    TRAINING = "training"
    POLICY = "policy"


class LanguageCode(StrEnum):
    EN = "en"
    ES = "es"
    FR = "fr"
    PT = "pt"
    UK = "uk"
    ID = "id"
    VI = "vi"
    TH = "th"


class AccessLevel(StrEnum):
    PUBLIC = "public"
    MEMBERS = "members"
    INTERNAL = "internal"


class ResourceSource(StrEnum):
    MANUAL = "manual"
    DISCOVERED = "discovered"


class DescriptionSource(StrEnum):
    MANUAL = "manual"
    AI = "ai"
    DISCOVERY = "discovery"


class StatusChange(ValueObject):
    """One entry of a resource's append-only status audit trail."""

    status: ContentStatus
    changed_at: datetime
    changed_by: UserId
    reason: str | None = None


class TranslationLink(ValueObject):
    language: LanguageCode
    resource_id: ResourceId
