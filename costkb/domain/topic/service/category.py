"""Derive the browsable topic a resource belongs to."""

from costkb.domain.resource.model.aggregate import Resource
from costkb.domain.resource.model.value import ResourceType

INDEPENDENT_REVIEWS = "Independent Reviews"
LEGACY_INDEPENDENT_REVIEW = "Independent Review"
OC4IDS = "OC4IDS"
TRANSPARENCY_INDEX = "Infrastructure Transparency Index"
GUIDANCE_NOTES = "Guidance Notes"

INDEPENDENT_REVIEW_ALIASES = frozenset(
    {
        "independent reviews",
        "independent review",
        "assurance",
        "assurance report",
        "assurance reports",
    }
)
_OC4IDS_ALIASES = frozenset({"oc4ids", "open contracting for infrastructure data standard"})
_OC4IDS_TAGS = frozenset({"oc4ids", "open contracting"})
_ITI_ALIASES = frozenset({"infrastructure transparency index", "iti", "transparency index"})
_GUIDANCE_ALIASES = frozenset({"guidance notes", "guidance"})
_GUIDANCE_TAGS = frozenset({"guidance", "guidance note", "guidance notes"})

_TOPIC_LABELS = (
    OC4IDS,
    INDEPENDENT_REVIEWS,
    LEGACY_INDEPENDENT_REVIEW,
    TRANSPARENCY_INDEX,
    GUIDANCE_NOTES,
)


def resolve_independent_review_name(active_topics: frozenset[str] | set[str] | None) -> str:
    """Prefer whichever spelling of the review topic is currently active."""
    if active_topics and INDEPENDENT_REVIEWS in active_topics:
        return INDEPENDENT_REVIEWS
    if active_topics and LEGACY_INDEPENDENT_REVIEW in active_topics:
        return LEGACY_INDEPENDENT_REVIEW
    return INDEPENDENT_REVIEWS


def _normalize_category(value: str | None, active_topics) -> str | None:
    if not value:
        return None
    lower = value.strip().lower()
    if lower in INDEPENDENT_REVIEW_ALIASES:
        return resolve_independent_review_name(active_topics)
    if lower in _OC4IDS_ALIASES:
        return OC4IDS
    if lower in _ITI_ALIASES:
        return TRANSPARENCY_INDEX
    if lower in _GUIDANCE_ALIASES:
        return GUIDANCE_NOTES
    for label in _TOPIC_LABELS:
        if label.lower() == lower:
            return label
    return None


def map_resource_to_topic(
    resource: Resource, active_topics: frozenset[str] | set[str] | None = None
) -> str:
    """Map a resource onto a topic label.

    Checked in order: explicit category, an "assurance" workstream, any
    OC4IDS alignment, tag aliases, resource type. Falls back to
    "Guidance Notes".
    """
    direct = _normalize_category(resource.category, active_topics)
    if direct:
        return direct

    if "assurance" in (w.lower() for w in resource.workstreams):
        return resolve_independent_review_name(active_topics)

    if resource.oc4ids_alignment:
        return OC4IDS

    tags = {t.lower() for t in resource.tags}
    if tags & INDEPENDENT_REVIEW_ALIASES:
        return resolve_independent_review_name(active_topics)
    if tags & _OC4IDS_TAGS:
        return OC4IDS
    if tags & _ITI_ALIASES:
        return TRANSPARENCY_INDEX
    if tags & _GUIDANCE_TAGS:
        return GUIDANCE_NOTES

    if resource.resource_type == ResourceType.GUIDANCE:
        return GUIDANCE_NOTES

    return GUIDANCE_NOTES
