from datetime import UTC, datetime
from typing import Any

from costkb.domain.resource.model.aggregate import Resource
from costkb.domain.resource.model.value import (
    ContentStatus,
    ResourceId,
    StatusChange,
    TranslationLink,
)
from costkb.domain.shared.model.value import UserId

# Array fields mirrored into resource_terms
TERM_FIELDS = ("tags", "themes", "country_programs", "audience")

_DATETIME_COLUMNS = (
    "publication_date",
    "last_verified",
    "valid_until",
    "published_at",
    "archived_at",
    "last_clicked_at",
    "created_at",
    "updated_at",
)


def as_utc(value: datetime | None) -> datetime | None:
    """SQLite hands back naive datetimes; everything is stored as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def search_text(resource: Resource) -> str:
    """Lowercased text the keyword match runs against.

    Folded in Python so matching does not depend on the database's
    ``lower()``, which on SQLite only handles ASCII. Fields are kept on
    separate lines so a term never spans two of them.
    """
    parts = [resource.title, resource.description, *resource.tags, *resource.themes]
    return "\n".join(parts).lower()


def row_to_resource(row: dict[str, Any], history: list[StatusChange] | None = None) -> Resource:
    data = dict(row)
    data.pop("search_text", None)
    for column in _DATETIME_COLUMNS:
        data[column] = as_utc(data.get(column))
    data["id"] = ResourceId(data["id"])
    data["created_by"] = UserId(data["created_by"])
    data["updated_by"] = UserId(data["updated_by"])
    data["status_history"] = history or []
    data["translations"] = [TranslationLink(**t) for t in data.get("translations") or []]
    return Resource.model_validate(data)


def resource_to_dict(resource: Resource) -> dict[str, Any]:
    data = resource.model_dump(exclude={"status_history"})
    for column in _DATETIME_COLUMNS:
        data[column] = as_utc(data[column])
    data["translations"] = [t.model_dump(mode="json") for t in resource.translations]
    data["search_text"] = search_text(resource)
    return data


def resource_to_terms(resource: Resource) -> list[dict[str, str]]:
    """One row per distinct (field, value) of the resource's array fields."""
    rows = []
    for field in TERM_FIELDS:
        for value in dict.fromkeys(getattr(resource, field)):
            rows.append({"resource_id": resource.id, "field": field, "value": value})
    return rows


def status_change_to_dict(resource_id: ResourceId, change: StatusChange) -> dict[str, Any]:
    return {
        "resource_id": resource_id,
        "status": str(change.status),
        "changed_at": as_utc(change.changed_at),
        "changed_by": change.changed_by,
        "reason": change.reason,
    }


def row_to_status_change(row: dict[str, Any]) -> StatusChange:
    return StatusChange(
        status=ContentStatus(row["status"]),
        changed_at=as_utc(row["changed_at"]),
        changed_by=UserId(row["changed_by"]),
        reason=row["reason"],
    )
