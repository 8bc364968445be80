"""Content lifecycle gate.

The gate owns the single authoritative transition table for resource
statuses and computes the field changes a transition implies. It performs
no I/O: callers apply the returned ``StatusUpdate`` to a ``Resource`` and
persist it themselves.
"""

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from costkb.domain.resource.model.value import ContentStatus, StatusChange
from costkb.domain.shared.error import InvalidTransitionError
from costkb.domain.shared.model.value import UserId, ValueObject

DEFAULT_ARCHIVE_REASON = "archived"

TRANSITIONS: Mapping[ContentStatus, frozenset[ContentStatus]] = {
    ContentStatus.DISCOVERED: frozenset({ContentStatus.PENDING_REVIEW, ContentStatus.REJECTED}),
    ContentStatus.PENDING_REVIEW: frozenset({ContentStatus.APPROVED, ContentStatus.REJECTED}),
    ContentStatus.APPROVED: frozenset({ContentStatus.PUBLISHED, ContentStatus.PENDING_REVIEW}),
    ContentStatus.PUBLISHED: frozenset({ContentStatus.ARCHIVED}),
    ContentStatus.ARCHIVED: frozenset({ContentStatus.PUBLISHED}),
    ContentStatus.REJECTED: frozenset({ContentStatus.PENDING_REVIEW}),
}

_TERMINAL = frozenset({ContentStatus.PUBLISHED, ContentStatus.ARCHIVED})


class StatusUpdate(ValueObject):
    """Field changes implied by one legal status transition.

    ``published_at``/``archived_at``/``archived_reason`` are only meaningful
    when set; ``clears_archive`` resets the archive fields to ``None``.
    """

    status: ContentStatus
    change: StatusChange
    updated_at: datetime
    updated_by: UserId
    published_at: datetime | None = None
    archived_at: datetime | None = None
    archived_reason: str | None = None
    clears_archive: bool = False

    def fields(self) -> dict[str, Any]:
        """Scalar fields to set on the stored resource (history excluded)."""
        values: dict[str, Any] = {
            "status": self.status,
            "updated_at": self.updated_at,
            "updated_by": self.updated_by,
        }
        if self.published_at is not None:
            values["published_at"] = self.published_at
        if self.archived_at is not None:
            values["archived_at"] = self.archived_at
            values["archived_reason"] = self.archived_reason
        if self.clears_archive:
            values["archived_at"] = None
            values["archived_reason"] = None
        return values


def next_statuses(current: ContentStatus | str) -> frozenset[ContentStatus]:
    """Statuses reachable from ``current``; empty for an unknown status."""
    try:
        return TRANSITIONS.get(ContentStatus(current), frozenset())
    except ValueError:
        return frozenset()


def is_valid_transition(current: ContentStatus | str, target: ContentStatus | str) -> bool:
    try:
        return ContentStatus(target) in next_statuses(current)
    except ValueError:
        return False


def is_terminal(status: ContentStatus) -> bool:
    """PUBLISHED and ARCHIVED only ever change through an explicit transition."""
    return status in _TERMINAL


def is_public(status: ContentStatus) -> bool:
    """The only visibility predicate the ranking engine trusts."""
    return status == ContentStatus.PUBLISHED


def prepare_transition(
    current: ContentStatus,
    target: ContentStatus,
    actor: UserId,
    reason: str | None = None,
    now: datetime | None = None,
) -> StatusUpdate:
    """Validate ``current -> target`` and compute the resulting update.

    Raises:
        InvalidTransitionError: If the pair is not in the transition table.
            The message enumerates the statuses allowed from ``current``.
    """
    if not is_valid_transition(current, target):
        raise InvalidTransitionError(
            current=str(current),
            target=str(target),
            allowed=[str(s) for s in next_statuses(current)],
        )

    now = now or datetime.now(UTC)
    target = ContentStatus(target)
    published_at = now if target == ContentStatus.PUBLISHED else None
    archived_at = now if target == ContentStatus.ARCHIVED else None

    return StatusUpdate(
        status=target,
        change=StatusChange(status=target, changed_at=now, changed_by=actor, reason=reason),
        updated_at=now,
        updated_by=actor,
        published_at=published_at,
        archived_at=archived_at,
        archived_reason=(reason or DEFAULT_ARCHIVE_REASON) if archived_at else None,
        clears_archive=(
            ContentStatus(current) == ContentStatus.ARCHIVED
            and target == ContentStatus.PUBLISHED
        ),
    )
