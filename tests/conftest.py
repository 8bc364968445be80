"""Global test fixtures."""

from datetime import UTC, datetime
from itertools import count
from typing import Any

import logfire
import pytest

from costkb.domain.resource.model.aggregate import Resource
from costkb.domain.resource.model.value import ContentStatus, ResourceId
from costkb.domain.shared.model.value import UserId

# Handler spans need a configured (but silent) logfire
logfire.configure(send_to_logfire=False, console=False)

_ids = count(1)


def build_resource(**overrides: Any) -> Resource:
    n = next(_ids)
    now = datetime(2025, 1, 1, tzinfo=UTC)
    data: dict[str, Any] = {
        "id": ResourceId(f"res-{n}"),
        "slug": f"resource-{n}",
        "url": f"https://example.org/resources/{n}",
        "title": f"Resource {n}",
        "description": "A document about infrastructure transparency.",
        "publication_date": now,
        "last_verified": now,
        "status": ContentStatus.PUBLISHED,
        "created_at": now,
        "created_by": UserId("admin"),
        "updated_at": now,
        "updated_by": UserId("admin"),
    }
    data.update(overrides)
    return Resource(**data)


@pytest.fixture
def make_resource():
    """Factory for Resource aggregates; published by default."""
    return build_resource
