from typing import Any

from costkb.domain.topic.model.topic import Topic


def row_to_topic(row: dict[str, Any]) -> Topic:
    return Topic(
        name=row["name"],
        slug=row["slug"],
        description=row.get("description") or "",
        display_order=row.get("display_order") or 0,
        is_active=bool(row["is_active"]),
    )


def topic_to_dict(topic: Topic) -> dict[str, Any]:
    return topic.model_dump()
