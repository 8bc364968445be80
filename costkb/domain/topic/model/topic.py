from pydantic import Field

from costkb.domain.shared.model.aggregate import Aggregate


class Topic(Aggregate):
    """A browsable topic; only active topics gate search results."""

    name: str = Field(min_length=1, max_length=100)
    slug: str
    description: str = Field(default="", max_length=500)
    display_order: int = Field(default=0, ge=0)
    is_active: bool = True
