"""
Query state for the crop list view.
"""
from pydantic import BaseModel, Field


SORT_KEYS: tuple[str, ...] = (
    "newest",
    "oldest",
    "price-low",
    "price-high",
    "quantity-low",
    "quantity-high",
    "name-asc",
    "name-desc",
)

ALL_TYPES = "all"
DEFAULT_SORT = "newest"


class QueryState(BaseModel):
    """
    Search, type filter and sort key for the crop list.
    Unknown sort keys are allowed: they leave the order unchanged.
    """
    search_text: str = Field(default="", description="Case-insensitive substring")
    type_filter: str = Field(default=ALL_TYPES, description="Crop type or 'all'")
    sort_key: str = Field(default=DEFAULT_SORT)

    @classmethod
    def cleared(cls) -> "QueryState":
        """Query with every field reset (newest first, no filters)."""
        return cls()

    @property
    def is_default(self) -> bool:
        return (
            not self.search_text.strip()
            and self.type_filter == ALL_TYPES
            and self.sort_key == DEFAULT_SORT
        )
