"""Crop list transform pipeline."""

from .listing import (
    filter_by_text,
    filter_by_type,
    sort_crops,
    transform_listings,
    owned_by,
    SORTERS,
)

__all__ = [
    "filter_by_text",
    "filter_by_type",
    "sort_crops",
    "transform_listings",
    "owned_by",
    "SORTERS",
]
