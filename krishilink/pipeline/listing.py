"""
Crop list pipeline - search, type filter and sort over an in-memory list.
"""
import logging
import unicodedata
from typing import Callable, Iterable, Optional

from ..models.crop import Crop
from ..models.query import ALL_TYPES, QueryState


logger = logging.getLogger(__name__)


def _collation_key(text: str) -> tuple[str, str]:
    """
    Locale-style comparison key: accents and case are ignored first,
    the raw text breaks ties so the order stays total.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), text


def _created_key(crop: Crop) -> float:
    # Missing timestamps sort as oldest
    return crop.created_at.timestamp() if crop.created_at else float("-inf")


# sort key -> (key function, descending)
SORTERS: dict[str, tuple[Callable[[Crop], object], bool]] = {
    "newest": (_created_key, True),
    "oldest": (_created_key, False),
    "price-low": (lambda c: c.price_per_unit, False),
    "price-high": (lambda c: c.price_per_unit, True),
    "quantity-low": (lambda c: c.quantity, False),
    "quantity-high": (lambda c: c.quantity, True),
    "name-asc": (lambda c: _collation_key(c.name), False),
    "name-desc": (lambda c: _collation_key(c.name), True),
}


def filter_by_text(crops: Iterable[Crop], search_text: str) -> list[Crop]:
    """Case-insensitive substring match on name, type, location and description."""
    crops = list(crops)
    if not search_text.strip():
        return crops

    needle = search_text.lower()
    return [
        crop for crop in crops
        if needle in crop.name.lower()
        or needle in crop.type.lower()
        or needle in crop.location.lower()
        or needle in crop.description.lower()
    ]


def filter_by_type(crops: Iterable[Crop], type_filter: str) -> list[Crop]:
    """Exact match on crop type; 'all' keeps everything."""
    crops = list(crops)
    if type_filter == ALL_TYPES:
        return crops
    return [crop for crop in crops if crop.type == type_filter]


def sort_crops(crops: Iterable[Crop], sort_key: str) -> list[Crop]:
    """
    Stable sort by one of the known sort keys.
    An unknown key returns the crops in their current order.
    """
    crops = list(crops)
    sorter = SORTERS.get(sort_key)
    if sorter is None:
        logger.debug(f"Unknown sort key {sort_key!r}, keeping order")
        return crops

    key, descending = sorter
    # sorted() keeps equal elements in input order, also with reverse=True
    return sorted(crops, key=key, reverse=descending)


def transform_listings(crops: Iterable[Crop], query: Optional[QueryState] = None) -> list[Crop]:
    """
    Derive the visible crop list from the full list and a query.

    Steps run in a fixed order: text search, type filter, sort.
    The input is never mutated; a new list is returned.

    Args:
        crops: All crops as loaded from the API
        query: Search/filter/sort state (defaults to a cleared query)

    Returns:
        Filtered and ordered crops
    """
    query = query or QueryState.cleared()

    result = filter_by_text(crops, query.search_text)
    result = filter_by_type(result, query.type_filter)
    result = sort_crops(result, query.sort_key)

    logger.debug(f"Transformed listing view: {len(result)} crops for {query.model_dump()}")
    return result


def owned_by(crops: Iterable[Crop], email: Optional[str]) -> list[Crop]:
    """Crops posted by one owner, in input order."""
    return [crop for crop in crops if crop.is_owned_by(email)]
