"""
Search & filter panel for the crop list.
"""
import streamlit as st

from ...models.crop import CROP_TYPES
from ...models.query import ALL_TYPES, QueryState, SORT_KEYS


SORT_LABELS = {
    "newest": "Newest first",
    "oldest": "Oldest first",
    "price-low": "Price: Low to High",
    "price-high": "Price: High to Low",
    "quantity-low": "Quantity: Low to High",
    "quantity-high": "Quantity: High to Low",
    "name-asc": "Name: A to Z",
    "name-desc": "Name: Z to A",
}


def render_filter_panel(query: QueryState) -> tuple[QueryState, bool]:
    """
    Render search, type and sort inputs.

    Returns:
        Tuple of (new query, clear requested)
    """
    search_text = st.text_input(
        "Search",
        value=query.search_text,
        placeholder="Search by crop name, type, location...",
        key="crop_search",
        label_visibility="collapsed",
    )

    col1, col2, col3 = st.columns([2, 2, 1])

    type_options = [ALL_TYPES, *CROP_TYPES]
    with col1:
        type_filter = st.selectbox(
            "Crop type",
            options=type_options,
            index=type_options.index(query.type_filter) if query.type_filter in type_options else 0,
            format_func=lambda t: "All types" if t == ALL_TYPES else t,
            key="crop_type_filter",
        )

    with col2:
        sort_key = st.selectbox(
            "Sort by",
            options=list(SORT_KEYS),
            index=SORT_KEYS.index(query.sort_key) if query.sort_key in SORT_KEYS else 0,
            format_func=lambda k: SORT_LABELS.get(k, k),
            key="crop_sort",
        )

    with col3:
        st.write("")
        clear = st.button("Clear filters", use_container_width=True)

    return QueryState(search_text=search_text, type_filter=type_filter, sort_key=sort_key), clear
