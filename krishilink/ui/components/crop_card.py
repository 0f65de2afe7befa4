"""
Crop card component - one listing in the grid.
"""
from html import escape
from typing import Optional

import streamlit as st

from ...models.crop import Crop


def render_crop_grid(crops: list[Crop], columns: int = 3, key_prefix: str = "view") -> Optional[Crop]:
    """
    Render crops as a grid of cards.

    Returns:
        The crop whose "View details" button was clicked, if any
    """
    if not crops:
        st.info("No crops found. Try a different search or clear the filters.")
        return None

    selected = None
    cols = st.columns(columns)
    for index, crop in enumerate(crops):
        with cols[index % columns]:
            if render_crop_card(crop, key=f"{key_prefix}_{crop.id}"):
                selected = crop
    return selected


def render_crop_card(crop: Crop, key: Optional[str] = None) -> bool:
    """Render a single crop card; returns True when its details button is clicked."""
    if crop.image:
        st.image(crop.image, use_container_width=True)

    description = crop.description
    if len(description) > 100:
        description = description[:100] + "..."

    card_html = f"""
    <div class="crop-card">
        <div style="display: flex; justify-content: space-between; align-items: center;">
            <span class="name">{escape(crop.name)}</span>
            <span class="type-badge">{escape(crop.type)}</span>
        </div>
        <div class="price">৳{crop.price_per_unit:,.2f} / {crop.unit}</div>
        <div class="meta">📦 {crop.quantity:g} {crop.unit} available</div>
        <div class="meta">📍 {escape(crop.location or 'Unknown location')}</div>
        <p class="meta">{escape(description)}</p>
    </div>
    """
    st.markdown(card_html, unsafe_allow_html=True)
    return st.button("View details", key=key or f"view_{crop.id}", use_container_width=True)
