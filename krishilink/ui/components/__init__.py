"""UI components package."""

from .filter_panel import render_filter_panel
from .crop_card import render_crop_grid, render_crop_card
from .toast_stack import render_toast_stack, advance_toasts, toast_stack_fragment

__all__ = [
    "render_filter_panel",
    "render_crop_grid",
    "render_crop_card",
    "render_toast_stack",
    "advance_toasts",
    "toast_stack_fragment",
]
