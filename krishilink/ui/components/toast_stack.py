"""
Toast stack component - renders the toast manager's queue.

The stack lives in a fragment that reruns on its own every few ticks, so
toasts count down and expire without any user interaction.
"""
import time
from html import escape
from typing import MutableMapping, Optional

import streamlit as st

from ...config import get_config
from ...notify.manager import ToastManager


def advance_toasts(toasts: ToastManager, state: MutableMapping, now: Optional[float] = None) -> None:
    """Advance countdowns by the wall time since the previous call."""
    now = time.monotonic() if now is None else now
    last = state.get("toast_clock")
    state["toast_clock"] = now
    if last is not None:
        toasts.advance((now - last) * 1000)


def render_toast_stack(toasts: ToastManager):
    """Render toasts oldest first, each with pause and close controls."""
    for toast in toasts.toasts:
        classes = ["toast", toast.kind]
        if toast.is_expiring:
            classes.append("expiring")

        st.markdown(f"""
        <div class="{' '.join(classes)}">
            <strong>{toast.title}</strong>
            <div>{escape(toast.message)}</div>
            <div class="progress"><div style="width: {toast.remaining_percent:.0f}%"></div></div>
        </div>
        """, unsafe_allow_html=True)

        if toast.is_expiring:
            continue

        col1, col2 = st.columns(2)
        with col1:
            label = "▶ Resume" if toast.is_paused else "⏸ Pause"
            if st.button(label, key=f"toast_pause_{toast.id}", use_container_width=True):
                if toast.is_paused:
                    toasts.resume(toast.id)
                else:
                    toasts.pause(toast.id)
                st.rerun(scope="fragment")
        with col2:
            if st.button("✕ Close", key=f"toast_close_{toast.id}", use_container_width=True):
                toasts.dismiss(toast.id)
                st.rerun(scope="fragment")


@st.fragment(run_every=get_config().toast.refresh_seconds)
def toast_stack_fragment(toasts: ToastManager):
    """Self-refreshing toast stack; only this fragment reruns on its timer."""
    advance_toasts(toasts, st.session_state)
    render_toast_stack(toasts)
