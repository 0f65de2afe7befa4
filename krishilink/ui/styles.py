"""
Custom CSS styles for the KrishiLink app.
"""
import streamlit as st


# Color palette
COLORS = {
    "primary": "#4CAF50",
    "primary_dark": "#388E3C",
    "background": "#F8FFF8",
    "surface": "#FFFFFF",
    "text": "#1A1A1A",
    "text_muted": "#6B7280",
    "success": "#4CAF50",
    "error": "#EF4444",
    "border": "#E5E7EB",
}


def inject_custom_css():
    """Inject custom CSS into the Streamlit app."""
    st.markdown(f"""
    <style>
    @import url('https://fonts.googleapis.com/css2?family=Poppins:wght@400;500;600;700&display=swap');

    :root {{
        --primary: {COLORS['primary']};
        --primary-dark: {COLORS['primary_dark']};
        --bg: {COLORS['background']};
        --surface: {COLORS['surface']};
        --text: {COLORS['text']};
        --text-muted: {COLORS['text_muted']};
        --success: {COLORS['success']};
        --error: {COLORS['error']};
        --border: {COLORS['border']};
    }}

    .stApp {{
        font-family: 'Poppins', sans-serif;
        background: linear-gradient(180deg, #FFFFFF 0%, var(--bg) 100%);
    }}

    .app-header {{
        text-align: center;
        padding: 1.5rem 0 1rem;
    }}

    .app-header h1 {{
        font-size: 2.5rem;
        font-weight: 700;
        color: var(--text);
    }}

    .app-header h1 span {{
        color: var(--primary);
    }}

    .crop-card {{
        background: var(--surface);
        border: 1px solid var(--border);
        border-radius: 16px;
        padding: 1.25rem;
        margin-bottom: 1rem;
        box-shadow: 0 4px 12px rgba(0, 0, 0, 0.05);
    }}

    .crop-card .name {{
        font-size: 1.15rem;
        font-weight: 600;
        color: var(--text);
    }}

    .crop-card .type-badge {{
        background: #E8F5E9;
        color: var(--primary-dark);
        border-radius: 999px;
        padding: 0.15rem 0.65rem;
        font-size: 0.8rem;
    }}

    .crop-card .price {{
        font-size: 1.25rem;
        font-weight: 700;
        color: var(--primary);
    }}

    .crop-card .meta {{
        color: var(--text-muted);
        font-size: 0.9rem;
    }}

    .toast {{
        background: var(--surface);
        border-left: 4px solid var(--success);
        border-radius: 8px;
        padding: 0.75rem 1rem 0.5rem;
        margin-bottom: 0.5rem;
        box-shadow: 0 8px 24px rgba(0, 0, 0, 0.12);
    }}

    .toast.error {{
        border-left-color: var(--error);
    }}

    .toast.expiring {{
        opacity: 0.4;
    }}

    .toast .progress {{
        height: 4px;
        background: var(--border);
        border-radius: 999px;
        margin-top: 0.5rem;
        overflow: hidden;
    }}

    .toast .progress div {{
        height: 100%;
        background: var(--success);
    }}

    .toast.error .progress div {{
        background: var(--error);
    }}
    </style>
    """, unsafe_allow_html=True)
