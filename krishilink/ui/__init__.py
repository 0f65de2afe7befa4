"""Streamlit view layer."""
