"""Talea Streamlit UI helpers."""

from __future__ import annotations

from .explore import render_explore_tab
from .profile import render_profile_tab
from .saved import render_saved_tab
from .state import ensure_app_state, render_toasts, render_upgrade_prompt

__all__ = [
    "ensure_app_state",
    "render_explore_tab",
    "render_profile_tab",
    "render_saved_tab",
    "render_toasts",
    "render_upgrade_prompt",
]
