"""Streamlit entry point for the Talea application."""
from __future__ import annotations

import logging
from typing import Sequence

import streamlit as st
from dotenv import load_dotenv

from talea.config import log_level
from talea.ui import (
    ensure_app_state,
    render_explore_tab,
    render_profile_tab,
    render_saved_tab,
    render_toasts,
    render_upgrade_prompt,
)


_TAB_ORDER: Sequence[str] = ("Explore", "Saved", "Profile")


def configure() -> None:
    """Configure global Streamlit settings and load environment variables."""

    load_dotenv()
    logging.basicConfig(level=log_level(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    st.set_page_config(page_title="Talea", layout="wide")


def render() -> None:
    """Render the Talea multi-tab shell."""

    session = ensure_app_state()

    st.title("🧭 Talea")
    if session.tier is not None:
        saved_count = len(session.saved_ids())
        st.caption(f"{saved_count} saved · {session.tier.value}")

    render_upgrade_prompt(st.container())

    tab_containers = st.tabs(list(_TAB_ORDER))
    tab_lookup = {label: container for label, container in zip(_TAB_ORDER, tab_containers)}

    render_explore_tab(tab_lookup["Explore"])
    render_saved_tab(tab_lookup["Saved"])
    render_profile_tab(tab_lookup["Profile"])

    render_toasts()


if __name__ == "__main__":
    configure()
    render()
