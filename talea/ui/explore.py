"""Explore tab: search and filter the tale catalog."""

from __future__ import annotations

import streamlit as st

from talea.core.catalog import SORT_OPTIONS
from talea.ui.cards import render_tale_grid
from talea.ui.state import get_session


def render_explore_tab(container) -> None:
    session = get_session()
    catalog = session.catalog
    with container:
        st.subheader("Explore tales")
        query = st.text_input("Search", key="explore_query", placeholder="Search destinations, experiences...")
        category_col, personality_col, sort_col = st.columns(3)
        category = category_col.selectbox("Category", catalog.categories(), key="explore_category")
        personality = personality_col.selectbox(
            "Personality", catalog.personality_types(), key="explore_personality"
        )
        sort = sort_col.selectbox("Sort by", list(SORT_OPTIONS), key="explore_sort")

        tales = catalog.explore(query, category=category, personality=personality, sort=sort)
        st.caption(f"{len(tales)} of {len(catalog)} tales")
        if not tales:
            st.info("No tales found. Try adjusting your search criteria or filters.")
            return
        render_tale_grid(tales, key_prefix="explore")


__all__ = ["render_explore_tab"]
