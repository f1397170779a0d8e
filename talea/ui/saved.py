"""Saved tab: the current user's collection, favorites and trips."""

from __future__ import annotations

import streamlit as st

from talea.core.catalog import ALL_TYPES
from talea.core.session import TaleaSession
from talea.schemas import TaleType
from talea.ui.cards import render_tale_grid
from talea.ui.state import get_session

_TYPE_FILTERS = [ALL_TYPES, *[kind.value for kind in TaleType]]


def _render_collection(session: TaleaSession) -> None:
    tale_type = st.selectbox("Type", _TYPE_FILTERS, key="saved_type_filter")
    tales = session.saved_tales(tale_type)
    if not tales:
        st.info("You haven't saved any tales yet. Browse the Explore tab to start your collection.")
        return

    st.caption(f"{len(tales)} saved")
    render_tale_grid(tales, key_prefix="saved")
    if st.button("Clear collection", key="saved_clear"):
        session.clear_saved()
        st.rerun()


def _render_favorites(session: TaleaSession) -> None:
    st.markdown("#### My Favorites")
    tales = session.favorite_tales()
    if not tales:
        st.caption("No favorites yet. Use the ☆ button on any tale.")
        return
    render_tale_grid(tales, key_prefix="favorites")


def _render_trips(session: TaleaSession) -> None:
    st.markdown("#### My Trips")
    with st.form("trip_create_form", clear_on_submit=True):
        name = st.text_input("Trip name")
        destination = st.text_input("Destination")
        if st.form_submit_button("Create trip"):
            if session.create_trip(name, destination) is not None:
                st.rerun()

    trips = session.trips()
    if not trips:
        st.caption("Create a trip, then use “Add to My Trip” on any tale.")
        return

    current = session.current_trip()
    labels = {trip.id: f"{trip.name} ({len(trip.tale_ids)} tales)" for trip in trips}
    ids = list(labels)
    selected = st.selectbox(
        "Current trip",
        ids,
        index=ids.index(current.id) if current is not None else 0,
        format_func=labels.get,
        key="saved_current_trip",
    )
    if current is None or selected != current.id:
        session.select_trip(selected)
        current = session.current_trip()
    if current is None:
        return

    if current.destination:
        st.caption(current.destination)
    for tale in session.trip_tales(current):
        title_col, remove_col = st.columns([4, 1])
        title_col.write(tale.title)
        if remove_col.button("Remove", key=f"trip_remove_{current.id}_{tale.id}"):
            session.remove_from_trip(current.id, tale.id)
            st.rerun()
    if st.button("Delete trip", key=f"trip_delete_{current.id}"):
        session.delete_trip(current.id)
        st.rerun()


def render_saved_tab(container) -> None:
    session = get_session()
    with container:
        st.subheader("My Saved Items")
        if not session.is_ready:
            st.info("Loading your saved items...")
            return

        _render_collection(session)
        identity = session.identity
        if identity is None or identity.is_anonymous:
            st.caption("Sign in on the Profile tab to keep favorites and plan trips.")
            return
        _render_favorites(session)
        _render_trips(session)


__all__ = ["render_saved_tab"]
