"""Tale card rendering shared by the explore and saved tabs."""

from __future__ import annotations

from typing import List, Optional

import streamlit as st

from talea.schemas import Tale, TaleType
from talea.ui.state import get_session, handle_add_to_trip, handle_favorite, handle_toggle

_TYPE_ICONS = {
    TaleType.VIDEO: "🎬",
    TaleType.HOTEL: "🏨",
    TaleType.EVENT: "🎉",
    TaleType.RESTAURANT: "🍽️",
    TaleType.ATTRACTION: "📍",
}


def save_button_label(is_saved: bool) -> str:
    return "♥ Saved" if is_saved else "♡ Save"


def favorite_button_label(is_favorite: bool) -> str:
    return "★ Favorite" if is_favorite else "☆ Favorite"


def tale_meta_line(tale: Tale) -> str:
    parts: List[Optional[str]] = [
        tale.location,
        tale.category,
        f"★ {tale.rating:.1f}" if tale.rating is not None else None,
        tale.price_range,
    ]
    return " · ".join(part for part in parts if part)


def render_tale_card(tale: Tale, *, key_prefix: str) -> None:
    session = get_session()
    is_saved = session.is_saved(tale.id)
    identity = session.identity
    signed_in = identity is not None and not identity.is_anonymous
    current_trip = session.current_trip() if signed_in else None
    with st.container(border=True):
        if tale.image_url:
            st.image(tale.image_url, use_container_width=True)
        st.markdown(f"**{_TYPE_ICONS.get(tale.type, '')} {tale.title}**")
        st.caption(tale_meta_line(tale))
        st.write(tale.description)
        if tale.tags:
            st.caption(" ".join(f"#{tag}" for tag in tale.tags))
        save_col, favorite_col = st.columns(2)
        save_col.button(
            save_button_label(is_saved),
            key=f"{key_prefix}_save_{tale.id}",
            on_click=handle_toggle,
            args=(tale.id,),
            disabled=not session.is_ready,
        )
        if signed_in:
            favorite_col.button(
                favorite_button_label(session.is_favorite(tale.id)),
                key=f"{key_prefix}_favorite_{tale.id}",
                on_click=handle_favorite,
                args=(tale.id,),
            )
        if current_trip is not None:
            in_trip = tale.id in current_trip.tale_ids
            st.button(
                "Added to Trip!" if in_trip else "Add to My Trip",
                key=f"{key_prefix}_trip_{tale.id}",
                on_click=handle_add_to_trip,
                args=(tale.id,),
                disabled=in_trip,
            )


def render_tale_grid(tales: List[Tale], *, key_prefix: str, columns: int = 3) -> None:
    if not tales:
        return
    cols = st.columns(columns)
    for index, tale in enumerate(tales):
        with cols[index % columns]:
            render_tale_card(tale, key_prefix=key_prefix)


__all__ = [
    "favorite_button_label",
    "render_tale_card",
    "render_tale_grid",
    "save_button_label",
    "tale_meta_line",
]
