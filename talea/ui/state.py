"""Session-state wiring shared by the Talea tabs."""

from __future__ import annotations

import logging
from typing import Optional

import streamlit as st

from talea.config import StorageSettings
from talea.core.favorites import FavoriteResult
from talea.core.ledger import ToggleResult
from talea.core.session import TaleaSession
from talea.core.storage import InMemoryKeyValueStore, JsonFileStore, KeyValueStore
from talea.schemas import NotificationType, UpgradeTrigger

_LOGGER = logging.getLogger(__name__)

SESSION_KEY = "_talea_session"
LOCAL_STORE_KEY = "_talea_local_store"
UPGRADE_TRIGGER_KEY = "_talea_upgrade_trigger"
SHOWN_TOASTS_KEY = "_talea_shown_toasts"

_TOAST_ICONS = {
    NotificationType.SUCCESS: "✅",
    NotificationType.INFO: "ℹ️",
    NotificationType.WARNING: "⚠️",
    NotificationType.ERROR: "❌",
}


@st.cache_resource(show_spinner=False)
def _shared_file_store(path: str) -> JsonFileStore:
    """One durable store per path for every session in this process."""

    _LOGGER.info("Using durable store at %s", path)
    return JsonFileStore(path)


def _build_store() -> KeyValueStore:
    settings = StorageSettings.from_env()
    if settings.store_path is not None:
        return _shared_file_store(str(settings.store_path))
    backing = st.session_state.setdefault(LOCAL_STORE_KEY, {})
    return InMemoryKeyValueStore(backing)


def ensure_app_state() -> TaleaSession:
    """Create the session services once per Streamlit session."""

    session = st.session_state.get(SESSION_KEY)
    if not isinstance(session, TaleaSession):
        session = TaleaSession(_build_store())
        st.session_state[SESSION_KEY] = session
    session.start()
    st.session_state.setdefault(UPGRADE_TRIGGER_KEY, None)
    st.session_state.setdefault(SHOWN_TOASTS_KEY, [])
    return session


def get_session() -> TaleaSession:
    session = st.session_state.get(SESSION_KEY)
    if isinstance(session, TaleaSession):
        return session
    return ensure_app_state()


def open_upgrade_prompt(trigger: UpgradeTrigger) -> None:
    st.session_state[UPGRADE_TRIGGER_KEY] = UpgradeTrigger(trigger).value


def close_upgrade_prompt() -> None:
    st.session_state[UPGRADE_TRIGGER_KEY] = None


def pending_upgrade_trigger() -> Optional[UpgradeTrigger]:
    raw = st.session_state.get(UPGRADE_TRIGGER_KEY)
    return UpgradeTrigger(raw) if raw else None


def handle_toggle(tale_id: str) -> ToggleResult:
    """Button callback for save/unsave on any tale card."""

    result = get_session().toggle_save(tale_id)
    if result.upgrade_trigger is not None:
        open_upgrade_prompt(result.upgrade_trigger)
    return result


def handle_favorite(tale_id: str) -> FavoriteResult:
    return get_session().toggle_favorite(tale_id)


def handle_add_to_trip(tale_id: str) -> bool:
    return get_session().add_to_trip(tale_id)


def render_toasts() -> None:
    """Show each queued notification once."""

    session = get_session()
    shown = st.session_state.setdefault(SHOWN_TOASTS_KEY, [])
    for notification in session.notifications.active():
        if notification.id in shown:
            continue
        icon = _TOAST_ICONS.get(notification.type)
        st.toast(f"**{notification.title}** {notification.message}", icon=icon)
        shown.append(notification.id)
    del shown[:-50]


def render_upgrade_prompt(container) -> None:
    trigger = pending_upgrade_trigger()
    if trigger is None:
        return
    session = get_session()
    prompt = session.upgrade_prompt(trigger)
    with container:
        with st.container(border=True):
            st.markdown(f"### {prompt.title}")
            st.caption(prompt.subtitle)
            st.write(prompt.description)
            upgrade_col, close_col = st.columns(2)
            if upgrade_col.button(prompt.button_text, key=f"upgrade_{trigger.value}", use_container_width=True):
                with st.spinner("Upgrading..."):
                    upgraded = session.upgrade()
                if upgraded:
                    close_upgrade_prompt()
                    st.rerun()
            if close_col.button("Maybe later", key=f"upgrade_close_{trigger.value}", use_container_width=True):
                close_upgrade_prompt()
                st.rerun()


__all__ = [
    "LOCAL_STORE_KEY",
    "SESSION_KEY",
    "UPGRADE_TRIGGER_KEY",
    "close_upgrade_prompt",
    "ensure_app_state",
    "get_session",
    "handle_add_to_trip",
    "handle_favorite",
    "handle_toggle",
    "open_upgrade_prompt",
    "pending_upgrade_trigger",
    "render_toasts",
    "render_upgrade_prompt",
]
