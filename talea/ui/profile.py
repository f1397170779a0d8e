"""Profile tab: account, tier status and the AI companion."""

from __future__ import annotations

from typing import Optional

import streamlit as st

from talea.core.session import TaleaSession
from talea.schemas import Tier, UpgradeTrigger
from talea.ui.state import get_session, open_upgrade_prompt

COMPANION_ANSWER_KEY = "_profile_companion_answer"

_TIER_LABELS = {
    Tier.PREMIUM: "⭐ Premium",
    Tier.FREEMIUM: "Free member",
    Tier.ANONYMOUS: "Guest",
}


def tier_label(tier: Optional[Tier]) -> str:
    if tier is None:
        return "Loading..."
    return _TIER_LABELS[tier]


def ai_usage_caption(session: TaleaSession) -> str:
    tier = session.tier
    used = session.quota.ai_usage_today
    if tier == Tier.PREMIUM:
        return f"AI companion: unlimited ({used} used today)"
    limits = session.quota.limits
    limit = limits.ai_daily_freemium if tier == Tier.FREEMIUM else limits.ai_daily_anonymous
    return f"AI companion: {min(used, limit)}/{limit} used today"


def _render_auth_controls(session: TaleaSession) -> None:
    identity = session.identity
    if identity is not None and not identity.is_anonymous:
        st.write(f"Signed in as **{identity.email}**")
        if st.button("Sign out", key="profile_sign_out"):
            session.sign_out()
            st.rerun()
        return

    with st.form("profile_auth_form", clear_on_submit=False):
        email = st.text_input("Email", key="profile_auth_email")
        password = st.text_input("Password", type="password", key="profile_auth_password")
        sign_in_col, register_col = st.columns(2)
        sign_in_clicked = sign_in_col.form_submit_button("Sign in", use_container_width=True)
        register_clicked = register_col.form_submit_button("Sign up", use_container_width=True)
        if sign_in_clicked or register_clicked:
            try:
                if register_clicked:
                    session.sign_up(email, password)
                else:
                    session.sign_in(email, password)
            except ValueError as exc:
                st.warning(str(exc))
            else:
                st.rerun()

    if identity is None and st.button("Continue as guest", key="profile_guest"):
        session.continue_as_guest()
        st.rerun()


def _render_tier_status(session: TaleaSession) -> None:
    tier = session.tier
    st.markdown(f"**Plan:** {tier_label(tier)}")
    if tier == Tier.ANONYMOUS:
        info = session.trial_info()
        st.progress(
            info.used_saves / info.max_saves if info.max_saves else 1.0,
            text=f"{info.used_saves}/{info.max_saves} free saves used",
        )
        if session.quota.trial_expired:
            st.warning("Your free saves are used up. Sign up or upgrade to keep saving.")
    if tier is not None:
        st.caption(ai_usage_caption(session))
    if tier is not None and tier != Tier.PREMIUM:
        if st.button("Upgrade to Premium", key="profile_upgrade"):
            open_upgrade_prompt(UpgradeTrigger.UPGRADE_BUTTON)
            st.rerun()


def _render_companion(session: TaleaSession) -> None:
    st.markdown("#### AI travel companion")
    question = st.text_area("Ask for ideas", key="profile_companion_question")
    if st.button("Ask", key="profile_companion_ask", disabled=not session.is_ready):
        reply = session.ask_companion(question)
        if reply.upgrade_trigger is not None:
            open_upgrade_prompt(reply.upgrade_trigger)
            st.rerun()
        if reply.ok:
            st.session_state[COMPANION_ANSWER_KEY] = reply.answer
    answer = st.session_state.get(COMPANION_ANSWER_KEY)
    if answer:
        st.markdown(answer)


def render_profile_tab(container) -> None:
    session = get_session()
    with container:
        st.subheader("Profile")
        if not session.auth.is_ready:
            st.info("Loading your profile...")
            return
        _render_auth_controls(session)
        _render_tier_status(session)
        _render_companion(session)


__all__ = ["ai_usage_caption", "render_profile_tab", "tier_label"]
