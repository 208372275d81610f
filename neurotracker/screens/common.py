# neurotracker/screens/common.py
# -*- coding: utf-8 -*-
from __future__ import annotations

import time
from dataclasses import dataclass

import streamlit as st

from neurotracker import config
from neurotracker.persistence.repositories.prefs_repo import PreferencesRepository
from neurotracker.persistence.repositories.surveys_repo import CompletionRepository
from neurotracker.persistence.repositories.users_repo import UserRepository
from neurotracker.services.auth_service import AuthService, ProfileService
from neurotracker.services.errors import NeuroTrackerError
from neurotracker.services.navigation import Navigator
from neurotracker.services.verification import VerificationService

THEME_CSS = {
    "light": "",
    "dark": """
      .stApp { background: #0f172a; }
      .stApp h1, .stApp h2, .stApp h3, .stApp p, .stApp li, .stApp label { color: #e2e8f0; }
    """,
    "colorblind": """
      .stApp { background: #f8fafc; }
      .nt-band-green { color: #0072B2 !important; }
      .nt-band-blue { color: #56B4E9 !important; }
      .nt-band-orange { color: #E69F00 !important; }
      .nt-band-red { color: #D55E00 !important; }
    """,
}

THEME_LABELS = {"light": "☀️ Light Mode", "dark": "🌙 Dark Mode", "colorblind": "👁️ Color-Safe Mode"}


@dataclass
class Context:
    """Tout ce dont un écran a besoin (services + navigateur de la session)."""
    nav: Navigator
    users: UserRepository
    completions: CompletionRepository
    prefs: PreferencesRepository
    auth: AuthService
    profile: ProfileService
    verification: VerificationService


def rerun() -> None:
    st.rerun()


def simulate_latency(label: str) -> None:
    """Latence "réseau" purement cosmétique (NT_SIMULATED_LATENCY_SEC)."""
    if config.SIMULATED_LATENCY_SEC <= 0:
        return
    with st.spinner(label):
        time.sleep(config.SIMULATED_LATENCY_SEC)


def show_error(err: NeuroTrackerError) -> None:
    st.error(err.message)
    st.toast(err.message, icon="⚠️")


def get_initials(name: str) -> str:
    return "".join(part[0] for part in name.split() if part).upper()[:2]


def apply_theme(ctx: Context) -> None:
    css = THEME_CSS.get(ctx.prefs.get_theme(), "")
    if css:
        st.markdown(f"<style>{css}</style>", unsafe_allow_html=True)


def theme_toggle(ctx: Context) -> None:
    current = ctx.prefs.get_theme()
    if st.sidebar.button(THEME_LABELS[current], help="Toggle theme"):
        ctx.prefs.cycle_theme()
        rerun()
    if current == "colorblind":
        st.sidebar.caption("Color-safe palette active")


def user_header(ctx: Context) -> None:
    """Barre du haut des écrans connectés (avatar + menu)."""
    state = ctx.nav.state
    col_logo, col_menu = st.columns([3, 2])
    with col_logo:
        st.markdown("### 🧠 NEUROTRACKER")
    with col_menu:
        with st.popover(f"👤 {get_initials(state.display_name or 'User')}"):
            st.write(f"**{state.display_name}**")
            st.caption(state.email)
            if st.button("Dashboard", key="menu_dashboard"):
                ctx.nav.view_dashboard()
                rerun()
            if st.button("Profile", key="menu_profile"):
                ctx.nav.view_profile()
                rerun()
            if st.button("Log out", key="menu_logout"):
                ctx.nav.logout()
                st.session_state.pop("survey", None)
                rerun()


def back_home_button(ctx: Context, key: str) -> None:
    if st.button("← Back to Home", key=key):
        ctx.nav.go_home()
        rerun()
