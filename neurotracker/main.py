# neurotracker/main.py
# -*- coding: utf-8 -*-
# --- bootstrap import path (run as script via streamlit) ---
import os, sys
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
# -----------------------------------------------------------
import logging

import streamlit as st

from neurotracker import config
from neurotracker.persistence.db import init_db
from neurotracker.persistence.models import Base
from neurotracker.persistence.storage import SqlKeyValueStore
from neurotracker.persistence.repositories.users_repo import UserRepository
from neurotracker.persistence.repositories.surveys_repo import CompletionRepository
from neurotracker.persistence.repositories.prefs_repo import PreferencesRepository

from neurotracker.services.auth_service import AuthService, ProfileService
from neurotracker.services.navigation import Navigator, Screen
from neurotracker.services.verification import VerificationService

from neurotracker.screens.common import Context, apply_theme, rerun, theme_toggle
from neurotracker.screens import assessment, auth, home, onboarding, public, tools

logger = logging.getLogger("neurotracker")

# ---------------------------------------------------------------------
# Bootstrapping
# ---------------------------------------------------------------------
@st.cache_resource
def _bootstrap() -> SqlKeyValueStore:
    config.setup_logging()
    init_db(Base, drop_and_recreate=False)
    logger.info("Base initialisée")
    return SqlKeyValueStore()


st.set_page_config(page_title=config.APP_NAME, page_icon="🧠", layout="centered")

store = _bootstrap()
users = UserRepository(store)
completions = CompletionRepository(store)
prefs = PreferencesRepository(store)

if "nav" not in st.session_state:
    st.session_state["nav"] = Navigator(completions)
nav: Navigator = st.session_state["nav"]
# le navigateur survit aux reruns ; le repository est rebranché à chaque passage
nav.completions = completions

ctx = Context(
    nav=nav,
    users=users,
    completions=completions,
    prefs=prefs,
    auth=AuthService(users, completions),
    profile=ProfileService(users, prefs),
    verification=VerificationService(),
)

apply_theme(ctx)
theme_toggle(ctx)

# ---------------------------------------------------------------------
# Notice bloquante (ex. questionnaire déjà complété)
# ---------------------------------------------------------------------
notice = nav.state.blocking_notice
if notice is not None:
    st.title(notice.title)
    for line in notice.body:
        st.write(line)
    if st.button("Continue to Home", type="primary"):
        nav.dismiss_notice()
        rerun()
    st.stop()

# ---------------------------------------------------------------------
# Écran courant
# ---------------------------------------------------------------------
RENDERERS = {
    Screen.LANDING: public.render_landing,
    Screen.LEARN_MORE: public.render_learn_more,
    Screen.AUTH: auth.render_auth,
    Screen.FORGOT_PASSWORD: auth.render_forgot_password,
    Screen.OTP: onboarding.render_otp,
    Screen.USERNAME: onboarding.render_username,
    Screen.DISCLAIMER: onboarding.render_disclaimer,
    Screen.SURVEY: assessment.render_survey,
    Screen.RESULTS: assessment.render_results,
    Screen.DASHBOARD: assessment.render_dashboard,
    Screen.USER_HOME: home.render_user_home,
    Screen.PROFILE: home.render_profile,
    Screen.ATTENTION_TRACKER: tools.render_attention_tracker,
    Screen.MEETING_NAVIGATOR: tools.render_meeting_navigator,
    Screen.CALENDAR: tools.render_calendar,
    Screen.AI_MODELS: tools.render_ai_models,
}

RENDERERS[nav.screen](ctx)
