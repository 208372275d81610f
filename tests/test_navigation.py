# tests/test_navigation.py
# -*- coding: utf-8 -*-
"""
Tests du contrôleur de navigation (neurotracker/services/navigation.py).

Ce fichier couvre :
- les parcours complets (inscription -> OTP -> username -> disclaimer -> questionnaire -> résultats),
- la connexion d'un utilisateur ayant déjà complété le questionnaire (notice bloquante),
- l'absence d'écrasement d'un résultat existant,
- la déconnexion et les transitions refusées.
"""

import pytest

from neurotracker.persistence.repositories.surveys_repo import CompletionRecord, CompletionRepository
from neurotracker.persistence.storage import InMemoryKeyValueStore
from neurotracker.services.auth_service import LoginResult
from neurotracker.services.errors import DisclaimerNotAccepted, InvalidTransition
from neurotracker.services.navigation import ALREADY_COMPLETED, Navigator, Screen

EMAIL = "jane@example.com"


# ---------------------------------------------------------------------
# Fixtures / helpers
# ---------------------------------------------------------------------

@pytest.fixture
def completions():
    return CompletionRepository(InMemoryKeyValueStore())


@pytest.fixture
def nav(completions):
    return Navigator(completions)


def login(nav: Navigator, completions: CompletionRepository, name: str = "Jane") -> Screen:
    nav.get_started()
    return nav.logged_in(LoginResult(email=EMAIL, name=name, completion=completions.get_completion(EMAIL)))


def walk_to_survey(nav: Navigator) -> None:
    nav.get_started()
    nav.signed_up(EMAIL)
    nav.otp_verified()
    nav.username_chosen("jane_doe")
    nav.disclaimer_accepted(True)


# ---------------------------------------------------------------------
# Pages publiques
# ---------------------------------------------------------------------

def test_public_pages(nav):
    assert nav.screen is Screen.LANDING
    assert nav.learn_more() is Screen.LEARN_MORE
    assert nav.back_to_landing() is Screen.LANDING
    assert nav.get_started() is Screen.AUTH
    assert nav.forgot_password() is Screen.FORGOT_PASSWORD
    assert nav.back_to_auth() is Screen.AUTH
    assert nav.back_to_landing() is Screen.LANDING


def test_get_started_from_learn_more(nav):
    nav.learn_more()
    assert nav.get_started() is Screen.AUTH


# ---------------------------------------------------------------------
# Inscription + questionnaire
# ---------------------------------------------------------------------

def test_signup_flow_to_results(nav, completions):
    nav.get_started()
    assert nav.signed_up(EMAIL) is Screen.OTP
    assert nav.otp_verified() is Screen.USERNAME
    assert nav.username_chosen("jane_doe") is Screen.DISCLAIMER
    assert nav.state.display_name == "jane_doe"
    assert nav.disclaimer_accepted(True) is Screen.SURVEY

    assert nav.survey_completed(12) is Screen.RESULTS
    assert nav.state.score == 12
    record = completions.get_completion(EMAIL)
    assert record.completed is True
    assert record.score == 12
    assert nav.state.completion_date == record.date

    assert nav.continue_home() is Screen.USER_HOME


def test_back_to_auth_from_onboarding(nav):
    nav.get_started()
    nav.signed_up(EMAIL)
    assert nav.back_to_auth() is Screen.AUTH


@pytest.mark.parametrize("accepted", [False, None, "yes"])
def test_disclaimer_must_be_accepted(nav, accepted):
    nav.get_started()
    nav.signed_up(EMAIL)
    nav.otp_verified()
    nav.username_chosen("jane_doe")
    with pytest.raises(DisclaimerNotAccepted):
        nav.disclaimer_accepted(accepted)
    assert nav.screen is Screen.DISCLAIMER


# ---------------------------------------------------------------------
# Connexion
# ---------------------------------------------------------------------

def test_login_without_completion_goes_to_disclaimer(nav, completions):
    assert login(nav, completions) is Screen.DISCLAIMER
    assert nav.state.display_name == "Jane"
    assert nav.state.blocking_notice is None


def test_login_empty_name_defaults_to_user(nav, completions):
    login(nav, completions, name="")
    assert nav.state.display_name == "User"


def test_login_with_completion_shows_notice_then_home(nav, completions):
    completions.set_completion(EMAIL, 15, date="2026-10-19T09:30:00Z")

    login(nav, completions)
    notice = nav.state.blocking_notice
    assert notice is not None
    assert notice.kind == ALREADY_COMPLETED
    assert notice.title == "Survey Already Completed"
    assert "Your score: 15 out of 24" in notice.body
    assert any("October 19, 2026" in line for line in notice.body)
    assert nav.state.score == 15
    assert nav.screen is not Screen.SURVEY

    # tant que la notice est affichée, aucun autre événement
    with pytest.raises(InvalidTransition):
        nav.forgot_password()

    assert nav.dismiss_notice() is Screen.USER_HOME
    assert nav.state.blocking_notice is None


def test_login_uses_completion_from_result(nav, completions):
    """Le résultat de connexion fait foi : pas de relecture du store."""
    record = CompletionRecord(completed=True, score=9, date="2026-10-01T08:00:00Z")
    nav.get_started()
    nav.logged_in(LoginResult(email=EMAIL, name="Jane", completion=record))
    assert completions.get_completion(EMAIL) is None
    assert nav.state.blocking_notice.kind == ALREADY_COMPLETED
    assert nav.state.score == 9

    # enregistrement non complété : onboarding normal
    other = Navigator(completions)
    other.get_started()
    pending = CompletionRecord(completed=False, score=9, date="2026-10-01T08:00:00Z")
    assert other.logged_in(LoginResult(email=EMAIL, name="Jane", completion=pending)) is Screen.DISCLAIMER


def test_dismiss_without_notice(nav):
    with pytest.raises(InvalidTransition):
        nav.dismiss_notice()


# ---------------------------------------------------------------------
# Soumission unique
# ---------------------------------------------------------------------

def test_second_submission_never_overwrites(nav, completions):
    walk_to_survey(nav)
    # un autre onglet a soumis entre-temps
    completions.set_completion(EMAIL, 20, date="2026-10-18")

    nav.survey_completed(3)
    assert completions.get_completion(EMAIL).score == 20
    assert nav.state.score == 20
    assert nav.state.blocking_notice.kind == ALREADY_COMPLETED
    assert nav.dismiss_notice() is Screen.USER_HOME


def test_disclaimer_with_existing_completion_skips_survey(nav, completions):
    nav.get_started()
    nav.signed_up(EMAIL)
    nav.otp_verified()
    nav.username_chosen("jane_doe")
    completions.set_completion(EMAIL, 8)

    nav.disclaimer_accepted(True)
    assert nav.screen is not Screen.SURVEY
    assert nav.state.blocking_notice is not None


# ---------------------------------------------------------------------
# Espace connecté
# ---------------------------------------------------------------------

@pytest.fixture
def home_nav(nav):
    walk_to_survey(nav)
    nav.survey_completed(12)
    nav.continue_home()
    return nav


@pytest.mark.parametrize(
    "tool, screen",
    [
        ("Meeting Navigator", Screen.MEETING_NAVIGATOR),
        ("Attention Tracker", Screen.ATTENTION_TRACKER),
        ("Calendar", Screen.CALENDAR),
        ("AI Models", Screen.AI_MODELS),
    ],
)
def test_open_tool(home_nav, tool, screen):
    assert home_nav.open_tool(tool) is screen
    assert home_nav.go_home() is Screen.USER_HOME


def test_open_unknown_tool_stays(home_nav):
    assert home_nav.open_tool("Progress Tracker") is Screen.USER_HOME


def test_user_menu(home_nav):
    assert home_nav.view_dashboard() is Screen.DASHBOARD
    assert home_nav.view_profile() is Screen.PROFILE
    home_nav.profile_updated(display_name="janie", email="janie@example.com")
    assert home_nav.state.display_name == "janie"
    assert home_nav.state.email == "janie@example.com"


def test_logout_resets_state(home_nav):
    assert home_nav.logout() is Screen.LANDING
    assert home_nav.state.email == ""
    assert home_nav.state.score == 0
    assert home_nav.state.completion_date is None


@pytest.mark.parametrize("event", ["view_dashboard", "view_profile", "go_home", "logout"])
def test_authenticated_events_refused_when_logged_out(nav, event):
    with pytest.raises(InvalidTransition):
        getattr(nav, event)()


def test_survey_completed_refused_outside_survey(nav):
    with pytest.raises(InvalidTransition):
        nav.survey_completed(10)
