# neurotracker/services/navigation.py
# -*- coding: utf-8 -*-
"""
Contrôleur de navigation : un seul écran courant + une file de notices.

L'écran n'avance que par des événements nommés (signed_up, otp_verified,
disclaimer_accepted, survey_completed, logout, ...). Un événement appelé
depuis un écran qui ne le propose pas lève InvalidTransition.

Règle importante : un utilisateur qui a déjà un enregistrement de fin de
questionnaire ne repasse jamais par le questionnaire. À la connexion on
affiche son score historique dans une notice bloquante, puis on l'envoie
sur l'accueil connecté.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List

from neurotracker.persistence.repositories.surveys_repo import CompletionRecord, CompletionRepository
from neurotracker.services.auth_service import DEFAULT_DISPLAY_NAME, LoginResult
from neurotracker.services.errors import DisclaimerNotAccepted, InvalidTransition
from neurotracker.services.score_engine import MAX_SCORE

logger = logging.getLogger(__name__)


class Screen(str, Enum):
    LANDING = "landing"
    LEARN_MORE = "learn-more"
    AUTH = "auth"
    FORGOT_PASSWORD = "forgot-password"
    OTP = "otp"
    USERNAME = "username"
    DISCLAIMER = "disclaimer"
    SURVEY = "survey"
    RESULTS = "results"
    USER_HOME = "user-home"
    DASHBOARD = "dashboard"
    PROFILE = "profile"
    ATTENTION_TRACKER = "attention-tracker"
    MEETING_NAVIGATOR = "meeting-navigator"
    CALENDAR = "calendar"
    AI_MODELS = "ai-models"


TOOL_SCREENS = {
    "Meeting Navigator": Screen.MEETING_NAVIGATOR,
    "Attention Tracker": Screen.ATTENTION_TRACKER,
    "Calendar": Screen.CALENDAR,
    "AI Models": Screen.AI_MODELS,
}

# écrans accessibles une fois connecté (menu utilisateur)
AUTHENTICATED_SCREENS = frozenset({
    Screen.USER_HOME,
    Screen.DASHBOARD,
    Screen.PROFILE,
    *TOOL_SCREENS.values(),
})

ALREADY_COMPLETED = "already-completed"


@dataclass(frozen=True)
class Notice:
    kind: str
    title: str
    body: List[str]


@dataclass
class NavState:
    screen: Screen = Screen.LANDING
    email: str = ""
    display_name: str = ""
    score: int = 0
    completion_date: str | None = None
    notices: List[Notice] = field(default_factory=list)

    @property
    def blocking_notice(self) -> Notice | None:
        return self.notices[0] if self.notices else None


def already_completed_notice(record: CompletionRecord) -> Notice:
    return Notice(
        kind=ALREADY_COMPLETED,
        title="Survey Already Completed",
        body=[
            f"You have already completed the ADHD assessment survey on {record.display_date()}.",
            f"Your score: {record.score} out of {MAX_SCORE}",
            "⚠️ This assessment cannot be retaken. Your results are final and cannot be changed.",
        ],
    )


class Navigator:
    def __init__(self, completions: CompletionRepository, state: NavState | None = None) -> None:
        self.completions = completions
        self.state = state or NavState()

    @property
    def screen(self) -> Screen:
        return self.state.screen

    def _require(self, allowed: Iterable[Screen], event: str) -> None:
        if self.state.notices:
            raise InvalidTransition(f"'{event}' blocked by a pending notice")
        if self.state.screen not in set(allowed):
            raise InvalidTransition(f"'{event}' is not available from '{self.state.screen.value}'")

    def _go(self, screen: Screen) -> Screen:
        logger.debug("Navigation %s -> %s", self.state.screen.value, screen.value)
        self.state.screen = screen
        return screen

    def _load_history(self, record: CompletionRecord) -> None:
        self.state.score = record.score
        self.state.completion_date = record.date
        self.state.notices.append(already_completed_notice(record))

    # --- Pages publiques ---
    def get_started(self) -> Screen:
        self._require({Screen.LANDING, Screen.LEARN_MORE}, "get_started")
        return self._go(Screen.AUTH)

    def learn_more(self) -> Screen:
        self._require({Screen.LANDING}, "learn_more")
        return self._go(Screen.LEARN_MORE)

    def back_to_landing(self) -> Screen:
        self._require({Screen.LEARN_MORE, Screen.AUTH}, "back_to_landing")
        return self._go(Screen.LANDING)

    def forgot_password(self) -> Screen:
        self._require({Screen.AUTH}, "forgot_password")
        return self._go(Screen.FORGOT_PASSWORD)

    def back_to_auth(self) -> Screen:
        self._require({Screen.FORGOT_PASSWORD, Screen.OTP, Screen.USERNAME}, "back_to_auth")
        return self._go(Screen.AUTH)

    # --- Authentification / onboarding ---
    def signed_up(self, email: str) -> Screen:
        self._require({Screen.AUTH}, "signed_up")
        self.state.email = email
        return self._go(Screen.OTP)

    def logged_in(self, result: LoginResult) -> Screen:
        self._require({Screen.AUTH}, "logged_in")
        self.state.email = result.email
        self.state.display_name = result.name or DEFAULT_DISPLAY_NAME
        if result.has_completed_survey:
            # court-circuit de l'onboarding : notice bloquante puis accueil
            logger.info("Questionnaire déjà complété pour %s, pas de nouvelle passation", result.email)
            self._load_history(result.completion)
            return self.state.screen
        return self._go(Screen.DISCLAIMER)

    def otp_verified(self) -> Screen:
        self._require({Screen.OTP}, "otp_verified")
        return self._go(Screen.USERNAME)

    def username_chosen(self, username: str) -> Screen:
        self._require({Screen.USERNAME}, "username_chosen")
        self.state.display_name = username
        return self._go(Screen.DISCLAIMER)

    def disclaimer_accepted(self, accepted: bool) -> Screen:
        self._require({Screen.DISCLAIMER}, "disclaimer_accepted")
        if accepted is not True:
            raise DisclaimerNotAccepted()
        record = self.completions.get_completion(self.state.email)
        if record is not None and record.completed:
            self._load_history(record)
            return self.state.screen
        return self._go(Screen.SURVEY)

    def survey_completed(self, score: int) -> Screen:
        self._require({Screen.SURVEY}, "survey_completed")
        existing = self.completions.get_completion(self.state.email)
        if existing is not None and existing.completed:
            # jamais d'écrasement : on ressort le résultat historique
            logger.warning("Seconde soumission ignorée pour %s", self.state.email)
            self._load_history(existing)
            return self.state.screen
        record = self.completions.set_completion(self.state.email, score)
        self.state.score = record.score
        self.state.completion_date = record.date
        return self._go(Screen.RESULTS)

    def continue_home(self) -> Screen:
        self._require({Screen.RESULTS}, "continue_home")
        return self._go(Screen.USER_HOME)

    def dismiss_notice(self) -> Screen:
        if not self.state.notices:
            raise InvalidTransition("no notice to dismiss")
        notice = self.state.notices.pop(0)
        if notice.kind == ALREADY_COMPLETED:
            return self._go(Screen.USER_HOME)
        return self.state.screen

    # --- Espace connecté ---
    def open_tool(self, name: str) -> Screen:
        self._require(AUTHENTICATED_SCREENS, "open_tool")
        target = TOOL_SCREENS.get(name)
        if target is None:
            logger.info("Outil non disponible: %s", name)
            return self.state.screen
        return self._go(target)

    def view_dashboard(self) -> Screen:
        self._require(AUTHENTICATED_SCREENS, "view_dashboard")
        return self._go(Screen.DASHBOARD)

    def view_profile(self) -> Screen:
        self._require(AUTHENTICATED_SCREENS, "view_profile")
        return self._go(Screen.PROFILE)

    def go_home(self) -> Screen:
        self._require(AUTHENTICATED_SCREENS, "go_home")
        return self._go(Screen.USER_HOME)

    def profile_updated(self, display_name: str | None = None, email: str | None = None) -> None:
        self._require({Screen.PROFILE}, "profile_updated")
        if display_name:
            self.state.display_name = display_name
        if email:
            self.state.email = email

    def logout(self) -> Screen:
        self._require(AUTHENTICATED_SCREENS, "logout")
        logger.info("Déconnexion de %s", self.state.email)
        self.state = NavState()
        return self.state.screen
