# neurotracker/services/auth_service.py
# -*- coding: utf-8 -*-
"""
Connexion, inscription, réinitialisation du mot de passe et gestion du profil.

Toutes les vérifications lèvent une sous-classe de AuthError ; l'écran
appelant affiche `err.message` et reste sur le formulaire.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from neurotracker.persistence.repositories.prefs_repo import PreferencesRepository
from neurotracker.persistence.repositories.surveys_repo import CompletionRecord, CompletionRepository
from neurotracker.persistence.repositories.users_repo import User, UserRepository
from neurotracker.services.errors import (
    AccountExists,
    FullNameTooShort,
    InvalidCredentials,
    InvalidEmailFormat,
    PasswordMismatch,
    PasswordTooShort,
    UserNotFound,
    UsernameTooShort,
)

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6
DEFAULT_DISPLAY_NAME = "User"


def is_valid_email(email: str) -> bool:
    return bool(email) and EMAIL_RE.match(email) is not None


def validate_email(email: str) -> str:
    if not is_valid_email(email):
        raise InvalidEmailFormat()
    return email


@dataclass(frozen=True)
class LoginResult:
    email: str
    name: str
    completion: CompletionRecord | None

    @property
    def has_completed_survey(self) -> bool:
        return self.completion is not None and self.completion.completed


class AuthService:
    def __init__(self, users: UserRepository, completions: CompletionRepository) -> None:
        self.users = users
        self.completions = completions

    def login(self, email: str, password: str) -> LoginResult:
        validate_email(email)
        user = self.users.find_user(email)
        if user is None:
            raise UserNotFound()
        if user.password != password:
            logger.info("Échec de connexion (mot de passe) pour %s", email)
            raise InvalidCredentials()
        logger.info("Connexion réussie pour %s", email)
        return LoginResult(
            email=email,
            name=user.name or DEFAULT_DISPLAY_NAME,
            completion=self.completions.get_completion(email),
        )

    def signup(self, email: str, password: str, confirm_password: str, name: str) -> User:
        validate_email(email)
        if password != confirm_password:
            raise PasswordMismatch()
        if self.users.find_user(email) is not None:
            raise AccountExists()
        user = self.users.add_user(email, password, name)
        logger.info("Compte créé pour %s", email)
        return user

    def start_password_reset(self, email: str) -> str:
        """Phase 1 : l'email doit être valide et connu."""
        validate_email(email)
        if self.users.find_user(email) is None:
            raise UserNotFound("No account found with this email")
        return email

    def complete_password_reset(self, email: str, new_password: str, confirm_password: str) -> None:
        """Phase 2 : confirmation identique puis longueur minimale."""
        if new_password != confirm_password:
            raise PasswordMismatch()
        if len(new_password) < MIN_PASSWORD_LENGTH:
            raise PasswordTooShort()
        if not self.users.update_password(email, new_password):
            raise UserNotFound("No account found with this email")
        logger.info("Mot de passe réinitialisé pour %s", email)


class ProfileService:
    """Mises à jour du profil (nom complet, username, email, mot de passe)."""

    def __init__(self, users: UserRepository, prefs: PreferencesRepository) -> None:
        self.users = users
        self.prefs = prefs

    def full_name(self, email: str) -> str:
        override = self.prefs.get_full_name(email)
        if override:
            return override
        user = self.users.find_user(email)
        return user.name if user and user.name else ""

    def update_full_name(self, email: str, full_name: str) -> str:
        name = full_name.strip()
        if len(name) < 2:
            raise FullNameTooShort()
        self.prefs.set_full_name(email, name)
        return name

    def change_username(self, username: str) -> str:
        name = username.strip()
        if len(name) < 3:
            raise UsernameTooShort()
        return name

    def change_email(self, new_email: str) -> str:
        # portée session uniquement : l'enregistrement utilisateur garde son email
        return validate_email(new_email.strip())

    def change_password(self, email: str, current: str, new: str, confirm: str) -> None:
        if len(current.strip()) < MIN_PASSWORD_LENGTH:
            raise PasswordTooShort("Current password must be at least 6 characters")
        if len(new.strip()) < MIN_PASSWORD_LENGTH:
            raise PasswordTooShort("New password must be at least 6 characters")
        if new != confirm:
            raise PasswordMismatch("New password and confirm password do not match")
        user = self.users.find_user(email)
        if user is None:
            raise UserNotFound("User not found")
        if user.password != current:
            raise InvalidCredentials("Current password is incorrect")
        self.users.update_password(email, new)
        logger.info("Mot de passe modifié pour %s", email)
