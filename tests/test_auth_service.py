# tests/test_auth_service.py
# -*- coding: utf-8 -*-
"""
Tests des services d'authentification et de profil.

Ce fichier couvre :
- connexion (format email, compte inconnu, mauvais mot de passe, nom par défaut),
- inscription (confirmation, compte existant, compte persisté),
- réinitialisation du mot de passe en deux phases,
- mises à jour du profil (nom complet, username, email, mot de passe).

Les repositories tournent sur InMemoryKeyValueStore : aucun accès disque.
"""

import pytest

from neurotracker.persistence.repositories.prefs_repo import PreferencesRepository
from neurotracker.persistence.repositories.surveys_repo import CompletionRepository
from neurotracker.persistence.repositories.users_repo import UserRepository
from neurotracker.persistence.storage import InMemoryKeyValueStore
from neurotracker.services.auth_service import AuthService, ProfileService, is_valid_email
from neurotracker.services.errors import (
    AccountExists,
    AuthError,
    FullNameTooShort,
    InvalidCredentials,
    InvalidEmailFormat,
    PasswordMismatch,
    PasswordTooShort,
    UserNotFound,
    UsernameTooShort,
)


# ---------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------

@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def users(store):
    repo = UserRepository(store)
    repo.add_user("jane@example.com", "secret1", "Jane Doe")
    return repo


@pytest.fixture
def completions(store):
    return CompletionRepository(store)


@pytest.fixture
def auth(users, completions):
    return AuthService(users, completions)


@pytest.fixture
def profile(users, store):
    return ProfileService(users, PreferencesRepository(store))


# ---------------------------------------------------------------------
# Format email
# ---------------------------------------------------------------------

@pytest.mark.parametrize(
    "email, ok",
    [
        ("jane@example.com", True),
        ("a.b+c@sub.domain.org", True),
        ("not-an-email", False),
        ("jane@example", False),
        ("ja ne@example.com", False),
        ("", False),
    ],
)
def test_is_valid_email(email, ok):
    assert is_valid_email(email) is ok


# ---------------------------------------------------------------------
# Connexion
# ---------------------------------------------------------------------

def test_login_ok_without_completion(auth):
    res = auth.login("jane@example.com", "secret1")
    assert res.email == "jane@example.com"
    assert res.name == "Jane Doe"
    assert res.completion is None
    assert res.has_completed_survey is False


def test_login_returns_completion(auth, completions):
    completions.set_completion("jane@example.com", 15, date="2026-10-19T10:00:00Z")
    res = auth.login("jane@example.com", "secret1")
    assert res.has_completed_survey is True
    assert res.completion.score == 15


def test_login_invalid_format_checked_first(auth):
    with pytest.raises(InvalidEmailFormat) as exc:
        auth.login("not-an-email", "whatever")
    assert exc.value.message == "Please enter a valid email address"


def test_login_unknown_user(auth):
    with pytest.raises(UserNotFound):
        auth.login("nobody@example.com", "secret1")


def test_login_is_case_sensitive_on_email(auth):
    with pytest.raises(UserNotFound):
        auth.login("Jane@example.com", "secret1")


def test_login_wrong_password(auth):
    with pytest.raises(InvalidCredentials):
        auth.login("jane@example.com", "nope")


def test_login_default_display_name(store, completions):
    users = UserRepository(store)
    users.add_user("anon@example.com", "secret1", "")
    res = AuthService(users, completions).login("anon@example.com", "secret1")
    assert res.name == "User"


# ---------------------------------------------------------------------
# Inscription
# ---------------------------------------------------------------------

def test_signup_creates_user(auth, users):
    auth.signup("new@example.com", "abcdef", "abcdef", "New Person")
    user = users.find_user("new@example.com")
    assert user is not None
    assert user.name == "New Person"
    assert auth.login("new@example.com", "abcdef").name == "New Person"


def test_signup_existing_account(auth, users):
    with pytest.raises(AccountExists):
        auth.signup("jane@example.com", "abcdef", "abcdef", "Other")
    assert len(users.list_users()) == 1


def test_signup_password_mismatch(auth, users):
    with pytest.raises(PasswordMismatch) as exc:
        auth.signup("new@example.com", "abcdef", "abcdeg", "New")
    assert exc.value.message == "Passwords do not match"
    assert users.find_user("new@example.com") is None


def test_signup_invalid_email(auth, users):
    with pytest.raises(InvalidEmailFormat):
        auth.signup("not-an-email", "abcdef", "abcdef", "New")
    assert users.find_user("not-an-email") is None
    assert len(users.list_users()) == 1


def test_auth_errors_are_value_errors(auth):
    """Les formulaires attrapent AuthError ; ValueError reste compatible."""
    with pytest.raises(ValueError):
        auth.login("nobody@example.com", "x")
    with pytest.raises(AuthError):
        auth.login("nobody@example.com", "x")


# ---------------------------------------------------------------------
# Mot de passe oublié
# ---------------------------------------------------------------------

def test_password_reset_flow(auth):
    assert auth.start_password_reset("jane@example.com") == "jane@example.com"
    auth.complete_password_reset("jane@example.com", "newpass", "newpass")
    assert auth.login("jane@example.com", "newpass").email == "jane@example.com"
    with pytest.raises(InvalidCredentials):
        auth.login("jane@example.com", "secret1")


def test_password_reset_unknown_email(auth):
    with pytest.raises(UserNotFound):
        auth.start_password_reset("nobody@example.com")


@pytest.mark.parametrize(
    "new, confirm, err",
    [
        ("abcdef", "abcdeg", PasswordMismatch),
        ("abc", "abc", PasswordTooShort),
    ],
)
def test_password_reset_validation(auth, new, confirm, err):
    with pytest.raises(err):
        auth.complete_password_reset("jane@example.com", new, confirm)
    # mot de passe inchangé
    assert auth.login("jane@example.com", "secret1")


# ---------------------------------------------------------------------
# Profil
# ---------------------------------------------------------------------

def test_full_name_defaults_to_user_name(profile):
    assert profile.full_name("jane@example.com") == "Jane Doe"
    assert profile.full_name("nobody@example.com") == ""


def test_update_full_name_overrides(profile):
    assert profile.update_full_name("jane@example.com", "  Jane Q. Doe ") == "Jane Q. Doe"
    assert profile.full_name("jane@example.com") == "Jane Q. Doe"


def test_update_full_name_too_short(profile):
    with pytest.raises(FullNameTooShort):
        profile.update_full_name("jane@example.com", " J ")


def test_change_username(profile):
    assert profile.change_username(" jane_d ") == "jane_d"
    with pytest.raises(UsernameTooShort):
        profile.change_username("ab")


def test_change_email(profile):
    assert profile.change_email(" jane2@example.com ") == "jane2@example.com"
    with pytest.raises(InvalidEmailFormat):
        profile.change_email("jane2")


def test_change_password_ok(profile, users):
    profile.change_password("jane@example.com", "secret1", "better1", "better1")
    assert users.find_user("jane@example.com").password == "better1"


@pytest.mark.parametrize(
    "current, new, confirm, err, message",
    [
        ("abc", "better1", "better1", PasswordTooShort, "Current password must be at least 6 characters"),
        ("secret1", "abc", "abc", PasswordTooShort, "New password must be at least 6 characters"),
        ("secret1", "better1", "better2", PasswordMismatch, "New password and confirm password do not match"),
        ("wrong12", "better1", "better1", InvalidCredentials, "Current password is incorrect"),
    ],
)
def test_change_password_errors(profile, users, current, new, confirm, err, message):
    with pytest.raises(err) as exc:
        profile.change_password("jane@example.com", current, new, confirm)
    assert exc.value.message == message
    assert users.find_user("jane@example.com").password == "secret1"
