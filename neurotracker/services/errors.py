# neurotracker/services/errors.py
# -*- coding: utf-8 -*-
"""
Hiérarchie des erreurs métier de NeuroTracker.

    NeuroTrackerError (base)
    ├── InputValidationError (ValueError)
    │   ├── IncompleteSurvey
    │   └── SurveyAlreadySubmitted
    ├── AuthError (ValueError)
    │   ├── InvalidEmailFormat
    │   ├── UserNotFound
    │   ├── InvalidCredentials
    │   ├── AccountExists
    │   ├── PasswordMismatch
    │   ├── PasswordTooShort
    │   ├── FullNameTooShort
    │   ├── UsernameTooShort
    │   ├── UsernameInvalid
    │   ├── UsernameTaken
    │   ├── InvalidVerificationCode
    │   └── VerificationUnavailable
    └── NavigationError
        ├── InvalidTransition
        └── DisclaimerNotAccepted

Les erreurs de validation sont récupérées au niveau du formulaire (message
inline + toast) ; elles ne remontent jamais plus haut. `message` est le texte
affiché à l'utilisateur.
"""


class NeuroTrackerError(Exception):
    """Base de toutes les erreurs NeuroTracker."""

    message = "Something went wrong"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message


class InputValidationError(NeuroTrackerError, ValueError):
    """Erreur de validation des données d'entrée (scores, réglages)."""

    message = "Invalid input"


class IncompleteSurvey(InputValidationError):
    message = "Please answer every question before submitting"


class SurveyAlreadySubmitted(InputValidationError):
    message = "This assessment has already been submitted"


class AuthError(NeuroTrackerError, ValueError):
    """Erreurs des formulaires d'authentification et de profil."""


class InvalidEmailFormat(AuthError):
    message = "Please enter a valid email address"


class UserNotFound(AuthError):
    message = "No account found with this email. Please sign up first."


class InvalidCredentials(AuthError):
    message = "Incorrect password. Please try again."


class AccountExists(AuthError):
    message = "An account with this email already exists. Please log in."


class PasswordMismatch(AuthError):
    message = "Passwords do not match"


class PasswordTooShort(AuthError):
    message = "Password must be at least 6 characters"


class FullNameTooShort(AuthError):
    message = "Full name must be at least 2 characters"


class UsernameTooShort(AuthError):
    message = "Username must be at least 3 characters"


class UsernameInvalid(AuthError):
    message = (
        "Username must be 3-20 characters long and can only contain "
        "letters, numbers, and underscores."
    )


class UsernameTaken(AuthError):
    message = "This username is already taken. Please try another one."


class InvalidVerificationCode(AuthError):
    message = "Please enter the 6-digit code sent to your email"


class VerificationUnavailable(AuthError):
    """Backend de vérification injoignable ou en erreur (HTTP)."""

    message = "Verification service is unavailable. Please try again in a moment."


class NavigationError(NeuroTrackerError):
    """Événement de navigation refusé."""


class InvalidTransition(NavigationError):
    message = "This action is not available from the current screen"


class DisclaimerNotAccepted(NavigationError):
    message = "Please accept the disclaimer to continue"
