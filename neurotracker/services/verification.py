# neurotracker/services/verification.py
# -*- coding: utf-8 -*-
"""
Service de vérification pour l'onboarding (code à usage unique, username).

Deux providers :
- StubVerificationProvider : offline, déterministe (défaut). Tout code à
  6 chiffres est accepté ; les usernames commençant par "admin" sont pris.
- HttpVerificationProvider : backend HTTP (VERIFY_PROVIDER=http + VERIFY_API_URL).

Usage:
    from neurotracker.services.verification import VerificationService

    svc = VerificationService()      # auto: stub si pas de backend configuré
    svc.send_code("jane@example.com")
    svc.verify_code("jane@example.com", "123456")
    svc.check_username("jane_doe")
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Protocol

import httpx

from neurotracker import config
from neurotracker.services.errors import (
    InvalidVerificationCode,
    UsernameInvalid,
    UsernameTaken,
    UsernameTooShort,
    VerificationUnavailable,
)

logger = logging.getLogger(__name__)

CODE_RE = re.compile(r"^[0-9]{6}$")
USERNAME_RE = re.compile(r"^[A-Za-z0-9_]+$")
USERNAME_MIN = 3
USERNAME_MAX = 20
RESERVED_PREFIXES = ("admin",)


def mask_email(email: str) -> str:
    """jane@example.com -> ja**@example.com (noms de 2 caractères ou moins inchangés)."""
    name, _, domain = email.partition("@")
    if not name or not domain:
        return email
    if len(name) <= 2:
        return f"{name}@{domain}"
    return f"{name[:2]}{'*' * (len(name) - 2)}@{domain}"


def normalize_username(raw: str) -> str:
    """Ce que fait le champ de saisie : minuscules, seulement [a-z0-9_]."""
    return re.sub(r"[^a-z0-9_]", "", raw.lower())


class VerificationProvider(Protocol):
    def send_code(self, email: str) -> None: ...

    def verify_code(self, email: str, code: str) -> bool: ...

    def is_username_available(self, username: str) -> bool: ...


# -----------------------------------------------------------------------------
# Provider: Stub (déterministe, offline)
# -----------------------------------------------------------------------------

class StubVerificationProvider:
    """Aucun code n'est réellement généré ; aucun appel réseau."""

    def __init__(self, reserved_prefixes: tuple[str, ...] = RESERVED_PREFIXES) -> None:
        self.reserved_prefixes = reserved_prefixes

    def send_code(self, email: str) -> None:
        logger.debug("Envoi (simulé) d'un code à %s", mask_email(email))

    def verify_code(self, email: str, code: str) -> bool:
        return CODE_RE.match(code) is not None

    def is_username_available(self, username: str) -> bool:
        lowered = username.lower()
        return not any(lowered.startswith(p) for p in self.reserved_prefixes)


# -----------------------------------------------------------------------------
# Provider: backend HTTP
# -----------------------------------------------------------------------------

class HttpVerificationProvider:
    """
    Client minimal pour un backend de vérification.

    Endpoints attendus (JSON) :
        POST {base}/otp/send            {"email": ...}
        POST {base}/otp/verify          {"email": ..., "code": ...} -> {"valid": bool}
        GET  {base}/usernames/{name}    -> {"available": bool}

    Les erreurs réseau (httpx.HTTPError) ne sont pas masquées ici : la façade
    VerificationService les traduit en VerificationUnavailable.
    """

    def __init__(self, base_url: str | None = None, timeout_sec: float | None = None) -> None:
        self.base_url = (base_url if base_url is not None else config.VERIFY_API_URL).rstrip("/")
        if not self.base_url:
            raise RuntimeError("VERIFY_API_URL manquant pour HttpVerificationProvider.")
        self.timeout_sec = timeout_sec if timeout_sec is not None else config.VERIFY_TIMEOUT_SEC

    def _client(self) -> httpx.Client:
        return httpx.Client(base_url=self.base_url, timeout=self.timeout_sec)

    def send_code(self, email: str) -> None:
        with self._client() as client:
            resp = client.post("/otp/send", json={"email": email})
            resp.raise_for_status()

    def verify_code(self, email: str, code: str) -> bool:
        with self._client() as client:
            resp = client.post("/otp/verify", json={"email": email, "code": code})
            resp.raise_for_status()
            data = resp.json()
        return isinstance(data, dict) and data.get("valid") is True

    def is_username_available(self, username: str) -> bool:
        with self._client() as client:
            resp = client.get(f"/usernames/{username}")
            resp.raise_for_status()
            data = resp.json()
        return isinstance(data, dict) and data.get("available") is True


# -----------------------------------------------------------------------------
# Façade principale
# -----------------------------------------------------------------------------

class VerificationService:
    """
    Choisit le provider selon l'environnement :
      - VERIFY_PROVIDER=http -> HttpVerificationProvider (si VERIFY_API_URL présent)
      - sinon                -> StubVerificationProvider

    On peut forcer un provider en passant `provider=...`.

    Toute erreur HTTP du provider devient VerificationUnavailable (AuthError) :
    les formulaires l'affichent comme n'importe quelle erreur de saisie.
    """

    def __init__(self, provider: Optional[VerificationProvider] = None) -> None:
        if provider is not None:
            self._provider = provider
            return

        if config.VERIFY_PROVIDER == "http":
            try:
                self._provider = HttpVerificationProvider()
            except RuntimeError:
                logger.warning("Backend de vérification mal configuré, repli sur le stub")
                self._provider = StubVerificationProvider()
        else:
            self._provider = StubVerificationProvider()

    @property
    def is_offline(self) -> bool:
        """Vrai avec le stub (aucun code réellement envoyé)."""
        return isinstance(self._provider, StubVerificationProvider)

    def _call(self, action: str, fn, *args):
        try:
            return fn(*args)
        except httpx.HTTPError as e:
            logger.warning("Vérification indisponible (%s): %s", action, e)
            raise VerificationUnavailable() from e

    def send_code(self, email: str) -> str:
        """Déclenche l'envoi et renvoie l'email masqué à afficher."""
        self._call("send_code", self._provider.send_code, email)
        return mask_email(email)

    def verify_code(self, email: str, code: str) -> None:
        code = code.strip()
        if CODE_RE.match(code) is None or not self._call("verify_code", self._provider.verify_code, email, code):
            raise InvalidVerificationCode()

    def check_username(self, username: str) -> str:
        if len(username) < USERNAME_MIN:
            raise UsernameTooShort()
        if len(username) > USERNAME_MAX or USERNAME_RE.match(username) is None:
            raise UsernameInvalid()
        if not self._call("username", self._provider.is_username_available, username):
            raise UsernameTaken()
        return username
