# neurotracker/persistence/repositories/prefs_repo.py
# -*- coding: utf-8 -*-
from __future__ import annotations

from neurotracker.persistence.storage import KeyValueStore

THEME_KEY = "theme"
SYSTEM_CONFIG_KEY = "neurotracker_system_config"
FULLNAME_KEY_PREFIX = "neurotracker_fullname_"

THEMES = ("light", "dark", "colorblind")


class PreferencesRepository:
    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    # --- Thème ---
    def get_theme(self) -> str:
        theme = self.store.get(THEME_KEY, "light")
        return theme if theme in THEMES else "light"

    def set_theme(self, theme: str) -> None:
        if theme not in THEMES:
            raise ValueError(f"Thème inconnu: {theme}")
        self.store.set(THEME_KEY, theme)

    def cycle_theme(self) -> str:
        """light -> dark -> colorblind -> light"""
        nxt = THEMES[(THEMES.index(self.get_theme()) + 1) % len(THEMES)]
        self.set_theme(nxt)
        return nxt

    # --- Nom complet (override par email) ---
    def get_full_name(self, email: str) -> str | None:
        name = self.store.get(f"{FULLNAME_KEY_PREFIX}{email}")
        return name if isinstance(name, str) and name else None

    def set_full_name(self, email: str, full_name: str) -> None:
        self.store.set(f"{FULLNAME_KEY_PREFIX}{email}", full_name)

    # --- Config matérielle (cache) ---
    def get_system_config(self) -> dict | None:
        cfg = self.store.get(SYSTEM_CONFIG_KEY)
        return cfg if isinstance(cfg, dict) else None

    def set_system_config(self, config: dict) -> None:
        self.store.set(SYSTEM_CONFIG_KEY, config)
