# neurotracker/persistence/repositories/users_repo.py
# -*- coding: utf-8 -*-
from __future__ import annotations

from dataclasses import asdict, dataclass

from neurotracker.persistence.storage import KeyValueStore

USERS_KEY = "neurotracker_users"


@dataclass
class User:
    email: str
    password: str
    name: str


class UserRepository:
    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def _load(self) -> list[dict]:
        rows = self.store.get(USERS_KEY, [])
        # liste attendue ; tout autre contenu = pas de donnée
        return [r for r in rows if isinstance(r, dict)] if isinstance(rows, list) else []

    def list_users(self) -> list[User]:
        return [
            User(email=r.get("email", ""), password=r.get("password", ""), name=r.get("name", ""))
            for r in self._load()
        ]

    def find_user(self, email: str) -> User | None:
        # comparaison exacte, sensible à la casse
        for u in self.list_users():
            if u.email == email:
                return u
        return None

    def add_user(self, email: str, password: str, name: str) -> User:
        rows = self._load()
        u = User(email=email, password=password, name=name)
        rows.append(asdict(u))
        self.store.set(USERS_KEY, rows)
        return u

    def update_password(self, email: str, new_password: str) -> bool:
        rows = self._load()
        for r in rows:
            if r.get("email") == email:
                r["password"] = new_password
                self.store.set(USERS_KEY, rows)
                return True
        return False
