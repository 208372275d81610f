# neurotracker/persistence/storage.py
# -*- coding: utf-8 -*-
"""
Port clé/valeur utilisé par tous les repositories.

Deux implémentations :
- SqlKeyValueStore : table `kv_entries` via SQLAlchemy (usage normal).
- InMemoryKeyValueStore : dict en mémoire, idéal pour les tests.

Les valeurs sont sérialisées en JSON dans les deux cas. Une lecture qui échoue
(valeur illisible, table absente, base verrouillée) est traitée comme "pas de
donnée" : on log un warning et on renvoie le défaut. Les écritures propagent.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from neurotracker.persistence.db import get_session
from neurotracker.persistence.models import KVEntry

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def delete(self, key: str) -> bool: ...


def _decode(key: str, raw: str | None, default: Any) -> Any:
    if raw is None:
        return default
    try:
        return json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Valeur illisible pour la clé %r, ignorée", key)
        return default


def _encode(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


class SqlKeyValueStore:
    def get(self, key: str, default: Any = None) -> Any:
        try:
            with get_session() as s:
                raw = s.scalar(select(KVEntry.value).where(KVEntry.key == key))
        except SQLAlchemyError as e:
            logger.warning("Lecture impossible pour la clé %r (%s), ignorée", key, e.__class__.__name__)
            return default
        return _decode(key, raw, default)

    def set(self, key: str, value: Any) -> None:
        payload = _encode(value)
        with get_session() as s:
            entry = s.get(KVEntry, key)
            if entry is None:
                s.add(KVEntry(key=key, value=payload))
            else:
                entry.value = payload
                s.add(entry)

    def delete(self, key: str) -> bool:
        with get_session() as s:
            entry = s.get(KVEntry, key)
            if entry is None:
                return False
            s.delete(entry)
            return True


class InMemoryKeyValueStore:
    """Fake en mémoire ; stocke du JSON pour garder la même sémantique que la base."""

    def __init__(self, initial: Dict[str, Any] | None = None) -> None:
        self._data: Dict[str, str] = {}
        for k, v in (initial or {}).items():
            self.set(k, v)

    def get(self, key: str, default: Any = None) -> Any:
        return _decode(key, self._data.get(key), default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = _encode(value)

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def set_raw(self, key: str, raw: str) -> None:
        """Écrit une valeur brute (sert à simuler une donnée corrompue)."""
        self._data[key] = raw
