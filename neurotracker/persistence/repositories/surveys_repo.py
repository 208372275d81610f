# neurotracker/persistence/repositories/surveys_repo.py
# -*- coding: utf-8 -*-
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass

from neurotracker.persistence.storage import KeyValueStore

SURVEYS_KEY = "neurotracker_surveys"


def _normalize_date(d) -> str:
    if d is None:
        return dt.datetime.now(dt.timezone.utc).isoformat()
    if isinstance(d, dt.datetime):
        return d.isoformat()
    if isinstance(d, dt.date):
        return dt.datetime(d.year, d.month, d.day, tzinfo=dt.timezone.utc).isoformat()
    if isinstance(d, str):
        return dt.datetime.fromisoformat(d.replace("Z", "+00:00")).isoformat()
    raise TypeError("Invalid date type")


@dataclass(frozen=True)
class CompletionRecord:
    completed: bool
    score: int
    date: str  # ISO-8601

    @property
    def completed_at(self) -> dt.datetime | None:
        try:
            return dt.datetime.fromisoformat(self.date.replace("Z", "+00:00"))
        except ValueError:
            return None

    def display_date(self) -> str:
        """Date lisible, ex. 'October 19, 2026' ; repli si la date est illisible."""
        when = self.completed_at
        if when is None:
            return "a previous date"
        return f"{when:%B} {when.day}, {when.year}"


class CompletionRepository:
    """Un enregistrement de fin de questionnaire par email."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def _load(self) -> dict:
        data = self.store.get(SURVEYS_KEY, {})
        return data if isinstance(data, dict) else {}

    def get_completion(self, email: str) -> CompletionRecord | None:
        row = self._load().get(email)
        if not isinstance(row, dict):
            return None
        try:
            return CompletionRecord(
                completed=row.get("completed") is True,
                score=int(row.get("score", 0)),
                date=str(row.get("date", "")),
            )
        except (TypeError, ValueError):
            return None

    def set_completion(self, email: str, score: int, date=None) -> CompletionRecord:
        # écrase la valeur précédente : la garantie "une seule fois" est portée par le Navigator
        data = self._load()
        rec = CompletionRecord(completed=True, score=int(score), date=_normalize_date(date))
        data[email] = {"completed": rec.completed, "score": rec.score, "date": rec.date}
        self.store.set(SURVEYS_KEY, data)
        return rec

    def has_completed(self, email: str) -> bool:
        rec = self.get_completion(email)
        return rec is not None and rec.completed
