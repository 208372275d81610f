# neurotracker/services/survey.py
# -*- coding: utf-8 -*-
"""
Session de questionnaire : une question courante, des réponses, une soumission.

Transitions :
    answer(v)        enregistre/écrase la réponse de la question courante
    next()           avance si la question courante a une réponse (plafonné à 5)
    previous()       recule (plancher 0)
    request_submit() ouvre la confirmation (dernière question répondue)
    cancel_submit()  ferme la confirmation
    confirm_submit() calcule le score ; irréversible
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict

from neurotracker.services.errors import (
    IncompleteSurvey,
    InputValidationError,
    SurveyAlreadySubmitted,
)
from neurotracker.services.score_engine import (
    MAX_ANSWER,
    MIN_ANSWER,
    NUM_QUESTIONS,
    QUESTIONS,
    compute_score,
)

logger = logging.getLogger(__name__)


@dataclass
class SurveySession:
    current: int = 0
    answers: Dict[int, int] = field(default_factory=dict)
    confirming: bool = False
    score: int | None = None

    @property
    def submitted(self) -> bool:
        return self.score is not None

    @property
    def question(self) -> str:
        return QUESTIONS[self.current]

    @property
    def current_answer(self) -> int | None:
        return self.answers.get(self.current)

    @property
    def is_answered(self) -> bool:
        return self.current in self.answers

    @property
    def is_last(self) -> bool:
        return self.current == NUM_QUESTIONS - 1

    @property
    def progress(self) -> float:
        return (self.current + 1) / NUM_QUESTIONS * 100

    @property
    def can_submit(self) -> bool:
        return not self.submitted and self.is_last and self.is_answered

    def _ensure_open(self) -> None:
        if self.submitted:
            raise SurveyAlreadySubmitted()

    def answer(self, value: int) -> None:
        self._ensure_open()
        if isinstance(value, bool) or not isinstance(value, int) or not (MIN_ANSWER <= value <= MAX_ANSWER):
            raise InputValidationError(f"réponse hors bornes: {value} (attendu {MIN_ANSWER}..{MAX_ANSWER})")
        self.answers[self.current] = value

    def next(self) -> bool:
        self._ensure_open()
        if not self.is_answered or self.is_last:
            return False
        self.current += 1
        return True

    def previous(self) -> bool:
        self._ensure_open()
        if self.current == 0:
            return False
        self.current -= 1
        return True

    def request_submit(self) -> bool:
        self._ensure_open()
        self.confirming = self.can_submit
        return self.confirming

    def cancel_submit(self) -> None:
        self.confirming = False

    def confirm_submit(self) -> int:
        self._ensure_open()
        if not self.confirming:
            raise InputValidationError("submission must be confirmed first")
        missing = [i for i in range(NUM_QUESTIONS) if i not in self.answers]
        if missing:
            self.confirming = False
            raise IncompleteSurvey(f"Please answer every question before submitting (missing: {missing})")
        self.score = compute_score(self.answers)
        self.confirming = False
        logger.info("Questionnaire soumis, score=%s", self.score)
        return self.score
