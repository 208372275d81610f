# neurotracker/services/score_engine.py
# -*- coding: utf-8 -*-
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Tuple

import pandas as pd

from neurotracker.services.errors import InputValidationError

# Questionnaire de dépistage (6 questions, échelle de Likert 0..4)
QUESTIONS: Tuple[str, ...] = (
    "How often do you have trouble wrapping up the final details of a project, "
    "once the challenging parts have been done?",
    "How often do you have difficulty getting things in order when you have to do "
    "a task that requires organization?",
    "How often do you have problems remembering appointments or obligations?",
    "When you have a task that requires a lot of thought, how often do you avoid "
    "or delay getting started?",
    "How often do you fidget or squirm with your hands or feet when you have to "
    "sit down for a long time?",
    "How often do you feel overly active and compelled to do things, like you were "
    "driven by a motor?",
)
SCALE_LABELS: Tuple[str, ...] = ("Never", "Rarely", "Sometimes", "Often", "Always")

NUM_QUESTIONS = len(QUESTIONS)
MIN_ANSWER = 0
MAX_ANSWER = len(SCALE_LABELS) - 1
MAX_SCORE = NUM_QUESTIONS * MAX_ANSWER  # 24


@dataclass(frozen=True)
class Band:
    """Tranche de score et ses métadonnées d'affichage."""
    name: str
    low: int
    high: int
    color: str              # green / blue / orange / red
    icon: str               # emoji affiché par l'UI
    message: str

    @property
    def range_label(self) -> str:
        return f"{self.low}–{self.high}"

    @property
    def is_positive_screen(self) -> bool:
        return self.low >= 14


BANDS: Tuple[Band, ...] = (
    Band(
        name="Low Negative",
        low=0,
        high=9,
        color="green",
        icon="✅",
        message=(
            "A score in this range indicates that you reported a very low frequency of "
            "ADHD-related symptoms. Based on this screener, your responses do not suggest "
            "the presence of ADHD."
        ),
    ),
    Band(
        name="High Negative",
        low=10,
        high=13,
        color="blue",
        icon="ℹ️",
        message=(
            "A score in this range is still considered \"negative\" for a positive screen. "
            "However, it indicates that you do experience some symptoms of inattention or "
            "hyperactivity/impulsivity. While this score does not meet the threshold for a "
            "positive screen, if these symptoms interfere with your daily life or work, you "
            "may still find it helpful to discuss them with a healthcare professional."
        ),
    ),
    Band(
        name="Low Positive Range",
        low=14,
        high=17,
        color="orange",
        icon="⚠️",
        message=(
            "This score is in the \"low positive\" range and meets the threshold for a "
            "positive screen. This result suggests that the symptoms you reported are "
            "consistent with an ADHD diagnosis in adults. It is not a diagnosis, but it is a "
            "strong indicator that further investigation by a qualified healthcare "
            "professional is warranted to determine if a formal diagnosis is appropriate "
            "and to discuss potential support."
        ),
    ),
    Band(
        name="High Positive Range",
        low=18,
        high=24,
        color="red",
        icon="❗",
        message=(
            "This score is in the \"high positive\" range, strongly suggesting the presence "
            "of symptoms that are highly consistent with adult ADHD. This result indicates a "
            "significant number or frequency of symptoms. It is strongly recommended that you "
            "share this result with a qualified healthcare professional for a comprehensive "
            "evaluation to confirm a potential diagnosis and discuss a plan for support."
        ),
    ),
)


def validate_answers(answers: Mapping[int, int]) -> None:
    """Valide les réponses : les 6 indices présents, valeurs dans 0..4.
    Lève InputValidationError si invalide."""
    errors = []

    missing = [i for i in range(NUM_QUESTIONS) if i not in answers]
    if missing:
        errors.append(f"questions sans réponse: {missing}")

    for idx, value in answers.items():
        if not (0 <= idx < NUM_QUESTIONS):
            errors.append(f"question inconnue: {idx}")
        elif isinstance(value, bool) or not isinstance(value, int) or not (MIN_ANSWER <= value <= MAX_ANSWER):
            errors.append(f"question {idx} hors bornes: {value} (attendu {MIN_ANSWER}..{MAX_ANSWER})")

    if errors:
        raise InputValidationError("; ".join(errors))


def compute_score(answers: Mapping[int, int]) -> int:
    """
    Score total du questionnaire = somme des 6 réponses (0..24).

    La somme ne dépend pas de l'ordre de saisie. Les réponses sont validées
    avant le calcul (erreur si une question manque ou si une valeur sort de 0..4).
    """
    validate_answers(answers)
    return sum(answers[i] for i in range(NUM_QUESTIONS))


def interpret(score: int) -> Band:
    """
    Retourne la tranche correspondant au score.

    Totale sur les entiers : un score négatif tombe dans la première tranche,
    tout score >= 18 dans la dernière. Les écrans résultats et tableau de bord
    passent tous les deux par cette fonction.
    """
    for band in BANDS[:-1]:
        if score <= band.high:
            return band
    return BANDS[-1]


def bands_frame(score: int | None = None) -> pd.DataFrame:
    """Tranches sous forme de DataFrame (graphique du tableau de bord)."""
    current = interpret(score) if score is not None else None
    return pd.DataFrame([{
        "band": b.name,
        "low": b.low,
        "high": b.high,
        "width": b.high - b.low + 1,
        "color": b.color,
        "range": b.range_label,
        "current": current is not None and b.name == current.name,
    } for b in BANDS])


def answers_summary(answers: Mapping[int, int]) -> Dict[str, str]:
    """Question -> libellé de la réponse (récapitulatif avant soumission)."""
    return {QUESTIONS[i]: SCALE_LABELS[v] for i, v in sorted(answers.items())}
