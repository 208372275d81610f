# tests/test_score_engine.py
# -*- coding: utf-8 -*-
"""
Tests unitaires pour neurotracker/services/score_engine.py

Ce fichier couvre :
- la validation des réponses (indices manquants, valeurs hors bornes, types),
- le calcul du score (somme, indépendance vis-à-vis de l'ordre de saisie),
- l'interprétation en tranches (chaque score 0..24, frontières, hors bornes),
- le DataFrame des tranches utilisé par les graphiques,
- le récapitulatif des réponses affiché avant soumission.
"""

import pytest

from neurotracker.services.errors import InputValidationError
from neurotracker.services.score_engine import (
    BANDS,
    MAX_SCORE,
    NUM_QUESTIONS,
    QUESTIONS,
    SCALE_LABELS,
    answers_summary,
    bands_frame,
    compute_score,
    interpret,
    validate_answers,
)

# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------

def answers_of(*values: int) -> dict:
    """answers_of(1, 2, ...) -> {0: 1, 1: 2, ...}"""
    return dict(enumerate(values))


# -----------------------------------------------------------------------------
# Constantes du questionnaire
# -----------------------------------------------------------------------------

def test_questionnaire_shape():
    assert NUM_QUESTIONS == 6
    assert len(QUESTIONS) == 6
    assert SCALE_LABELS == ("Never", "Rarely", "Sometimes", "Often", "Always")
    assert MAX_SCORE == 24


def test_bands_cover_every_score_without_gap():
    """Les tranches se suivent sans trou ni chevauchement, de 0 à 24."""
    assert BANDS[0].low == 0
    assert BANDS[-1].high == MAX_SCORE
    for prev, nxt in zip(BANDS, BANDS[1:]):
        assert nxt.low == prev.high + 1


# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------

def test_validate_answers_ok():
    validate_answers(answers_of(0, 1, 2, 3, 4, 0))


@pytest.mark.parametrize(
    "answers, snippet",
    [
        (answers_of(1, 1, 1, 1, 1), "sans réponse"),               # question 5 absente
        ({**answers_of(1, 1, 1, 1, 1, 1), 6: 2}, "inconnue"),     # indice en trop
        (answers_of(1, 1, 1, 1, 1, 5), "hors bornes"),            # > 4
        (answers_of(-1, 1, 1, 1, 1, 1), "hors bornes"),           # < 0
        (answers_of(1, 1, 1, 1, 1, 2.5), "hors bornes"),          # non entier
        (answers_of(True, 1, 1, 1, 1, 1), "hors bornes"),         # bool refusé
    ],
)
def test_validate_answers_errors(answers, snippet):
    with pytest.raises(InputValidationError) as exc:
        validate_answers(answers)
    assert snippet in str(exc.value)


def test_compute_score_rejects_incomplete_answers():
    with pytest.raises(InputValidationError):
        compute_score({0: 4})


# -----------------------------------------------------------------------------
# Calcul du score
# -----------------------------------------------------------------------------

@pytest.mark.parametrize(
    "values, expected",
    [
        ((0, 0, 0, 0, 0, 0), 0),
        ((4, 4, 4, 4, 4, 4), 24),
        ((2, 3, 1, 4, 0, 2), 12),
        ((1, 1, 1, 1, 1, 1), 6),
    ],
)
def test_compute_score_is_sum(values, expected):
    assert compute_score(answers_of(*values)) == expected


def test_compute_score_independent_of_entry_order():
    """Même réponses saisies dans un ordre différent => même score."""
    forward = {i: v for i, v in enumerate((2, 3, 1, 4, 0, 2))}
    backward = {i: forward[i] for i in reversed(range(NUM_QUESTIONS))}
    assert list(backward) != list(forward)
    assert compute_score(forward) == compute_score(backward)


# -----------------------------------------------------------------------------
# Interprétation
# -----------------------------------------------------------------------------

@pytest.mark.parametrize("score", range(0, 25))
def test_interpret_every_score(score):
    if score <= 9:
        expected = "Low Negative"
    elif score <= 13:
        expected = "High Negative"
    elif score <= 17:
        expected = "Low Positive Range"
    else:
        expected = "High Positive Range"
    band = interpret(score)
    assert band.name == expected
    assert band.low <= score <= band.high


@pytest.mark.parametrize(
    "score, name, color, positive",
    [
        (9, "Low Negative", "green", False),
        (10, "High Negative", "blue", False),
        (13, "High Negative", "blue", False),
        (14, "Low Positive Range", "orange", True),
        (17, "Low Positive Range", "orange", True),
        (18, "High Positive Range", "red", True),
    ],
)
def test_interpret_boundaries(score, name, color, positive):
    band = interpret(score)
    assert band.name == name
    assert band.color == color
    assert band.is_positive_screen is positive


def test_interpret_example_twelve():
    """Réponses 2,3,1,4,0,2 => 12 => High Negative (10–13)."""
    band = interpret(compute_score(answers_of(2, 3, 1, 4, 0, 2)))
    assert band.name == "High Negative"
    assert band.range_label == "10–13"
    assert "still considered" in band.message


@pytest.mark.parametrize("score, name", [(-3, "Low Negative"), (30, "High Positive Range")])
def test_interpret_out_of_range_scores(score, name):
    """Fonction totale : pas d'exception, tranche extrême."""
    assert interpret(score).name == name


# -----------------------------------------------------------------------------
# DataFrame des tranches / récapitulatif
# -----------------------------------------------------------------------------

def test_bands_frame_marks_current_band():
    df = bands_frame(15)
    assert list(df["band"]) == [b.name for b in BANDS]
    assert list(df["width"]) == [10, 4, 4, 7]
    assert df.loc[df["current"], "band"].tolist() == ["Low Positive Range"]


def test_bands_frame_without_score():
    assert not bands_frame()["current"].any()


def test_answers_summary_labels_in_question_order():
    summary = answers_summary({1: 4, 0: 0})
    assert list(summary) == [QUESTIONS[0], QUESTIONS[1]]
    assert list(summary.values()) == ["Never", "Always"]
