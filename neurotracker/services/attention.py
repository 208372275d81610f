# neurotracker/services/attention.py
# -*- coding: utf-8 -*-
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Tuple

from neurotracker.services.errors import InputValidationError

CAMERAS: Dict[str, str] = {
    "camera1": "Camera 1",
    "camera2": "Camera 2",
    "camera3": "Camera 3",
    "camera4": "Camera 4",
}

# bornes des curseurs de réglage
BOUNDS: Dict[str, Tuple[float, float]] = {
    "pitch_min": (-90.0, 0.0),
    "pitch_max": (0.0, 90.0),
    "strictness": (1.0, 20.0),
    "yaw_min": (-90.0, 0.0),
    "yaw_max": (0.0, 90.0),
    "eye_threshold": (0.05, 0.5),
}

FOCUSED = "FOCUSED"
DISTRACTED = "DISTRACTED"


@dataclass(frozen=True)
class AttentionConfig:
    """Réglages du suivi d'attention (angles en degrés, seuil EAR sans unité)."""
    camera: str = "camera1"
    pitch_min: float = -64.6
    pitch_max: float = 41.1
    strictness: float = 5.0
    yaw_min: float = -35.0
    yaw_max: float = 35.0
    eye_threshold: float = 0.15

    def validate(self) -> None:
        errors = []
        if self.camera not in CAMERAS:
            errors.append(f"caméra inconnue: {self.camera}")
        for name, (lo, hi) in BOUNDS.items():
            v = getattr(self, name)
            if not (lo <= v <= hi):
                errors.append(f"{name} hors bornes: {v} (attendu {lo}..{hi})")
        if errors:
            raise InputValidationError("; ".join(errors))


@dataclass(frozen=True)
class HeadPose:
    """Mesure instantanée : orientation de la tête + ouverture des yeux (EAR)."""
    pitch: float
    yaw: float
    roll: float
    ear: float
    face_detected: bool = True


@dataclass(frozen=True)
class FocusReport:
    face_ok: bool
    pitch_ok: bool
    yaw_ok: bool
    roll_ok: bool
    ear_ok: bool

    @property
    def status(self) -> str:
        checks = (self.face_ok, self.pitch_ok, self.yaw_ok, self.roll_ok, self.ear_ok)
        return FOCUSED if all(checks) else DISTRACTED


def evaluate(pose: HeadPose, cfg: AttentionConfig) -> FocusReport:
    return FocusReport(
        face_ok=pose.face_detected,
        pitch_ok=cfg.pitch_min <= pose.pitch <= cfg.pitch_max,
        yaw_ok=cfg.yaw_min <= pose.yaw <= cfg.yaw_max,
        roll_ok=True,  # le roulis n'est pas filtré
        ear_ok=pose.ear >= cfg.eye_threshold,
    )


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _recentre(lo: float, hi: float, center: float, lo_bounds, hi_bounds) -> Tuple[float, float]:
    half = (hi - lo) / 2
    new_lo = _clamp(round(center - half, 1), *lo_bounds)
    new_hi = _clamp(round(center + half, 1), *hi_bounds)
    return new_lo, new_hi


def set_pitch_focused(cfg: AttentionConfig, pitch: float) -> AttentionConfig:
    """Recentre la fenêtre de pitch sur l'angle courant (même largeur, bornée)."""
    lo, hi = _recentre(cfg.pitch_min, cfg.pitch_max, pitch, BOUNDS["pitch_min"], BOUNDS["pitch_max"])
    return replace(cfg, pitch_min=lo, pitch_max=hi)


def set_yaw_focused(cfg: AttentionConfig, yaw: float) -> AttentionConfig:
    lo, hi = _recentre(cfg.yaw_min, cfg.yaw_max, yaw, BOUNDS["yaw_min"], BOUNDS["yaw_max"])
    return replace(cfg, yaw_min=lo, yaw_max=hi)


def calibrate(cfg: AttentionConfig, pose: HeadPose) -> AttentionConfig:
    """Prend la position courante comme centre (pitch et yaw)."""
    return set_yaw_focused(set_pitch_focused(cfg, pose.pitch), pose.yaw)
