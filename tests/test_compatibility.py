# tests/test_compatibility.py
# -*- coding: utf-8 -*-
"""
Tests pour neurotracker/services/compatibility.py

- barème de compatibilité (valeurs connues, plafond à 100),
- libellés de note,
- filtrage des modèles compatibles,
- chargement de la config : cache > détection > défauts (sonde factice, pas d'accès matériel),
- courbe de performance.
"""

import pytest

from neurotracker.persistence.repositories.prefs_repo import PreferencesRepository
from neurotracker.persistence.storage import InMemoryKeyValueStore
from neurotracker.services.compatibility import (
    MODEL_CATALOG,
    LocalHardwareProbe,
    SystemConfig,
    compatibility_score,
    compatible_models,
    curve_frame,
    curve_position,
    estimate_vram,
    load_system_config,
    models_frame,
    rating,
    save_system_config,
)


# ---------------------------------------------------------------------
# Fixtures / helpers
# ---------------------------------------------------------------------

class FakeProbe:
    def __init__(self, detected):
        self.detected = detected
        self.calls = 0

    def detect(self):
        self.calls += 1
        return dict(self.detected)


@pytest.fixture
def prefs():
    return PreferencesRepository(InMemoryKeyValueStore())


# ---------------------------------------------------------------------
# Barème
# ---------------------------------------------------------------------

@pytest.mark.parametrize(
    "cfg, expected",
    [
        (SystemConfig(), 8 + 10 + 8 + 4),                                              # défauts
        (SystemConfig(gpu="NVIDIA RTX 4090", ram=64, vram=24, storage=2000), 100),
        (SystemConfig(gpu="NVIDIA RTX 3060", ram=16, vram=12, storage=512), 30 + 18 + 12 + 6),
        (SystemConfig(gpu="AMD Radeon RX 6800", ram=32, vram=16, storage=1000), 35 + 25 + 12 + 8),
        (SystemConfig(gpu="NVIDIA RTX 3070", ram=8, vram=6, storage=256), 15 + 10 + 15 + 4),
    ],
)
def test_compatibility_score(cfg, expected):
    assert compatibility_score(cfg) == expected


def test_compatibility_score_never_exceeds_100():
    cfg = SystemConfig(gpu="RTX 4090 4080", ram=512, vram=80, storage=10000)
    assert compatibility_score(cfg) == 100


@pytest.mark.parametrize(
    "score, label, color",
    [(100, "Excellent", "green"), (80, "Excellent", "green"), (79, "Good", "blue"),
     (60, "Good", "blue"), (40, "Fair", "orange"), (39, "Limited", "red"), (0, "Limited", "red")],
)
def test_rating(score, label, color):
    assert rating(score) == (label, color)


# ---------------------------------------------------------------------
# Modèles
# ---------------------------------------------------------------------

def test_compatible_models_default_config():
    names = [m.name for m in compatible_models(SystemConfig())]
    assert names == ["Llama 3.2 1B", "Llama 3.2 3B", "Phi-3 Mini", "Gemma 2B", "GPT-4 Vision"]


def test_compatible_models_high_end_config():
    cfg = SystemConfig(ram=64, vram=24)
    assert len(compatible_models(cfg)) == len(MODEL_CATALOG)


def test_models_frame_flags_compatibility():
    df = models_frame(SystemConfig())
    assert len(df) == len(MODEL_CATALOG)
    assert df["compatible"].sum() == 5
    assert not df.loc[df["model"] == "Llama 3.1 70B", "compatible"].item()


# ---------------------------------------------------------------------
# Détection / cache
# ---------------------------------------------------------------------

@pytest.mark.parametrize(
    "renderer, vram",
    [("NVIDIA GeForce RTX 4090", 24), ("RTX 3080", 10), ("AMD Radeon RX 7900 XTX", 20),
     ("AMD Radeon RX 580", 8), ("Intel Iris Xe", 0), ("Apple M2", None)],
)
def test_estimate_vram(renderer, vram):
    assert estimate_vram(renderer) == vram


def test_load_uses_detection_over_defaults(prefs):
    probe = FakeProbe({"cpu": "12-Core Processor", "ram": 32, "gpu": "RTX 3080", "vram": 10})
    cfg = load_system_config(prefs, probe=probe)
    assert cfg == SystemConfig(cpu="12-Core Processor", gpu="RTX 3080", ram=32, vram=10, storage=256)


def test_load_partial_detection_keeps_defaults(prefs):
    cfg = load_system_config(prefs, probe=FakeProbe({}))
    assert cfg == SystemConfig()


def test_cached_config_wins(prefs):
    save_system_config(prefs, SystemConfig(cpu="Custom", gpu="RTX 4070", ram=16, vram=12, storage=1000))
    probe = FakeProbe({"cpu": "Detected"})
    cfg = load_system_config(prefs, probe=probe)
    assert cfg.cpu == "Custom"
    assert cfg.vram == 12
    assert probe.calls == 0


def test_cached_config_ignores_unknown_keys(prefs):
    prefs.set_system_config({"cpu": "Custom", "ram": "16", "extra": "x"})
    cfg = load_system_config(prefs, probe=FakeProbe({}))
    assert cfg == SystemConfig(cpu="Custom", ram=16.0)


def test_unreadable_cache_falls_back_to_detection(prefs):
    prefs.set_system_config({"ram": "lots"})
    probe = FakeProbe({"cpu": "Detected"})
    cfg = load_system_config(prefs, probe=probe)
    assert cfg.cpu == "Detected"
    assert probe.calls == 1


def test_local_probe_uses_renderer_override(tmp_path):
    detected = LocalHardwareProbe(storage_path=str(tmp_path), gpu_renderer="NVIDIA GeForce RTX 3070").detect()
    assert detected["gpu"] == "NVIDIA GeForce RTX 3070"
    assert detected["vram"] == 8
    assert set(detected) <= {"cpu", "ram", "gpu", "vram", "storage"}


# ---------------------------------------------------------------------
# Courbe
# ---------------------------------------------------------------------

def test_curve_frame_shape():
    df = curve_frame()
    assert len(df) == 51
    assert df["x"].iloc[0] == 0 and df["x"].iloc[-1] == 100
    assert df["y"].max() == pytest.approx(100.0)
    assert (df["y"] >= 0).all()


@pytest.mark.parametrize("score, y", [(50, 100.0), (0, 0.0), (100, 0.0), (60, 96.0)])
def test_curve_position(score, y):
    assert curve_position(score) == (float(score), pytest.approx(y))
