# neurotracker/services/compatibility.py
# -*- coding: utf-8 -*-
"""
Estimation de compatibilité du poste pour faire tourner des modèles d'IA en local.

- LocalHardwareProbe : détection best-effort (threads CPU, RAM, GPU, disque).
- load_system_config : config en cache > valeurs détectées > valeurs par défaut.
- compatibility_score : barème sur 100 (VRAM 40, RAM 30, GPU 20, stockage 10).
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Tuple

import pandas as pd

from neurotracker import config
from neurotracker.persistence.repositories.prefs_repo import PreferencesRepository

logger = logging.getLogger(__name__)

GIB = 1024 ** 3

# Paramètres de la courbe "performance" : y = -a (x - 50)^2 + 100
CURVE_A = 0.04
CURVE_STEP = 2


@dataclass(frozen=True)
class SystemConfig:
    cpu: str = "Unknown"
    gpu: str = "Unknown"
    ram: float = 8        # Go
    vram: float = 4       # Go
    storage: float = 256  # Go

    @classmethod
    def from_dict(cls, data: Dict) -> "SystemConfig":
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        for k in ("ram", "vram", "storage"):
            if k in values:
                values[k] = float(values[k])
        return cls(**values)


@dataclass(frozen=True)
class AIModel:
    name: str
    size: str
    min_vram: float
    min_ram: float
    performance: str
    category: str


MODEL_CATALOG: Tuple[AIModel, ...] = (
    AIModel("Llama 3.2 1B", "1B", 2, 4, "Fast", "Small"),
    AIModel("Llama 3.2 3B", "3B", 4, 8, "Fast", "Small"),
    AIModel("Phi-3 Mini", "3.8B", 4, 8, "Fast", "Small"),
    AIModel("Gemma 2B", "2B", 3, 6, "Fast", "Small"),
    AIModel("Llama 3.1 8B", "8B", 6, 12, "Balanced", "Medium"),
    AIModel("Mistral 7B", "7B", 6, 12, "Balanced", "Medium"),
    AIModel("Gemma 7B", "7B", 6, 12, "Balanced", "Medium"),
    AIModel("Llama 3.1 70B", "70B", 24, 48, "High Quality", "Large"),
    AIModel("Mixtral 8x7B", "47B", 20, 40, "High Quality", "Large"),
    AIModel("GPT-4 Vision", "API", 0, 4, "Cloud-based", "API"),
)


# -----------------------------------------------------------------------------
# Détection matérielle
# -----------------------------------------------------------------------------

class HardwareProbe(Protocol):
    def detect(self) -> Dict[str, object]: ...


def estimate_vram(renderer: str) -> Optional[float]:
    """VRAM (Go) déduite du nom du GPU ; None si on ne sait pas."""
    if "4090" in renderer:
        return 24
    if "4080" in renderer:
        return 16
    if "4070" in renderer:
        return 12
    if "3090" in renderer:
        return 24
    if "3080" in renderer:
        return 10
    if "3070" in renderer:
        return 8
    if "3060" in renderer:
        return 12
    if "AMD" in renderer or "Radeon" in renderer:
        if "7900" in renderer:
            return 20
        if "7800" in renderer or "6900" in renderer or "6800" in renderer:
            return 16
        return 8
    if "Intel" in renderer:
        return 0  # graphique intégré
    return None


class LocalHardwareProbe:
    """Ne renvoie que les champs réellement détectés."""

    def __init__(self, storage_path: str | None = None, gpu_renderer: str | None = None) -> None:
        self.storage_path = storage_path or str(Path.home())
        self.gpu_renderer = gpu_renderer if gpu_renderer is not None else config.GPU_RENDERER

    def _ram_gb(self) -> Optional[float]:
        try:
            total = os.sysconf("SC_PAGE_SIZE") * os.sysconf("SC_PHYS_PAGES")
        except (AttributeError, ValueError, OSError):
            return None
        return round(total / GIB) if total > 0 else None

    def _renderer(self) -> Optional[str]:
        if self.gpu_renderer:
            return self.gpu_renderer
        try:
            out = subprocess.run(
                ["nvidia-smi", "--query-gpu=name", "--format=csv,noheader"],
                capture_output=True, text=True, timeout=3, check=True,
            ).stdout.strip()
        except (OSError, subprocess.SubprocessError):
            return None
        return out.splitlines()[0].strip() if out else None

    def _storage_gb(self) -> Optional[float]:
        try:
            return round(shutil.disk_usage(self.storage_path).total / GIB)
        except OSError:
            return None

    def detect(self) -> Dict[str, object]:
        detected: Dict[str, object] = {}

        cores = os.cpu_count()
        if cores:
            detected["cpu"] = f"{cores}-Core Processor"

        ram = self._ram_gb()
        if ram:
            detected["ram"] = ram

        renderer = self._renderer()
        if renderer:
            detected["gpu"] = renderer
            vram = estimate_vram(renderer)
            if vram is not None:
                detected["vram"] = vram

        storage = self._storage_gb()
        if storage:
            detected["storage"] = storage

        logger.debug("Matériel détecté: %s", detected)
        return detected


def load_system_config(prefs: PreferencesRepository, probe: HardwareProbe | None = None) -> SystemConfig:
    """La config enregistrée gagne ; sinon défauts complétés par la détection."""
    cached = prefs.get_system_config()
    if cached:
        try:
            return SystemConfig.from_dict(cached)
        except (TypeError, ValueError):
            logger.warning("Config matérielle en cache illisible, nouvelle détection")
    detected = (probe or LocalHardwareProbe()).detect()
    return replace(SystemConfig(), **detected)


def save_system_config(prefs: PreferencesRepository, cfg: SystemConfig) -> None:
    prefs.set_system_config(asdict(cfg))


# -----------------------------------------------------------------------------
# Score et recommandations
# -----------------------------------------------------------------------------

def compatibility_score(cfg: SystemConfig) -> int:
    score = 0

    # VRAM (40 %)
    if cfg.vram >= 24:
        score += 40
    elif cfg.vram >= 16:
        score += 35
    elif cfg.vram >= 12:
        score += 30
    elif cfg.vram >= 8:
        score += 25
    elif cfg.vram >= 6:
        score += 15
    else:
        score += 8

    # RAM (30 %)
    if cfg.ram >= 64:
        score += 30
    elif cfg.ram >= 32:
        score += 25
    elif cfg.ram >= 16:
        score += 18
    else:
        score += 10

    # Type de GPU (20 %)
    gpu = cfg.gpu
    if "4090" in gpu or "4080" in gpu:
        score += 20
    elif "4070" in gpu or "3090" in gpu:
        score += 18
    elif "3080" in gpu or "3070" in gpu:
        score += 15
    elif "3060" in gpu or "AMD" in gpu:
        score += 12
    else:
        score += 8

    # Stockage (10 %)
    if cfg.storage >= 2000:
        score += 10
    elif cfg.storage >= 1000:
        score += 8
    elif cfg.storage >= 500:
        score += 6
    else:
        score += 4

    return min(100, score)


def rating(score: int) -> Tuple[str, str]:
    """(libellé, couleur)"""
    if score >= 80:
        return "Excellent", "green"
    if score >= 60:
        return "Good", "blue"
    if score >= 40:
        return "Fair", "orange"
    return "Limited", "red"


def compatible_models(cfg: SystemConfig, catalog: Tuple[AIModel, ...] = MODEL_CATALOG) -> List[AIModel]:
    return [m for m in catalog if m.min_vram <= cfg.vram and m.min_ram <= cfg.ram]


def models_frame(cfg: SystemConfig) -> pd.DataFrame:
    ok = {m.name for m in compatible_models(cfg)}
    return pd.DataFrame([{
        "model": m.name,
        "size": m.size,
        "min VRAM (GB)": m.min_vram,
        "min RAM (GB)": m.min_ram,
        "performance": m.performance,
        "category": m.category,
        "compatible": m.name in ok,
    } for m in MODEL_CATALOG])


def _curve_y(x: float) -> float:
    return max(0.0, -CURVE_A * (x - 50) ** 2 + 100)


def curve_frame() -> pd.DataFrame:
    xs = list(range(0, 101, CURVE_STEP))
    return pd.DataFrame({"x": xs, "y": [_curve_y(x) for x in xs]})


def curve_position(score: int) -> Tuple[float, float]:
    return float(score), _curve_y(score)
