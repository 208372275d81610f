# neurotracker/config.py
# -*- coding: utf-8 -*-
import logging
import os


def _get_float(value: str | None, default: float) -> float:
    try:
        return float(value) if value is not None else default
    except ValueError:
        return default


APP_NAME = "NeuroTracker"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Latence "réseau" simulée côté UI (0 => désactivée)
SIMULATED_LATENCY_SEC = _get_float(os.getenv("NT_SIMULATED_LATENCY_SEC"), 1.0)

# Vérification (OTP / disponibilité username)
VERIFY_PROVIDER = os.getenv("VERIFY_PROVIDER", "stub").strip().lower()
VERIFY_API_URL = os.getenv("VERIFY_API_URL", "").strip()
VERIFY_TIMEOUT_SEC = _get_float(os.getenv("VERIFY_TIMEOUT_SEC"), 8.0)

# Override manuel du nom de GPU (la détection locale reste best-effort)
GPU_RENDERER = os.getenv("NT_GPU_RENDERER", "").strip()


def setup_logging(level: str | None = None) -> None:
    """Configure le logging racine une seule fois (appelé par main.py)."""
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
