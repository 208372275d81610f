# neurotracker/services/meetings.py
# -*- coding: utf-8 -*-
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from neurotracker.services.errors import InputValidationError

AI_MODELS: Dict[str, str] = {
    "gpt-4": "GPT-4 (Most Accurate)",
    "gpt-4-turbo": "GPT-4 Turbo (Balanced)",
    "gpt-3.5-turbo": "GPT-3.5 Turbo (Fast)",
    "claude-3-opus": "Claude 3 Opus",
    "claude-3-sonnet": "Claude 3 Sonnet",
}

TRANSCRIPT_MODELS: Dict[str, str] = {
    "whisper-1": "Whisper v1 (Recommended)",
    "whisper-2": "Whisper v2 (Enhanced)",
    "whisper-large": "Whisper Large (High Quality)",
    "assembly-ai": "AssemblyAI",
    "deepgram": "Deepgram Nova",
}

SUMMARIZATION_LEVELS: Dict[str, str] = {
    "light": "Brief overview with key points only",
    "medium": "Balanced summary with important details",
    "heavy": "Detailed summary with comprehensive coverage",
}


@dataclass(frozen=True)
class MeetingConfig:
    live_transcription: bool = True
    ai_model: str = "gpt-4"
    transcript_model: str = "whisper-1"
    summarization_level: str = "medium"
    calendar_tracking: bool = False

    @property
    def transcription_mode(self) -> str:
        return "Live Transcription" if self.live_transcription else "Post Meeting Transcription"

    @property
    def transcription_hint(self) -> str:
        if self.live_transcription:
            return "Real-time transcription during the meeting"
        return "Transcribe after the meeting ends"

    def validate(self) -> None:
        errors = []
        if self.ai_model not in AI_MODELS:
            errors.append(f"modèle IA inconnu: {self.ai_model}")
        if self.transcript_model not in TRANSCRIPT_MODELS:
            errors.append(f"modèle de transcription inconnu: {self.transcript_model}")
        if self.summarization_level not in SUMMARIZATION_LEVELS:
            errors.append(f"niveau de résumé inconnu: {self.summarization_level}")
        if errors:
            raise InputValidationError("; ".join(errors))


def suggest_level() -> str:
    # pas encore d'historique de réunions : niveau équilibré par défaut
    return "medium"
