"""Shared data models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

LanguageLabel = Literal[
    "English",
    "Polish",
    "Spanish",
    "French",
    "German",
    "Hindi",
    "Cyrillic",
    "Arabic",
    "Chinese",
    "Non-Latin",
]
Phase = Literal["idle", "listening", "thinking", "speaking"]
Emotion = Literal["happy", "calm", "curious", "sleepy"]
Lang = Literal["ar", "fr", "en"]


class WireModel(BaseModel):
    """Base for models exchanged with web clients: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HealthResponse(WireModel):
    """Response payload for the API health endpoint."""

    status: Literal["ok"]
    version: str
    env: str


class NonVerbalCue(WireModel):
    """A recognized non-verbal tag found in a transcript."""

    model_config = ConfigDict(frozen=True)

    emoji: str
    label: str
    raw_tag: str


class TranscriptResult(WireModel):
    """Outcome of processing one raw transcript."""

    model_config = ConfigDict(frozen=True)

    raw: str
    cleaned: str
    language: LanguageLabel | None = None
    non_verbal_cues: list[NonVerbalCue] = Field(default_factory=list)
    is_non_english: bool = False


class ProcessRequest(WireModel):
    """Transcript processing request payload used by the API."""

    text: str
    english_only_mode: bool | None = None
    reject_non_english: bool = False


class TagEntry(WireModel):
    """One row of the non-verbal tag table."""

    tag: str
    emoji: str
    label: str


class SessionState(WireModel):
    """Live state of a voice session."""

    phase: Phase = "idle"
    emotion: Emotion = "calm"
    energy: float = Field(default=0.3, ge=0.0, le=1.0)
    last_audio_url: str | None = None
    lang: Lang = "en"
    updated_at: int = Field(default=0, ge=0)


class SessionMetrics(WireModel):
    """Per-session conversation counters."""

    turns: int = Field(default=0, ge=0)
    wh_questions: int = Field(default=0, ge=0)
    session_minutes: float = Field(default=0, ge=0.0)
    ci: float = 0


class SessionDocument(WireModel):
    """Full session document as stored in the `sessions` collection."""

    state: SessionState
    metrics: SessionMetrics
