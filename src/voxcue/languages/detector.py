"""Heuristic language detection for transcripts."""

from __future__ import annotations

import re

from voxcue.errors import NonEnglishTranscriptError
from voxcue.languages.base import EnglishCheck, first_match
from voxcue.languages.rules import ENGLISH_ONLY_RULES, UNRESTRICTED_RULES
from voxcue.models import LanguageLabel

_IGNORED_CHARS_RE = re.compile(r"[.,!?;:'\"\[\](){}—–\-_\s]")


def strip_for_language_check(text: str) -> str:
    """Drop punctuation, brackets and whitespace before script checks."""
    return _IGNORED_CHARS_RE.sub("", text)


def validate_english_only(text: str) -> EnglishCheck:
    """Check whether `text` looks English, reporting the detected language otherwise."""
    stripped = strip_for_language_check(text)
    if not stripped:
        return EnglishCheck(is_english=True)

    label = first_match(stripped, ENGLISH_ONLY_RULES)
    if label == "English":
        return EnglishCheck(is_english=True)
    return EnglishCheck(is_english=False, detected_language=label)


def detect_language(text: str, english_only_mode: bool = False) -> LanguageLabel:
    """Classify `text` with the first-match-wins heuristics.

    In English-only mode non-Latin scripts are checked before diacritics;
    otherwise Polish non-verbal tags take precedence. Falls back to
    ``"English"`` and never raises.
    """
    if english_only_mode:
        check = validate_english_only(text)
        if check.is_english or check.detected_language is None:
            return "English"
        return check.detected_language

    return first_match(text, UNRESTRICTED_RULES)


def ensure_english(text: str) -> None:
    """Raise `NonEnglishTranscriptError` unless `text` passes the English-only check."""
    check = validate_english_only(text)
    if not check.is_english:
        raise NonEnglishTranscriptError(check.detected_language or "Non-English")
