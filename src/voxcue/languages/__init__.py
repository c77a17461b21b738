"""Heuristic language classification."""

from voxcue.languages.base import EnglishCheck, LanguageRule, first_match
from voxcue.languages.detector import (
    detect_language,
    ensure_english,
    strip_for_language_check,
    validate_english_only,
)

__all__ = [
    "EnglishCheck",
    "LanguageRule",
    "detect_language",
    "ensure_english",
    "first_match",
    "strip_for_language_check",
    "validate_english_only",
]
