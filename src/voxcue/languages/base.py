"""Language rule base types."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from voxcue.models import LanguageLabel


@dataclass(frozen=True)
class LanguageRule:
    """A (predicate, result) pair in a first-match-wins rule chain."""

    label: LanguageLabel
    pattern: re.Pattern[str]

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


@dataclass(frozen=True)
class EnglishCheck:
    """Result of an English-only validation."""

    is_english: bool
    detected_language: LanguageLabel | None = None


def first_match(
    text: str,
    rules: Sequence[LanguageRule],
    default: LanguageLabel = "English",
) -> LanguageLabel:
    """Return the label of the first rule matching `text`, else `default`."""
    for rule in rules:
        if rule.matches(text):
            return rule.label
    return default
