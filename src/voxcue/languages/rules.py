"""Ordered rule chains for heuristic language classification.

Order is significant: the first matching rule wins. Polish diacritics are
checked before Spanish, French and German, and a Polish non-verbal tag
overrides any diacritic evidence.
"""

from __future__ import annotations

import re

from voxcue.cues.table import POLISH_TAGS
from voxcue.languages.base import LanguageRule

POLISH_CHARS_RE = re.compile(r"[ąćęłńóśźż]", re.IGNORECASE)
SPANISH_CHARS_RE = re.compile(r"[ñáíóú¿¡]", re.IGNORECASE)
FRENCH_CHARS_RE = re.compile(r"[àâäéèêëïîôùûüÿç]", re.IGNORECASE)
GERMAN_CHARS_RE = re.compile(r"[äöüß]", re.IGNORECASE)

POLISH_TAG_RE = re.compile(
    r"\[(?:" + "|".join(re.escape(tag) for tag in sorted(POLISH_TAGS)) + r")\]",
    re.IGNORECASE,
)

DEVANAGARI_RE = re.compile(r"[\u0900-\u097F]")
CYRILLIC_RE = re.compile(r"[\u0400-\u04FF]")
ARABIC_RE = re.compile(r"[\u0600-\u06FF]")
CJK_RE = re.compile(r"[\u4E00-\u9FFF]")
NON_LATIN_RE = re.compile(
    r"[\u0400-\u04FF\u0600-\u06FF\u0900-\u097F\u3040-\u309F\u30A0-\u30FF\u4E00-\u9FFF]"
)

DIACRITIC_RULES: tuple[LanguageRule, ...] = (
    LanguageRule("Polish", POLISH_CHARS_RE),
    LanguageRule("Spanish", SPANISH_CHARS_RE),
    LanguageRule("French", FRENCH_CHARS_RE),
    LanguageRule("German", GERMAN_CHARS_RE),
)

UNRESTRICTED_RULES: tuple[LanguageRule, ...] = (
    LanguageRule("Polish", POLISH_TAG_RE),
    *DIACRITIC_RULES,
)

# Hiragana/Katakana have no dedicated label and fall through to "Non-Latin".
SCRIPT_RULES: tuple[LanguageRule, ...] = (
    LanguageRule("Hindi", DEVANAGARI_RE),
    LanguageRule("Cyrillic", CYRILLIC_RE),
    LanguageRule("Arabic", ARABIC_RE),
    LanguageRule("Chinese", CJK_RE),
    LanguageRule("Non-Latin", NON_LATIN_RE),
)

ENGLISH_ONLY_RULES: tuple[LanguageRule, ...] = (*SCRIPT_RULES, *DIACRITIC_RULES)
