"""Non-verbal tag mapping table."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class TagMapping:
    """Display pair for a recognized tag."""

    emoji: str
    label: str


TagTable = Mapping[str, TagMapping]

_LAUGHING = TagMapping("😊", "User is laughing")
_COUGHING = TagMapping("🤧", "User is coughing")
_SIGHED = TagMapping("😌", "User sighed")
_GIGGLING = TagMapping("😄", "User is giggling")

_POLISH_ENTRIES: dict[str, TagMapping] = {
    "śmiech": _LAUGHING,
    "kaszel": _COUGHING,
    "westchnienie": _SIGHED,
    "chichot": _GIGGLING,
    "mlaskanie": TagMapping("👅", "User made mouth sounds"),
}

_ENGLISH_ENTRIES: dict[str, TagMapping] = {
    "laughter": _LAUGHING,
    "cough": _COUGHING,
    "sigh": _SIGHED,
    "gasp": TagMapping("😮", "User gasped"),
    "giggle": _GIGGLING,
    "sneeze": TagMapping("🤧", "User is sneezing"),
    "breath": TagMapping("💨", "User breathed"),
    "hiccup": TagMapping("😅", "User hiccupped"),
    "snore": TagMapping("😴", "User is snoring"),
    "yawn": TagMapping("😴", "User yawned"),
    "cry": TagMapping("😢", "User is crying"),
    "sob": TagMapping("😭", "User is sobbing"),
    "whisper": TagMapping("🤫", "User is whispering"),
    "clear throat": TagMapping("👤", "User cleared throat"),
}

_OTHER_ENTRIES: dict[str, TagMapping] = {
    # Spanish
    "risa": _LAUGHING,
    "tos": _COUGHING,
    # French
    "rire": _LAUGHING,
    "toux": _COUGHING,
    # German
    "lachen": _LAUGHING,
    "husten": _COUGHING,
}


def normalize_tag(text: str) -> str:
    """Normalize a bracket interior for table lookups."""
    return text.lower().strip()


def build_tag_table(entries: Mapping[str, TagMapping] | Iterable[tuple[str, TagMapping]]) -> TagTable:
    """Build a read-only tag table with normalized keys."""
    pairs = entries.items() if isinstance(entries, Mapping) else entries
    return MappingProxyType({normalize_tag(tag): mapping for tag, mapping in pairs})


POLISH_TAGS: frozenset[str] = frozenset(_POLISH_ENTRIES)

DEFAULT_TAG_TABLE: TagTable = build_tag_table(
    {**_POLISH_ENTRIES, **_ENGLISH_ENTRIES, **_OTHER_ENTRIES}
)
