"""Tag cleaning and non-verbal cue extraction."""

from __future__ import annotations

import re

from voxcue.cues.table import DEFAULT_TAG_TABLE, TagTable, normalize_tag
from voxcue.models import NonVerbalCue

TAG_RE = re.compile(r"\[([^\]]+)\]", re.IGNORECASE)
_SPACES_RE = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to a single space and trim."""
    return _SPACES_RE.sub(" ", text).strip()


def clean_transcript(raw: str, table: TagTable = DEFAULT_TAG_TABLE) -> str:
    """Replace known tags with their English label and drop unknown ones."""

    def _replace(match: re.Match[str]) -> str:
        mapping = table.get(normalize_tag(match.group(1)))
        return mapping.label if mapping is not None else ""

    return normalize_whitespace(TAG_RE.sub(_replace, raw))


def extract_non_verbal_cues(raw: str, table: TagTable = DEFAULT_TAG_TABLE) -> list[NonVerbalCue]:
    """Return one cue per distinct recognized tag, in first-occurrence order."""
    cues: list[NonVerbalCue] = []
    seen: set[str] = set()

    for match in TAG_RE.finditer(raw):
        tag = match.group(1)
        normalized = normalize_tag(tag)
        if normalized in seen:
            continue
        seen.add(normalized)

        mapping = table.get(normalized)
        if mapping is not None:
            cues.append(NonVerbalCue(emoji=mapping.emoji, label=mapping.label, raw_tag=tag))

    return cues
