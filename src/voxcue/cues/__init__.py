"""Non-verbal tag table, transcript cleaning and cue extraction."""

from voxcue.cues.extract import clean_transcript, extract_non_verbal_cues, normalize_whitespace
from voxcue.cues.table import (
    DEFAULT_TAG_TABLE,
    POLISH_TAGS,
    TagMapping,
    TagTable,
    build_tag_table,
    normalize_tag,
)

__all__ = [
    "DEFAULT_TAG_TABLE",
    "POLISH_TAGS",
    "TagMapping",
    "TagTable",
    "build_tag_table",
    "clean_transcript",
    "extract_non_verbal_cues",
    "normalize_tag",
    "normalize_whitespace",
]
