"""Transcript processing pipeline.

Cleaning, language classification and cue extraction each read the same raw
transcript and are independent of one another; the result record is
assembled from their outputs.
"""

from __future__ import annotations

import logging

from voxcue.cues import DEFAULT_TAG_TABLE, TagTable, clean_transcript, extract_non_verbal_cues
from voxcue.languages import detect_language
from voxcue.models import TranscriptResult

logger = logging.getLogger(__name__)


def process_transcript(
    raw: str,
    english_only_mode: bool = False,
    *,
    table: TagTable = DEFAULT_TAG_TABLE,
) -> TranscriptResult:
    """Clean a raw transcript, classify its language and collect non-verbal cues."""
    cleaned = clean_transcript(raw, table)
    language = detect_language(raw, english_only_mode)
    cues = extract_non_verbal_cues(raw, table)
    is_non_english = english_only_mode and language != "English"

    logger.debug(
        "Processed transcript: %d chars, language=%s, cues=%d",
        len(raw),
        language,
        len(cues),
    )
    if is_non_english:
        logger.warning("English-only mode: non-English transcript detected (%s)", language)

    return TranscriptResult(
        raw=raw,
        cleaned=cleaned,
        language=language,
        non_verbal_cues=cues,
        is_non_english=is_non_english,
    )
