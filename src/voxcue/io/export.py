"""Transcript result serializers."""

from __future__ import annotations

from pathlib import Path

from voxcue.models import TranscriptResult


def to_json(result: TranscriptResult) -> str:
    """Serialize a transcript result to formatted JSON."""
    return result.model_dump_json(indent=2, by_alias=True)


def write_json(result: TranscriptResult, output_path: str | Path) -> None:
    """Write transcript result JSON to disk."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_json(result) + "\n", encoding="utf-8")
