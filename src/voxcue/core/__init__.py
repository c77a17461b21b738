"""Core transcript pipeline."""

from voxcue.core.pipeline import process_transcript

__all__ = ["process_transcript"]
