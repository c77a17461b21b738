"""Error types raised by voxcue."""

from __future__ import annotations


class VoxcueError(Exception):
    """Base error for voxcue."""


class NonEnglishTranscriptError(VoxcueError, ValueError):
    """Raised when English-only input is required but another language was detected."""

    def __init__(self, language: str) -> None:
        super().__init__(f"Only English is supported, detected {language}")
        self.language = language


class SessionStoreError(VoxcueError):
    """Raised when the session document store rejects a read or write."""
