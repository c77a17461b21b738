"""HTTP API for voxcue."""

from __future__ import annotations

from fastapi import FastAPI, HTTPException

from voxcue import __version__
from voxcue.config import load_config
from voxcue.core import process_transcript
from voxcue.cues import DEFAULT_TAG_TABLE
from voxcue.errors import NonEnglishTranscriptError
from voxcue.logging_utils import setup_logging
from voxcue.models import HealthResponse, ProcessRequest, TagEntry, TranscriptResult


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    config = load_config()
    setup_logging(config.log_level)
    app = FastAPI(
        title="voxcue",
        version=__version__,
        description="Voice transcript cleanup and language flagging API.",
    )

    @app.get("/health", response_model=HealthResponse, tags=["system"])
    def health() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__, env=config.env)

    @app.post("/v1/transcripts", response_model=TranscriptResult, tags=["transcripts"])
    def transcripts(request: ProcessRequest) -> TranscriptResult:
        english_only_mode = (
            config.english_only_mode
            if request.english_only_mode is None
            else request.english_only_mode
        )
        try:
            result = process_transcript(request.text, english_only_mode)
            if request.reject_non_english and result.is_non_english:
                raise NonEnglishTranscriptError(result.language or "Non-English")
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return result

    @app.get("/v1/tags", response_model=list[TagEntry], tags=["transcripts"])
    def tags() -> list[TagEntry]:
        return [
            TagEntry(tag=tag, emoji=mapping.emoji, label=mapping.label)
            for tag, mapping in DEFAULT_TAG_TABLE.items()
        ]

    return app


app = create_app()
