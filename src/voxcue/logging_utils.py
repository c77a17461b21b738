"""Logging setup shared by the CLI and the HTTP API."""

from __future__ import annotations

import logging
import os

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_CONFIGURED = False


def setup_logging(level: str | None = None) -> None:
    """Configure root logging once.

    Args:
        level: Optional level name such as ``"DEBUG"``. Falls back to
            ``VOXCUE_LOG_LEVEL`` and then ``INFO``.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    level_name = (level or os.getenv("VOXCUE_LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=_LOG_FORMAT,
    )
    _CONFIGURED = True
