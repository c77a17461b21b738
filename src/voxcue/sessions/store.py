"""Session state persistence on Google Cloud Firestore.

Documents live at ``<collection>/<session_id>`` and hold a ``state`` map and a
``metrics`` map, using the same camelCase field names as the web client.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

from google.api_core.exceptions import AlreadyExists, GoogleAPICallError
from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from voxcue.config import AppConfig
from voxcue.errors import SessionStoreError
from voxcue.models import Phase, SessionDocument, SessionMetrics, SessionState

logger = logging.getLogger(__name__)

StateCallback = Callable[[SessionState | None], None]
ErrorCallback = Callable[[Exception], None]


def now_ms() -> int:
    return int(time.time() * 1000)


def initial_session_document(updated_at: int | None = None) -> SessionDocument:
    """Build the document written for a session seen for the first time."""
    state = SessionState(
        phase="idle",
        emotion="calm",
        energy=0.3,
        last_audio_url=None,
        lang="en",
        updated_at=updated_at if updated_at is not None else now_ms(),
    )
    return SessionDocument(state=state, metrics=SessionMetrics())


def ensure_anon_auth() -> None:
    """Server credentials stand in for end-user sign-in, so there is nothing to create."""
    logger.info("Using service credentials for session access (no anonymous sign-in required)")


class SessionStore:
    """Create, read, patch and watch session documents."""

    def __init__(
        self,
        client: Any,
        collection: str = "sessions",
        *,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._client = client
        self._collection = collection
        self._clock = clock

    @classmethod
    def from_config(cls, config: AppConfig) -> SessionStore:
        """Build a store backed by a real Firestore client."""
        from google.cloud import firestore

        client = firestore.Client(project=config.firestore_project)
        return cls(client, config.sessions_collection)

    @property
    def collection(self) -> str:
        return self._collection

    def ensure_state(self, session_id: str) -> bool:
        """Create the initial session document if it does not exist yet.

        Uses Firestore's atomic create, so concurrent callers never overwrite
        each other. Failures are logged and reported as ``False`` so callers
        can keep running without a session store.
        """
        ref = self._document(session_id)
        document = initial_session_document(self._clock())
        try:
            ref.create(document.model_dump(by_alias=True))
        except AlreadyExists:
            return True
        except GoogleAPICallError:
            logger.exception("Error ensuring state for session %s", session_id)
            return False
        logger.info("Created initial state for session: %s", session_id)
        return True

    def get_state(self, session_id: str) -> SessionState | None:
        """Read the current session state, or None when absent."""
        ref = self._document(session_id)
        try:
            snapshot = ref.get()
        except GoogleAPICallError as exc:
            raise SessionStoreError(f"Failed to read session {session_id}: {exc}") from exc
        if not snapshot.exists:
            return None
        return _parse_state(snapshot.to_dict())

    def patch_phase(self, session_id: str, phase: Phase, **fields: Any) -> dict[str, Any]:
        """Merge a new phase (and optional extra state fields) into the session.

        Extra fields use their Python names, e.g. ``last_audio_url``.
        Returns the ``state`` patch that was written.
        """
        patch: dict[str, Any] = {"phase": phase, "updatedAt": self._clock()}
        for name, value in fields.items():
            field = SessionState.model_fields.get(name)
            if field is None:
                raise ValueError(f"Unknown session state field: {name}")
            patch[field.alias or to_camel(name)] = value

        try:
            SessionState.model_validate(patch)
        except ValidationError as exc:
            raise ValueError(f"Invalid session state patch: {exc}") from exc

        try:
            self._document(session_id).set({"state": patch}, merge=True)
        except GoogleAPICallError as exc:
            raise SessionStoreError(f"Failed to update session {session_id}: {exc}") from exc
        logger.debug("Session %s moved to phase %s", session_id, phase)
        return patch

    def subscribe_state(
        self,
        session_id: str,
        on_update: StateCallback,
        on_error: ErrorCallback | None = None,
    ) -> Callable[[], None]:
        """Watch a session document and push parsed state to `on_update`.

        Returns a callable that stops the subscription.
        """
        ref = self._document(session_id)

        def _on_snapshot(snapshots: list[Any], _changes: Any, _read_time: Any) -> None:
            try:
                snapshot = snapshots[0] if snapshots else None
                if snapshot is None or not snapshot.exists:
                    on_update(None)
                    return
                on_update(_parse_state(snapshot.to_dict()))
            except Exception as exc:  # noqa: BLE001
                logger.exception("Session subscription error for %s", session_id)
                if on_error is not None:
                    on_error(exc)

        watch = ref.on_snapshot(_on_snapshot)
        return watch.unsubscribe

    def _document(self, session_id: str) -> Any:
        if not session_id:
            raise ValueError("session_id must be a non-empty string")
        return self._client.collection(self._collection).document(session_id)


def _parse_state(data: dict[str, Any] | None) -> SessionState | None:
    if not data:
        return None
    state = data.get("state")
    if not state:
        return None
    return SessionState.model_validate(state)
