"""Session state store backed by Firestore."""

from voxcue.sessions.store import (
    SessionStore,
    ensure_anon_auth,
    initial_session_document,
)

__all__ = ["SessionStore", "ensure_anon_auth", "initial_session_document"]
