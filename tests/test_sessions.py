import logging
from typing import Any

import pytest
from google.api_core.exceptions import AlreadyExists, ServiceUnavailable

from voxcue.errors import SessionStoreError
from voxcue.models import SessionState
from voxcue.sessions import SessionStore, ensure_anon_auth, initial_session_document


class FakeSnapshot:
    def __init__(self, data: dict[str, Any] | None) -> None:
        self._data = data

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self) -> dict[str, Any] | None:
        return None if self._data is None else dict(self._data)


class FakeWatch:
    def __init__(self) -> None:
        self.unsubscribed = False

    def unsubscribe(self) -> None:
        self.unsubscribed = True


class FakeDocument:
    def __init__(self, fail: bool = False) -> None:
        self.data: dict[str, Any] | None = None
        self.fail = fail
        self.callbacks: list[Any] = []
        self.watch = FakeWatch()

    def get(self) -> FakeSnapshot:
        if self.fail:
            raise ServiceUnavailable("firestore down")
        return FakeSnapshot(self.data)

    def create(self, data: dict[str, Any]) -> None:
        if self.fail:
            raise ServiceUnavailable("firestore down")
        if self.data is not None:
            raise AlreadyExists("document already exists")
        self.data = data

    def set(self, data: dict[str, Any], merge: bool = False) -> None:
        if self.fail:
            raise ServiceUnavailable("firestore down")
        if merge and self.data is not None:
            self.data = _deep_merge(self.data, data)
        else:
            self.data = data

    def on_snapshot(self, callback: Any) -> FakeWatch:
        self.callbacks.append(callback)
        return self.watch

    def push(self) -> None:
        for callback in self.callbacks:
            callback([FakeSnapshot(self.data)], [], None)


class FakeCollection:
    def __init__(self, documents: dict[str, FakeDocument]) -> None:
        self._documents = documents

    def document(self, document_id: str) -> FakeDocument:
        return self._documents.setdefault(document_id, FakeDocument())


class FakeClient:
    def __init__(self) -> None:
        self.collections: dict[str, dict[str, FakeDocument]] = {}

    def collection(self, name: str) -> FakeCollection:
        return FakeCollection(self.collections.setdefault(name, {}))

    def doc(self, collection: str, document_id: str) -> FakeDocument:
        return self.collection(collection).document(document_id)


def _deep_merge(base: dict[str, Any], patch: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in patch.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


@pytest.fixture
def client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def store(client: FakeClient) -> SessionStore:
    return SessionStore(client, clock=lambda: 1_700_000_000_000)


def test_initial_session_document_uses_wire_names() -> None:
    document = initial_session_document(updated_at=42).model_dump(by_alias=True)

    assert document == {
        "state": {
            "phase": "idle",
            "emotion": "calm",
            "energy": 0.3,
            "lastAudioUrl": None,
            "lang": "en",
            "updatedAt": 42,
        },
        "metrics": {"turns": 0, "whQuestions": 0, "sessionMinutes": 0, "ci": 0},
    }


def test_ensure_state_creates_missing_document(store: SessionStore, client: FakeClient) -> None:
    assert store.ensure_state("demo-session") is True

    data = client.doc("sessions", "demo-session").data
    assert data is not None
    assert data["state"]["phase"] == "idle"
    assert data["state"]["updatedAt"] == 1_700_000_000_000
    assert data["metrics"]["turns"] == 0


def test_ensure_state_keeps_existing_document(store: SessionStore, client: FakeClient) -> None:
    existing = {"state": {"phase": "speaking", "updatedAt": 1}, "metrics": {"turns": 5}}
    client.doc("sessions", "demo-session").data = existing

    assert store.ensure_state("demo-session") is True
    assert client.doc("sessions", "demo-session").data == existing


def test_ensure_state_logs_store_failures(client: FakeClient, caplog) -> None:
    client.collections["sessions"] = {"broken": FakeDocument(fail=True)}
    store = SessionStore(client)

    with caplog.at_level(logging.ERROR, logger="voxcue.sessions.store"):
        assert store.ensure_state("broken") is False

    assert "Error ensuring state for session broken" in caplog.text


def test_get_state(store: SessionStore) -> None:
    assert store.get_state("missing") is None

    store.ensure_state("demo-session")
    state = store.get_state("demo-session")

    assert isinstance(state, SessionState)
    assert state.phase == "idle"
    assert state.updated_at == 1_700_000_000_000


def test_get_state_wraps_store_errors(client: FakeClient) -> None:
    client.collections["sessions"] = {"broken": FakeDocument(fail=True)}

    with pytest.raises(SessionStoreError, match="Failed to read session broken"):
        SessionStore(client).get_state("broken")


def test_patch_phase_merges_state(store: SessionStore, client: FakeClient) -> None:
    store.ensure_state("demo-session")

    patch = store.patch_phase(
        "demo-session", "speaking", last_audio_url="https://example.com/a.mp3"
    )

    assert patch == {
        "phase": "speaking",
        "updatedAt": 1_700_000_000_000,
        "lastAudioUrl": "https://example.com/a.mp3",
    }
    data = client.doc("sessions", "demo-session").data
    assert data["state"]["phase"] == "speaking"
    assert data["state"]["emotion"] == "calm"
    assert data["state"]["lastAudioUrl"] == "https://example.com/a.mp3"
    assert data["metrics"]["turns"] == 0


def test_patch_phase_rejects_bad_input(store: SessionStore) -> None:
    with pytest.raises(ValueError, match="Unknown session state field: mood"):
        store.patch_phase("demo-session", "idle", mood="grumpy")
    with pytest.raises(ValueError, match="Invalid session state patch"):
        store.patch_phase("demo-session", "dancing")  # type: ignore[arg-type]
    with pytest.raises(ValueError, match="session_id must be a non-empty string"):
        store.patch_phase("", "idle")


def test_patch_phase_wraps_store_errors(client: FakeClient) -> None:
    client.collections["sessions"] = {"broken": FakeDocument(fail=True)}

    with pytest.raises(SessionStoreError, match="Failed to update session broken"):
        SessionStore(client).patch_phase("broken", "thinking")


def test_subscribe_state_delivers_updates(store: SessionStore, client: FakeClient) -> None:
    updates: list[SessionState | None] = []
    unsubscribe = store.subscribe_state("demo-session", updates.append)
    document = client.doc("sessions", "demo-session")

    document.push()
    store.ensure_state("demo-session")
    document.push()
    store.patch_phase("demo-session", "listening")
    document.push()

    assert updates[0] is None
    assert updates[1] is not None and updates[1].phase == "idle"
    assert updates[2] is not None and updates[2].phase == "listening"

    unsubscribe()
    assert document.watch.unsubscribed is True


def test_subscribe_state_without_state_field(store: SessionStore, client: FakeClient) -> None:
    updates: list[SessionState | None] = []
    store.subscribe_state("demo-session", updates.append)
    document = client.doc("sessions", "demo-session")
    document.data = {"metrics": {"turns": 1}}

    document.push()

    assert updates == [None]


def test_subscribe_state_forwards_errors(store: SessionStore, client: FakeClient) -> None:
    updates: list[SessionState | None] = []
    errors: list[Exception] = []
    store.subscribe_state("demo-session", updates.append, errors.append)
    document = client.doc("sessions", "demo-session")
    document.data = {"state": {"phase": "dancing"}}

    document.push()

    assert updates == []
    assert len(errors) == 1


def test_custom_collection(client: FakeClient) -> None:
    store = SessionStore(client, "rooms")

    store.ensure_state("room-1")

    assert store.collection == "rooms"
    assert "room-1" in client.collections["rooms"]


def test_ensure_anon_auth_logs(caplog) -> None:
    with caplog.at_level(logging.INFO, logger="voxcue.sessions.store"):
        ensure_anon_auth()

    assert "no anonymous sign-in required" in caplog.text


def test_from_config_builds_firestore_client(monkeypatch) -> None:
    from voxcue.config import AppConfig

    created: dict[str, Any] = {}

    def fake_client(project: str | None = None) -> FakeClient:
        created["project"] = project
        return FakeClient()

    monkeypatch.setattr("google.cloud.firestore.Client", fake_client)
    config = AppConfig(
        env="test",
        log_level="INFO",
        api_host="127.0.0.1",
        api_port=8000,
        workers=1,
        english_only_mode=False,
        firestore_project="demo-project",
        sessions_collection="rooms",
    )

    store = SessionStore.from_config(config)

    assert created == {"project": "demo-project"}
    assert store.collection == "rooms"


def test_ensure_state_does_not_overwrite_concurrent_create(client: FakeClient) -> None:
    first = SessionStore(client, clock=lambda: 1)
    second = SessionStore(client, clock=lambda: 2)

    assert first.ensure_state("demo-session") is True
    first.patch_phase("demo-session", "speaking")
    assert second.ensure_state("demo-session") is True

    state = client.doc("sessions", "demo-session").data["state"]
    assert state["phase"] == "speaking"
    assert state["updatedAt"] == 1
