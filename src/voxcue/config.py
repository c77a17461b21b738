"""Configuration loading utilities for voxcue."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

_INT_KEYS = {"api_port", "workers"}
_BOOL_KEYS = {"english_only_mode"}
_OPTIONAL_STR_KEYS = {"firestore_project"}
_STR_KEYS = {"log_level", "api_host", "sessions_collection"}
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class AppConfig:
    """Application configuration resolved from profile + environment variables."""

    env: str
    log_level: str
    api_host: str
    api_port: int
    workers: int
    english_only_mode: bool
    firestore_project: str | None
    sessions_collection: str


def load_config(env_name: str | None = None, config_dir: Path | None = None) -> AppConfig:
    """Load configuration from `configs/<env>.toml` and environment overrides."""
    env = env_name or os.getenv("VOXCUE_ENV", "dev")
    resolved_dir = config_dir or _default_config_dir()
    profile_path = resolved_dir / f"{env}.toml"

    defaults: dict[str, str | int | bool | None] = {
        "log_level": "INFO",
        "api_host": "127.0.0.1",
        "api_port": 8000,
        "workers": 1,
        "english_only_mode": False,
        "firestore_project": None,
        "sessions_collection": "sessions",
    }
    defaults.update(_load_profile(profile_path))

    log_level = os.getenv("VOXCUE_LOG_LEVEL", str(defaults["log_level"]))
    api_host = os.getenv("VOXCUE_API_HOST", str(defaults["api_host"]))
    api_port = _parse_int("VOXCUE_API_PORT", os.getenv("VOXCUE_API_PORT"), defaults["api_port"])
    workers = _parse_int("VOXCUE_WORKERS", os.getenv("VOXCUE_WORKERS"), defaults["workers"])
    english_only_mode = _parse_bool(
        "VOXCUE_ENGLISH_ONLY_MODE",
        os.getenv("VOXCUE_ENGLISH_ONLY_MODE"),
        defaults["english_only_mode"],
    )
    firestore_project = os.getenv("VOXCUE_FIRESTORE_PROJECT") or defaults["firestore_project"]
    sessions_collection = os.getenv(
        "VOXCUE_SESSIONS_COLLECTION", str(defaults["sessions_collection"])
    )

    return AppConfig(
        env=env,
        log_level=log_level,
        api_host=api_host,
        api_port=api_port,
        workers=workers,
        english_only_mode=english_only_mode,
        firestore_project=(str(firestore_project) if firestore_project else None),
        sessions_collection=sessions_collection,
    )


def _default_config_dir() -> Path:
    return Path(__file__).resolve().parents[2] / "configs"


def _load_profile(path: Path) -> dict[str, str | int | bool | None]:
    if not path.exists():
        return {}

    with path.open("rb") as handle:
        payload = tomllib.load(handle)

    resolved: dict[str, str | int | bool | None] = {}
    for key, raw in payload.items():
        if key in _INT_KEYS:
            resolved[key] = _coerce_int(key, raw)
        elif key in _BOOL_KEYS:
            resolved[key] = _coerce_bool(key, raw)
        elif key in _STR_KEYS or key in _OPTIONAL_STR_KEYS:
            resolved[key] = _coerce_str(key, raw)
    return resolved


def _parse_int(name: str, raw: str | None, default: object) -> int:
    if raw is None:
        return _coerce_int(name, default)
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _parse_bool(name: str, raw: str | None, default: object) -> bool:
    if raw is None:
        return _coerce_bool(name, default)
    return _coerce_bool(name, raw)


def _coerce_int(name: str, value: object) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got type bool")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError as exc:
            raise ValueError(f"{name} must be an integer, got {value!r}") from exc
    raise ValueError(f"{name} must be an integer, got type {type(value).__name__}")


def _coerce_bool(name: str, value: object) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().casefold()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ValueError(f"{name} must be a boolean, got {value!r}")
    raise ValueError(f"{name} must be a boolean, got type {type(value).__name__}")


def _coerce_str(name: str, value: object) -> str:
    if isinstance(value, str):
        return value
    raise ValueError(f"{name} must be a string, got type {type(value).__name__}")
