"""Local storage for the brand.dev API key."""

from __future__ import annotations

import json
import os
from pathlib import Path

from .config import config_root
from .logging_setup import get_logger


API_KEY_ENV = "PFPGEN_BRANDDEV_KEY"
_STORAGE_KEY = "pfpgen_branddev_key"

logger = get_logger("credentials")


def credentials_path() -> Path:
    return config_root() / "credentials.json"


def _read_store(path: Path) -> dict[str, str]:
    if not path.exists():
        return {}
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        logger.warning("credential store unreadable", extra={"event": "credentials_unreadable"})
        return {}
    return raw if isinstance(raw, dict) else {}


def load_api_key(path: Path | None = None) -> str:
    env_key = os.environ.get(API_KEY_ENV, "").strip()
    if env_key:
        return env_key
    store = _read_store(path or credentials_path())
    return str(store.get(_STORAGE_KEY, "") or "")


def has_stored_key(path: Path | None = None) -> bool:
    return bool(_read_store(path or credentials_path()).get(_STORAGE_KEY))


def save_api_key(key: str, path: Path | None = None) -> str:
    """Persist or remove the key; returns the status text shown to the user."""
    path = path or credentials_path()
    key = key.strip()
    store = _read_store(path)

    if key:
        store[_STORAGE_KEY] = key
        status = "Key saved"
    else:
        store.pop(_STORAGE_KEY, None)
        status = "Key removed"

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(store, indent=2, sort_keys=True), encoding="utf-8")
    try:
        path.chmod(0o600)
    except OSError:
        logger.debug("could not restrict credential file permissions", extra={"event": "credentials_chmod_failed"})

    logger.info(status.lower(), extra={"event": "credentials_updated"})
    return status
