"""Doctor payload for support and troubleshooting."""

from __future__ import annotations

import platform
import re
from dataclasses import asdict
from datetime import datetime, timezone
from importlib import metadata
from typing import Any

from pfpgen_renderer import SpriteSet, resolve_variant

from .config import AppConfig, config_path
from .credentials import API_KEY_ENV, has_stored_key
from .logging_setup import log_dir


_SECRET_RE = re.compile(r"(token|secret|password|apikey|api_key|auth)", re.IGNORECASE)


def redact(value: Any) -> Any:
    if isinstance(value, dict):
        out: dict[str, Any] = {}
        for k, v in value.items():
            if _SECRET_RE.search(k):
                out[k] = "***REDACTED***"
            else:
                out[k] = redact(v)
        return out
    if isinstance(value, list):
        return [redact(v) for v in value]
    return value


def _dist_version(name: str) -> str | None:
    try:
        return metadata.version(name)
    except metadata.PackageNotFoundError:
        return None


def build_doctor_payload(cfg: AppConfig, sprites: SpriteSet) -> dict[str, Any]:
    return {
        "ts_utc": datetime.now(timezone.utc).isoformat(),
        "platform": platform.platform(),
        "python": platform.python_version(),
        "libraries": {
            "pillow": _dist_version("Pillow"),
            "numpy": _dist_version("numpy"),
            "certifi": _dist_version("certifi"),
        },
        "config_path": str(config_path()),
        "log_dir": str(log_dir()),
        "config": redact(asdict(cfg)),
        "sprites": {
            "light": {"ready": sprites.light.is_ready, "source": sprites.light.source},
            "dark": {"ready": sprites.dark.is_ready, "source": sprites.dark.source},
        },
        "resolved_variant": resolve_variant(cfg.render.variant_mode, cfg.render.theme_color).value,
        "api_key": {"stored": has_stored_key(), "env_var": API_KEY_ENV},
    }
