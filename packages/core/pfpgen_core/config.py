"""Persistent app settings schema and load/save helpers."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from pfpgen_renderer import MAX_EXPORT_SIZE, MIN_EXPORT_SIZE, PREVIEW_SIZE, VariantMode, is_valid_hex, normalize_hex


CONFIG_VERSION = 1
DEFAULT_THEME_COLOR = "#3b82f6"
DEFAULT_NOISE_INTENSITY = 18


@dataclass
class RenderConfig:
    theme_color: str = DEFAULT_THEME_COLOR
    variant_mode: str = "auto"
    noise_intensity: int = DEFAULT_NOISE_INTENSITY
    preview_size: int = PREVIEW_SIZE
    sprite_dir: str | None = None


@dataclass
class ExportConfig:
    default_size: int = 512
    output_dir: str | None = None


@dataclass
class BrandConfig:
    api_base: str = "https://api.brand.dev/v1"
    timeout_s: int = 15
    last_brand: str | None = None


@dataclass
class DiagnosticsConfig:
    keep_log_files: int = 7


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    render: RenderConfig = field(default_factory=RenderConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    brand: BrandConfig = field(default_factory=BrandConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)


def config_root() -> Path:
    override = os.environ.get("PFPGEN_CONFIG_DIR", "").strip()
    if override:
        return Path(override).expanduser()
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "pfpgen"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "pfpgen"
    return Path.home() / ".config" / "pfpgen"


def config_path() -> Path:
    return config_root() / "config.json"


def _merge(dataclass_type, raw: Any):
    defaults = dataclass_type()  # type: ignore[misc]
    if not isinstance(raw, dict):
        return defaults
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _clamp_int(value: Any, low: int, high: int, fallback: int) -> int:
    try:
        return max(low, min(high, int(value)))
    except (TypeError, ValueError):
        return fallback


def _normalize_render(cfg: AppConfig) -> None:
    render = cfg.render
    color = str(render.theme_color or "")
    if not color.startswith("#"):
        color = "#" + color
    render.theme_color = normalize_hex(color) if is_valid_hex(color) else DEFAULT_THEME_COLOR
    if not isinstance(render.variant_mode, str) or render.variant_mode not in {m.value for m in VariantMode}:
        render.variant_mode = VariantMode.AUTO.value
    render.noise_intensity = _clamp_int(render.noise_intensity, 0, 100, DEFAULT_NOISE_INTENSITY)
    render.preview_size = _clamp_int(render.preview_size, MIN_EXPORT_SIZE, MAX_EXPORT_SIZE, PREVIEW_SIZE)


def _normalize_export(cfg: AppConfig) -> None:
    cfg.export.default_size = _clamp_int(cfg.export.default_size, MIN_EXPORT_SIZE, MAX_EXPORT_SIZE, 512)


def _normalize_brand(cfg: AppConfig) -> None:
    cfg.brand.api_base = str(cfg.brand.api_base or BrandConfig.api_base).rstrip("/")
    cfg.brand.timeout_s = _clamp_int(cfg.brand.timeout_s, 1, 120, 15)


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return AppConfig()
    if not isinstance(raw, dict):
        return AppConfig()

    cfg = AppConfig(
        config_version=_clamp_int(raw.get("config_version"), 1, CONFIG_VERSION, CONFIG_VERSION),
        render=_merge(RenderConfig, raw.get("render")),
        export=_merge(ExportConfig, raw.get("export")),
        brand=_merge(BrandConfig, raw.get("brand")),
        diagnostics=_merge(DiagnosticsConfig, raw.get("diagnostics")),
    )

    _normalize_render(cfg)
    _normalize_export(cfg)
    _normalize_brand(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
