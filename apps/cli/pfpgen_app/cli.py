"""CLI entrypoints for rendering, brand lookups, key management, and diagnostics."""

from __future__ import annotations

import argparse
import json
from dataclasses import asdict
from pathlib import Path

from pfpgen_core import (
    AppConfig,
    BrandLookupError,
    BrandService,
    InvalidColorError,
    ProfileSession,
    build_doctor_payload,
    load_api_key,
    load_config,
    save_api_key,
    save_config,
)
from pfpgen_core.config import config_path
from pfpgen_core.logging_setup import configure_logging, install_crash_hooks
from pfpgen_renderer import (
    PREVIEW_SIZE,
    VariantMode,
    coerce_hex_input,
    load_sprites,
    parse_hex,
    relative_luminance,
    resolve_variant,
    to_data_uri,
)


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _error(message: str, code: int = 1) -> int:
    _print_json({"success": False, "error": message})
    return code


def _session_from_args(cfg: AppConfig, args: argparse.Namespace) -> ProfileSession:
    sprite_dir = getattr(args, "sprite_dir", None)
    sprites = load_sprites(Path(sprite_dir).expanduser()) if sprite_dir else None
    session = ProfileSession.from_config(cfg, sprites=sprites)

    color = getattr(args, "color", None)
    if color is not None:
        value = coerce_hex_input(color)
        if value is None:
            raise InvalidColorError(f"Expected a 6-digit hex color, got {color!r}")
        session.set_color(value)
    if getattr(args, "variant", None):
        session.set_variant_mode(args.variant)
    if getattr(args, "noise", None) is not None:
        session.set_noise_intensity(args.noise)
    return session


def _write_artifact(artifact, out: str | None, out_dir: str | None) -> Path:
    if out:
        path = Path(out).expanduser()
    else:
        base = Path(out_dir).expanduser() if out_dir else Path.cwd()
        path = base / (artifact.filename or f"pfp_{artifact.size}x{artifact.size}.png")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(artifact.png)
    return path


def _export_payload(session: ProfileSession, artifact, args: argparse.Namespace, cfg: AppConfig) -> dict:
    payload = {
        "success": True,
        "color": session.theme_color,
        "variant_mode": session.variant_mode.value,
        "variant": session.resolved_variant().value,
        "noise_intensity": session.noise_intensity,
        "size": artifact.size,
        "bytes": len(artifact.png),
    }
    if getattr(args, "data_uri", False):
        payload["data_uri"] = to_data_uri(artifact.png)
    else:
        payload["path"] = str(_write_artifact(artifact, args.out, cfg.export.output_dir))
    return payload


def cmd_render(args: argparse.Namespace) -> int:
    cfg = load_config()
    try:
        session = _session_from_args(cfg, args)
    except InvalidColorError as exc:
        return _error(str(exc))

    size = args.size if args.size is not None else cfg.export.default_size
    artifact = session.export(size)
    payload = _export_payload(session, artifact, args, cfg)

    if args.save:
        save_config(session.to_config(cfg))
        payload["config_saved"] = str(config_path())

    _print_json(payload)
    return 0


def cmd_preview(args: argparse.Namespace) -> int:
    cfg = load_config()
    try:
        session = _session_from_args(cfg, args)
    except InvalidColorError as exc:
        return _error(str(exc))

    artifact = session.preview()
    _print_json(_export_payload(session, artifact, args, cfg))
    return 0


def cmd_variant(args: argparse.Namespace) -> int:
    cfg = load_config()
    color = coerce_hex_input(args.color) if args.color else cfg.render.theme_color
    if color is None:
        return _error(f"Expected a 6-digit hex color, got {args.color!r}")
    mode = args.mode or cfg.render.variant_mode

    _print_json(
        {
            "color": color,
            "luminance": relative_luminance(*parse_hex(color)),
            "mode": mode,
            "variant": resolve_variant(mode, color).value,
        }
    )
    return 0


def cmd_brand(args: argparse.Namespace) -> int:
    cfg = load_config()
    service = BrandService(api_base=cfg.brand.api_base, timeout_s=cfg.brand.timeout_s)

    try:
        result = service.lookup(args.query, load_api_key())
    except BrandLookupError as exc:
        return _error(exc.message)

    if not 0 <= args.pick < len(result.colors):
        return _error(f"--pick must be between 0 and {len(result.colors) - 1}")

    try:
        session = _session_from_args(cfg, args)
        status = session.apply_brand(result, index=args.pick)
    except InvalidColorError as exc:
        return _error(str(exc))

    size = args.size if args.size is not None else cfg.export.default_size
    artifact = session.export(size)
    payload = _export_payload(session, artifact, args, cfg)
    payload["status"] = status
    payload["brand"] = {
        "title": result.title,
        "colors": [asdict(c) for c in result.colors],
    }

    if args.save:
        save_config(session.to_config(cfg))
    _print_json(payload)
    return 0


def cmd_key(args: argparse.Namespace) -> int:
    if args.key_cmd == "set":
        status = save_api_key(args.key)
    elif args.key_cmd == "clear":
        status = save_api_key("")
    else:
        key = load_api_key()
        _print_json({"configured": bool(key), "hint": (key[:4] + "…") if key else None})
        return 0
    _print_json({"success": True, "status": status})
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    if args.config_cmd == "reset":
        path = save_config(AppConfig())
        _print_json({"success": True, "path": str(path)})
        return 0
    cfg = load_config()
    _print_json({"path": str(config_path()), "config": asdict(cfg)})
    return 0


def cmd_doctor(_args: argparse.Namespace) -> int:
    cfg = load_config()
    sprites = load_sprites(Path(cfg.render.sprite_dir).expanduser() if cfg.render.sprite_dir else None)
    _print_json(build_doctor_payload(cfg, sprites))
    return 0


def _add_render_options(cmd: argparse.ArgumentParser, with_size: bool = True) -> None:
    cmd.add_argument("--color", default=None, help="Theme color as RRGGBB or #RRGGBB")
    cmd.add_argument("--variant", choices=[m.value for m in VariantMode], default=None)
    cmd.add_argument("--noise", type=int, default=None, help="Noise intensity 0-100")
    if with_size:
        cmd.add_argument("--size", type=int, default=None, help="Output size in pixels, clamped to 20-4096")
    cmd.add_argument("--sprite-dir", default=None, help="Directory holding base_light.png and base_dark.png")
    cmd.add_argument("--out", default=None, help="Output PNG path")
    cmd.add_argument("--data-uri", action="store_true", help="Print a data URI instead of writing a file")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pfpgen", description="Pixel-art profile picture generator")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    render_cmd = sub.add_parser("render", help="Export a profile picture PNG")
    _add_render_options(render_cmd)
    render_cmd.add_argument("--save", action="store_true", help="Persist color/variant/noise to config")
    render_cmd.set_defaults(func=cmd_render)

    preview_cmd = sub.add_parser("preview", help=f"Render the {PREVIEW_SIZE}px preview")
    _add_render_options(preview_cmd, with_size=False)
    preview_cmd.set_defaults(func=cmd_preview)

    variant_cmd = sub.add_parser("variant", help="Show luminance and the resolved sprite variant")
    variant_cmd.add_argument("--color", default=None)
    variant_cmd.add_argument("--mode", choices=[m.value for m in VariantMode], default=None)
    variant_cmd.set_defaults(func=cmd_variant)

    brand_cmd = sub.add_parser("brand", help="Look up brand colors on brand.dev and export")
    brand_cmd.add_argument("query", help="Brand name or domain")
    brand_cmd.add_argument("--pick", type=int, default=0, help="Index of the brand color to use")
    _add_render_options(brand_cmd)
    brand_cmd.add_argument("--save", action="store_true", help="Persist the chosen color to config")
    brand_cmd.set_defaults(func=cmd_brand)

    key_cmd = sub.add_parser("key", help="Manage the brand.dev API key")
    key_sub = key_cmd.add_subparsers(dest="key_cmd", required=True)
    key_set = key_sub.add_parser("set", help="Store an API key")
    key_set.add_argument("key")
    key_sub.add_parser("clear", help="Remove the stored API key")
    key_sub.add_parser("show", help="Show whether a key is configured")
    key_cmd.set_defaults(func=cmd_key)

    config_cmd = sub.add_parser("config", help="Show or reset settings")
    config_sub = config_cmd.add_subparsers(dest="config_cmd", required=True)
    config_sub.add_parser("show")
    config_sub.add_parser("reset")
    config_cmd.set_defaults(func=cmd_config)

    doctor_cmd = sub.add_parser("doctor", help="Print environment and sprite diagnostics")
    doctor_cmd.set_defaults(func=cmd_doctor)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(keep_files=load_config().diagnostics.keep_log_files, console=False, verbose=args.verbose)
    install_crash_hooks()
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
