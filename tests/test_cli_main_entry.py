from __future__ import annotations

import runpy
from pathlib import Path

import pfpgen_app.__main__ as app_main


def test_main_defaults_to_render(monkeypatch) -> None:
    calls: list[list[str]] = []
    monkeypatch.setattr(app_main, "_cli_main", lambda argv=None: calls.append(list(argv or [])) or 0)

    rc = app_main.main([])
    assert rc == 0
    assert calls == [["render"]]


def test_main_passes_through_args(monkeypatch) -> None:
    calls: list[list[str]] = []
    monkeypatch.setattr(app_main, "_cli_main", lambda argv=None: calls.append(list(argv or [])) or 0)

    rc = app_main.main(["variant", "--color", "#000000"])
    assert rc == 0
    assert calls == [["variant", "--color", "#000000"]]


def test_main_module_runpath_without_package_context() -> None:
    main_path = Path(__file__).resolve().parents[1] / "apps" / "cli" / "pfpgen_app" / "__main__.py"
    result = runpy.run_path(str(main_path))
    assert "main" in result
