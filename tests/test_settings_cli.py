import asyncio
import json
from pathlib import Path

import pytest

import i18n
from i18n import AppLocale
from persistence import cli

from factories import make_history_entry, open_store


@pytest.fixture
def run_cli(tmp_path: Path, capsys):
    def run(*argv: str):
        code = cli.main(["--settings-dir", str(tmp_path), *argv])
        out = capsys.readouterr()
        return code, out.out, out.err

    return run


def test_set_then_get(run_cli):
    assert run_cli("set", "theme", "dark")[0] == 0
    code, out, _ = run_cli("get", "theme")
    assert code == 0
    assert out.strip() == "dark"


def test_show_json_contains_seeded_values(run_cli, tmp_path: Path):
    code, out, _ = run_cli("show", "--json")
    assert code == 0
    data = json.loads(out)
    assert data["version"] == 1
    assert data["port"] == 53317
    assert len(data["certificate_hash"]) == 64
    assert (tmp_path / "shared_preferences.json").exists()


def test_dash_removes_destination(run_cli):
    run_cli("set", "destination", "/tmp/in")
    assert run_cli("get", "destination")[1].strip() == "/tmp/in"
    run_cli("set", "destination", "-")
    assert run_cli("get", "destination")[1].strip() == ""


def test_invalid_value_exit_code(run_cli):
    code, _, err = run_cli("set", "port", "70000")
    assert code == 2
    assert "port" in err
    code, _, err = run_cli("set", "https", "maybe")
    assert code == 2


def test_corrupt_store_reports_error(run_cli, tmp_path: Path, monkeypatch):
    from persistence import SystemPlatform, TargetPlatform
    from persistence import settings_store

    monkeypatch.setattr(
        settings_store, "SystemPlatform", lambda: SystemPlatform(TargetPlatform.LINUX)
    )
    (tmp_path / "shared_preferences.json").write_text("{broken", encoding="utf-8")
    code, _, err = run_cli("get", "alias")
    assert code == 2
    assert err.startswith("error:")


def test_show_lists_geometry_certificate_and_history(run_cli, tmp_path: Path):
    store = open_store(tmp_path / "shared_preferences.json")
    asyncio.run(store.set_locale(AppLocale.EN))
    asyncio.run(store.set_window_width(800))
    asyncio.run(store.set_window_height(600.5))
    asyncio.run(store.set_window_offset_x(10))
    asyncio.run(store.set_window_offset_y(-20))
    asyncio.run(store.set_receive_history([make_history_entry(), make_history_entry()]))

    code, out, _ = run_cli("show")
    assert code == 0
    assert "Window size: 800 x 600.5" in out
    assert "Window position: 10, -20" in out
    assert f"Certificate hash: {1:064x}" in out
    assert "2 received items" in out


def test_show_without_geometry_or_locale(run_cli, tmp_path: Path, monkeypatch):
    monkeypatch.setattr(i18n, "device_locale_tag", lambda: "en_US")
    store = open_store(tmp_path / "shared_preferences.json")
    asyncio.run(store.set_receive_history([make_history_entry()]))

    code, out, _ = run_cli("show")
    assert code == 0
    lines = out.splitlines()
    assert "  Window size: -" in lines
    assert "  Language: System" in lines
    assert "  Window position: -" in lines
    assert "1 received item" in out
