"""Command line entrypoint for inspecting and editing persisted settings."""

from __future__ import annotations
import argparse
import asyncio
import json
import logging
import sys
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from core.filesystem import settings_file_path
from domain.models import ColorMode, SendMode, ThemeMode
from i18n import AppLocale, match_locale, t, tp

from .errors import SettingsError
from .settings_store import SettingsStore

_REMOVE = "-"


@dataclass(frozen=True)
class _Setting:
    label_key: str
    getter: Callable[[SettingsStore], Any]
    setter: Optional[Callable[[SettingsStore, Any], Any]] = None
    parse: Callable[[str], Any] = str
    removable: bool = False


def _parse_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"Expected a boolean, got {raw!r}")


def _enum_parser(enum_cls):
    def parse(raw: str):
        try:
            return enum_cls(raw.strip().lower())
        except ValueError:
            names = ", ".join(v.value for v in enum_cls)
            raise ValueError(f"Expected one of {names}, got {raw!r}") from None

    return parse


def _parse_locale(raw: str) -> AppLocale:
    locale = match_locale(raw)
    if locale is None:
        raise ValueError(f"Unsupported locale {raw!r}")
    return locale


def _parse_port(raw: str) -> int:
    port = int(raw)
    if not 0 < port < 65536:
        raise ValueError(f"Port out of range: {port}")
    return port


def _plain(value: Any) -> Any:
    if isinstance(value, (ThemeMode, ColorMode, SendMode)):
        return value.value
    if isinstance(value, AppLocale):
        return value.language_tag
    return value


SETTINGS: Dict[str, _Setting] = {
    "alias": _Setting("settings.alias", SettingsStore.get_alias, SettingsStore.set_alias),
    "theme": _Setting(
        "settings.theme", SettingsStore.get_theme, SettingsStore.set_theme, _enum_parser(ThemeMode)
    ),
    "color": _Setting(
        "settings.color",
        SettingsStore.get_color_mode,
        SettingsStore.set_color_mode,
        _enum_parser(ColorMode),
    ),
    "locale": _Setting(
        "settings.locale",
        SettingsStore.get_locale,
        SettingsStore.set_locale,
        _parse_locale,
        removable=True,
    ),
    "port": _Setting("settings.port", SettingsStore.get_port, SettingsStore.set_port, _parse_port),
    "multicast-group": _Setting(
        "settings.multicastGroup",
        SettingsStore.get_multicast_group,
        SettingsStore.set_multicast_group,
    ),
    "destination": _Setting(
        "settings.destination",
        SettingsStore.get_destination,
        SettingsStore.set_destination,
        removable=True,
    ),
    "https": _Setting("settings.https", SettingsStore.is_https, SettingsStore.set_https, _parse_bool),
    "send-mode": _Setting(
        "settings.sendMode",
        SettingsStore.get_send_mode,
        SettingsStore.set_send_mode,
        _enum_parser(SendMode),
    ),
    "quick-save": _Setting(
        "settings.quickSave", SettingsStore.is_quick_save, SettingsStore.set_quick_save, _parse_bool
    ),
    "save-to-gallery": _Setting(
        "settings.saveToGallery",
        SettingsStore.is_save_to_gallery,
        SettingsStore.set_save_to_gallery,
        _parse_bool,
    ),
    "minimize-to-tray": _Setting(
        "settings.minimizeToTray",
        SettingsStore.is_minimize_to_tray,
        SettingsStore.set_minimize_to_tray,
        _parse_bool,
    ),
    "launch-at-startup": _Setting(
        "settings.launchAtStartup",
        SettingsStore.is_launch_at_startup,
        SettingsStore.set_launch_at_startup,
        _parse_bool,
    ),
    "auto-start-launch-minimized": _Setting(
        "settings.autoStartLaunchMinimized",
        SettingsStore.is_auto_start_launch_minimized,
        SettingsStore.set_auto_start_launch_minimized,
        _parse_bool,
    ),
    "save-window-placement": _Setting(
        "settings.saveWindowPlacement",
        SettingsStore.get_save_window_placement,
        SettingsStore.set_save_window_placement,
        _parse_bool,
    ),
    "show-token": _Setting("settings.showToken", SettingsStore.get_show_token),
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="localsend-settings", description="LocalSend settings store")
    p.add_argument("--settings-dir", type=str, help="Override the settings directory")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="Print all settings")
    show.add_argument("--json", action="store_true", help="Output JSON")

    get = sub.add_parser("get", help="Print one setting")
    get.add_argument("name", choices=sorted(SETTINGS))

    put = sub.add_parser("set", help="Change one setting")
    put.add_argument(
        "name", choices=sorted(name for name, s in SETTINGS.items() if s.setter is not None)
    )
    put.add_argument("value", help=f"New value ('{_REMOVE}' clears locale / destination)")
    return p.parse_args(argv)


def _print_settings(store: SettingsStore) -> None:
    for setting in SETTINGS.values():
        value = _plain(setting.getter(store))
        if value is None and setting.label_key == "settings.locale":
            value = t("settings.locale.system")
        print(f"  {t(setting.label_key)}: {value}")

    dims = store.get_window_last_dimensions()
    size = f"{dims.size.width:g} x {dims.size.height:g}" if dims.size else "-"
    position = f"{dims.position.dx:g}, {dims.position.dy:g}" if dims.position else "-"
    print(f"  {t('settings.windowSize')}: {size}")
    print(f"  {t('settings.windowPosition')}: {position}")
    print(f"  {t('settings.certificateHash')}: {store.get_security_context().certificate_hash}")
    count = len(store.get_receive_history())
    print(f"  {tp('history.count.one', 'history.count.other', count)}")


async def _run(args: argparse.Namespace) -> int:
    path = settings_file_path(args.settings_dir) if args.settings_dir else None
    store = await SettingsStore.initialize(path=path)

    if args.command == "show":
        if args.json:
            print(json.dumps(store.snapshot(), indent=2, ensure_ascii=False))
        else:
            _print_settings(store)
        return 0

    setting = SETTINGS[args.name]
    if args.command == "get":
        value = _plain(setting.getter(store))
        print("" if value is None else value)
        return 0

    if args.value == _REMOVE and setting.removable:
        value = None
    else:
        try:
            value = setting.parse(args.value)
        except ValueError as e:
            print(f"error: {args.name}: {e}", file=sys.stderr)
            return 2
    await setting.setter(store, value)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return asyncio.run(_run(args))
    except SettingsError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
