import asyncio

import pytest

from config import settings
from domain.models import ColorMode, SendMode, ThemeMode
from i18n import AppLocale
from persistence import keys

from factories import FakePlatform, open_store


def run(coro):
    return asyncio.run(coro)


def test_scalar_defaults(store):
    assert store.get_theme() is ThemeMode.SYSTEM
    assert store.get_locale() is None
    assert store.get_port() == settings.DEFAULT_PORT == 53317
    assert store.get_multicast_group() == settings.DEFAULT_MULTICAST_GROUP
    assert store.get_destination() is None
    assert store.is_https() is True
    assert store.get_send_mode() is SendMode.SINGLE
    assert store.is_save_to_gallery() is True
    assert store.is_quick_save() is False
    assert store.is_minimize_to_tray() is False
    assert store.is_launch_at_startup() is False
    assert store.is_auto_start_launch_minimized() is True
    assert store.get_save_window_placement() is True
    assert store.get_receive_history() == []


@pytest.mark.parametrize(
    "setter, getter, value",
    [
        ("set_alias", "get_alias", "Strong Pumpkin"),
        ("set_theme", "get_theme", ThemeMode.DARK),
        ("set_theme", "get_theme", ThemeMode.LIGHT),
        ("set_color_mode", "get_color_mode", ColorMode.YARU),
        ("set_color_mode", "get_color_mode", ColorMode.SYSTEM),
        ("set_locale", "get_locale", AppLocale.PT_BR),
        ("set_port", "get_port", 8080),
        ("set_multicast_group", "get_multicast_group", "224.0.0.200"),
        ("set_destination", "get_destination", "/home/user/Downloads"),
        ("set_https", "is_https", False),
        ("set_send_mode", "get_send_mode", SendMode.LINK),
        ("set_save_to_gallery", "is_save_to_gallery", False),
        ("set_quick_save", "is_quick_save", True),
        ("set_minimize_to_tray", "is_minimize_to_tray", True),
        ("set_launch_at_startup", "is_launch_at_startup", True),
        ("set_auto_start_launch_minimized", "is_auto_start_launch_minimized", False),
        ("set_save_window_placement", "get_save_window_placement", False),
    ],
)
def test_setter_getter_roundtrip(store, setter, getter, value):
    run(getattr(store, setter)(value))
    assert getattr(store, getter)() == value


def test_writes_are_durable_across_restart(store, settings_path, desktop, catalog):
    run(store.set_theme(ThemeMode.DARK))
    run(store.set_port(50000))
    run(store.set_quick_save(True))

    restarted = open_store(settings_path, platform=desktop, locale_catalog=catalog)
    assert restarted.get_theme() is ThemeMode.DARK
    assert restarted.get_port() == 50000
    assert restarted.is_quick_save() is True


def test_enums_are_persisted_by_name(store):
    run(store.set_theme(ThemeMode.LIGHT))
    run(store.set_send_mode(SendMode.MULTIPLE))
    assert store.backend.get_string(keys.THEME) == "light"
    assert store.backend.get_string(keys.SEND_MODE) == "multiple"


def test_unknown_enum_names_fall_back_to_default(store):
    run(store.backend.set_string(keys.THEME, "sepia"))
    run(store.backend.set_string(keys.SEND_MODE, "broadcast"))
    run(store.backend.set_string(keys.COLOR, "neon"))
    assert store.get_theme() is ThemeMode.SYSTEM
    assert store.get_send_mode() is SendMode.SINGLE
    assert store.get_color_mode() is ColorMode.LOCALSEND


def test_color_mode_read_default_on_android(settings_path, catalog):
    from persistence import TargetPlatform

    store = open_store(settings_path, platform=FakePlatform(TargetPlatform.ANDROID), locale_catalog=catalog)
    run(store.backend.remove(keys.COLOR))
    assert store.get_color_mode() is ColorMode.SYSTEM


def test_set_locale_none_removes_key(store):
    run(store.set_locale(AppLocale.DE))
    assert store.backend.get_string(keys.LOCALE) == "de"
    run(store.set_locale(None))
    assert store.get_locale() is None
    assert not store.backend.contains(keys.LOCALE)


def test_unknown_locale_tag_reads_as_none(store):
    run(store.backend.set_string(keys.LOCALE, "tlh"))
    assert store.get_locale() is None


def test_set_destination_none_removes_key(store):
    run(store.set_destination("/tmp/incoming"))
    run(store.set_destination(None))
    assert store.get_destination() is None
    assert not store.backend.contains(keys.DESTINATION)


def test_alias_falls_back_to_generated_name_without_persisting(store):
    run(store.backend.remove(keys.ALIAS))
    assert store.get_alias() == "Nice Banana"
    assert not store.backend.contains(keys.ALIAS)


def test_empty_alias_is_kept(store):
    run(store.set_alias(""))
    assert store.get_alias() == ""
    assert store.get_alias() == ""
    assert store.backend.get_string(keys.ALIAS) == ""


def test_reads_see_external_backend_writes(store):
    run(store.backend.set_int(keys.PORT, 1234))
    assert store.get_port() == 1234
    run(store.backend.set_bool(keys.HTTPS, False))
    assert store.is_https() is False


def test_save_window_placement_forced_off_on_wayland(settings_path, catalog):
    wayland = FakePlatform(wayland=True)
    store = open_store(settings_path, platform=wayland, locale_catalog=catalog)
    run(store.set_save_window_placement(True))
    assert store.get_save_window_placement() is False
    # The stored flag is ignored, not overwritten
    assert store.backend.get_bool(keys.SAVE_WINDOW_PLACEMENT) is True


def test_concurrent_setters_on_different_keys(store):
    async def write_all():
        await asyncio.gather(
            store.set_theme(ThemeMode.DARK),
            store.set_port(40000),
            store.set_alias("Fast Lemon"),
            store.set_https(False),
        )

    run(write_all())
    assert store.get_theme() is ThemeMode.DARK
    assert store.get_port() == 40000
    assert store.get_alias() == "Fast Lemon"
    assert store.is_https() is False


def test_snapshot_is_json_friendly(store):
    import json

    run(store.set_locale(AppLocale.ZH_CN))
    snap = store.snapshot()
    assert snap["locale"] == "zh-CN"
    assert snap["theme"] == "system"
    assert snap["window_size"] is None
    assert snap["certificate_hash"] == f"{1:064x}"
    assert "private" not in json.dumps(snap).lower()
