"""Locale catalog: supported locales, active-locale switching and translation lookup.

The settings store only needs two entry points from here during startup:
``use_device_locale()`` and ``set_locale_raw(tag)``. Both must run before an
alias is generated so the alias word lists match the active language.

Design decisions / assumptions:
 - A *default locale* (``"en"``) always exists and is consulted as fallback.
 - Missing key after fallback returns the key itself (easy to spot) rather than raising.
 - Plural helper expects two keys: singular_key, plural_key.
 - Locale tags are matched case-insensitively with ``_`` and ``-`` treated alike;
   a region we do not ship falls back to the first locale of the same language.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Any, Optional

from config import settings

__all__ = [
    "AppLocale",
    "register_catalog",
    "set_locale",
    "get_locale",
    "current_app_locale",
    "match_locale",
    "device_locale_tag",
    "use_device_locale",
    "set_locale_raw",
    "t",
    "translate",
    "tp",
    "translate_plural",
]


class AppLocale(Enum):
    EN = "en"
    DE = "de"
    ES = "es"
    FR = "fr"
    IT = "it"
    JA = "ja"
    KO = "ko"
    NL = "nl"
    PL = "pl"
    PT_BR = "pt-BR"
    RU = "ru"
    TR = "tr"
    UK = "uk"
    ZH_CN = "zh-CN"
    ZH_TW = "zh-TW"

    @property
    def language_tag(self) -> str:
        return self.value

    @property
    def language_code(self) -> str:
        return self.value.split("-", 1)[0]


_DEFAULT_LOCALE = settings.DEFAULT_LOCALE
_current_locale = _DEFAULT_LOCALE

_catalogs: Dict[str, Dict[str, str]] = {}


def register_catalog(locale: str, catalog: Dict[str, str]) -> None:
    """Register or extend a catalog for a locale.

    Existing keys are updated (last registration wins). Empty catalogs allowed.
    """
    existing = _catalogs.setdefault(locale, {})
    existing.update(catalog)


def set_locale(locale: str) -> None:
    global _current_locale
    _current_locale = locale


def get_locale() -> str:
    return _current_locale


def current_app_locale() -> AppLocale:
    return match_locale(_current_locale) or AppLocale.EN


def _normalize(tag: str) -> str:
    return tag.strip().replace("_", "-").split(".", 1)[0].lower()


def match_locale(tag: Optional[str]) -> Optional[AppLocale]:
    """Return the supported locale for ``tag`` (exact tag, then same language) or None."""
    if not tag:
        return None
    wanted = _normalize(tag)
    for locale in AppLocale:
        if locale.language_tag.lower() == wanted:
            return locale
    language = wanted.split("-", 1)[0]
    for locale in AppLocale:
        if locale.language_code.lower() == language:
            return locale
    return None


def device_locale_tag() -> str:
    from PyQt6.QtCore import QLocale  # local import

    return QLocale.system().name()


def use_device_locale() -> AppLocale:
    """Activate the device locale (English when the device language is unsupported)."""
    locale = match_locale(device_locale_tag()) or AppLocale.EN
    set_locale(locale.language_tag)
    return locale


def set_locale_raw(tag: str) -> AppLocale:
    """Activate a persisted language tag (English when the tag is unsupported)."""
    locale = match_locale(tag) or AppLocale.EN
    set_locale(locale.language_tag)
    return locale


def _lookup(locale: str, key: str) -> Optional[str]:
    catalog = _catalogs.get(locale)
    if not catalog:
        return None
    return catalog.get(key)


def translate(key: str, **variables: Any) -> str:
    """Translate a key using the current locale with fallback.

    Variables are interpolated using ``str.format``. Missing variables raise ``KeyError``
    to surface programmer error.
    """
    text = _lookup(_current_locale, key)
    if text is None and "-" in _current_locale:
        text = _lookup(_current_locale.split("-", 1)[0], key)
    if text is None and _current_locale != _DEFAULT_LOCALE:
        text = _lookup(_DEFAULT_LOCALE, key)
    if text is None:
        text = key  # final fallback
    needs_format = "{" in text and "}" in text
    try:
        if needs_format:
            return text.format(**variables)
        return text
    except KeyError as e:
        raise KeyError(f"Missing interpolation variable {e.args[0]!r} for key '{key}'") from e


# Short alias commonly used in UI code.
t = translate


def translate_plural(singular_key: str, plural_key: str, n: int, **variables: Any) -> str:
    """Choose ``singular_key`` when ``n == 1`` else ``plural_key``; ``n`` is passed through."""
    chosen = singular_key if n == 1 else plural_key
    if "n" not in variables:
        variables["n"] = n
    return translate(chosen, **variables)


# Short alias
tp = translate_plural


register_catalog(
    _DEFAULT_LOCALE,
    {
        "settings.alias": "Alias",
        "settings.theme": "Theme",
        "settings.color": "Color",
        "settings.locale": "Language",
        "settings.locale.system": "System",
        "settings.port": "Port",
        "settings.multicastGroup": "Multicast group",
        "settings.destination": "Destination",
        "settings.https": "Encryption",
        "settings.sendMode": "Send mode",
        "settings.quickSave": "Quick save",
        "settings.saveToGallery": "Save media to gallery",
        "settings.minimizeToTray": "Minimize to tray",
        "settings.launchAtStartup": "Autostart after login",
        "settings.autoStartLaunchMinimized": "Start hidden",
        "settings.saveWindowPlacement": "Save window placement",
        "settings.showToken": "Show token",
        "settings.windowSize": "Window size",
        "settings.windowPosition": "Window position",
        "settings.certificateHash": "Certificate hash",
        "history.count.one": "{n} received item",
        "history.count.other": "{n} received items",
    },
)

register_catalog(
    "de",
    {
        "settings.alias": "Alias",
        "settings.theme": "Design",
        "settings.color": "Farbe",
        "settings.locale": "Sprache",
        "settings.locale.system": "System",
        "settings.port": "Port",
        "settings.multicastGroup": "Multicast-Gruppe",
        "settings.destination": "Zielordner",
        "settings.https": "Verschlüsselung",
        "settings.sendMode": "Sendemodus",
        "settings.quickSave": "Schnellspeichern",
        "settings.saveToGallery": "Medien in Galerie speichern",
        "settings.minimizeToTray": "In Taskleiste minimieren",
        "settings.launchAtStartup": "Autostart nach Anmeldung",
        "settings.autoStartLaunchMinimized": "Versteckt starten",
        "settings.saveWindowPlacement": "Fensterposition speichern",
        "settings.windowSize": "Fenstergröße",
        "settings.windowPosition": "Fensterposition",
        "settings.certificateHash": "Zertifikat-Hash",
        "history.count.one": "{n} empfangenes Element",
        "history.count.other": "{n} empfangene Elemente",
    },
)
