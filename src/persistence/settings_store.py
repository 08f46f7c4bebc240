"""Typed settings facade over the untyped key-value backend.

``SettingsStore.initialize()`` opens the backend (with one-shot recovery of
a corrupt settings file on Windows), applies the persisted locale and seeds
first-run defaults. The returned store is constructed once at startup and
passed explicitly to its consumers; there is no module-level instance.

Every getter re-reads the backend and applies a documented default when the
value is absent. Every setter is a coroutine that completes once the backend
reports the write as durable. Enum settings are stored by name and fall back
to their default when the stored name is unknown.
"""

from __future__ import annotations

import logging
import uuid
from pathlib import Path
from threading import Lock
from typing import Any, Callable, Dict, List, Optional, Protocol

import i18n
from config import settings
from core.filesystem import delete_file, settings_file_path
from domain.models import (
    ColorMode,
    Offset,
    ReceiveHistoryEntry,
    SendMode,
    Size,
    StoredSecurityContext,
    ThemeMode,
    WindowDimensions,
)
from i18n import AppLocale
from identity import generate_random_alias, generate_security_context

from . import keys
from .backend import JsonFileBackend, KeyValueBackend
from .codecs import (
    decode_receive_history,
    decode_security_context,
    encode_receive_history,
    encode_security_context,
    enum_from_name,
)
from .errors import MalformedRecordError, StoreUnavailableError
from .platform_check import PlatformOracle, SystemPlatform, TargetPlatform

__all__ = ["SettingsStore", "LocaleCatalog"]

_logger = logging.getLogger(__name__)

# Opening + recovery deletes files; never run two attempts at once.
_INIT_LOCK = Lock()

# Platforms known to leave a corrupt settings file behind
_RECOVERABLE_PLATFORMS = (TargetPlatform.WINDOWS,)


class LocaleCatalog(Protocol):
    def use_device_locale(self) -> Any: ...

    def set_locale_raw(self, tag: str) -> Any: ...


class SettingsStore:
    """Typed accessors for every persisted setting."""

    def __init__(
        self,
        backend: KeyValueBackend,
        *,
        platform: PlatformOracle | None = None,
        alias_generator: Callable[[], str] = generate_random_alias,
    ) -> None:
        self._backend = backend
        self._platform = platform or SystemPlatform()
        self._alias_generator = alias_generator

    @property
    def backend(self) -> KeyValueBackend:
        return self._backend

    # Initialization ----------------------------------------------------
    @classmethod
    async def initialize(
        cls,
        *,
        path: str | Path | None = None,
        platform: PlatformOracle | None = None,
        locale_catalog: LocaleCatalog | None = None,
        alias_generator: Callable[[], str] = generate_random_alias,
        security_generator: Callable[[], StoredSecurityContext] = generate_security_context,
        opener: Callable[[Path], KeyValueBackend] = JsonFileBackend.open,
    ) -> "SettingsStore":
        """Open the backend, resolve the locale and seed first-run defaults.

        Safe to call again on an initialized store: every default is only
        written when its key is absent.

        Raises:
            StoreUnavailableError: the backend could not be opened, even after recovery.
        """
        platform = platform or SystemPlatform()
        catalog = locale_catalog or i18n
        settings_path = Path(path) if path is not None else settings_file_path()

        backend = _open_backend(settings_path, platform, opener)

        # Locale first: alias generation uses localized word lists
        persisted_locale = backend.get_string(keys.LOCALE)
        if persisted_locale is None:
            _logger.debug("No persisted locale, following device locale")
            catalog.use_device_locale()
        else:
            _logger.debug("Applying persisted locale %s", persisted_locale)
            catalog.set_locale_raw(persisted_locale)

        if backend.get_int(keys.VERSION) is None:
            await backend.set_int(keys.VERSION, settings.STORE_VERSION)
            _logger.info("Seeded %s", keys.VERSION)

        if backend.get_string(keys.SHOW_TOKEN) is None:
            await backend.set_string(keys.SHOW_TOKEN, str(uuid.uuid4()))
            _logger.info("Seeded %s", keys.SHOW_TOKEN)

        if backend.get_string(keys.ALIAS) is None:
            await backend.set_string(keys.ALIAS, alias_generator())
            _logger.info("Seeded %s", keys.ALIAS)

        if backend.get_string(keys.SECURITY_CONTEXT) is None:
            context = security_generator()
            await backend.set_string(keys.SECURITY_CONTEXT, encode_security_context(context))
            _logger.info("Seeded %s", keys.SECURITY_CONTEXT)

        if backend.get_string(keys.COLOR) is None:
            await backend.set_string(keys.COLOR, _default_color_mode(platform).value)
            _logger.info("Seeded %s", keys.COLOR)

        return cls(backend, platform=platform, alias_generator=alias_generator)

    # Security context --------------------------------------------------
    def get_security_context(self) -> StoredSecurityContext:
        raw = self._backend.get_string(keys.SECURITY_CONTEXT)
        if raw is None:
            raise MalformedRecordError(
                "Security context is missing", context={"key": keys.SECURITY_CONTEXT}
            )
        return decode_security_context(raw)

    async def set_security_context(self, context: StoredSecurityContext) -> None:
        await self._backend.set_string(keys.SECURITY_CONTEXT, encode_security_context(context))

    # Receive history ---------------------------------------------------
    def get_receive_history(self) -> List[ReceiveHistoryEntry]:
        raw = self._backend.get_string_list(keys.RECEIVE_HISTORY) or []
        return decode_receive_history(raw)

    async def set_receive_history(self, entries: List[ReceiveHistoryEntry]) -> None:
        await self._backend.set_string_list(keys.RECEIVE_HISTORY, encode_receive_history(entries))

    # Identity ----------------------------------------------------------
    def get_show_token(self) -> str:
        token = self._backend.get_string(keys.SHOW_TOKEN)
        if token is None:
            raise StoreUnavailableError(
                "Show token missing; the store was not initialized",
                context={"key": keys.SHOW_TOKEN},
            )
        return token

    def get_alias(self) -> str:
        alias = self._backend.get_string(keys.ALIAS)
        return self._alias_generator() if alias is None else alias

    async def set_alias(self, alias: str) -> None:
        await self._backend.set_string(keys.ALIAS, alias)

    # Appearance --------------------------------------------------------
    def get_theme(self) -> ThemeMode:
        return enum_from_name(ThemeMode, self._backend.get_string(keys.THEME), ThemeMode.SYSTEM)

    async def set_theme(self, theme: ThemeMode) -> None:
        await self._backend.set_string(keys.THEME, theme.value)

    def get_color_mode(self) -> ColorMode:
        return enum_from_name(
            ColorMode, self._backend.get_string(keys.COLOR), _default_color_mode(self._platform)
        )

    async def set_color_mode(self, color: ColorMode) -> None:
        await self._backend.set_string(keys.COLOR, color.value)

    def get_locale(self) -> Optional[AppLocale]:
        """Persisted locale, or None meaning "follow the device"."""
        value = self._backend.get_string(keys.LOCALE)
        if value is None:
            return None
        for locale in AppLocale:
            if locale.language_tag == value:
                return locale
        return None

    async def set_locale(self, locale: Optional[AppLocale]) -> None:
        if locale is None:
            await self._backend.remove(keys.LOCALE)
        else:
            await self._backend.set_string(keys.LOCALE, locale.language_tag)

    # Network -----------------------------------------------------------
    def get_port(self) -> int:
        port = self._backend.get_int(keys.PORT)
        return settings.DEFAULT_PORT if port is None else port

    async def set_port(self, port: int) -> None:
        await self._backend.set_int(keys.PORT, port)

    def get_multicast_group(self) -> str:
        group = self._backend.get_string(keys.MULTICAST_GROUP)
        return settings.DEFAULT_MULTICAST_GROUP if group is None else group

    async def set_multicast_group(self, group: str) -> None:
        await self._backend.set_string(keys.MULTICAST_GROUP, group)

    def get_destination(self) -> Optional[str]:
        return self._backend.get_string(keys.DESTINATION)

    async def set_destination(self, destination: Optional[str]) -> None:
        if destination is None:
            await self._backend.remove(keys.DESTINATION)
        else:
            await self._backend.set_string(keys.DESTINATION, destination)

    def is_https(self) -> bool:
        return self._bool(keys.HTTPS, True)

    async def set_https(self, https: bool) -> None:
        await self._backend.set_bool(keys.HTTPS, https)

    def get_send_mode(self) -> SendMode:
        return enum_from_name(SendMode, self._backend.get_string(keys.SEND_MODE), SendMode.SINGLE)

    async def set_send_mode(self, mode: SendMode) -> None:
        await self._backend.set_string(keys.SEND_MODE, mode.value)

    # Behaviour toggles -------------------------------------------------
    def _bool(self, key: str, default: bool) -> bool:
        value = self._backend.get_bool(key)
        return default if value is None else value

    def is_save_to_gallery(self) -> bool:
        return self._bool(keys.SAVE_TO_GALLERY, True)

    async def set_save_to_gallery(self, save_to_gallery: bool) -> None:
        await self._backend.set_bool(keys.SAVE_TO_GALLERY, save_to_gallery)

    def is_quick_save(self) -> bool:
        return self._bool(keys.QUICK_SAVE, False)

    async def set_quick_save(self, quick_save: bool) -> None:
        await self._backend.set_bool(keys.QUICK_SAVE, quick_save)

    def is_minimize_to_tray(self) -> bool:
        return self._bool(keys.MINIMIZE_TO_TRAY, False)

    async def set_minimize_to_tray(self, minimize_to_tray: bool) -> None:
        await self._backend.set_bool(keys.MINIMIZE_TO_TRAY, minimize_to_tray)

    def is_launch_at_startup(self) -> bool:
        return self._bool(keys.LAUNCH_AT_STARTUP, False)

    async def set_launch_at_startup(self, launch_at_startup: bool) -> None:
        await self._backend.set_bool(keys.LAUNCH_AT_STARTUP, launch_at_startup)

    def is_auto_start_launch_minimized(self) -> bool:
        return self._bool(keys.AUTO_START_LAUNCH_MINIMIZED, True)

    async def set_auto_start_launch_minimized(self, launch_minimized: bool) -> None:
        await self._backend.set_bool(keys.AUTO_START_LAUNCH_MINIMIZED, launch_minimized)

    # Window geometry ---------------------------------------------------
    async def set_window_offset_x(self, x: float) -> None:
        await self._backend.set_double(keys.WINDOW_OFFSET_X, x)

    async def set_window_offset_y(self, y: float) -> None:
        await self._backend.set_double(keys.WINDOW_OFFSET_Y, y)

    async def set_window_width(self, width: float) -> None:
        await self._backend.set_double(keys.WINDOW_WIDTH, width)

    async def set_window_height(self, height: float) -> None:
        await self._backend.set_double(keys.WINDOW_HEIGHT, height)

    def get_window_last_dimensions(self) -> WindowDimensions:
        offset_x = self._backend.get_double(keys.WINDOW_OFFSET_X)
        offset_y = self._backend.get_double(keys.WINDOW_OFFSET_Y)
        width = self._backend.get_double(keys.WINDOW_WIDTH)
        height = self._backend.get_double(keys.WINDOW_HEIGHT)
        size = Size(width, height) if width is not None and height is not None else None
        position = (
            Offset(offset_x, offset_y) if offset_x is not None and offset_y is not None else None
        )
        return WindowDimensions(size=size, position=position)

    async def set_save_window_placement(self, save_placement: bool) -> None:
        await self._backend.set_bool(keys.SAVE_WINDOW_PLACEMENT, save_placement)

    def get_save_window_placement(self) -> bool:
        # Wayland compositors do not report window position reliably
        if not self._platform.is_not_wayland_desktop():
            return False
        return self._bool(keys.SAVE_WINDOW_PLACEMENT, True)

    # Diagnostics -------------------------------------------------------
    def snapshot(self) -> Dict[str, Any]:
        """All settings read through their typed getters, as JSON-friendly values."""
        dims = self.get_window_last_dimensions()
        locale = self.get_locale()
        return {
            "version": self._backend.get_int(keys.VERSION),
            "show_token": self._backend.get_string(keys.SHOW_TOKEN),
            "alias": self.get_alias(),
            "theme": self.get_theme().value,
            "color": self.get_color_mode().value,
            "locale": locale.language_tag if locale else None,
            "port": self.get_port(),
            "multicast_group": self.get_multicast_group(),
            "destination": self.get_destination(),
            "https": self.is_https(),
            "send_mode": self.get_send_mode().value,
            "save_to_gallery": self.is_save_to_gallery(),
            "quick_save": self.is_quick_save(),
            "minimize_to_tray": self.is_minimize_to_tray(),
            "launch_at_startup": self.is_launch_at_startup(),
            "auto_start_launch_minimized": self.is_auto_start_launch_minimized(),
            "save_window_placement": self.get_save_window_placement(),
            "window_size": (
                {"width": dims.size.width, "height": dims.size.height} if dims.size else None
            ),
            "window_position": (
                {"x": dims.position.dx, "y": dims.position.dy} if dims.position else None
            ),
            "certificate_hash": self.get_security_context().certificate_hash,
            "receive_history_count": len(self._backend.get_string_list(keys.RECEIVE_HISTORY) or []),
        }


def _default_color_mode(platform: PlatformOracle) -> ColorMode:
    if platform.is_platform((TargetPlatform.ANDROID,)):
        return ColorMode.SYSTEM
    return ColorMode.LOCALSEND


def _open_backend(
    path: Path, platform: PlatformOracle, opener: Callable[[Path], KeyValueBackend]
) -> KeyValueBackend:
    with _INIT_LOCK:
        try:
            return opener(path)
        except Exception as exc:
            if not platform.is_platform(_RECOVERABLE_PLATFORMS):
                raise StoreUnavailableError(
                    f"Could not initialize settings store at {path}", context={"path": str(path)}
                ) from exc
            _logger.info(
                "Could not initialize settings store, trying to delete corrupted settings file %s",
                path,
            )
        try:
            delete_file(path)
            return opener(path)
        except Exception as exc:
            raise StoreUnavailableError(
                f"Could not initialize settings store at {path} after recovery",
                context={"path": str(path), "recovered": True},
            ) from exc
