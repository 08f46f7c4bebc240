"""Platform capability queries used by the settings store.

Platform dependent defaults (color mode) and behaviour (window placement,
corrupt-store recovery) go through the small :class:`PlatformOracle`
interface so tests can substitute a fake.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from typing import Iterable, Protocol

__all__ = ["TargetPlatform", "PlatformOracle", "SystemPlatform", "detect_platform"]


class TargetPlatform(Enum):
    ANDROID = "android"
    FUCHSIA = "fuchsia"
    IOS = "ios"
    LINUX = "linux"
    MACOS = "macos"
    WINDOWS = "windows"


class PlatformOracle(Protocol):
    def is_platform(self, platforms: Iterable[TargetPlatform]) -> bool: ...

    def is_not_wayland_desktop(self) -> bool: ...


def detect_platform() -> TargetPlatform:
    if sys.platform.startswith("win"):
        return TargetPlatform.WINDOWS
    if sys.platform == "darwin":
        return TargetPlatform.MACOS
    if sys.platform == "ios":
        return TargetPlatform.IOS
    if sys.platform == "android" or "ANDROID_ROOT" in os.environ:
        return TargetPlatform.ANDROID
    return TargetPlatform.LINUX


class SystemPlatform:
    """Oracle answering for the running process."""

    def __init__(self, current: TargetPlatform | None = None) -> None:
        self.current = current or detect_platform()

    def is_platform(self, platforms: Iterable[TargetPlatform]) -> bool:
        return self.current in set(platforms)

    def is_not_wayland_desktop(self) -> bool:
        if self.current is not TargetPlatform.LINUX:
            return True
        return not _is_wayland_session()


def _is_wayland_session() -> bool:
    # A running Qt GUI knows its platform plugin; otherwise trust the session type
    from PyQt6.QtCore import QCoreApplication  # local import

    if QCoreApplication.instance() is not None:
        from PyQt6.QtGui import QGuiApplication

        name = QGuiApplication.platformName().lower()
        if name:
            return name.startswith("wayland")
    return os.environ.get("XDG_SESSION_TYPE", "").lower() == "wayland"
