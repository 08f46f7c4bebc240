"""Filesystem utility helpers."""

from __future__ import annotations
from pathlib import Path

from config import settings


def application_support_dir() -> Path:
    """Return the per-user application-support directory.

    ``LOCALSEND_SETTINGS_DIR`` wins when set; otherwise Qt's AppDataLocation
    for the configured organization / application name.
    """
    if settings.SETTINGS_DIR:
        return Path(settings.SETTINGS_DIR)
    from PyQt6.QtCore import QCoreApplication, QStandardPaths  # local import

    QCoreApplication.setOrganizationName(settings.ORGANIZATION_NAME)
    QCoreApplication.setApplicationName(settings.APP_NAME)
    location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.AppDataLocation)
    return Path(location)


def settings_file_path(base_dir: str | Path | None = None) -> Path:
    base = Path(base_dir) if base_dir else application_support_dir()
    return base / settings.SETTINGS_FILENAME


def delete_file(path: str | Path) -> bool:
    """Delete ``path`` if present. Returns True when a file was removed."""
    target = Path(path)
    if not target.exists():
        return False
    target.unlink()
    return True
