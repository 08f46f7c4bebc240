"""Persistence layer: typed settings over a flat ``ls_`` key-value store.

Public exports include the settings facade, the backend contract with its
JSON-file implementation, the platform oracle and the error taxonomy.
"""

from .backend import KeyValueBackend, JsonFileBackend  # noqa: F401
from .errors import SettingsError, StoreUnavailableError, MalformedRecordError  # noqa: F401
from .platform_check import PlatformOracle, SystemPlatform, TargetPlatform  # noqa: F401
from .settings_store import SettingsStore, LocaleCatalog  # noqa: F401

__all__ = [
    "SettingsStore",
    "LocaleCatalog",
    # Backend
    "KeyValueBackend",
    "JsonFileBackend",
    # Platform
    "PlatformOracle",
    "SystemPlatform",
    "TargetPlatform",
    # Errors
    "SettingsError",
    "StoreUnavailableError",
    "MalformedRecordError",
]
