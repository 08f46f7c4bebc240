"""Global configuration and constants for the settings store."""

from __future__ import annotations

import os
from typing import Final

APP_NAME: Final = "LocalSend"
ORGANIZATION_NAME: Final = "LocalSend"

# Backend file inside the application-support directory
SETTINGS_FILENAME: Final = "shared_preferences.json"

# Single integer marker; future migrations would branch on it
STORE_VERSION: Final = 1

DEFAULT_PORT: Final = 53317
DEFAULT_MULTICAST_GROUP: Final = "224.0.0.167"
DEFAULT_LOCALE: Final = "en"

# Optional override of the application-support directory (tests, portable installs)
SETTINGS_DIR: Final = os.environ.get("LOCALSEND_SETTINGS_DIR")
