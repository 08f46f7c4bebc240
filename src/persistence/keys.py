"""Settings keys of the flat ``ls_`` namespace."""

from __future__ import annotations

from typing import Final

# Version of the storage
VERSION: Final = "ls_version"

# Security keys (generated on first app start)
SECURITY_CONTEXT: Final = "ls_security_context"

# Received file history
RECEIVE_HISTORY: Final = "ls_receive_history"

# Window offset and size
WINDOW_OFFSET_X: Final = "ls_window_offset_x"
WINDOW_OFFSET_Y: Final = "ls_window_offset_y"
WINDOW_WIDTH: Final = "ls_window_width"
WINDOW_HEIGHT: Final = "ls_window_height"
SAVE_WINDOW_PLACEMENT: Final = "ls_save_window_placement"

# Settings
SHOW_TOKEN: Final = "ls_show_token"
ALIAS: Final = "ls_alias"
THEME: Final = "ls_theme"  # brightness
COLOR: Final = "ls_color"
LOCALE: Final = "ls_locale"
PORT: Final = "ls_port"
MULTICAST_GROUP: Final = "ls_multicast_group"
DESTINATION: Final = "ls_destination"
SAVE_TO_GALLERY: Final = "ls_save_to_gallery"
QUICK_SAVE: Final = "ls_quick_save"
MINIMIZE_TO_TRAY: Final = "ls_minimize_to_tray"
LAUNCH_AT_STARTUP: Final = "ls_launch_at_startup"
AUTO_START_LAUNCH_MINIMIZED: Final = "ls_auto_start_launch_minimized"
HTTPS: Final = "ls_https"
SEND_MODE: Final = "ls_send_mode"
