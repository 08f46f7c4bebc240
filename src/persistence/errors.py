"""Structured errors raised by the settings store."""

from __future__ import annotations
from typing import Any


class SettingsError(Exception):
    """Base class for settings store issues."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class StoreUnavailableError(SettingsError):
    """Raised when the backing store cannot be opened, even after recovery."""


class MalformedRecordError(SettingsError):
    """Raised when a JSON-encoded setting (security context, history entry) cannot be decoded."""
