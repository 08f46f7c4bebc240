"""Domain models persisted by the settings store."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class ThemeMode(Enum):
    SYSTEM = "system"
    LIGHT = "light"
    DARK = "dark"


class ColorMode(Enum):
    SYSTEM = "system"
    LOCALSEND = "localsend"
    OLED = "oled"
    YARU = "yaru"


class SendMode(Enum):
    SINGLE = "single"
    MULTIPLE = "multiple"
    LINK = "link"


class FileType(Enum):
    IMAGE = "image"
    VIDEO = "video"
    PDF = "pdf"
    TEXT = "text"
    APK = "apk"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class StoredSecurityContext:
    """Locally generated identity material (PEM key pair + self-signed certificate)."""

    private_key: str
    public_key: str
    certificate: str
    certificate_hash: str

    def to_json(self) -> Dict[str, Any]:
        return {
            "privateKey": self.private_key,
            "publicKey": self.public_key,
            "certificate": self.certificate,
            "certificateHash": self.certificate_hash,
        }

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "StoredSecurityContext":
        return cls(
            private_key=_require_str(data, "privateKey"),
            public_key=_require_str(data, "publicKey"),
            certificate=_require_str(data, "certificate"),
            certificate_hash=_require_str(data, "certificateHash"),
        )


@dataclass(frozen=True, slots=True)
class ReceiveHistoryEntry:
    id: str
    file_name: str
    file_type: FileType
    path: Optional[str]
    saved_to_gallery: bool
    is_message: bool
    file_size: int
    sender_alias: str
    timestamp: datetime

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "fileName": self.file_name,
            "fileType": self.file_type.value,
            "path": self.path,
            "savedToGallery": self.saved_to_gallery,
            "isMessage": self.is_message,
            "fileSize": self.file_size,
            "senderAlias": self.sender_alias,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "ReceiveHistoryEntry":
        file_size = data["fileSize"]
        if not isinstance(file_size, int) or isinstance(file_size, bool):
            raise TypeError(f"fileSize must be an integer, got {type(file_size).__name__}")
        path = data.get("path")
        if path is not None and not isinstance(path, str):
            raise TypeError("path must be a string or null")
        try:
            file_type = FileType(data.get("fileType"))
        except ValueError:
            file_type = FileType.OTHER
        return cls(
            id=_require_str(data, "id"),
            file_name=_require_str(data, "fileName"),
            file_type=file_type,
            path=path,
            saved_to_gallery=bool(data.get("savedToGallery", False)),
            is_message=bool(data.get("isMessage", False)),
            file_size=file_size,
            sender_alias=_require_str(data, "senderAlias"),
            timestamp=_parse_timestamp(_require_str(data, "timestamp")),
        )


def _require_str(data: Dict[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string, got {type(value).__name__}")
    return value


def _parse_timestamp(raw: str) -> datetime:
    # fromisoformat only accepts the "Z" suffix from Python 3.11 on
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    return datetime.fromisoformat(raw)


@dataclass(frozen=True, slots=True)
class Size:
    width: float
    height: float

    def to_qt(self):
        from PyQt6.QtCore import QSizeF  # local import

        return QSizeF(self.width, self.height)


@dataclass(frozen=True, slots=True)
class Offset:
    dx: float
    dy: float

    def to_qt(self):
        from PyQt6.QtCore import QPointF  # local import

        return QPointF(self.dx, self.dy)


@dataclass(frozen=True, slots=True)
class WindowDimensions:
    """Last known window geometry; each part is only present when both of its fields were stored."""

    size: Optional[Size] = None
    position: Optional[Offset] = None

    def apply_to(self, window: Any) -> None:
        """Resize / move a Qt top-level window for whichever parts are known."""
        if self.size is not None:
            window.resize(round(self.size.width), round(self.size.height))
        if self.position is not None:
            window.move(round(self.position.dx), round(self.position.dy))
