"""Serialization boundary between domain records and the flat key-value store.

Pure functions only: nothing here touches a backend, so every encode/decode
pair can be exercised on its own.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Type, TypeVar

from domain.models import ReceiveHistoryEntry, StoredSecurityContext
from .errors import MalformedRecordError
from .keys import RECEIVE_HISTORY, SECURITY_CONTEXT

__all__ = [
    "enum_from_name",
    "encode_security_context",
    "decode_security_context",
    "encode_history_entry",
    "decode_history_entry",
    "encode_receive_history",
    "decode_receive_history",
]

E = TypeVar("E", bound=Enum)


def enum_from_name(enum_cls: Type[E], name: Optional[str], default: E) -> E:
    """Return the variant persisted as ``name`` or ``default`` when absent / unknown."""
    if name is None:
        return default
    for variant in enum_cls:
        if variant.value == name:
            return variant
    return default


def encode_security_context(context: StoredSecurityContext) -> str:
    return json.dumps(context.to_json())


def decode_security_context(raw: str) -> StoredSecurityContext:
    try:
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise TypeError("security context root is not an object")
        return StoredSecurityContext.from_json(data)
    except (ValueError, KeyError, TypeError) as exc:
        raise MalformedRecordError(
            f"Stored security context could not be decoded: {exc}",
            context={"key": SECURITY_CONTEXT},
        ) from exc


def encode_history_entry(entry: ReceiveHistoryEntry) -> str:
    return json.dumps(entry.to_json())


def decode_history_entry(raw: str, *, index: int | None = None) -> ReceiveHistoryEntry:
    try:
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise TypeError("history entry root is not an object")
        return ReceiveHistoryEntry.from_json(data)
    except (ValueError, KeyError, TypeError) as exc:
        where = "" if index is None else f" #{index}"
        raise MalformedRecordError(
            f"Receive history entry{where} could not be decoded: {exc}",
            context={"key": RECEIVE_HISTORY, "index": index},
        ) from exc


def encode_receive_history(entries: Iterable[ReceiveHistoryEntry]) -> List[str]:
    # One self-contained JSON document per entry (native string-list storage)
    return [encode_history_entry(e) for e in entries]


def decode_receive_history(raw_entries: Sequence[str]) -> List[ReceiveHistoryEntry]:
    return [decode_history_entry(raw, index=i) for i, raw in enumerate(raw_entries)]
