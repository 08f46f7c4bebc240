import json
from datetime import datetime, timedelta, timezone

import pytest

from domain.models import FileType, SendMode, ThemeMode
from persistence import MalformedRecordError
from persistence.codecs import (
    decode_history_entry,
    decode_receive_history,
    decode_security_context,
    encode_history_entry,
    encode_security_context,
    enum_from_name,
)

from factories import make_history_entry, make_security_context


def test_enum_from_name_known_unknown_and_absent():
    assert enum_from_name(ThemeMode, "dark", ThemeMode.SYSTEM) is ThemeMode.DARK
    assert enum_from_name(ThemeMode, "DARK", ThemeMode.SYSTEM) is ThemeMode.SYSTEM
    assert enum_from_name(SendMode, None, SendMode.SINGLE) is SendMode.SINGLE
    assert enum_from_name(SendMode, "", SendMode.SINGLE) is SendMode.SINGLE


def test_security_context_encoding_uses_camel_case_keys():
    ctx = make_security_context(3)
    data = json.loads(encode_security_context(ctx))
    assert data["certificateHash"] == ctx.certificate_hash
    assert decode_security_context(json.dumps(data)) == ctx


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        "[]",
        '{"privateKey": "a", "publicKey": "b", "certificate": "c"}',
        '{"privateKey": 1, "publicKey": "b", "certificate": "c", "certificateHash": "d"}',
    ],
)
def test_security_context_decode_failures(raw):
    with pytest.raises(MalformedRecordError):
        decode_security_context(raw)


def test_history_entry_json_shape():
    entry = make_history_entry("a.png")
    data = json.loads(encode_history_entry(entry))
    assert data["fileName"] == "a.png"
    assert data["fileType"] == "image"
    assert data["timestamp"] == entry.timestamp.isoformat()


def test_history_entry_decodes_foreign_record():
    raw = json.dumps(
        {
            "id": "0b5b",
            "fileName": "notes.txt",
            "fileType": "text",
            "path": None,
            "savedToGallery": False,
            "isMessage": True,
            "fileSize": 12,
            "senderAlias": "Secret Peach",
            "timestamp": "2023-11-02T08:15:30.123",
        }
    )
    entry = decode_history_entry(raw)
    assert entry.file_type is FileType.TEXT
    assert entry.is_message is True
    assert entry.path is None
    assert entry.timestamp == datetime(2023, 11, 2, 8, 15, 30, 123000)


def test_history_timestamp_with_utc_suffix_is_timezone_aware():
    data = make_history_entry().to_json()
    data["timestamp"] = "2024-01-01T10:00:00.000Z"
    entry = decode_history_entry(json.dumps(data))
    assert entry.timestamp == datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
    assert entry.timestamp.utcoffset() == timedelta(0)


def test_unknown_file_type_falls_back_to_other():
    data = make_history_entry().to_json()
    data["fileType"] = "hologram"
    assert decode_history_entry(json.dumps(data)).file_type is FileType.OTHER


@pytest.mark.parametrize(
    "field, value",
    [("fileSize", "big"), ("fileSize", True), ("timestamp", "yesterday"), ("path", 5)],
)
def test_history_entry_invalid_fields(field, value):
    data = make_history_entry().to_json()
    data[field] = value
    with pytest.raises(MalformedRecordError):
        decode_history_entry(json.dumps(data))


def test_decode_receive_history_reports_first_bad_index():
    good = encode_history_entry(make_history_entry())
    with pytest.raises(MalformedRecordError) as info:
        decode_receive_history([good, good, "{", good])
    assert info.value.context["index"] == 2
    assert isinstance(info.value.__cause__, ValueError)
