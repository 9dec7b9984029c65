"""Decoding rules for upstream diary payloads."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from diaryfeed.app.domain.diary_feed import DiaryEntry, DiaryQueryResult
from diaryfeed.app.domain.diary_feed.models import datetime_from_epoch_ms

pytestmark = [pytest.mark.feed, pytest.mark.upstream]


def _entry_payload(**overrides):
    payload = {
        "id": "1",
        "author": "a",
        "contentMd": "hi",
        "createdAt": 1000,
        "lastUpdatedAt": 2000,
    }
    payload.update(overrides)
    return payload


def test_entry_decodes_wire_names_and_epoch_ms():
    entry = DiaryEntry.model_validate(_entry_payload(createdAt=1_650_000_000_123))

    assert entry.id == "1"
    assert entry.content_md == "hi"
    assert entry.created_at == datetime(
        2022, 4, 15, 5, 20, 0, 123000, tzinfo=timezone.utc
    )
    assert entry.last_updated_at == datetime(1970, 1, 1, 0, 0, 2, tzinfo=timezone.utc)


def test_small_timestamps_are_milliseconds_not_seconds():
    entry = DiaryEntry.model_validate(_entry_payload(createdAt=1000))

    assert entry.created_at == datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc)


def test_unknown_fields_are_ignored():
    entry = DiaryEntry.model_validate(_entry_payload(isPublic=True, title="x"))

    assert entry.author == "a"


@pytest.mark.parametrize("bad_value", ["1000", None, True, [1000]])
def test_non_numeric_timestamp_rejected(bad_value):
    with pytest.raises(ValidationError):
        DiaryEntry.model_validate(_entry_payload(createdAt=bad_value))


@pytest.mark.parametrize("missing", ["id", "author", "contentMd", "createdAt", "lastUpdatedAt"])
def test_missing_field_rejected(missing):
    payload = _entry_payload()
    del payload[missing]

    with pytest.raises(ValidationError):
        DiaryEntry.model_validate(payload)


def test_non_string_id_rejected():
    with pytest.raises(ValidationError):
        DiaryEntry.model_validate(_entry_payload(id=1))


def test_query_result_requires_result_field():
    with pytest.raises(ValidationError):
        DiaryQueryResult.model_validate({"results": []})


def test_query_result_keeps_upstream_order_and_latest_is_last():
    result = DiaryQueryResult.model_validate(
        {
            "result": [
                _entry_payload(id="b", lastUpdatedAt=9000),
                _entry_payload(id="a", lastUpdatedAt=3000),
            ]
        }
    )

    assert [entry.id for entry in result.result] == ["b", "a"]
    assert result.latest().id == "a"


def test_empty_query_result_has_no_latest():
    assert DiaryQueryResult.model_validate({"result": []}).latest() is None


def test_out_of_range_timestamp_is_a_value_error():
    with pytest.raises(ValueError, match="out of range"):
        datetime_from_epoch_ms(10**20)
