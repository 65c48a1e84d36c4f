from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from TimeLog.models import LogEntry, Timesheet, TimesheetEntry
from TimeLog.storage.hashing import fingerprint


def test_create_fills_both_prompt_fields_and_hashes_snippet(t0):
    entry = LogEntry.create(prompt="fix bug", timestamp=t0, summary="Checks input.", snippet="if x is None:")
    assert entry.description == "fix bug"
    assert entry.ai_prompt == "fix bug"
    assert entry.code_context_snippet_hash == fingerprint("if x is None:")
    assert "if x is None" not in entry.model_dump_json()


def test_json_dict_uses_on_disk_field_names(t0):
    data = LogEntry.create(prompt="p", timestamp=t0, summary="s").to_json_dict()
    assert set(data) == {
        "timestamp", "description", "aiPrompt", "file", "method",
        "codeContextSnippetHash", "summary", "source",
    }
    assert data["timestamp"] == "2026-02-28T09:00:00+05:30"


def test_one_field_schema_entry_is_readable():
    entry = LogEntry.model_validate({
        "timestamp": "2026-02-28T03:30:00.000Z",
        "description": "old style",
        "file": "",
        "method": "",
        "summary": "(no code context available)",
    })
    assert entry.prompt_text == "old style"
    assert entry.source == "manual"
    assert entry.code_context_snippet_hash == fingerprint("")
    assert entry.timestamp == datetime(2026, 2, 28, 3, 30, tzinfo=timezone.utc)


def test_legacy_selection_source_is_mapped(t0):
    entry = LogEntry.model_validate({
        "timestamp": t0.isoformat(), "description": "p", "aiPrompt": "p",
        "summary": "s", "source": "activeInputCapture",
    })
    assert entry.source == "selection"


def test_naive_timestamp_is_taken_as_utc():
    entry = LogEntry.create(prompt="p", timestamp=datetime(2026, 2, 28, 9, 0), summary="s")
    assert entry.timestamp.tzinfo == timezone.utc


@pytest.mark.parametrize("bad", [
    {"summary": ""},
    {"source": "email"},
    {"codeContextSnippetHash": "not-a-digest"},
])
def test_invalid_entries_are_rejected(t0, bad):
    data = {"timestamp": t0.isoformat(), "description": "p", "aiPrompt": "p", "summary": "s"}
    data.update(bad)
    with pytest.raises(ValidationError):
        LogEntry.model_validate(data)


@pytest.mark.parametrize("start, end", [("9:00", "09:30"), ("09:00", "24:00"), ("09:60", "10:00")])
def test_timesheet_times_must_be_hhmm(start, end):
    with pytest.raises(ValidationError):
        TimesheetEntry(task="t", start=start, end=end)


def test_timesheet_date_must_be_iso():
    with pytest.raises(ValidationError):
        Timesheet(date="28/02/2026", tasks=[])
