"""
The three user actions: log an activity, capture a prompt, generate a timesheet.

Each one is a single sequential run. Inputs (text, workspace root, code
context, a transport built from an explicit key) are resolved by the caller;
errors other than summary failures propagate to it.
"""
from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone, tzinfo
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from TimeLog.config import Settings
from TimeLog.errors import AllModelsFailedError, CaptureError, NoLogsError, TimesheetParseError
from TimeLog.llm.summarizer import CodeSummarizer
from TimeLog.llm.timesheet_generator import TimesheetGenerator
from TimeLog.llm.transport import Transport
from TimeLog.models import LogEntry, LogSource
from TimeLog.storage.dedup import is_duplicate
from TimeLog.storage.log_store import (
    append_entry,
    day_log_path,
    log_exists,
    read_log,
    timesheet_path,
    write_timesheet,
)

log = logging.getLogger(__name__)


# Helper to get local timezone
def get_local_tz(settings: Settings) -> tzinfo:
    try:
        return ZoneInfo(settings.local_tz)
    except ZoneInfoNotFoundError:
        log.warning(f"Timezone '{settings.local_tz}' not found in system database. Defaulting to UTC.")
        return timezone.utc
    except ValueError as e:
        log.error(f"Error initializing ZoneInfo with '{settings.local_tz}': {e}. Defaulting to UTC.")
        return timezone.utc


def now_local(settings: Settings) -> datetime:
    return datetime.now(get_local_tz(settings)).replace(microsecond=0)


def _record(
    settings: Settings,
    transport: Transport,
    workspace_root: Path,
    prompt: str,
    source: LogSource,
    file: str,
    method: str,
    snippet: str,
    timestamp: datetime,
) -> LogEntry:
    summarizer = CodeSummarizer(transport, settings.model_candidates)
    summary = summarizer.summarize(snippet, task_hint=prompt)
    entry = LogEntry.create(
        prompt=prompt,
        timestamp=timestamp,
        summary=summary,
        source=source,
        file=file,
        method=method,
        snippet=snippet,
    )
    path = day_log_path(workspace_root, settings.logs_path, timestamp.date())
    append_entry(path, entry)
    return entry


def log_activity(
    settings: Settings,
    transport: Transport,
    workspace_root: Path,
    description: str,
    *,
    file: str = "",
    method: str = "",
    snippet: str = "",
    now: Optional[datetime] = None,
) -> LogEntry:
    """Manual logging: the developer describes what they are doing."""
    description = description.strip()
    if not description:
        raise CaptureError("Activity description is empty.")
    timestamp = now or now_local(settings)
    if not file:
        log.info("No active file, logging without code context.")
    entry = _record(settings, transport, workspace_root, description, "manual", file, method, snippet, timestamp)
    log.info(f"Activity logged at {timestamp.strftime('%H:%M:%S')}")
    return entry


def capture_prompt(
    settings: Settings,
    transport: Transport,
    workspace_root: Path,
    prompt_text: str,
    source: LogSource,
    *,
    file: str = "",
    method: str = "",
    snippet: str = "",
    now: Optional[datetime] = None,
) -> Optional[LogEntry]:
    """
    Log a captured AI prompt (clipboard, editor selection or typed).

    Returns None, without calling the model or touching the file, when the
    same prompt was the last entry logged within the duplicate window.
    """
    prompt_text = prompt_text.strip()
    if not prompt_text:
        raise CaptureError(f"Nothing to log: captured {source} text is empty.")

    timestamp = now or now_local(settings)
    path = day_log_path(workspace_root, settings.logs_path, timestamp.date())
    window = timedelta(seconds=settings.duplicate_window_s)
    if is_duplicate(path, prompt_text, now=timestamp, window=window):
        log.info(f"Duplicate prompt detected within {settings.duplicate_window_s}s, skipped.")
        return None

    entry = _record(settings, transport, workspace_root, prompt_text, source, file, method, snippet, timestamp)
    log.info(f"AI prompt logged [{source}] at {timestamp.strftime('%H:%M:%S')}")
    return entry


def generate_timesheet(
    settings: Settings,
    transport: Transport,
    workspace_root: Path,
    day: Optional[date] = None,
) -> Path:
    """
    Build and save the timesheet for ``day`` (default: today, local time).

    Runs NoLogs -> LogsLoaded -> ModelQueried and ends in ParsedOK (the file
    is written), ParseFailed or AllModelsFailed (the error propagates and
    nothing is written). A previous timesheet for the day is replaced whole.
    """
    day = day or now_local(settings).date()
    logs_file = day_log_path(workspace_root, settings.logs_path, day)

    if not log_exists(logs_file):
        raise NoLogsError(f"No log file found for {day} ({logs_file}). Log some activity first.")
    entries = read_log(logs_file)
    if not entries:
        raise NoLogsError(f"The log file for {day} is empty. Nothing to generate.")
    log.debug(f"Timesheet {day}: loaded {len(entries)} entries")

    generator = TimesheetGenerator(transport, settings.model_candidates)
    try:
        timesheet = generator.aggregate(entries, day.isoformat())
    except AllModelsFailedError:
        log.error(f"Timesheet {day}: no model answered, nothing written.")
        raise
    except TimesheetParseError:
        log.error(f"Timesheet {day}: answer did not parse, nothing written.")
        raise

    out_path = timesheet_path(workspace_root, settings.logs_path, day)
    write_timesheet(out_path, timesheet)
    log.info(f"✅ Timesheet saved: {out_path.name}")
    return out_path
