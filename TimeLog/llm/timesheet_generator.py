"""
End-of-day aggregation: a day's log entries in, a categorised Timesheet out.

Unlike code summaries, failures here are hard errors. A timesheet is the
deliverable of the end-of-day flow and is never replaced by an empty one.
"""
from __future__ import annotations

import json
import logging
import re
from typing import List, Sequence

from pydantic import ValidationError

from TimeLog.errors import TimesheetParseError
from TimeLog.llm.fallback import call_with_fallback
from TimeLog.llm.transport import Transport
from TimeLog.models import LogEntry, Timesheet
from TimeLog.prompts import TIMESHEET_PROMPT, TIMESHEET_SCHEMA

log = logging.getLogger(__name__)

_OPENING_FENCE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_CLOSING_FENCE = re.compile(r"\s*```$")


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```/```json fence if the model added one."""
    text = text.strip()
    text = _OPENING_FENCE.sub("", text)
    text = _CLOSING_FENCE.sub("", text)
    return text.strip()


def parse_timesheet(text: str) -> Timesheet:
    cleaned = strip_code_fences(text)
    try:
        return Timesheet.model_validate_json(cleaned)
    except ValidationError as e:
        log.error(f"Failed to parse/validate timesheet JSON: {e}")
        log.error(f"Problematic JSON string snippet: {cleaned[:500]}...")
        raise TimesheetParseError(f"Model response is not a valid timesheet: {e}", raw_text=text) from e


class TimesheetGenerator:
    def __init__(self, transport: Transport, models: Sequence[str]):
        self.transport = transport
        self.models = list(models)

    def build_prompt(self, entries: List[LogEntry], date_label: str) -> str:
        entries_json = json.dumps([e.to_json_dict() for e in entries], indent=2, ensure_ascii=False)
        return TIMESHEET_PROMPT.format(
            date_label=date_label,
            schema=TIMESHEET_SCHEMA,
            entries_json=entries_json,
        ).strip()

    def aggregate(self, entries: List[LogEntry], date_label: str) -> Timesheet:
        """
        Ask the models for a timesheet covering ``entries``.

        Raises AllModelsFailedError when no candidate answers and
        TimesheetParseError when the answer is not a Timesheet.
        """
        if not entries:
            raise ValueError(f"No log entries to aggregate for {date_label}.")

        prompt = self.build_prompt(entries, date_label)
        log.info(f"Requesting timesheet for {date_label} from {len(entries)} entries. Prompt length: ~{len(prompt)} chars.")
        result = call_with_fallback(self.transport, self.models, prompt)

        timesheet = parse_timesheet(result.text)
        if timesheet.date != date_label:
            log.warning(f"Model {result.model} labelled the timesheet {timesheet.date}, expected {date_label}.")
        log.info(f"Parsed {len(timesheet.tasks)} categories from {result.model} for {date_label}.")
        return timesheet
