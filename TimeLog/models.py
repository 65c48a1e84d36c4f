from __future__ import annotations
from datetime import date, datetime, timezone
import re
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from TimeLog.storage.hashing import fingerprint

LogSource = Literal["manual", "clipboard", "selection"]

# Older versions tagged editor-selection captures with this name.
_LEGACY_SOURCES = {"activeInputCapture": "selection"}

_HHMM = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
_YMD = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class LogEntry(BaseModel):
    """
    One logged activity event, stored in a day file.

    ``description`` and ``aiPrompt`` carry the same text; the first is kept so
    files written by the one-field schema stay readable both ways.
    """
    model_config = ConfigDict(populate_by_name=True)

    timestamp: datetime = Field(..., description="When the activity was logged (tz-aware)")
    description: str = Field(default="", description="Task text, one-field schema name")
    ai_prompt: Optional[str] = Field(default=None, alias="aiPrompt")
    file: str = Field(default="", description="Active file path, may be empty")
    method: str = Field(default="", description="Enclosing function name, may be empty")
    code_context_snippet_hash: str = Field(
        default_factory=lambda: fingerprint(""),
        alias="codeContextSnippetHash",
        pattern=r"^[0-9a-f]{64}$",
        description="SHA-256 of the code context; the context itself is never stored",
    )
    summary: str = Field(..., min_length=1, description="1-2 sentence summary or a placeholder")
    source: LogSource = "manual"

    @field_validator('timestamp', mode='before')
    @classmethod
    def parse_datetime_aware(cls, v):
        if isinstance(v, str):
            v = datetime.fromisoformat(v.replace('Z', '+00:00'))
        if isinstance(v, datetime):
            return v.replace(tzinfo=timezone.utc) if v.tzinfo is None else v
        raise ValueError("Invalid datetime format")

    @field_validator('source', mode='before')
    @classmethod
    def map_legacy_source(cls, v):
        return _LEGACY_SOURCES.get(v, v)

    @property
    def prompt_text(self) -> str:
        """The captured prompt, falling back to the one-field ``description``."""
        return self.ai_prompt if self.ai_prompt is not None else self.description

    @classmethod
    def create(
        cls,
        prompt: str,
        timestamp: datetime,
        summary: str,
        source: LogSource = "manual",
        file: str = "",
        method: str = "",
        snippet: str = "",
    ) -> "LogEntry":
        return cls(
            timestamp=timestamp,
            description=prompt,
            ai_prompt=prompt,
            file=file,
            method=method,
            code_context_snippet_hash=fingerprint(snippet),
            summary=summary,
            source=source,
        )

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class TimesheetEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    task: str
    start: str = Field(description="HH:MM, 24-hour")
    end: str = Field(description="HH:MM, 24-hour")

    @field_validator('start', 'end')
    @classmethod
    def validate_time_format(cls, value: str) -> str:
        if not _HHMM.match(value):
            raise ValueError(f"Time must be a 24-hour HH:MM string, got {value!r}")
        return value


class TimesheetCategory(BaseModel):
    model_config = ConfigDict(extra="forbid")

    category: str = Field(description="e.g. 'Coding: Auth Feature' or 'Code Review'")
    entries: List[TimesheetEntry]


class Timesheet(BaseModel):
    """Exactly the shape the model is asked for; unknown keys are rejected."""
    model_config = ConfigDict(extra="forbid")

    date: str = Field(description="YYYY-MM-DD")
    tasks: List[TimesheetCategory]

    @field_validator('date')
    @classmethod
    def validate_date(cls, value: str) -> str:
        if not _YMD.match(value):
            raise ValueError(f"Date must be YYYY-MM-DD, got {value!r}")
        date.fromisoformat(value)
        return value
