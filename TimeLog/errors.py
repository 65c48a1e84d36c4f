"""
Exception hierarchy for TimeLog.

Storage and timesheet failures propagate to the command boundary. Transport
failures from a single model are absorbed by the fallback loop and only
surface as ``AllModelsFailedError`` once every candidate has been tried.
"""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Union

if TYPE_CHECKING:
    from TimeLog.llm.fallback import Attempt


class TimeLogError(Exception):
    """Base class for every error raised by TimeLog."""


class StorageError(TimeLogError):
    """A day file could not be read or written."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class LogParseError(StorageError):
    """An existing day file is not a valid JSON array of log entries."""


class TransportError(TimeLogError):
    """A single model candidate failed to produce text."""

    def __init__(self, model: str, message: str):
        super().__init__(f"{model}: {message}")
        self.model = model


class AllModelsFailedError(TimeLogError):
    """Every model candidate failed. ``attempts`` lists them in call order."""

    def __init__(self, attempts: List["Attempt"]):
        self.attempts = attempts
        tried = ", ".join(a.model for a in attempts)
        last = attempts[-1].error if attempts else None
        super().__init__(f"All {len(attempts)} model candidates failed ({tried}). Last error: {last}")

    @property
    def last_error(self) -> Optional[BaseException]:
        return self.attempts[-1].error if self.attempts else None


class TimesheetParseError(TimeLogError):
    """The model answer could not be decoded into a Timesheet."""

    def __init__(self, message: str, raw_text: str):
        super().__init__(message)
        self.raw_text = raw_text


class NoLogsError(TimeLogError):
    """There is nothing logged for the requested day."""


class CaptureError(TimeLogError):
    """The captured prompt text was empty."""
