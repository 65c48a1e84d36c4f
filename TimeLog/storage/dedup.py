import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional, Union

from TimeLog.storage.log_store import read_log

log = logging.getLogger(__name__)

DEFAULT_WINDOW = timedelta(minutes=2)


def is_duplicate(
    path: Union[str, Path],
    candidate_text: str,
    now: Optional[datetime] = None,
    window: timedelta = DEFAULT_WINDOW,
) -> bool:
    """
    True when the *last* entry of the day file has exactly ``candidate_text``
    as its prompt and was logged less than ``window`` before ``now``.

    Only the immediately preceding entry is compared. An identical entry
    further back, or one older than the window, never counts.
    """
    entries = read_log(path)
    if not entries:
        return False

    last = entries[-1]
    if last.prompt_text != candidate_text:
        return False

    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    age = now - last.timestamp
    if age < window:
        log.debug(f"Last entry in {path} repeats the prompt after {age.total_seconds():.0f}s")
        return True
    return False
