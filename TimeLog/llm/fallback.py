"""
Ordered model fallback.

Each candidate gets exactly one attempt, in order, with no delay between
them. Every failure is treated the same way (rate limit, 5xx and bad
credentials alike) and the next candidate is tried. The outcome of every
attempt is kept so callers and tests can see exactly what was called.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from TimeLog.errors import AllModelsFailedError
from TimeLog.llm.transport import Transport

log = logging.getLogger(__name__)


@dataclass
class Attempt:
    model: str
    text: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.text is not None


@dataclass
class FallbackResult:
    text: str
    model: str
    attempts: List[Attempt] = field(default_factory=list)


def call_with_fallback(transport: Transport, models: Sequence[str], prompt: str) -> FallbackResult:
    """Return the first successful answer among ``models``.

    Raises AllModelsFailedError, chained to the last failure, when none answers.
    """
    if not models:
        raise ValueError("At least one model candidate is required.")

    attempts: List[Attempt] = []
    for index, model in enumerate(models, start=1):
        try:
            text = transport.generate(model, prompt)
        except Exception as e:
            attempts.append(Attempt(model=model, error=e))
            log.warning(f"Model {model} failed ({index}/{len(models)}): {type(e).__name__} - {e}")
            continue
        attempts.append(Attempt(model=model, text=text))
        if index > 1:
            log.info(f"Model {model} answered after {index - 1} failed candidate(s).")
        return FallbackResult(text=text, model=model, attempts=attempts)

    log.error(f"All {len(models)} model candidates failed.")
    raise AllModelsFailedError(attempts) from attempts[-1].error
