from __future__ import annotations

import logging
from typing import Optional, Sequence

from TimeLog.errors import AllModelsFailedError
from TimeLog.llm.fallback import call_with_fallback
from TimeLog.llm.transport import Transport
from TimeLog.prompts import CODE_SUMMARY_PROMPT, TASK_AWARE_SUMMARY_PROMPT

log = logging.getLogger(__name__)

NO_CONTEXT_PLACEHOLDER = "(no code context available)"
SUMMARY_UNAVAILABLE_PLACEHOLDER = "(AI summary unavailable)"


class CodeSummarizer:
    """
    Produces a 1-2 sentence description of a code snippet.

    A summary is optional metadata on a log entry, so this never raises on
    model failure: the entry is always saved, with a placeholder if needed.
    """

    def __init__(self, transport: Transport, models: Sequence[str]):
        self.transport = transport
        self.models = list(models)

    def build_prompt(self, context: str, task_hint: Optional[str] = None) -> str:
        if task_hint and task_hint.strip():
            return TASK_AWARE_SUMMARY_PROMPT.format(task_hint=task_hint.strip(), code_snippet=context).strip()
        return CODE_SUMMARY_PROMPT.format(code_snippet=context).strip()

    def summarize(self, context: str, task_hint: Optional[str] = None) -> str:
        if not context or not context.strip():
            log.debug("No code context, skipping summary call.")
            return NO_CONTEXT_PLACEHOLDER

        prompt = self.build_prompt(context, task_hint)
        try:
            result = call_with_fallback(self.transport, self.models, prompt)
        except (AllModelsFailedError, ValueError) as e:
            log.error(f"Code summary unavailable: {e}")
            return SUMMARY_UNAVAILABLE_PLACEHOLDER

        summary = result.text.strip()
        if not summary:
            log.warning(f"Model {result.model} returned a blank summary.")
            return SUMMARY_UNAVAILABLE_PLACEHOLDER
        return summary
