from TimeLog.errors import TransportError
from TimeLog.llm.summarizer import (
    NO_CONTEXT_PLACEHOLDER,
    SUMMARY_UNAVAILABLE_PLACEHOLDER,
    CodeSummarizer,
)

SNIPPET = "def add(a, b):\n    return a + b\n"


def test_blank_context_skips_the_model(fake_transport):
    transport = fake_transport({"A": "unused"})
    summarizer = CodeSummarizer(transport, ["A"])
    assert summarizer.summarize("   \n") == NO_CONTEXT_PLACEHOLDER
    assert summarizer.summarize("") == NO_CONTEXT_PLACEHOLDER
    assert transport.calls == []


def test_summary_is_trimmed(fake_transport):
    transport = fake_transport({"A": "  Adds two numbers.\n"})
    assert CodeSummarizer(transport, ["A"]).summarize(SNIPPET) == "Adds two numbers."


def test_total_failure_returns_placeholder(fake_transport):
    transport = fake_transport({"A": TransportError("A", "500"), "B": RuntimeError("boom")})
    assert CodeSummarizer(transport, ["A", "B"]).summarize(SNIPPET) == SUMMARY_UNAVAILABLE_PLACEHOLDER
    assert transport.models_called == ["A", "B"]


def test_falls_back_to_next_model(fake_transport):
    transport = fake_transport({"A": TransportError("A", "429"), "B": "Adds numbers."})
    assert CodeSummarizer(transport, ["A", "B"]).summarize(SNIPPET) == "Adds numbers."


def test_task_hint_selects_task_aware_prompt(fake_transport):
    transport = fake_transport({"A": "ok"})
    summarizer = CodeSummarizer(transport, ["A"])
    summarizer.summarize(SNIPPET, task_hint="Implement login page")
    summarizer.summarize(SNIPPET)
    with_hint, without_hint = (prompt for _, prompt in transport.calls)
    assert "Implement login page" in with_hint
    assert "Implement login page" not in without_hint
    assert SNIPPET in with_hint and SNIPPET in without_hint


def test_no_candidate_models_returns_placeholder(fake_transport):
    transport = fake_transport({})
    assert CodeSummarizer(transport, []).summarize(SNIPPET) == SUMMARY_UNAVAILABLE_PLACEHOLDER
    assert transport.calls == []
