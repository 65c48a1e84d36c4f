from datetime import datetime, timedelta, timezone
from typing import Dict, List, Union

import pytest

from TimeLog.config import Settings
from TimeLog.errors import TransportError


class FakeTransport:
    """Scripted stand-in for GeminiTransport.

    ``script`` maps a model name to the text it answers or the exception it raises.
    """

    def __init__(self, script: Dict[str, Union[str, Exception]]):
        self.script = script
        self.calls: List[tuple] = []

    def generate(self, model: str, prompt: str) -> str:
        self.calls.append((model, prompt))
        outcome = self.script.get(model, TransportError(model, "not scripted"))
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    @property
    def models_called(self) -> List[str]:
        return [model for model, _ in self.calls]


@pytest.fixture
def fake_transport():
    return FakeTransport


@pytest.fixture
def settings(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)  # keep a developer's .env out of the tests
    return Settings(
        logs_path=".project-logs/",
        local_tz="Asia/Kolkata",
        model_candidates=["model-a", "model-b", "model-c"],
    )


@pytest.fixture
def t0():
    return datetime(2026, 2, 28, 9, 0, 0, tzinfo=timezone(timedelta(hours=5, minutes=30)))
