"""
Text-generation transport.

``GeminiTransport`` wraps the google-genai client. The API key is passed in by
the caller; nothing here reads the environment.
"""
from __future__ import annotations

import logging
from typing import Optional, Protocol

from google import genai
from google.genai import types as genai_types

from TimeLog.errors import TransportError

log = logging.getLogger(__name__)


class Transport(Protocol):
    def generate(self, model: str, prompt: str) -> str:
        """Return the model's text for ``prompt`` or raise."""
        ...


class GeminiTransport:
    """Single-shot ``generate_content`` calls against the Gemini Developer API."""

    def __init__(self, api_key: str, temperature: float = 0.3, client: Optional[genai.Client] = None):
        if not api_key and client is None:
            raise ValueError("A Gemini API key is required.")
        self.temperature = temperature
        self.client = client or genai.Client(api_key=api_key)

    def generate(self, model: str, prompt: str) -> str:
        config = genai_types.GenerateContentConfig(temperature=self.temperature)
        log.debug(f"Calling {model} with a {len(prompt)} char prompt.")
        try:
            response = self.client.models.generate_content(
                model=model,
                contents=prompt,
                config=config,
            )
        except Exception as e:
            raise TransportError(model, f"{type(e).__name__} - {e}") from e

        if response.prompt_feedback and response.prompt_feedback.block_reason:
            raise TransportError(model, f"prompt blocked: {response.prompt_feedback.block_reason}")
        text = response.text
        if not text or not text.strip():
            raise TransportError(model, "empty response")
        return text
