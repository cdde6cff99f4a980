"""
Google Generative AI client, the only place that talks to the text service.

Two call shapes:
  complete(prompt)                 → one-shot text, or None on any failure
  start_chat(system_instruction)   → GeminiChat whose send() returns the model turn

Callers depend on the TextCompleter protocol so tests can pass an in-memory
fake. No retries and no timeout: a failed call is reported once and the call
site degrades to its own fallback string.
"""

from __future__ import annotations

import logging
import warnings
from typing import Protocol

# google.generativeai emits a FutureWarning about the google-genai migration
warnings.filterwarnings(
    "ignore",
    category=FutureWarning,
    module="google.generativeai",
)

import google.generativeai as genai  # noqa: E402

from src.config import settings  # noqa: E402

logger = logging.getLogger(__name__)


class ChatTransport(Protocol):
    def send(self, text: str) -> str: ...


class TextCompleter(Protocol):
    def complete(
        self,
        prompt: str,
        *,
        temperature: float | None = None,
        max_output_tokens: int | None = None,
    ) -> str | None: ...

    def start_chat(self, system_instruction: str) -> ChatTransport: ...


class GeminiChat:
    """Stateful chat session; history is kept by the underlying genai.ChatSession."""

    def __init__(self, session: genai.ChatSession) -> None:
        self._session = session

    def send(self, text: str) -> str:
        response = self._session.send_message(text)
        return response.text.strip()


class GeminiClient:
    def __init__(
        self,
        api_key: str | None = None,
        model_name: str | None = None,
        chat_model_name: str | None = None,
    ) -> None:
        genai.configure(api_key=api_key if api_key is not None else settings.google_api_key)
        self._model_name = model_name or settings.llm_model
        self._chat_model_name = chat_model_name or settings.chat_model
        self._llm = genai.GenerativeModel(model_name=self._model_name)
        logger.info(
            "LLM model '%s' configured (chat: '%s').", self._model_name, self._chat_model_name
        )

    def complete(
        self,
        prompt: str,
        *,
        temperature: float | None = None,
        max_output_tokens: int | None = None,
    ) -> str | None:
        generation_config: dict = {}
        if temperature is not None:
            generation_config["temperature"] = temperature
        if max_output_tokens is not None:
            generation_config["max_output_tokens"] = max_output_tokens

        logger.info("Calling LLM (%d prompt chars) …", len(prompt))
        try:
            response = self._llm.generate_content(
                prompt, generation_config=generation_config or None
            )
            return response.text.strip()
        except Exception:
            logger.exception("LLM call failed.")
            return None

    def start_chat(self, system_instruction: str) -> GeminiChat:
        model = genai.GenerativeModel(
            model_name=self._chat_model_name,
            system_instruction=system_instruction,
        )
        return GeminiChat(model.start_chat(history=[]))
