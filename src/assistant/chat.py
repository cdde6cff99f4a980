"""
Floating chat assistant session.

The session is seeded with the visible catalog and the answer language. When
either changes the owner calls reset(), which rebuilds the underlying model
session and restarts the transcript with the welcome message.
"""

from __future__ import annotations

import logging
from typing import Literal

from pydantic import BaseModel

from src.assistant.gemini import ChatTransport, TextCompleter
from src.assistant.prompts import chat_system_instruction
from src.library.models import Document, Language

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Hello! I am IndusBot. Ask me about any procedure, safety sheet or machine manual."
CHAT_FALLBACK = "Error."


class ChatMessage(BaseModel):
    role: Literal["user", "model"]
    text: str

    @property
    def is_fallback(self) -> bool:
        return self.role == "model" and self.text == CHAT_FALLBACK


class AssistantChat:
    def __init__(
        self, assistant: TextCompleter, documents: list[Document], language: Language
    ) -> None:
        self._assistant = assistant
        self._documents = list(documents)
        self._language = language
        self._transport: ChatTransport | None = None
        self.messages: list[ChatMessage] = []
        self.reset()

    @property
    def language(self) -> Language:
        return self._language

    def reset(
        self, documents: list[Document] | None = None, language: Language | None = None
    ) -> None:
        if documents is not None:
            self._documents = list(documents)
        if language is not None:
            self._language = language
        self._transport = self._assistant.start_chat(
            chat_system_instruction(self._documents, self._language)
        )
        self.messages = [ChatMessage(role="model", text=WELCOME_MESSAGE)]
        logger.debug("Chat session started with %d document(s).", len(self._documents))

    def send(self, text: str) -> ChatMessage | None:
        """Send one user turn; returns the model turn, or None for blank input."""
        message = text.strip()
        if not message:
            return None
        self.messages.append(ChatMessage(role="user", text=message))

        try:
            reply = self._transport.send(message) or CHAT_FALLBACK
        except Exception:
            logger.exception("Chat call failed.")
            reply = CHAT_FALLBACK

        model_turn = ChatMessage(role="model", text=reply)
        self.messages.append(model_turn)
        return model_turn
