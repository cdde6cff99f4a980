"""
Shared fixtures: an in-memory stand-in for the Gemini client and a library
backed by a temporary store directory. No test touches the network.
"""

from __future__ import annotations

import pytest

from src.library.controller import DocumentLibrary
from src.library.store import JsonStore


class FakeChat:
    def __init__(self, owner: "FakeAssistant", system_instruction: str) -> None:
        self.owner = owner
        self.system_instruction = system_instruction

    def send(self, text: str) -> str:
        self.owner.chat_turns.append(text)
        if self.owner.fail:
            raise RuntimeError("chat service unavailable")
        return f"echo: {text}"


class FakeAssistant:
    """Records every prompt; returns `reply`, or None when `fail` is set."""

    def __init__(self, reply: str = "generated text", fail: bool = False) -> None:
        self.reply = reply
        self.fail = fail
        self.prompts: list[str] = []
        self.options: list[dict] = []
        self.system_instructions: list[str] = []
        self.chat_turns: list[str] = []

    def complete(self, prompt, *, temperature=None, max_output_tokens=None):
        self.prompts.append(prompt)
        self.options.append({"temperature": temperature, "max_output_tokens": max_output_tokens})
        return None if self.fail else self.reply

    def start_chat(self, system_instruction: str) -> FakeChat:
        self.system_instructions.append(system_instruction)
        return FakeChat(self, system_instruction)


@pytest.fixture
def fake_assistant() -> FakeAssistant:
    return FakeAssistant()


@pytest.fixture
def failing_assistant() -> FakeAssistant:
    return FakeAssistant(fail=True)


@pytest.fixture
def store(tmp_path) -> JsonStore:
    return JsonStore(tmp_path / "store")


@pytest.fixture
def library(store, fake_assistant) -> DocumentLibrary:
    return DocumentLibrary(store, assistant=fake_assistant)


@pytest.fixture
def admin_library(library) -> DocumentLibrary:
    library.login("admin@indudocs.com", "admin")
    return library


@pytest.fixture
def operator_library(library) -> DocumentLibrary:
    library.login("juan@indudocs.com", "user123")
    return library
