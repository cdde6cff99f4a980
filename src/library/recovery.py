"""
Simulated password recovery.

No e-mail is sent: the assistant drafts the notification text and the caller
displays it. Unlike login, an unknown address is reported explicitly.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel

from src.assistant.gemini import TextCompleter
from src.assistant.prompts import RECOVERY_FALLBACK, recovery_prompt
from src.library.errors import AccountNotFoundError
from src.library.models import Language, User

logger = logging.getLogger(__name__)


class RecoveryResult(BaseModel):
    email: str
    message: str
    generated: bool  # False when the fixed template was used


def find_by_email(users: list[User], email: str) -> User | None:
    wanted = email.lower()
    return next((u for u in users if u.email.lower() == wanted), None)


def recover_account(
    users: list[User], email: str, assistant: TextCompleter, language: Language
) -> RecoveryResult:
    user = find_by_email(users, email)
    if user is None:
        logger.info("Recovery requested for unknown address '%s'.", email)
        raise AccountNotFoundError(email)

    text = assistant.complete(recovery_prompt(user, language), temperature=0.8)
    if text:
        return RecoveryResult(email=user.email, message=text, generated=True)

    logger.warning("Recovery message generation failed for %s; using template.", user.id)
    return RecoveryResult(
        email=user.email,
        message=RECOVERY_FALLBACK.format(name=user.name, email=user.email),
        generated=False,
    )
