"""
Login state machine: ANONYMOUS ⇄ AUTHENTICATED(user).

Credentials are compared in plaintext, case-sensitively on both fields.
"""

from __future__ import annotations

import logging

from src.library.errors import InvalidCredentialsError
from src.library.models import Session, User

logger = logging.getLogger(__name__)

ANONYMOUS = Session()


def login(users: list[User], email: str, password: str) -> Session:
    """Return an authenticated session, or raise InvalidCredentialsError."""
    matches = [u for u in users if u.email == email and u.password == password]
    if not matches:
        logger.info("Rejected login attempt for '%s'.", email)
        raise InvalidCredentialsError()
    if len(matches) > 1:
        logger.warning(
            "%d users share the credentials for '%s'; using the first (%s).",
            len(matches),
            email,
            matches[0].id,
        )
    user = matches[0]
    logger.info("User %s (%s) logged in.", user.id, user.role)
    return Session(user=user, is_authenticated=True)


def logout() -> Session:
    return ANONYMOUS.model_copy()
