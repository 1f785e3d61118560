"""
Explicit session context for the signed-in user.

Routes and services receive a SessionContext instead of reaching for ambient
auth state. Listeners subscribed through `subscribe` are told about every
sign-in and sign-out; `subscribe` returns the matching unsubscribe callable.
"""

from __future__ import annotations

import logging
from typing import Callable

from app.models import User

logger = logging.getLogger(__name__)

Listener = Callable[["SessionContext"], None]

ROLE_ADMIN = "admin"
ROLE_CLEANER = "cleaner"


class SessionContext:
    def __init__(self, user: User | None = None) -> None:
        self._user = user
        self._listeners: list[Listener] = []

    @property
    def user(self) -> User | None:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    @property
    def role(self) -> str | None:
        return self._user.role if self._user else None

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def sign_in(self, user: User) -> None:
        self._user = user
        logger.debug("session signed in user=%s role=%s", user.id, user.role)
        self._notify()

    def sign_out(self) -> None:
        if self._user is None:
            return
        logger.debug("session signed out user=%s", self._user.id)
        self._user = None
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
