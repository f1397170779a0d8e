"""Simulated local authentication.

There is no credential check: signing in or up simply mints a new
non-anonymous identity and persists it under ``localUser``.
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable, List, Optional

from pydantic import ValidationError

from talea.core.storage import KeyValueStore, read_json, write_json
from talea.schemas import UserIdentity

_LOGGER = logging.getLogger(__name__)

LOCAL_USER_KEY = "localUser"
GUEST_EMAIL = "guest@local.com"

IdentityListener = Callable[[Optional[UserIdentity]], None]


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


class LocalAuth:
    """Supplies the current :class:`UserIdentity` and announces changes."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store
        self._identity: Optional[UserIdentity] = None
        self._ready = False
        self._listeners: List[IdentityListener] = []

    @property
    def identity(self) -> Optional[UserIdentity]:
        return self._identity

    @property
    def user_id(self) -> Optional[str]:
        return self._identity.id if self._identity else None

    @property
    def is_ready(self) -> bool:
        return self._ready

    def subscribe(self, listener: IdentityListener) -> Callable[[], None]:
        """Register ``listener`` and return a function that unregisters it."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _replace(self, identity: Optional[UserIdentity]) -> Optional[UserIdentity]:
        if identity is None:
            self._store.remove(LOCAL_USER_KEY)
        else:
            write_json(self._store, LOCAL_USER_KEY, identity.model_dump(mode="json"))
        self._identity = identity
        for listener in list(self._listeners):
            listener(identity)
        return identity

    def bootstrap(self) -> UserIdentity:
        """Restore the stored identity or start an anonymous guest session."""

        payload = read_json(self._store, LOCAL_USER_KEY)
        identity: Optional[UserIdentity] = None
        if isinstance(payload, dict):
            try:
                identity = UserIdentity.model_validate(payload)
            except ValidationError as exc:
                _LOGGER.warning("Stored user is invalid; creating a guest instead: %s", exc)
        elif payload is not None:
            _LOGGER.warning("Stored user is not an object; creating a guest instead")

        if identity is None:
            _LOGGER.info("No stored user found, creating anonymous user")
            identity = UserIdentity(id=_new_id("anon"), is_anonymous=True, email=GUEST_EMAIL)
            self._replace(identity)
        else:
            self._identity = identity
            for listener in list(self._listeners):
                listener(identity)

        self._ready = True
        return identity

    @staticmethod
    def _require_credentials(email: str, password: str) -> str:
        cleaned = (email or "").strip()
        if not cleaned or not password:
            raise ValueError("Enter both email and password.")
        return cleaned

    def sign_up(self, email: str, password: str) -> UserIdentity:
        cleaned = self._require_credentials(email, password)
        identity = UserIdentity(id=_new_id("user"), is_anonymous=False, email=cleaned)
        _LOGGER.info("Signed up and logged in as %s (%s)", cleaned, identity.id)
        return self._replace(identity)

    def sign_in(self, email: str, password: str) -> UserIdentity:
        cleaned = self._require_credentials(email, password)
        identity = UserIdentity(id=_new_id("user"), is_anonymous=False, email=cleaned)
        _LOGGER.info("Signed in as %s (%s)", cleaned, identity.id)
        return self._replace(identity)

    def sign_in_anonymously(self) -> UserIdentity:
        identity = UserIdentity(id=_new_id("anon"), is_anonymous=True, email=GUEST_EMAIL)
        _LOGGER.info("Signed in anonymously as %s", identity.id)
        return self._replace(identity)

    def sign_out(self) -> None:
        self._replace(None)
        _LOGGER.info("Signed out")


__all__ = ["GUEST_EMAIL", "IdentityListener", "LOCAL_USER_KEY", "LocalAuth"]
