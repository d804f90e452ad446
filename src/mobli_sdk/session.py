"""In-memory session state for a Mobli client.

Asynchronous requests read the token from pool threads while a login dialog
may be writing it, so every access goes through one re-entrant lock.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

from .models import NEVER_EXPIRES, Session
from .telemetry import get_logger


class TokenStore:
    """Holds the access token, its expiry and the authenticated user id.

    Expiry is kept in milliseconds since the Unix epoch, with ``0`` meaning
    the session never expires.
    """

    def __init__(self, *, clock: Callable[[], float] = time.time) -> None:
        """Initialize an empty store.

        Args:
            clock: Time source returning seconds since the epoch.
        """
        self._clock = clock
        self._lock = threading.RLock()
        self._access_token: str | None = None
        self._access_expires: int = NEVER_EXPIRES
        self._user_id: str | None = None
        self._logger = get_logger()

    def now_ms(self) -> int:
        return int(self._clock() * 1000)

    @property
    def access_token(self) -> str | None:
        with self._lock:
            return self._access_token

    @property
    def access_expires(self) -> int:
        with self._lock:
            return self._access_expires

    @property
    def user_id(self) -> str | None:
        with self._lock:
            return self._user_id

    def set_access_token(self, token: str | None) -> None:
        with self._lock:
            self._access_token = token

    def set_access_expires(self, expires_ms: int) -> None:
        with self._lock:
            self._access_expires = expires_ms

    def set_access_expires_in(self, expires_in: str | int | None) -> None:
        """Set expiry from a duration in seconds.

        ``"0"`` marks the session as never expiring; ``None`` leaves the
        current expiry untouched.
        """
        if expires_in is None:
            return
        if expires_in == "0" or expires_in == 0:
            with self._lock:
                self._access_expires = NEVER_EXPIRES
            return
        try:
            seconds = int(expires_in)
        except (TypeError, ValueError):
            self._logger.warning("Ignoring unparsable expires_in", expires_in=str(expires_in))
            return
        with self._lock:
            self._access_expires = self.now_ms() + seconds * 1000

    def set_user_id(self, user_id: str | None) -> None:
        with self._lock:
            self._user_id = user_id

    def is_session_valid(self) -> bool:
        """Whether a token is present and has not expired."""
        with self._lock:
            return self.snapshot().is_valid(self.now_ms())

    def valid_access_token(self) -> str | None:
        """Return the token if the session is valid, else None."""
        with self._lock:
            return self._access_token if self.is_session_valid() else None

    def update(
        self,
        *,
        access_token: str | None,
        expires_in: str | int | None,
        user_id: str | None,
    ) -> bool:
        """Apply a login result atomically and report whether it is valid."""
        with self._lock:
            self.set_access_token(access_token)
            self.set_access_expires_in(expires_in)
            self.set_user_id(user_id)
            return self.is_session_valid()

    def clear(self) -> None:
        """Drop the token and reset expiry."""
        with self._lock:
            self._access_token = None
            self._access_expires = NEVER_EXPIRES

    def snapshot(self) -> Session:
        with self._lock:
            return Session(
                access_token=self._access_token,
                access_expires=self._access_expires,
                user_id=self._user_id,
            )
