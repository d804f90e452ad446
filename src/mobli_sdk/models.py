"""Pydantic models for the Mobli SDK."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

NEVER_EXPIRES = 0


class Session(BaseModel):
    """Point-in-time copy of the session held by a TokenStore."""

    model_config = ConfigDict(frozen=True)

    access_token: str | None = None
    access_expires: int = NEVER_EXPIRES
    user_id: str | None = None

    def is_valid(self, now_ms: int) -> bool:
        """Check the session against the given instant (ms since epoch)."""
        return self.access_token is not None and (
            self.access_expires == NEVER_EXPIRES or now_ms < self.access_expires
        )


class PublicTokenResponse(BaseModel):
    """Body returned by the client-credentials (shared token) endpoint.

    Numeric tokens are read as their decimal string; an empty string is
    still a token.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    access_token: str
