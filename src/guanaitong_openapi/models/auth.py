"""Auth-related data models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from guanaitong_openapi.models.common import ApiRequest

GRANT_TYPE = "client_credential"

# Tokens are proactively replaced once this share of their lifetime has passed
REFRESH_PERCENT = 80


class CreateTokenRequest(ApiRequest):
    grant_type: str = GRANT_TYPE


class TokenResponse(BaseModel):
    """Payload of a successful /token/create call."""
    access_token: str
    expires_in: int


class Token(BaseModel):
    """An access token with its lifetime, timestamps in epoch milliseconds."""
    access_token: str
    expires_in: int
    created_at: int
    expires_at: int

    model_config = {"frozen": True}

    @classmethod
    def from_response(cls, response: TokenResponse, now_ms: int) -> Token:
        return cls(
            access_token=response.access_token,
            expires_in=response.expires_in,
            created_at=now_ms,
            expires_at=now_ms + response.expires_in * 1000,
        )

    @property
    def refresh_at(self) -> int:
        return self.created_at + self.expires_in * 1000 * REFRESH_PERCENT // 100

    def needs_refresh(self, now_ms: int) -> bool:
        """True once 80% of the declared lifetime has elapsed."""
        return now_ms > self.refresh_at

    def is_expired(self, now_ms: int) -> bool:
        return now_ms >= self.expires_at


class TokenStatus(BaseModel):
    """Current state of the cached access token."""
    has_token: bool
    is_expired: bool
    needs_refresh: bool = True
    created_at: datetime | None = None
    expires_at: datetime | None = None
    seconds_remaining: int | None = None
