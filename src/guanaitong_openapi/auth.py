"""Access token lifecycle for the open platform.

Creates tokens with the client-credential grant, caches them, and replaces them
once 80% of their lifetime has elapsed or when the server rejects them.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from guanaitong_openapi.models.auth import CreateTokenRequest, Token, TokenResponse, TokenStatus
from guanaitong_openapi.utils.errors import OpenApiError, TokenError

if TYPE_CHECKING:
    from guanaitong_openapi.client import OpenApiClient

logger = logging.getLogger(__name__)

TOKEN_CREATE_PATH = "/token/create"


class TokenManager:
    """Owns the access token of one ``OpenApiClient``.

    All reads and replacements of the token happen under a lock, so concurrent
    callers that find the token missing or stale trigger a single token-create.
    """

    def __init__(self, client: OpenApiClient, clock: Callable[[], float] = time.time) -> None:
        self._client = client
        self._clock = clock
        self._token: Token | None = None
        self._lock = threading.Lock()

    @property
    def token(self) -> Token | None:
        return self._token

    def get_access_token(self, force_refresh: bool = False) -> str:
        """Get a valid access token, creating or refreshing it if needed.

        Args:
            force_refresh: Replace the token even if it is still fresh.

        Returns:
            The access token string.

        Raises:
            TokenError: If the token-create call fails.
        """
        with self._lock:
            if not force_refresh and self._is_token_fresh():
                return self._token.access_token  # type: ignore[union-attr]
            return self._recreate()

    def refresh(self, stale_token: str | None = None) -> str:
        """Discard the token the server rejected and create a new one.

        Args:
            stale_token: The token value that was rejected. If the held token
                already differs from it, another caller has replaced it and
                the held token is returned without a new token-create.
        """
        with self._lock:
            if (
                stale_token is not None
                and self._token is not None
                and self._token.access_token != stale_token
                and self._is_token_fresh()
            ):
                return self._token.access_token
            logger.info("Access token rejected by server, recreating")
            return self._recreate()

    def clear(self) -> None:
        """Forget the current token; the next call creates a new one."""
        with self._lock:
            self._token = None

    def get_status(self) -> TokenStatus:
        """Get the current token status."""
        token = self._token
        if token is None:
            return TokenStatus(has_token=False, is_expired=True)

        now_ms = self._now_ms()
        is_expired = token.is_expired(now_ms)
        seconds_remaining = None
        if not is_expired:
            seconds_remaining = (token.expires_at - now_ms) // 1000

        return TokenStatus(
            has_token=True,
            is_expired=is_expired,
            needs_refresh=token.needs_refresh(now_ms),
            created_at=datetime.fromtimestamp(token.created_at / 1000),
            expires_at=datetime.fromtimestamp(token.expires_at / 1000),
            seconds_remaining=seconds_remaining,
        )

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def _is_token_fresh(self) -> bool:
        return self._token is not None and not self._token.needs_refresh(self._now_ms())

    def _recreate(self) -> str:
        # Caller holds the lock.
        self._token = None
        self._token = self._create_token()
        return self._token.access_token

    def _create_token(self) -> Token:
        """Call /token/create without an access token."""
        try:
            response = self._client.request(
                TOKEN_CREATE_PATH,
                CreateTokenRequest(),
                auth=False,
                response_model=TokenResponse,
            )
        except OpenApiError as e:
            raise TokenError(f"createToken error: {e}") from e

        token = Token.from_response(response, self._now_ms())
        logger.info(f"Created access token, expires in {token.expires_in}s")
        return token
