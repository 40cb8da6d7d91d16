"""Base API client for the Guanaitong open platform.

Handles common parameters, request signing, body encoding, envelope decoding
and the one-shot retry when the server reports an expired token.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from typing import Any
from urllib.parse import urlencode

import httpx
from pydantic import TypeAdapter, ValidationError

from guanaitong_openapi.auth import TokenManager
from guanaitong_openapi.config import Settings
from guanaitong_openapi.models.common import BODY_KEY, ApiRequest, ApiResponse
from guanaitong_openapi.signing import SIGN_KEY, sign
from guanaitong_openapi.utils.errors import ApiError, DecodeError, OpenApiError, TransportError

logger = logging.getLogger(__name__)

# First attempt plus one retry after an expired-token response
MAX_ATTEMPTS = 2


class OpenApiClient:
    """HTTP client for the open platform with signing and token handling."""

    def __init__(
        self,
        app_id: str,
        app_secret: str,
        is_prod: bool = False,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        http_client: httpx.Client | None = None,
        clock: Callable[[], float] = time.time,
        verbose: bool = False,
    ) -> None:
        self._settings = Settings(
            app_id=app_id,
            app_secret=app_secret,
            is_prod=is_prod,
            base_url_override=base_url or "",
            timeout=timeout,
        )
        self._clock = clock
        self._verbose = verbose
        if http_client is not None:
            self._http = http_client
        elif timeout is not None:
            self._http = httpx.Client(timeout=timeout)
        else:
            self._http = httpx.Client()
        self._tokens = TokenManager(self, clock=clock)

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> OpenApiClient:
        """Build a client from a ``Settings`` object."""
        return cls(
            settings.app_id,
            settings.app_secret,
            settings.is_prod,
            base_url=settings.base_url_override or None,
            timeout=settings.timeout,
            **kwargs,
        )

    @property
    def app_id(self) -> str:
        return self._settings.app_id

    @property
    def base_url(self) -> str:
        return self._settings.base_url

    @property
    def tokens(self) -> TokenManager:
        return self._tokens

    def request(
        self,
        path: str,
        request: ApiRequest,
        *,
        auth: bool = True,
        response_model: Any = None,
    ) -> Any:
        """Make a signed POST request and return the envelope payload.

        Args:
            path: API path (e.g. "/employee/add"). Appended to the base URL.
            request: Typed request body.
            auth: Attach the access token, creating it if needed.
            response_model: Type to validate the payload into. None returns
                the payload as decoded from JSON.

        Returns:
            The ``data`` field of a successful envelope.

        Raises:
            TokenError: If an access token could not be created.
            TransportError: On connection failures or a non-2xx status.
            DecodeError: If the body is not a valid envelope.
            ApiError: If the server returns a nonzero code.
        """
        business_params = request.to_wire_params()
        body = self._encode_body(request, business_params)

        for attempt in range(1, MAX_ATTEMPTS + 1):
            common_params = self.signed_common_params(business_params, auth=auth)
            url = self.build_url(path, common_params)

            if self._verbose:
                logger.info(f"[Attempt {attempt}/{MAX_ATTEMPTS}] POST {path} ({request.content_type})")

            envelope = self._post(path, url, body, request.content_type)

            if envelope.is_success:
                return self._decode_data(path, envelope.data, response_model)

            if envelope.is_token_expired and auth and attempt < MAX_ATTEMPTS:
                logger.warning(f"Token expired ({envelope.code}) on {path}, refreshing and retrying...")
                self._tokens.refresh(stale_token=common_params["access_token"])
                continue

            raise ApiError(envelope.code, envelope.msg)

        raise OpenApiError(f"Request to {path} failed after {MAX_ATTEMPTS} attempts")

    def signed_common_params(
        self,
        business_params: Mapping[str, Any],
        auth: bool = True,
    ) -> dict[str, Any]:
        """Build appid/timestamp(/access_token) and add the signature over everything."""
        common_params: dict[str, Any] = {
            "appid": self._settings.app_id,
            "timestamp": int(self._clock()),
        }
        if auth:
            common_params["access_token"] = self._tokens.get_access_token()

        common_params[SIGN_KEY] = sign(self._settings.app_secret, common_params, business_params)
        return common_params

    def build_url(self, path: str, params: Mapping[str, Any] | None = None) -> str:
        """Join the base URL and path, appending params as a sorted query string."""
        url = f"{self.base_url}/{path.lstrip('/')}"
        if params:
            return f"{url}?{urlencode(sorted(params.items()))}"
        return url

    def _encode_body(self, request: ApiRequest, business_params: Mapping[str, str]) -> str:
        if request.is_form:
            return urlencode(sorted(business_params.items()))
        return business_params.get(BODY_KEY, "")

    def _post(self, path: str, url: str, body: str, content_type: str) -> ApiResponse:
        """Dispatch one POST and decode the envelope."""
        try:
            response = self._http.post(
                url,
                content=body,
                headers={"Content-Type": content_type},
            )
        except httpx.HTTPError as e:
            raise TransportError(f"Remote error on {path}: {e}") from e

        if self._verbose:
            logger.info(f"Response: {response.status_code}")

        if not 200 <= response.status_code < 300:
            raise TransportError(
                f"Request failure on {path} (HTTP {response.status_code}): {response.text}",
                status_code=response.status_code,
            )

        try:
            return ApiResponse.model_validate(response.json())
        except ValueError as e:
            raise DecodeError(f"Failed to parse API response from {path}: {e}") from e

    def _decode_data(self, path: str, data: Any, response_model: Any) -> Any:
        if response_model is None:
            return data
        try:
            return TypeAdapter(response_model).validate_python(data)
        except ValidationError as e:
            raise DecodeError(f"Unexpected payload from {path}: {e}") from e

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._http.close()

    def __enter__(self) -> OpenApiClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
