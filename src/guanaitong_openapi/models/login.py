"""SSO login data models."""

from __future__ import annotations

from guanaitong_openapi.models.common import ApiRequest


class GetAuthCodeByMobileRequest(ApiRequest):
    mobile: str


class SSOLoginRequest(ApiRequest):
    auth_code: str
    redirect_url: str
