"""SSO login service."""

from __future__ import annotations

from guanaitong_openapi.client import OpenApiClient
from guanaitong_openapi.models.login import GetAuthCodeByMobileRequest, SSOLoginRequest

AUTH_CODE_PATH = "/sso/employee/getAuthCodeByMobile"
SSO_LOGIN_PATH = "/sso/employee/login"


class LoginService:
    """Service for single sign-on of employees into the platform."""

    def __init__(self, client: OpenApiClient) -> None:
        self._client = client

    def get_auth_code_by_mobile(self, mobile: str) -> str:
        """Get a one-time SSO auth code for the employee with this mobile number.

        A success envelope without data yields an empty string.
        """
        request = GetAuthCodeByMobileRequest(mobile=mobile)
        code = self._client.request(AUTH_CODE_PATH, request, response_model=str | None)
        return code or ""

    def generate_login_url(self, auth_code: str, redirect_url: str) -> str:
        """Build the signed SSO login URL to redirect the employee's browser to.

        Nothing is sent; the parameters are signed locally without a token.
        """
        business_params = SSOLoginRequest(auth_code=auth_code, redirect_url=redirect_url).to_wire_params()
        common_params = self._client.signed_common_params(business_params, auth=False)
        return self._client.build_url(SSO_LOGIN_PATH, {**business_params, **common_params})

    def login_url_for_mobile(self, mobile: str, redirect_url: str) -> str:
        """Fetch an auth code for a mobile number and turn it into a login URL."""
        auth_code = self.get_auth_code_by_mobile(mobile)
        return self.generate_login_url(auth_code, redirect_url)
