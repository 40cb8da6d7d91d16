"""CLI tests for sso command group."""
from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from guanaitong_openapi.commands.sso_cmd import app
from guanaitong_openapi.utils.errors import ApiError, TokenError

runner = CliRunner()


def _invoke(args, service):
    with patch("guanaitong_openapi.commands.sso_cmd.get_settings", return_value=MagicMock()), \
         patch("guanaitong_openapi.commands.sso_cmd.OpenApiClient", MagicMock()), \
         patch("guanaitong_openapi.commands.sso_cmd.LoginService", return_value=service):
        return runner.invoke(app, args)


# ── auth-code ────────────────────────────────────────────────────────

def test_auth_code_success():
    service = MagicMock()
    service.get_auth_code_by_mobile.return_value = "ac-1"

    result = _invoke(["auth-code", "--mobile", "17762200002", "--output", "json"], service)
    assert result.exit_code == 0
    assert "ac-1" in result.stdout
    service.get_auth_code_by_mobile.assert_called_once_with("17762200002")


def test_auth_code_token_failure():
    service = MagicMock()
    service.get_auth_code_by_mobile.side_effect = TokenError("createToken error: bad secret")

    result = _invoke(["auth-code", "--mobile", "17762200002"], service)
    assert result.exit_code == 1
    assert "AUTH_ERROR" in result.stdout


# ── login-url ────────────────────────────────────────────────────────

def test_login_url():
    service = MagicMock()
    service.generate_login_url.return_value = "https://openapi.guanaitong.tech/sso/employee/login?x=1"

    result = _invoke(
        ["login-url", "--auth-code", "ac-1", "--redirect-url", "https://m.igeidao.com", "--output", "json"],
        service,
    )
    assert result.exit_code == 0
    assert "/sso/employee/login" in result.stdout
    service.generate_login_url.assert_called_once_with("ac-1", "https://m.igeidao.com")


# ── login ────────────────────────────────────────────────────────────

def test_login_for_mobile():
    service = MagicMock()
    service.login_url_for_mobile.return_value = "https://openapi.guanaitong.tech/sso/employee/login?y=2"

    result = _invoke(["login", "--mobile", "17762200002", "--redirect-url", "https://m.igeidao.com"], service)
    assert result.exit_code == 0
    service.login_url_for_mobile.assert_called_once_with("17762200002", "https://m.igeidao.com")


def test_login_api_error():
    service = MagicMock()
    service.login_url_for_mobile.side_effect = ApiError(1000300002, "mobile not registered")

    result = _invoke(["login", "--mobile", "1", "--redirect-url", "https://m.igeidao.com"], service)
    assert result.exit_code == 1


def test_missing_credentials():
    with patch("guanaitong_openapi.commands.sso_cmd.get_settings",
               side_effect=ValueError("No application credentials configured.")):
        result = runner.invoke(app, ["login-url", "--auth-code", "a", "--redirect-url", "b"])
    assert result.exit_code == 1
