"""CLI commands for employee single sign-on."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from guanaitong_openapi.client import OpenApiClient
from guanaitong_openapi.config import get_settings
from guanaitong_openapi.services.login import LoginService
from guanaitong_openapi.utils.errors import handle_error
from guanaitong_openapi.utils.output import OutputFormat, print_output

console = Console(stderr=True)
app = typer.Typer(name="sso", help="Generate SSO auth codes and login URLs.")


def _client(verbose: bool = False) -> OpenApiClient:
    try:
        return OpenApiClient.from_settings(get_settings(), verbose=verbose)
    except ValueError as e:
        handle_error(e)
        raise typer.Exit(1)


@app.command("auth-code")
def auth_code(
    mobile: Annotated[str, typer.Option("--mobile", "-m", help="Employee mobile number")],
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show request details")] = False,
) -> None:
    """Get a one-time SSO auth code for an employee."""
    client = _client(verbose)
    service = LoginService(client)

    try:
        code = service.get_auth_code_by_mobile(mobile)
        print_output({"mobile": mobile, "auth_code": code}, output, title="SSO Auth Code")
    except RuntimeError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        client.close()


@app.command("login-url")
def login_url(
    auth_code: Annotated[str, typer.Option("--auth-code", "-c", help="Auth code from `sso auth-code`")],
    redirect_url: Annotated[str, typer.Option("--redirect-url", "-r", help="Page to land on after login")],
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
) -> None:
    """Build a signed SSO login URL from an auth code (no network call)."""
    client = _client()
    try:
        url = LoginService(client).generate_login_url(auth_code, redirect_url)
        print_output({"login_url": url}, output, title="SSO Login URL")
    finally:
        client.close()


@app.command("login")
def login(
    mobile: Annotated[str, typer.Option("--mobile", "-m", help="Employee mobile number")],
    redirect_url: Annotated[str, typer.Option("--redirect-url", "-r", help="Page to land on after login")],
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show request details")] = False,
) -> None:
    """Fetch an auth code for a mobile number and print the login URL."""
    client = _client(verbose)
    service = LoginService(client)

    try:
        url = service.login_url_for_mobile(mobile, redirect_url)
        print_output({"mobile": mobile, "login_url": url}, output, title="SSO Login URL")
    except RuntimeError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        client.close()
