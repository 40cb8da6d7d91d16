"""CLI commands for access token management."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from guanaitong_openapi.client import OpenApiClient
from guanaitong_openapi.config import get_settings
from guanaitong_openapi.models.auth import TokenStatus
from guanaitong_openapi.utils.errors import handle_error
from guanaitong_openapi.utils.output import OutputFormat, print_output

console = Console(stderr=True)
app = typer.Typer(name="auth", help="Manage access tokens.")


def _status_row(status: TokenStatus, label: str) -> dict[str, object]:
    return {
        "status": label,
        "expires_at": str(status.expires_at) if status.expires_at else "N/A",
        "seconds_remaining": status.seconds_remaining or 0,
        "needs_refresh": status.needs_refresh,
    }


@app.command()
def login(
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show request details")] = False,
) -> None:
    """Create an access token and display its status."""
    try:
        client = OpenApiClient.from_settings(get_settings(), verbose=verbose)
    except ValueError as e:
        handle_error(e)
        raise typer.Exit(1)

    try:
        console.print(f"Creating token for app [bold]{client.app_id}[/bold]...", style="yellow")
        client.tokens.get_access_token()
        print_output(_status_row(client.tokens.get_status(), "authenticated"), output, title="Authentication")
    except RuntimeError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        client.close()


@app.command()
def refresh(
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show request details")] = False,
) -> None:
    """Force creation of a new access token."""
    try:
        client = OpenApiClient.from_settings(get_settings(), verbose=verbose)
    except ValueError as e:
        handle_error(e)
        raise typer.Exit(1)

    try:
        console.print("Force refreshing access token...", style="yellow")
        client.tokens.get_access_token(force_refresh=True)
        print_output(_status_row(client.tokens.get_status(), "refreshed"), output, title="Token Refreshed")
    except RuntimeError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        client.close()
