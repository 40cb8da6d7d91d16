"""Guanaitong open platform CLI — entry point.

Operator tooling on top of the SDK: token checks, adding employees and
building SSO login links.
"""

from __future__ import annotations

import logging

import typer

from guanaitong_openapi.commands.auth_cmd import app as auth_app
from guanaitong_openapi.commands.employee_cmd import app as employee_app
from guanaitong_openapi.commands.sso_cmd import app as sso_app

app = typer.Typer(
    name="gat-openapi",
    help="CLI for the Guanaitong open platform API.",
    no_args_is_help=True,
)

# Register command groups
app.add_typer(auth_app, name="auth")
app.add_typer(employee_app, name="employee")
app.add_typer(sso_app, name="sso")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Guanaitong open platform CLI — tokens, employees and SSO."""
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


if __name__ == "__main__":
    app()
