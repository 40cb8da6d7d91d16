"""CLI commands for employee management."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from guanaitong_openapi.client import OpenApiClient
from guanaitong_openapi.config import get_settings
from guanaitong_openapi.models.employee import EmployeeAddRequest
from guanaitong_openapi.services.employee import EmployeeService
from guanaitong_openapi.utils.errors import handle_error
from guanaitong_openapi.utils.output import OutputFormat, print_output

console = Console(stderr=True)
app = typer.Typer(name="employee", help="Manage enterprise employees.")


@app.callback()
def employee() -> None:
    """Manage enterprise employees."""


@app.command("add")
def add(
    enterprise_code: Annotated[str, typer.Option("--enterprise-code", "-e", help="Enterprise code")],
    user_id: Annotated[str, typer.Option("--user-id", "-u", help="Employee id in your system")],
    name: Annotated[str, typer.Option("--name", "-n", help="Employee name")],
    mobile: Annotated[str | None, typer.Option("--mobile", "-m", help="Mobile number")] = None,
    mobile_area: Annotated[str | None, typer.Option("--mobile-area", help="Mobile area code, e.g. 86")] = None,
    email: Annotated[str | None, typer.Option("--email", help="Email address")] = None,
    code: Annotated[str | None, typer.Option("--code", help="Employee number")] = None,
    gender: Annotated[int | None, typer.Option("--gender", help="1 male, 2 female")] = None,
    dept_code: Annotated[str | None, typer.Option("--dept-code", help="Department code")] = None,
    level: Annotated[str | None, typer.Option("--level", help="Employee level")] = None,
    birth_day: Annotated[str | None, typer.Option("--birth-day", help="Birthday (yyyy-MM-dd)")] = None,
    entry_day: Annotated[str | None, typer.Option("--entry-day", help="Entry date (yyyy-MM-dd)")] = None,
    send_invite: Annotated[int | None, typer.Option("--send-invite", help="1 to send an invitation")] = None,
    remark: Annotated[str | None, typer.Option("--remark", help="Free-form remark")] = None,
    card_type: Annotated[int | None, typer.Option("--card-type", help="Identity document type")] = None,
    card_no: Annotated[str | None, typer.Option("--card-no", help="Identity document number")] = None,
    allow_simple_pwd: Annotated[int | None, typer.Option("--allow-simple-pwd", help="1 to allow a simple initial password")] = None,
    password: Annotated[str | None, typer.Option("--password", help="Initial login password")] = None,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show request details")] = False,
) -> None:
    """Add an employee to an enterprise."""
    try:
        request = EmployeeAddRequest(
            enterprise_code=enterprise_code,
            user_id=user_id,
            name=name,
            mobile=mobile,
            mobile_area=mobile_area,
            email=email,
            code=code,
            gender=gender,
            dept_code=dept_code,
            level=level,
            birth_day=birth_day,
            entry_day=entry_day,
            send_invite=send_invite,
            remark=remark,
            card_type=card_type,
            card_no=card_no,
            allow_simple_pwd=allow_simple_pwd,
            password=password,
        )
        client = OpenApiClient.from_settings(get_settings(), verbose=verbose)
    except ValueError as e:
        handle_error(e)
        raise typer.Exit(1)

    service = EmployeeService(client)
    try:
        console.print(f"Adding employee [bold]{user_id}[/bold] to [bold]{enterprise_code}[/bold]...", style="yellow")
        result = service.add(request)
        print_output({"status": "added", "user_id": user_id, "result": result}, output, title="Employee")
    except RuntimeError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        client.close()
