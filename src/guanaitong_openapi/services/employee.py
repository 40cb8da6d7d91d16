"""Employee management service."""

from __future__ import annotations

from typing import Any

from guanaitong_openapi.client import OpenApiClient
from guanaitong_openapi.models.employee import EmployeeAddRequest

EMPLOYEE_ADD_PATH = "/employee/add"


class EmployeeService:
    """Service for adding employees to an enterprise."""

    def __init__(self, client: OpenApiClient) -> None:
        self._client = client

    def add(self, request: EmployeeAddRequest | None = None, **fields: Any) -> str | None:
        """Add one employee.

        Accepts either a prepared ``EmployeeAddRequest`` or its fields as
        keyword arguments (python or wire names).
        """
        if request is None:
            request = EmployeeAddRequest(**fields)
        return self._client.request(EMPLOYEE_ADD_PATH, request, response_model=str | None)
