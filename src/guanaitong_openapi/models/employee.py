"""Employee data models."""

from __future__ import annotations

from pydantic import Field

from guanaitong_openapi.models.common import ApiRequest


class EmployeeAddRequest(ApiRequest):
    enterprise_code: str = Field(alias="enterpriseCode")
    user_id: str = Field(alias="userId")
    name: str
    code: str | None = None
    gender: int | None = None  # 1 male, 2 female
    email: str | None = None
    mobile_area: str | None = Field(default=None, alias="mobileArea")
    mobile: str | None = None
    send_invite: int | None = Field(default=None, alias="sendInvite")
    remark: str | None = None
    dept_code: str | None = Field(default=None, alias="deptCode")
    level: str | None = None
    birth_day: str | None = Field(default=None, alias="birthDay")  # yyyy-MM-dd
    entry_day: str | None = Field(default=None, alias="entryDay")  # yyyy-MM-dd
    card_type: int | None = Field(default=None, alias="cardType")
    card_no: str | None = Field(default=None, alias="cardNo")
    allow_simple_pwd: int | None = Field(default=None, alias="allowSimplePwd")
    password: str | None = None
