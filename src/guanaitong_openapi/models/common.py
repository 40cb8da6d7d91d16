"""Request base class and the response envelope shared by every endpoint."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, field_validator

# Reserved business-parameter key holding the serialized body of a JSON request
BODY_KEY = "_body"

CODE_OK = 0
# Vendor code meaning the access token is no longer valid server-side
CODE_TOKEN_EXPIRED = 1000210004

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json"


class ApiRequest(BaseModel):
    """Base for typed request bodies.

    Field aliases are the wire parameter names. Form requests are sent as
    url-encoded fields; anything else is sent as one JSON document.
    """
    is_form: ClassVar[bool] = True

    model_config = {"populate_by_name": True}

    @property
    def content_type(self) -> str:
        return FORM_CONTENT_TYPE if self.is_form else JSON_CONTENT_TYPE

    def to_wire_params(self) -> dict[str, str]:
        """Business parameters as they take part in signing.

        Unset (None) fields are left out.
        """
        if self.is_form:
            data = self.model_dump(by_alias=True, exclude_none=True)
            return {key: str(value) for key, value in data.items()}
        return {BODY_KEY: self.model_dump_json(by_alias=True, exclude_none=True)}


class ApiResponse(BaseModel):
    """The ``{code, msg, data}`` envelope every response is wrapped in."""
    code: int
    msg: str = ""
    data: Any = None

    @field_validator("msg", mode="before")
    @classmethod
    def _null_msg(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def is_success(self) -> bool:
        return self.code == CODE_OK

    @property
    def is_token_expired(self) -> bool:
        return self.code == CODE_TOKEN_EXPIRED
