"""RFC 7807 Problem Details returned by every failing LibraryMan endpoint."""

from typing import Any

from pydantic import BaseModel, Field, model_validator

RFC7231 = "https://datatracker.ietf.org/doc/html/rfc7231#section-"

# Statuses the member and newsletter endpoints can answer with
PROBLEM_TYPES: dict[int, str] = {
    400: f"{RFC7231}6.5.1",
    404: f"{RFC7231}6.5.4",
    405: f"{RFC7231}6.5.5",
    409: f"{RFC7231}6.5.8",
    422: "https://datatracker.ietf.org/doc/html/rfc4918#section-11.2",
    500: f"{RFC7231}6.6.1",
}


def get_rfc_section_url(status: int) -> str:
    """Return the RFC section describing ``status``, or the 500 section."""
    return PROBLEM_TYPES.get(status, PROBLEM_TYPES[500])


class ValidationErrorDetail(BaseModel):
    """One rejected field of a member or newsletter request.

    ``input`` is blanked by the handler for password fields.
    """

    type: str = Field(..., description="Pydantic error type")
    loc: tuple[str, ...] = Field(..., description="Where the value was read from")
    msg: str = Field(..., description="Why the value was rejected")
    input: Any = Field(None, description="Rejected value, if safe to echo")
    ctx: dict[str, Any] | None = Field(None, description="Constraint values")


class ProblemDetail(BaseModel):
    """Problem Detail body.

    Attributes:
        type: Problem type URI, derived from ``status`` when omitted.
        title: Short summary, e.g. "Deletion Blocked".
        status: HTTP status code.
        detail: Message for this occurrence, hidden for server errors.
        instance: Request path that failed.
        errors: Field errors, only on 422.
    """

    type: str | None = Field(
        default=None,
        description="Problem type URI",
        json_schema_extra={"example": f"{RFC7231}6.5.8"},
    )
    title: str = Field(
        ...,
        description="Short summary of the problem",
        json_schema_extra={"example": "Deletion Blocked"},
    )
    status: int = Field(..., description="HTTP status code", json_schema_extra={"example": 409})
    detail: str | None = Field(
        default=None,
        description="Explanation of this occurrence",
        json_schema_extra={
            "example": "Cannot delete member due to unpaid fines or borrowed books"
        },
    )
    instance: str | None = Field(
        default=None,
        description="Path of the failing request",
        json_schema_extra={"example": "/api/members/42"},
    )
    errors: list[ValidationErrorDetail] | None = Field(
        default=None,
        description="Field errors (422 only)",
        json_schema_extra={
            "example": [
                {
                    "type": "string_too_short",
                    "loc": ["body", "username"],
                    "msg": "String should have at least 1 character",
                    "input": "",
                }
            ]
        },
    )

    @model_validator(mode="before")
    @classmethod
    def derive_type(cls, values: dict[str, Any]) -> dict[str, Any]:
        if values.get("type") is None:
            values["type"] = get_rfc_section_url(values.get("status", 500))
        return values
