"""Global exception handlers for standardized error responses.

Implements RFC 7807 Problem Details for HTTP APIs.
Domain errors carry their own status code and title; everything else is
mapped here.
"""

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from libraryman.core.logging import logger
from libraryman.domain.exceptions import LibraryManError
from libraryman.models.errors import ProblemDetail, ValidationErrorDetail


def _problem_response(problem_detail: ProblemDetail) -> JSONResponse:
    return JSONResponse(
        status_code=problem_detail.status,
        content=problem_detail.model_dump(exclude_none=True),
    )


async def library_error_handler(
    request: Request, exc: LibraryManError
) -> JSONResponse:  # noqa: ASYNC100
    """Handle domain errors with the status code each error class declares.

    Server-side failures keep their message out of the response body.

    Args:
        request: The FastAPI request object.
        exc: The domain error that was raised.

    Returns:
        JSONResponse with ProblemDetail body.
    """
    if exc.status_code >= 500:
        logger.error(
            f"{type(exc).__name__}: {exc.message}",
            extra={"path": str(request.url.path), "method": request.method},
        )
        detail = "An unexpected error occurred. Please try again later."
    else:
        logger.warning(
            f"{type(exc).__name__}: {exc.message}",
            extra={"path": str(request.url.path), "method": request.method},
        )
        detail = exc.message

    return _problem_response(
        ProblemDetail(
            title=exc.title,
            status=exc.status_code,
            detail=detail,
            instance=str(request.url.path),
        )
    )


async def http_exception_handler(
    request: Request, exc: HTTPException
) -> JSONResponse:  # noqa: ASYNC100
    """Handle HTTPException with RFC 7807 ProblemDetail response.

    Args:
        request: The FastAPI request object.
        exc: The HTTPException that was raised.

    Returns:
        JSONResponse with ProblemDetail body.
    """
    logger.warning(
        f"HTTPException: {exc.status_code} - {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "path": str(request.url.path),
            "method": request.method,
        },
    )

    return _problem_response(
        ProblemDetail(
            title="An error occurred",
            status=exc.status_code,
            detail=str(exc.detail),
            instance=str(request.url.path),
        )
    )


async def general_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:  # noqa: ASYNC100
    """Handle unexpected exceptions with 500 Internal Server Error.

    Args:
        request: The FastAPI request object.
        exc: The exception that was raised.

    Returns:
        JSONResponse with ProblemDetail body.
    """
    logger.exception(
        f"Unexpected error: {type(exc).__name__}",
        extra={
            "exception_type": type(exc).__name__,
            "path": str(request.url.path),
            "method": request.method,
        },
    )

    return _problem_response(
        ProblemDetail(
            title="Internal Server Error",
            status=500,
            detail="An unexpected error occurred. Please try again later.",
            instance=str(request.url.path),
        )
    )


async def validation_exception_handler(  # noqa: ASYNC100
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle validation errors with detailed field-level information.

    Args:
        request: The FastAPI request object.
        exc: The RequestValidationError from Pydantic validation.

    Returns:
        JSONResponse with ProblemDetail body including validation errors.
    """
    logger.warning(
        f"Validation error: {len(exc.errors())} errors",
        extra={"path": str(request.url.path), "method": request.method},
    )

    # Passwords submitted in the body are never echoed back
    errors = [
        ValidationErrorDetail(
            type=error["type"],
            loc=tuple(str(loc) for loc in error["loc"]),
            msg=error["msg"],
            input=None if "password" in str(error["loc"][-1]) else error.get("input"),
            ctx=(
                {k: str(v) for k, v in error.get("ctx", {}).items()}
                if error.get("ctx")
                else None
            ),
        )
        for error in exc.errors()
    ]

    return _problem_response(
        ProblemDetail(
            title="Validation Error",
            status=422,
            detail=f"One or more validation errors occurred ({len(errors)} errors).",
            instance=str(request.url.path),
            errors=errors,
        )
    )
