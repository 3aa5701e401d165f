"""Shared error response builders."""

from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.models import ValidationProblemResponse


def validation_problem(errors: dict[str, list[str]]) -> JSONResponse:
    """400 response carrying a field -> messages map."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ValidationProblemResponse(errors=errors).model_dump(),
    )


def request_validation_errors(exc: RequestValidationError) -> dict[str, list[str]]:
    """Flatten pydantic request errors into field -> messages.

    The field is the last location segment, e.g. ("body", "email") -> "email".
    """
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        field = loc[-1] if loc else "request"
        errors.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return errors
