"""
Exception handlers for the formula API.

Every client-side failure is reported as 400 {"message": "..."}:
- MissingInputError   -> "Missing required input: a or b"
- FormulaDomainError  -> "Invalid <field>: <reason>"
- RequestValidationError (body is not JSON, or a field is not a number)
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging

from services.calculations import FormulaError

logger = logging.getLogger(__name__)


async def formula_error_handler(request: Request, exc: FormulaError) -> JSONResponse:
    """Map calculator input errors to 400 with a specific reason."""
    logger.warning(f"Rejected {request.url.path}: {exc}")

    return JSONResponse(
        status_code=400,
        content={"message": str(exc)},
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request body"

    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part != "body"]
    if not location:
        return f"Invalid request body: {first.get('msg', 'malformed')}"
    return f"Invalid {'.'.join(location)}: {first.get('msg', 'invalid value')}"


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Map request schema errors to 400 {"message": ...}."""
    message = _describe_validation_error(exc)
    logger.warning(f"Rejected {request.url.path}: {message}")

    return JSONResponse(
        status_code=400,
        content={"message": message},
    )


def setup_error_handlers(app: FastAPI) -> None:
    """
    Register the API's exception handlers.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(FormulaError, formula_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
