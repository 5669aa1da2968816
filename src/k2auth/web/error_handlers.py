import logging

from fastapi import Request
from fastapi.responses import JSONResponse, Response

from k2auth.errors import NotFoundError
from k2auth.web.envelope import GENERAL_ERROR, INVALID_INPUT, NOT_FOUND, K2Response

logger = logging.getLogger(__name__)


def create_envelope_error_response(status_code: int, message: str) -> JSONResponse:
    """Wrap an error in the K2 envelope; the HTTP status stays 200."""
    envelope: K2Response[None] = K2Response.error(message, status_code=status_code)
    return JSONResponse(status_code=200, content=envelope.model_dump(mode="json", by_alias=True))


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with the matching envelope code."""
    # ValidationError and any other UserError are caller-correctable input problems
    status_code = NOT_FOUND if isinstance(exc, NotFoundError) else INVALID_INPUT
    return create_envelope_error_response(status_code=status_code, message=str(exc))


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors."""
    logger.exception("Unexpected error: %s", exc)
    return create_envelope_error_response(status_code=GENERAL_ERROR, message="An unexpected error occurred.")
