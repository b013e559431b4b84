"""Exception handlers mapping domain errors to HTTP responses"""

import logging
import time
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from quote_gateway.api.v1.schemas import ErrorResponse
from quote_gateway.domain.exceptions import (
    InvalidArgumentError,
    InvalidQuoteRequestError,
    PersistenceError,
    QuoteNotFoundError,
)


def _error(status_code: int, message: str, error_code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            message=message,
            error_code=error_code,
            timestamp=int(time.time() * 1000),
        ).model_dump(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach handlers for every domain error kind"""

    @app.exception_handler(InvalidQuoteRequestError)
    async def handle_invalid_quote_request(request: Request, exc: InvalidQuoteRequestError):
        return _error(400, str(exc), "INVALID_QUOTE_REQUEST")

    @app.exception_handler(InvalidArgumentError)
    async def handle_invalid_argument(request: Request, exc: InvalidArgumentError):
        return _error(400, str(exc), "INVALID_ARGUMENT")

    @app.exception_handler(QuoteNotFoundError)
    async def handle_quote_not_found(request: Request, exc: QuoteNotFoundError):
        return _error(404, str(exc), "QUOTE_NOT_FOUND")

    @app.exception_handler(PersistenceError)
    async def handle_persistence_error(request: Request, exc: PersistenceError):
        return _error(503, "Quote storage unavailable", "PERSISTENCE_ERROR")

    @app.exception_handler(RequestValidationError)
    async def handle_schema_violation(request: Request, exc: RequestValidationError):
        logging.warning(f"Validation error: {exc.errors()}")
        message = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'][1:])}: {err['msg']}"
            for err in exc.errors()
        )
        return _error(400, message, "VALIDATION_ERROR")
