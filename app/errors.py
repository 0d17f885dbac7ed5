"""Domain errors and their HTTP mapping"""

from typing import Any, Callable, Coroutine, Dict, Optional, Type

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.responses import Response

logger = structlog.get_logger()

ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]


class ReservationError(Exception):
    """Base class for errors surfaced to API clients"""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, reason: Optional[str] = None) -> None:
        self.message = message
        self.reason = reason
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        if self.reason is not None:
            body["reason"] = self.reason
        return body


class ValidationError(ReservationError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ReservationError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ReservationError):
    status_code = status.HTTP_409_CONFLICT


class NoCapacityError(ConflictError):
    """No table satisfies the seating and party size; an expected outcome"""

    DEFAULT_REASON = "No available tables for the selected seating and guests."

    def __init__(self, seating: str, guests: int, reason: Optional[str] = None) -> None:
        self.seating = seating
        self.guests = guests
        super().__init__(
            f"No {seating} table available for {guests} guests",
            reason=reason or self.DEFAULT_REASON,
        )


class StorageError(ReservationError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Failed to process the request. Please try again later.") -> None:
        super().__init__(message)


async def reservation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, ReservationError) else StorageError()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request", "detail": errors},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error", path=request.url.path, error=str(exc), exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=StorageError().to_dict(),
    )


EXCEPTION_HANDLERS: Dict[Type[Exception], ExceptionHandler] = {
    ReservationError: reservation_error_handler,
    RequestValidationError: validation_error_handler,
    Exception: unhandled_error_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
