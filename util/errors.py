# util/errors.py
from fastapi import HTTPException, status
from util.enums import ErrorMessage


class AppError(HTTPException):
    # Flow: raise AppError to short-circuit with a typed status & message.
    def __init__(
        self, message: str, http_status: int = status.HTTP_400_BAD_REQUEST
    ) -> None:
        super().__init__(status_code=http_status, detail=message)

    @classmethod
    def of(cls, error: ErrorMessage) -> "AppError":
        return cls(error.value.message, error.value.http_status)


class UsageError(AppError):
    """Malformed or missing input, detected before touching the substrate."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status.HTTP_400_BAD_REQUEST)

    @classmethod
    def of(cls, error: ErrorMessage) -> "UsageError":
        return cls(error.value.message)


class NotFoundError(AppError):
    def __init__(self, message: str) -> None:
        super().__init__(message, status.HTTP_404_NOT_FOUND)

    @classmethod
    def of(cls, error: ErrorMessage) -> "NotFoundError":
        return cls(error.value.message)


class SubstrateError(Exception):
    """
    The underlying store failed a get/put/delete/list.
    Carries the operation and the logical path only; physical keys stay internal.
    """

    def __init__(self, operation: str, path: str, cause: Exception | None = None):
        self.operation = operation
        self.path = path
        self.cause = cause
        reason = type(cause).__name__ if cause is not None else "error"
        super().__init__(f"substrate {operation} failed path={path} reason={reason}")
