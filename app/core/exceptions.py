"""
Typed API errors.

Services raise these at the point of failure; FastAPI renders them as
``{"detail": ..., "code": ...}`` through the handler registered in main.
"""
from fastapi import HTTPException, status


class AppError(HTTPException):
    """Base class for errors carrying an application error code."""

    code: str = "INTERNAL_SERVER_ERROR"
    status_code_default: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str = "", headers: dict[str, str] | None = None):
        super().__init__(
            status_code=self.status_code_default,
            detail=detail or self.code.replace("_", " ").capitalize(),
            headers=headers,
        )


class NotFoundError(AppError):
    """Raised when a requested row does not exist."""

    code = "NOT_FOUND"
    status_code_default = status.HTTP_404_NOT_FOUND


class ForbiddenError(AppError):
    """Raised when the user is not allowed to touch a tenant's data."""

    code = "FORBIDDEN"
    status_code_default = status.HTTP_403_FORBIDDEN


class BadRequestError(AppError):
    """Raised when input is valid JSON but breaks a business rule."""

    code = "BAD_REQUEST"
    status_code_default = status.HTTP_400_BAD_REQUEST


class ConflictError(AppError):
    """Raised when a unique value is already taken."""

    code = "CONFLICT"
    status_code_default = status.HTTP_409_CONFLICT


class UnauthorizedError(AppError):
    """Raised when authentication fails."""

    code = "UNAUTHORIZED"
    status_code_default = status.HTTP_401_UNAUTHORIZED

    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(detail=detail, headers={"WWW-Authenticate": "Bearer"})


class InternalServerError(AppError):
    """Raised when an operation fails for reasons the client cannot fix."""

    code = "INTERNAL_SERVER_ERROR"
    status_code_default = status.HTTP_500_INTERNAL_SERVER_ERROR
