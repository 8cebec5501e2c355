# catalog_admin/core/errors.py
from fastapi import HTTPException, status


class Unauthorized(HTTPException):
    """Missing, invalid or expired token; rejected login credentials."""

    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class Forbidden(HTTPException):
    def __init__(self, detail: str = "Forbidden"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFound(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class BadRequest(HTTPException):
    def __init__(self, detail: str = "Bad request"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class PayloadTooLarge(HTTPException):
    def __init__(self, detail: str = "Payload too large"):
        super().__init__(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=detail,
        )


class BackendError(Exception):
    """
    A call to Supabase (database or storage) failed.

    Raised by the repository / storage adapters so that services never see
    postgrest or storage3 exception types. Rendered as a 500 by the
    app-level handler in main.py.
    """

    def __init__(self, action: str, cause: object):
        self.action = action
        self.cause = cause
        super().__init__(f"{action}: {cause}")
