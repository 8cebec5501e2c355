# catalog_admin/schemas/error.py
from sqlmodel import SQLModel


class ErrorResponse(SQLModel):
    """Body of every non-2xx response."""

    error: str
