# catalog_admin/schemas/auth.py
from sqlmodel import SQLModel


class LoginRequest(SQLModel):
    """
    Credentials posted to /auth/login.

    Fields are not validated here: a malformed or missing email is answered
    like any other bad credentials (401), never as a 400.
    """

    email: str = ""
    password: str = ""


class IdentityClaim(SQLModel):
    """
    Identity facts embedded in an admin session token.

    `role` may be missing from a token; the auth gate treats that the same
    as a role mismatch, never as full access.
    """

    id: str
    email: str
    role: str | None = None


class UserSummary(SQLModel):
    id: str
    email: str
    role: str


class LoginResponse(SQLModel):
    token: str
    user: UserSummary


class AuthenticatedUser(SQLModel):
    """Identity returned by Supabase Auth after a successful sign-in."""

    id: str
    email: str | None = None
