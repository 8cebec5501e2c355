# catalog_admin/routers/auth.py
from fastapi import APIRouter, Depends

from catalog_admin.routers.dependencies import get_auth_service
from catalog_admin.schemas.auth import LoginRequest, LoginResponse
from catalog_admin.schemas.error import ErrorResponse
from catalog_admin.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
def login(
    payload: LoginRequest,
    service: AuthService = Depends(get_auth_service),
):
    """
    Admin panel login.

    - Verifies email/password with Supabase Auth.
    - Requires profiles.role == "admin".
    - Returns a session token for `Authorization: Bearer <token>`.
    """
    return service.login(payload.email, payload.password)
