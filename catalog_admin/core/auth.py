# catalog_admin/core/auth.py
import logging
from datetime import timedelta

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from catalog_admin.core.config import Settings, get_settings
from catalog_admin.core.errors import Forbidden, Unauthorized
from catalog_admin.core.tokens import TokenCodec, TokenExpiredError, TokenInvalidError
from catalog_admin.schemas.auth import IdentityClaim

logger = logging.getLogger(__name__)

# auto_error=False => a missing header or a non-Bearer scheme yields None
# and we reject with our own 401 body.
bearer_scheme = HTTPBearer(auto_error=False)


def get_token_codec(settings: Settings = Depends(get_settings)) -> TokenCodec:
    return TokenCodec(
        secret=settings.JWT_SECRET,
        ttl=timedelta(seconds=settings.JWT_EXPIRES_SECONDS),
        algorithm=settings.JWT_ALGORITHM,
    )


def require_role(required_role: str):
    """
    Build a dependency that admits only bearers of `required_role`.

    Flow:
      1. No header / not "Bearer <token>" => 401.
      2. Token expired => 401 "Token expired."
      3. Token otherwise invalid => 401 "Invalid or malformed token."
      4. claim.role != required_role => 403.
      5. Otherwise the claim is stored on request.state.claim and returned.

    Attach it to a whole router so every route of the resource is guarded.
    """

    def dependency(
        request: Request,
        credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
        codec: TokenCodec = Depends(get_token_codec),
    ) -> IdentityClaim:
        if credentials is None:
            logger.warning(
                "auth.rejected method=%s path=%s reason=missing_bearer",
                request.method,
                request.url.path,
            )
            raise Unauthorized("Access denied. No token provided.")

        try:
            claim = codec.verify(credentials.credentials)
        except TokenExpiredError:
            logger.warning(
                "auth.rejected method=%s path=%s reason=expired",
                request.method,
                request.url.path,
            )
            raise Unauthorized("Token expired.")
        except TokenInvalidError:
            logger.warning(
                "auth.rejected method=%s path=%s reason=invalid",
                request.method,
                request.url.path,
            )
            raise Unauthorized("Invalid or malformed token.")

        if claim.role != required_role:
            logger.warning(
                "auth.forbidden method=%s path=%s role=%s",
                request.method,
                request.url.path,
                claim.role,
            )
            raise Forbidden(f"Access forbidden. Requires {required_role} role.")

        request.state.claim = claim
        return claim

    return dependency


def require_admin(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    codec: TokenCodec = Depends(get_token_codec),
    settings: Settings = Depends(get_settings),
) -> IdentityClaim:
    """Admin gate; the required role comes from settings.ADMIN_ROLE."""
    return require_role(settings.ADMIN_ROLE)(request, credentials, codec)


def get_current_claim(request: Request) -> IdentityClaim:
    """
    Claim attached by the gate for the current request.

    Only valid on routes behind require_admin / require_role.
    """
    claim = getattr(request.state, "claim", None)
    if claim is None:
        raise Unauthorized("Authentication required")
    return claim
