# catalog_admin/services/auth_service.py
import logging

from pydantic import EmailStr, TypeAdapter, ValidationError

from catalog_admin.core.errors import BackendError, Forbidden, Unauthorized
from catalog_admin.core.identity import InvalidCredentialsError, SupabaseIdentityProvider
from catalog_admin.core.tokens import TokenCodec
from catalog_admin.repositories.profile_repo import ProfileRepository
from catalog_admin.schemas.auth import IdentityClaim, LoginResponse, UserSummary

logger = logging.getLogger(__name__)

_email_adapter = TypeAdapter(EmailStr)


class AuthService:
    """
    Admin panel login.

    Responsibilities:
      - verify email/password against Supabase Auth
      - resolve the user's role from profiles (service-role read)
      - mint the session token; this is the only place tokens are issued
    """

    def __init__(
        self,
        identity: SupabaseIdentityProvider,
        profiles: ProfileRepository,
        codec: TokenCodec,
        admin_role: str = "admin",
    ):
        self.identity = identity
        self.profiles = profiles
        self.codec = codec
        self.admin_role = admin_role

    def login(self, email: str, password: str) -> LoginResponse:
        """
        Exchange credentials for an admin session token.

        Raises:
            Unauthorized: malformed or rejected credentials, or no user
                came back.
            Forbidden: profile unreadable, missing, or not admin.
        """
        try:
            _email_adapter.validate_python(email)
        except ValidationError:
            raise Unauthorized("Invalid credentials.")
        if not password:
            raise Unauthorized("Invalid credentials.")

        try:
            user = self.identity.sign_in(email, password)
        except InvalidCredentialsError:
            raise Unauthorized("Invalid credentials.")

        if user is None:
            raise Unauthorized("Authentication failed.")

        try:
            role = self.profiles.get_role(user.id)
        except BackendError as exc:
            logger.error("Profile lookup failed for user %s: %s", user.id, exc)
            raise Forbidden("User not authorized for the admin panel.")

        if role != self.admin_role:
            logger.warning(
                "Admin login refused for user %s: role=%r", user.id, role
            )
            raise Forbidden("User not authorized for the admin panel.")

        claim = IdentityClaim(id=user.id, email=user.email or email, role=role)
        token = self.codec.issue(claim)
        logger.info("Admin login for user %s", user.id)

        return LoginResponse(
            token=token,
            user=UserSummary(id=claim.id, email=claim.email, role=role),
        )
