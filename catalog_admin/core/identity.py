# catalog_admin/core/identity.py
import logging

from supabase import Client

from catalog_admin.schemas.auth import AuthenticatedUser

logger = logging.getLogger(__name__)


class InvalidCredentialsError(Exception):
    """Supabase Auth refused the email/password pair."""


class SupabaseIdentityProvider:
    """
    Exchanges email/password for a verified identity via Supabase Auth.

    The caller never learns why a sign-in failed (wrong password,
    unconfirmed email, provider outage all look the same).
    """

    def __init__(self, client: Client):
        self.client = client

    def sign_in(self, email: str, password: str) -> AuthenticatedUser | None:
        """
        Returns:
            The signed-in user, or None if Supabase answered without one.

        Raises:
            InvalidCredentialsError: on any Auth error.
        """
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as exc:
            # supabase-auth raises several unrelated error types here
            logger.info("Supabase sign-in refused: %s", exc)
            raise InvalidCredentialsError(str(exc)) from exc

        user = getattr(response, "user", None)
        if user is None:
            return None
        return AuthenticatedUser(id=str(user.id), email=user.email)
