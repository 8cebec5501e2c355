# catalog_admin/core/tokens.py
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError

from catalog_admin.schemas.auth import IdentityClaim

DEFAULT_TTL = timedelta(days=7)


class TokenError(Exception):
    """Base class for session token verification failures."""


class TokenExpiredError(TokenError):
    """Signature is valid but `exp` is in the past."""


class TokenInvalidError(TokenError):
    """Bad signature, unparseable token or missing identity claims."""


class TokenCodec:
    """
    Issue and verify the admin session tokens (JWT, HS256 by default).

    Tokens are stateless: there is no server-side session store, so a token
    stays valid until it expires. Changing a user's role requires a new
    login.
    """

    def __init__(
        self,
        secret: str,
        ttl: timedelta = DEFAULT_TTL,
        algorithm: str = "HS256",
    ):
        if not secret:
            raise RuntimeError("JWT_SECRET is not configured")
        self._secret = secret
        self.ttl = ttl
        self.algorithm = algorithm

    def issue(self, claim: IdentityClaim) -> str:
        """
        Sign `claim` with an expiry of now + ttl.

        Returns:
            Encoded JWT string.
        """
        issued_at = datetime.now(timezone.utc)
        payload = claim.model_dump()
        payload.update({"iat": issued_at, "exp": issued_at + self.ttl})
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> IdentityClaim:
        """
        Decode and verify a session token.

        Raises:
            TokenExpiredError: signature ok, token past its expiry.
            TokenInvalidError: anything else (signature, structure, claims).
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as exc:
            raise TokenExpiredError("Token expired") from exc
        except JWTError as exc:
            raise TokenInvalidError("Invalid token") from exc

        try:
            return IdentityClaim.model_validate(payload)
        except ValidationError as exc:
            raise TokenInvalidError("Token missing identity claims") from exc
