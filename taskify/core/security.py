"""Security related functions: password hashing and bearer tokens."""

from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
import jwt

from taskify.core.config import settings
from taskify.exceptions.user import InvalidTokenError, TokenExpiredError


BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    # bcrypt only reads the first 72 bytes; newer releases reject longer input
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Return a salted bcrypt hash of ``password``."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check ``password`` against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


class TokenManager:
    """
    Issues and verifies the HS256 bearer tokens handed out at login.

    A token carries the user's ``id``, ``name`` and ``email`` so the client can
    show who is signed in without another round trip, plus the standard
    ``sub``, ``iat`` and ``exp`` claims.

    :ivar secret_key: The secret used to sign and verify tokens.
    :type secret_key: str
    :ivar algorithm: JWT signing algorithm.
    :type algorithm: str
    :ivar expires_delta: Lifetime of a freshly issued token.
    :type expires_delta: timedelta
    """

    def __init__(
        self,
        secret_key: str | None = None,
        algorithm: str | None = None,
        expires_delta: timedelta | None = None,
    ):
        self.secret_key = secret_key or settings.secret_key
        self.algorithm = algorithm or settings.algorithm
        self.expires_delta = expires_delta or timedelta(
            minutes=settings.access_token_expire_minutes
        )

    def create_access_token(self, user: Any, now: datetime | None = None) -> str:
        """Sign a token for ``user`` (anything with ``id``, ``name`` and ``email``)."""
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(user.id),
            "id": str(user.id),
            "name": user.name,
            "email": user.email,
            "iat": issued_at,
            "exp": issued_at + self.expires_delta,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> dict:
        """
        Decode ``token`` and validate its signature and expiry.

        :param token: The encoded JWT.
        :return: The decoded payload.
        :raises TokenExpiredError: If the token is past its ``exp``.
        :raises InvalidTokenError: For any other decoding failure.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp", "id"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError() from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError() from e
        return payload


token_manager = TokenManager()


def create_access_token(user: Any) -> str:
    return token_manager.create_access_token(user)
