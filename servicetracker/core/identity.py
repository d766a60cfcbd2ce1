"""
Identity verification for bearer tokens issued by the hosted auth provider
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol
import uuid

from jose import JWTError, jwt
import structlog

from servicetracker.core.config import Settings
from servicetracker.core.errors import Unauthenticated

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Identity:
    """A verified principal as reported by the identity provider"""
    id: uuid.UUID
    email: Optional[str] = None
    name: Optional[str] = None


class IdentityVerifier(Protocol):
    """Exchanges a bearer token for a verified identity"""

    async def verify(self, token: str) -> Identity:
        ...


class JWTIdentityVerifier:
    """Validates provider-signed JWT access tokens locally"""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        audience: Optional[str] = None,
        issuer: Optional[str] = None,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.audience = audience
        self.issuer = issuer

    @classmethod
    def from_settings(cls, settings: Settings) -> "JWTIdentityVerifier":
        return cls(
            secret=settings.IDENTITY_JWT_SECRET,
            algorithm=settings.IDENTITY_JWT_ALGORITHM,
            audience=settings.IDENTITY_JWT_AUDIENCE,
            issuer=settings.IDENTITY_JWT_ISSUER,
        )

    def decode(self, token: str) -> dict:
        """Decode and validate a token, raising Unauthenticated on failure"""
        options = {"verify_aud": self.audience is not None}
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                options=options,
            )
        except JWTError as exc:
            logger.warning(f"Token rejected: {exc}")
            raise Unauthenticated("Invalid token") from exc

    async def verify(self, token: str) -> Identity:
        if not token:
            raise Unauthenticated("No authorization token provided")

        payload = self.decode(token)

        try:
            subject = uuid.UUID(str(payload.get("sub")))
        except ValueError as exc:
            raise Unauthenticated("Invalid token") from exc

        metadata = payload.get("user_metadata") or {}
        return Identity(
            id=subject,
            email=payload.get("email"),
            name=metadata.get("full_name") or metadata.get("name"),
        )


def create_identity_token(
    user_id: uuid.UUID,
    email: Optional[str],
    secret: str,
    algorithm: str = "HS256",
    audience: Optional[str] = "authenticated",
    full_name: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Mint a token in the provider's format (tests and local development)"""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta if expires_delta is not None else timedelta(hours=1))

    to_encode = {
        "sub": str(user_id),
        "email": email,
        "role": "authenticated",
        "iat": now,
        "exp": expire,
    }
    if audience:
        to_encode["aud"] = audience
    if full_name:
        to_encode["user_metadata"] = {"full_name": full_name}

    return jwt.encode(to_encode, secret, algorithm=algorithm)
