"""
Bearer token verification.

Two verifiers are available:
- FirebaseTokenVerifier: RS256 Firebase ID tokens, validated via Google's JWKS
- SharedSecretTokenVerifier: HS256 tokens signed with a shared secret
  (local development and tests)

The verifier is built once at startup by create_verifier() and passed to the
web app; missing credentials fail at that point rather than at the first
request.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import jwt

from ..config import Settings
from ..errors import AuthError, ConfigurationError

logger = logging.getLogger(__name__)

FIREBASE_JWKS_URL = (
    "https://www.googleapis.com/service_accounts/v1/jwk/"
    "securetoken@system.gserviceaccount.com"
)
FIREBASE_ISSUER_PREFIX = "https://securetoken.google.com/"


@dataclass(frozen=True)
class Identity:
    """The caller behind a verified token."""

    user_id: str
    email: Optional[str] = None


def _identity_from_claims(payload: dict) -> Identity:
    user_id = payload.get("sub")
    if not user_id:
        raise AuthError("Token missing user ID")
    return Identity(user_id=user_id, email=payload.get("email"))


class TokenVerifier(ABC):
    """Turns a bearer token into an Identity or raises AuthError."""

    @abstractmethod
    def verify(self, token: str) -> Identity:
        pass


class FirebaseTokenVerifier(TokenVerifier):
    """Validate Firebase ID tokens (RS256 via JWKS)."""

    def __init__(self, project_id: str, jwks_client: jwt.PyJWKClient | None = None):
        if not project_id:
            raise ConfigurationError(
                "Firebase verification requires FIREBASE_PROJECT_ID"
            )
        self.project_id = project_id
        self.issuer = f"{FIREBASE_ISSUER_PREFIX}{project_id}"
        self._jwks_client = jwks_client or jwt.PyJWKClient(FIREBASE_JWKS_URL)

    def verify(self, token: str) -> Identity:
        try:
            signing_key = self._jwks_client.get_signing_key_from_jwt(token)
            payload = jwt.decode(
                token,
                signing_key.key,
                algorithms=["RS256"],
                audience=self.project_id,
                issuer=self.issuer,
            )
        except jwt.ExpiredSignatureError:
            raise AuthError("Invalid or expired token")
        except jwt.PyJWTError as e:
            logger.warning(f"Rejected Firebase token: {e}")
            raise AuthError("Invalid or expired token")
        return _identity_from_claims(payload)


class SharedSecretTokenVerifier(TokenVerifier):
    """Validate HS256 tokens signed with a shared secret."""

    algorithm = "HS256"

    def __init__(
        self,
        secret: str,
        issuer: Optional[str] = None,
        audience: Optional[str] = None,
    ):
        if not secret:
            raise ConfigurationError("Shared-secret verification requires JWT_SECRET")
        self._secret = secret
        self.issuer = issuer
        self.audience = audience

    def verify(self, token: str) -> Identity:
        options = {"verify_aud": self.audience is not None}
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                audience=self.audience,
                options=options,
            )
        except jwt.ExpiredSignatureError:
            raise AuthError("Invalid or expired token")
        except jwt.PyJWTError as e:
            logger.warning(f"Rejected token: {e}")
            raise AuthError("Invalid or expired token")
        return _identity_from_claims(payload)


def create_verifier(settings: Settings) -> TokenVerifier:
    """Build the verifier selected by settings.auth_provider."""
    if settings.auth_provider == "shared_secret":
        return SharedSecretTokenVerifier(
            settings.jwt_secret or "",
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
        )
    return FirebaseTokenVerifier(settings.firebase_project_id or "")


def parse_bearer(authorization: Optional[str]) -> str:
    """Extract the token from an Authorization header value."""
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthError("Missing Authorization header")
    token = authorization[len("Bearer "):].strip()
    if not token:
        raise AuthError("Missing Authorization header")
    return token
