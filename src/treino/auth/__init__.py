"""Identity verification for treino."""

from .verifier import (
    FirebaseTokenVerifier,
    Identity,
    SharedSecretTokenVerifier,
    TokenVerifier,
    create_verifier,
    parse_bearer,
)

__all__ = [
    "create_verifier",
    "FirebaseTokenVerifier",
    "Identity",
    "parse_bearer",
    "SharedSecretTokenVerifier",
    "TokenVerifier",
]
