"""Error taxonomy shared by the service, the gateway and the HTTP layer."""


class TreinoError(Exception):
    """Base class for treino errors."""


class ConfigurationError(TreinoError):
    """Startup configuration is missing or inconsistent."""


class AuthError(TreinoError):
    """Missing, malformed, invalid or expired credential."""


class InputValidationError(TreinoError):
    """Request body or query did not match the expected shape."""

    def __init__(self, errors: list[dict]):
        super().__init__(f"{len(errors)} validation error(s)")
        self.errors = errors


class StorageError(TreinoError):
    """The persistence layer was unreachable or rejected an operation."""
